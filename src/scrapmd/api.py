#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scrapmd/api.py
"""Public entry points for parsing, rendering and converting documents.

A conversion is ``parse`` into a ``Page``, zero or more passes over the page,
then ``render`` with the target dialect. The helpers below wire those steps
together with the defaults each direction needs.

Examples
--------
    >>> from scrapmd import scrapbox_to_markdown
    >>> scrapbox_to_markdown("#tag #tag [internal link]\\n")
    '#tag #tag [[internal link]]\\n'

"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Iterable, Optional, Union

from scrapmd.ast.nodes import Page
from scrapmd.ast.serialization import ast_to_json
from scrapmd.constants import (
    AST_TARGET,
    DIALECT_ALIASES,
    DIALECT_MARKDOWN,
    DIALECT_SCRAPBOX,
    SUPPORTED_DIALECTS,
    DialectName,
)
from scrapmd.exceptions import UnsupportedDialectError
from scrapmd.options.base import BaseParserOptions, BaseRendererOptions
from scrapmd.options.config import ConversionConfig
from scrapmd.options.markdown import MarkdownRendererOptions
from scrapmd.options.scrapbox import ScrapboxRendererOptions
from scrapmd.parsers.base import BaseParser
from scrapmd.parsers.markdown import MarkdownParser
from scrapmd.parsers.scrapbox import ScrapboxParser
from scrapmd.renderers.base import BaseRenderer
from scrapmd.renderers.markdown import MarkdownRenderer
from scrapmd.renderers.scrapbox import ScrapboxRenderer
from scrapmd.transforms.builtin import FlattenCodeBlockListTransform, HeadingMappingTransform, PageTransform
from scrapmd.transforms.registry import apply_transforms

logger = logging.getLogger(__name__)

TransformSpec = Union[str, PageTransform]

_PARSERS: dict[str, type[BaseParser]] = {
    DIALECT_MARKDOWN: MarkdownParser,
    DIALECT_SCRAPBOX: ScrapboxParser,
}


def normalize_dialect(dialect: str, allow_ast: bool = False) -> str:
    """Resolve a dialect name or alias to its canonical name.

    Parameters
    ----------
    dialect : str
        ``"markdown"``, ``"scrapbox"`` or an alias such as ``"md"``
    allow_ast : bool, default False
        Also accept ``"ast"`` (valid only as a conversion target)

    Returns
    -------
    str
        The canonical dialect name

    Raises
    ------
    UnsupportedDialectError
        If the name is not recognised

    """
    name = dialect.strip().lower()
    if allow_ast and name == AST_TARGET:
        return AST_TARGET
    if name in DIALECT_ALIASES:
        return DIALECT_ALIASES[name]
    supported = SUPPORTED_DIALECTS + ((AST_TARGET,) if allow_ast else ())
    raise UnsupportedDialectError(dialect, supported)


def default_transforms(source: str, target: str) -> list[str]:
    """Return the passes a conversion runs when none are requested.

    Scrapbox to Markdown maps stacked bold to headings and hoists code blocks
    out of lists; every other direction runs no passes.
    """
    if source == DIALECT_SCRAPBOX and target == DIALECT_MARKDOWN:
        return [HeadingMappingTransform.name, FlattenCodeBlockListTransform.name]
    return []


def parse(
    text: Union[str, bytes, Path, IO[str], IO[bytes]],
    dialect: DialectName | str,
    options: Optional[BaseParserOptions] = None,
) -> Page:
    """Parse a document into a ``Page``.

    Parameters
    ----------
    text : str, bytes, Path or file-like
        Document text, UTF-8 bytes, a path or a readable stream
    dialect : str
        Source dialect name or alias
    options : BaseParserOptions, optional
        Options of the matching parser class

    Returns
    -------
    Page
        The parsed page

    Raises
    ------
    UnsupportedDialectError
        If the dialect is unknown
    ParsingError
        If the document does not match the grammar
    InternalParserError
        If a grammar invariant is violated

    """
    parser_class = _PARSERS[normalize_dialect(dialect)]
    return parser_class(options).parse(text)  # type: ignore[arg-type]


def _renderer_for(
    dialect: str, config: ConversionConfig, options: Optional[BaseRendererOptions]
) -> BaseRenderer:
    if dialect == DIALECT_MARKDOWN:
        if options is None:
            options = MarkdownRendererOptions(indent=config.indent)
        return MarkdownRenderer(options)  # type: ignore[arg-type]
    if options is None:
        options = ScrapboxRendererOptions(heading1_mapping=config.heading1_mapping)
    return ScrapboxRenderer(options)  # type: ignore[arg-type]


def render(
    page: Page,
    dialect: DialectName | str,
    config: Optional[ConversionConfig] = None,
    options: Optional[BaseRendererOptions] = None,
) -> str:
    """Render a ``Page`` as dialect text.

    Parameters
    ----------
    page : Page
        Page to render
    dialect : str
        Target dialect name or alias
    config : ConversionConfig, optional
        Supplies the Markdown list indent and the Scrapbox heading mapping
        when ``options`` is not given
    options : BaseRendererOptions, optional
        Options of the matching renderer class; take precedence over ``config``

    Returns
    -------
    str
        The rendered document

    """
    renderer = _renderer_for(normalize_dialect(dialect), config or ConversionConfig(), options)
    return renderer.render_to_string(page)


def convert(
    text: Union[str, bytes, Path, IO[str], IO[bytes]],
    source: DialectName | str,
    target: str,
    config: Optional[ConversionConfig] = None,
    transforms: Optional[Iterable[TransformSpec]] = None,
    *,
    parser_options: Optional[BaseParserOptions] = None,
    renderer_options: Optional[BaseRendererOptions] = None,
) -> str:
    """Convert a document between dialects.

    Parameters
    ----------
    text : str, bytes, Path or file-like
        Source document
    source : str
        Source dialect name or alias
    target : str
        Target dialect name or alias, or ``"ast"`` for a JSON tree dump
    config : ConversionConfig, optional
        Conversion settings; defaults apply if omitted
    transforms : iterable of str or PageTransform, optional
        Passes to run between parsing and rendering. ``None`` selects the
        defaults of the direction (see ``default_transforms``); pass an empty
        list to run none.
    parser_options : BaseParserOptions, optional
        Options for the source parser
    renderer_options : BaseRendererOptions, optional
        Options for the target renderer

    Returns
    -------
    str
        The converted document

    Examples
    --------
        >>> convert("[** Section]\\n", "sb", "md")
        '## Section\\n'

    """
    config = config or ConversionConfig()
    source = normalize_dialect(source)
    target = normalize_dialect(target, allow_ast=True)
    if transforms is None:
        transforms = default_transforms(source, target)
    transforms = list(transforms)

    logger.debug("Converting %s to %s", source, target)
    page = parse(text, source, parser_options)
    if transforms:
        page = apply_transforms(page, transforms, config)

    if target == AST_TARGET:
        return ast_to_json(page)
    return render(page, target, config, renderer_options)


def scrapbox_to_markdown(text: str, config: Optional[ConversionConfig] = None) -> str:
    """Convert Scrapbox text to Markdown with heading mapping and code block hoisting."""
    return convert(text, DIALECT_SCRAPBOX, DIALECT_MARKDOWN, config)


def markdown_to_scrapbox(text: str, config: Optional[ConversionConfig] = None) -> str:
    """Convert Markdown text to Scrapbox."""
    return convert(text, DIALECT_MARKDOWN, DIALECT_SCRAPBOX, config)


def scrapbox_to_ast(text: str) -> str:
    """Parse Scrapbox text and return the JSON dump of its tree."""
    return convert(text, DIALECT_SCRAPBOX, AST_TARGET, transforms=[])


def markdown_to_ast(text: str) -> str:
    """Parse Markdown text and return the JSON dump of its tree."""
    return convert(text, DIALECT_MARKDOWN, AST_TARGET, transforms=[])
