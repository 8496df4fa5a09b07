"""scrapmd - convert documents between Scrapbox and Markdown.

Both dialects are parsed into one syntax tree (``scrapmd.ast``). Passes in
``scrapmd.transforms`` rewrite the tree between parsing and rendering, and
the renderers in ``scrapmd.renderers`` write it out again.

Examples
--------
Convert a Scrapbox page to Markdown:

    >>> from scrapmd import scrapbox_to_markdown
    >>> scrapbox_to_markdown("[*** Title]\\n#tag [Page]\\n")
    '# Title\\n#tag [[Page]]\\n'

Working with the tree directly:

    >>> from scrapmd import parse, render
    >>> page = parse("* item\\n", "markdown")
    >>> render(page, "scrapbox")
    '\\titem\\n'

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

__version__ = "0.1.0"

from scrapmd.api import (
    convert,
    markdown_to_ast,
    markdown_to_scrapbox,
    parse,
    render,
    scrapbox_to_ast,
    scrapbox_to_markdown,
)
from scrapmd.exceptions import (
    InternalParserError,
    ParsingError,
    ScrapmdError,
    TransformError,
    UnsupportedDialectError,
    ValidationError,
)
from scrapmd.options import ConversionConfig, IndentKind

__all__ = [
    "__version__",
    "ConversionConfig",
    "IndentKind",
    "InternalParserError",
    "ParsingError",
    "ScrapmdError",
    "TransformError",
    "UnsupportedDialectError",
    "ValidationError",
    "convert",
    "markdown_to_ast",
    "markdown_to_scrapbox",
    "parse",
    "render",
    "scrapbox_to_ast",
    "scrapbox_to_markdown",
]
