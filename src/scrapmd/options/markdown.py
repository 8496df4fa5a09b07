#  Copyright (c) 2025 Tom Villani, Ph.D.
# scrapmd/options/markdown.py
"""Configuration options for Markdown parsing and rendering."""

from __future__ import annotations

from dataclasses import dataclass, field

from scrapmd.constants import DEFAULT_IMAGE_HOST_PREFIX, DEFAULT_IMAGE_THUMBNAIL_SUFFIX
from scrapmd.options.base import BaseParserOptions, BaseRendererOptions
from scrapmd.options.common import IndentKind


@dataclass(frozen=True)
class MarkdownParserOptions(BaseParserOptions):
    """Configuration options for parsing Markdown.

    The Markdown grammar has no settings of its own beyond ``strict``.
    """


@dataclass(frozen=True)
class MarkdownRendererOptions(BaseRendererOptions):
    """Configuration options for rendering a page as Markdown.

    Parameters
    ----------
    indent : IndentKind, default two spaces
        Unit repeated once per nesting level in front of list items
    image_host_prefix : str, default "https://gyazo.com/"
        URL prefix of an image host whose page links become thumbnails.
        An untitled external link starting with this prefix is written as
        an image embed. Empty disables the rewrite.
    image_thumbnail_suffix : str, default "/max_size/400"
        Path appended to such a link to obtain the thumbnail

    Examples
    --------
        >>> from scrapmd.options.common import IndentKind
        >>> options = MarkdownRendererOptions(indent=IndentKind.tab())

    """

    indent: IndentKind = field(
        default_factory=IndentKind.space,
        metadata={"help": "List indentation unit (tab or N spaces)", "importance": "core"},
    )
    image_host_prefix: str = field(
        default=DEFAULT_IMAGE_HOST_PREFIX,
        metadata={"help": "Image host whose untitled page links are rendered as thumbnails", "importance": "advanced"},
    )
    image_thumbnail_suffix: str = field(
        default=DEFAULT_IMAGE_THUMBNAIL_SUFFIX,
        metadata={"help": "Suffix appended to image host links to obtain a thumbnail", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate the indent option.

        Raises
        ------
        ValueError
            If ``indent`` is not an IndentKind.

        """
        if not isinstance(self.indent, IndentKind):
            raise ValueError(f"indent must be an IndentKind, got {type(self.indent).__name__}")
