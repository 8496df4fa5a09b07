#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Option dataclasses for scrapmd parsers, renderers and conversions."""

from scrapmd.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from scrapmd.options.common import IndentKind
from scrapmd.options.config import ConversionConfig
from scrapmd.options.markdown import MarkdownParserOptions, MarkdownRendererOptions
from scrapmd.options.scrapbox import ScrapboxParserOptions, ScrapboxRendererOptions

__all__ = [
    "BaseParserOptions",
    "BaseRendererOptions",
    "CloneFrozenMixin",
    "ConversionConfig",
    "IndentKind",
    "MarkdownParserOptions",
    "MarkdownRendererOptions",
    "ScrapboxParserOptions",
    "ScrapboxRendererOptions",
]
