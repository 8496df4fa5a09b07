#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scrapmd/parsers/__init__.py
"""Dialect parsers built on a shared combinator toolkit.

- cursor: the immutable position/context value every rule threads through
- combinators: primitives, combinators and the free-text resolver
- markdown: the Markdown grammar and ``MarkdownParser``
- scrapbox: the Scrapbox grammar and ``ScrapboxParser``
"""

from scrapmd.parsers.base import BaseParser
from scrapmd.parsers.cursor import Cursor
from scrapmd.parsers.markdown import MarkdownContext, MarkdownParser
from scrapmd.parsers.scrapbox import ScrapboxContext, ScrapboxParser

__all__ = [
    "BaseParser",
    "Cursor",
    "MarkdownContext",
    "MarkdownParser",
    "ScrapboxContext",
    "ScrapboxParser",
]
