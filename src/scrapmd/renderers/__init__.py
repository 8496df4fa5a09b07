#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Renderers writing a parsed page out as Markdown or Scrapbox text."""

from scrapmd.renderers.base import BaseRenderer
from scrapmd.renderers.markdown import MarkdownRenderer
from scrapmd.renderers.scrapbox import ScrapboxRenderer

__all__ = [
    "BaseRenderer",
    "MarkdownRenderer",
    "ScrapboxRenderer",
]
