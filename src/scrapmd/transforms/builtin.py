#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scrapmd/transforms/builtin.py
"""Built-in semantic passes over a parsed page.

Each pass is a ``NodeVisitor`` whose ``transform`` method performs one full
walk, rewriting slots in place, and returns the same page. Passes compose as
plain ``Page -> Page`` functions.

Examples
--------
    >>> page = ScrapboxParser().parse("[** Section]\\n")
    >>> HeadingMappingTransform(h1_level=3).transform(page)
    Page(nodes=[Node(kind=Paragraph(children=[Node(kind=Heading(text='Section', level=2), id=0)]), id=0)])

"""

from __future__ import annotations

import logging
from typing import Optional

from scrapmd.ast.nodes import CodeBlock, Emphasis, Heading, List, ListItem, Node, Page, Paragraph
from scrapmd.ast.visitors import NodeVisitor, Replace, TransformCommand
from scrapmd.constants import DEFAULT_BOLD_TO_HEADING, DEFAULT_HEADING1_MAPPING

logger = logging.getLogger(__name__)


class PageTransform(NodeVisitor):
    """A visitor applied to a page as a single rewriting pass."""

    name = "transform"

    def transform(self, page: Page) -> Page:
        """Walk ``page`` once, rewriting it in place.

        Parameters
        ----------
        page : Page
            Page to rewrite

        Returns
        -------
        Page
            The same page object

        """
        logger.debug("Applying transform: %s", self.name)
        self.visit(page)
        return page


class HeadingMappingTransform(PageTransform):
    """Turn stacked bold markers into headings.

    Scrapbox has no heading syntax; pages use bold with several markers
    instead. A bold level ``b`` maps to heading level ``h1_level + 1 - b``,
    so with the default ``h1_level=3`` ``[*** x]`` is a level-1 heading and
    ``[** x]`` a level-2 heading. Levels that would fall outside
    ``1..h1_level`` stay bold. A single marker is ambiguous and becomes the
    lowest heading only when ``bold_to_heading`` is set.

    Emphasis inside list items is left alone: headings are only produced at
    paragraph level.

    Parameters
    ----------
    h1_level : int, default 3
        Bold level that maps to a level-1 heading
    bold_to_heading : bool, default False
        Promote single-marker bold as well

    """

    name = "heading-mapping"

    def __init__(self, h1_level: int = DEFAULT_HEADING1_MAPPING, bold_to_heading: bool = DEFAULT_BOLD_TO_HEADING):
        """Initialize the pass with its level mapping."""
        self.h1_level = h1_level
        self.bold_to_heading = bold_to_heading

    def visit_emphasis(self, node: Emphasis) -> Optional[TransformCommand]:
        level = self.h1_level + 1 - node.bold
        if 0 < level <= self.h1_level and (self.bold_to_heading or node.bold > 1):
            return Replace(Heading(node.text, level))
        return None

    def visit_list(self, node: List) -> Optional[TransformCommand]:
        return None


class FlattenCodeBlockListTransform(PageTransform):
    """Hoist code blocks out of lists.

    Markdown cannot put a fenced block inside a list item the way Scrapbox
    nests ``code:`` under an indented line. Every item whose first child is a
    code block is split into the standalone ``CodeBlock`` followed, if the
    item had more content, by a one-item list holding the rest. Runs of
    ordinary items between code blocks are regrouped into lists.

    A list that reduces to a single node is replaced by that node; otherwise
    the pieces are wrapped in a grouping ``Paragraph``.
    """

    name = "flatten-code-blocks"

    def visit_list(self, node: List) -> Optional[TransformCommand]:
        pieces: list[Node] = []
        after_code_block = True

        for item in node.children:
            first = item.children[0].kind if item.children else None
            if isinstance(first, CodeBlock):
                pieces.append(Node(first))
                if len(item.children) > 1:
                    pieces.append(Node(List([ListItem(item.kind, item.level, item.children[1:])])))
                after_code_block = True
            else:
                if after_code_block:
                    pieces.append(Node(List([item])))
                else:
                    pieces[-1].kind.children.append(item)
                after_code_block = False

        if not pieces:
            return None
        if len(pieces) == 1:
            return Replace(pieces[0].kind)
        return Replace(Paragraph(pieces))
