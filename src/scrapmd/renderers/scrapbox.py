#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scrapmd/renderers/scrapbox.py
"""Scrapbox rendering from a parsed page.

Headings become stacked bold brackets, with a level-1 heading getting
``heading1_mapping`` markers. List items are written with ``level + 1``
indent strings and ordered items are numbered from 1 for every run of
consecutive decimal items.
"""

from __future__ import annotations

from typing import Optional

from scrapmd.ast.nodes import (
    BlockQuate,
    CodeBlock,
    Emphasis,
    ExternalLink,
    HashTag,
    Heading,
    Image,
    InternalLink,
    List,
    ListKind,
    Math,
    Page,
    Paragraph,
    Table,
    Text,
)
from scrapmd.ast.visitors import NodeVisitor, TransformCommand
from scrapmd.constants import BOLD_MARKER, ITALIC_MARKER, STRIKETHROUGH_MARKER
from scrapmd.options.scrapbox import ScrapboxRendererOptions
from scrapmd.renderers.base import BaseRenderer


class ScrapboxRenderer(NodeVisitor, BaseRenderer):
    """Render a page as Scrapbox text.

    Parameters
    ----------
    options : ScrapboxRendererOptions or None, default = None
        Scrapbox rendering options

    """

    def __init__(self, options: ScrapboxRendererOptions | None = None):
        """Initialize the Scrapbox renderer with options."""
        BaseRenderer._validate_options_type(options, ScrapboxRendererOptions, "scrapbox")
        options = options or ScrapboxRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: ScrapboxRendererOptions = options
        self._output: list[str] = []

    def render_to_string(self, page: Page) -> str:
        """Render a page to a Scrapbox string."""
        self._output = []
        self.visit(page)
        return "".join(self._output)

    def visit_paragraph(self, node: Paragraph) -> Optional[TransformCommand]:
        self.visit_children(node.children)
        self._output.append("\n")
        return None

    def visit_list(self, node: List) -> Optional[TransformCommand]:
        number = 1
        for item in node.children:
            indent = self.options.indent * (item.level + 1)
            if item.kind == ListKind.DISC:
                self._output.append(indent)
            elif item.kind == ListKind.DECIMAL:
                self._output.append(f"{indent}{number}. ")

            # numbering restarts after any non-decimal item
            number = number + 1 if item.kind == ListKind.DECIMAL else 1

            self.visit_children(item.children)
            self._output.append("\n")
        return None

    def visit_hashtag(self, node: HashTag) -> Optional[TransformCommand]:
        self._output.append(f"#{node.value}")
        return None

    def visit_internal_link(self, node: InternalLink) -> Optional[TransformCommand]:
        self._output.append(f"[{node.title}]")
        return None

    def visit_external_link(self, node: ExternalLink) -> Optional[TransformCommand]:
        if node.title is not None:
            self._output.append(f"[{node.title} {node.url}]")
        else:
            self._output.append(f"[{node.url}]")
        return None

    def visit_emphasis(self, node: Emphasis) -> Optional[TransformCommand]:
        markers = (
            BOLD_MARKER * node.bold + ITALIC_MARKER * node.italic + STRIKETHROUGH_MARKER * node.strikethrough
        )
        self._output.append(f"[{markers} {node.text}]")
        return None

    def visit_heading(self, node: Heading) -> Optional[TransformCommand]:
        markers = max(self.options.heading1_mapping + 1 - node.level, 1)
        self._output.append(f"[{BOLD_MARKER * markers} {node.text}]\n")
        return None

    def visit_block_quate(self, node: BlockQuate) -> Optional[TransformCommand]:
        self._output.append(f"`{node.value}`")
        return None

    def visit_code_block(self, node: CodeBlock) -> Optional[TransformCommand]:
        self._output.append(f"code:{node.file_name}\n")
        for line in node.children:
            self._output.append(f" {line}\n")
        return None

    def visit_table(self, node: Table) -> Optional[TransformCommand]:
        if not node.header:
            return None
        self._output.append(f"table:{node.name}\n")
        self._output.append(" " + "\t".join(node.header) + "\n")
        for row in node.rows:
            if not row:
                break
            self._output.append(" " + "\t".join(row) + "\n")
        return None

    def visit_image(self, node: Image) -> Optional[TransformCommand]:
        self._output.append(f"[{node.uri}]")
        return None

    def visit_math(self, node: Math) -> Optional[TransformCommand]:
        self._output.append(f"[${node.value}]")
        return None

    def visit_text(self, node: Text) -> Optional[TransformCommand]:
        self._output.append(node.value)
        return None
