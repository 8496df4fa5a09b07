#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scrapmd/renderers/markdown.py
"""Markdown rendering from a parsed page.

Each paragraph ends with a line break and every other kind writes its own
Markdown syntax. Lists are written flat: an item's level decides how many
indent units precede its marker, with levels 0 and 1 both unindented since
Scrapbox's shallowest list items sit at level 1.
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
from scrapmd.options.markdown import MarkdownRendererOptions
from scrapmd.renderers.base import BaseRenderer

_LIST_MARKERS = {
    ListKind.DISC: "* ",
    ListKind.DECIMAL: "1. ",
}


class MarkdownRenderer(NodeVisitor, BaseRenderer):
    """Render a page as Markdown text.

    Parameters
    ----------
    options : MarkdownRendererOptions or None, default = None
        Markdown rendering options

    Notes
    -----
    List levels are read the Scrapbox way, where the outermost item is level
    1. Lists parsed from Markdown start at level 0, so a Markdown to Markdown
    conversion renders their second level flush with the first:
    ``"* a\\n  * b\\n    * c\\n"`` comes back as ``"* a\\n* b\\n  * c\\n"``.

    Examples
    --------
        >>> from scrapmd.ast import InternalLink, Node, Page, Paragraph
        >>> page = Page([Node(Paragraph([Node(InternalLink("Page"))]))])
        >>> MarkdownRenderer().render_to_string(page)
        '[[Page]]\\n'

    """

    def __init__(self, options: MarkdownRendererOptions | None = None):
        """Initialize the Markdown renderer with options."""
        BaseRenderer._validate_options_type(options, MarkdownRendererOptions, "markdown")
        options = options or MarkdownRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: MarkdownRendererOptions = options
        self._output: list[str] = []

    def render_to_string(self, page: Page) -> str:
        """Render a page to a Markdown string."""
        self._output = []
        self.visit(page)
        return "".join(self._output)

    def visit_paragraph(self, node: Paragraph) -> Optional[TransformCommand]:
        self.visit_children(node.children)
        self._output.append("\n")
        return None

    def visit_list(self, node: List) -> Optional[TransformCommand]:
        unit = self.options.indent.unit
        for item in node.children:
            indent = unit * max(item.level - 1, 0)
            marker = _LIST_MARKERS.get(item.kind)
            if marker is not None:
                self._output.append(indent + marker)
            self.visit_children(item.children)
            self._output.append("\n")
        return None

    def visit_hashtag(self, node: HashTag) -> Optional[TransformCommand]:
        self._output.append(f"#{node.value}")
        return None

    def visit_internal_link(self, node: InternalLink) -> Optional[TransformCommand]:
        self._output.append(f"[[{node.title}]]")
        return None

    def visit_external_link(self, node: ExternalLink) -> Optional[TransformCommand]:
        """Render a link; an untitled image-host page link becomes a thumbnail."""
        if node.title is not None:
            self._output.append(f"[{node.title}]({node.url})")
        elif self.options.image_host_prefix and node.url.startswith(self.options.image_host_prefix):
            self._output.append(f"![]({node.url}{self.options.image_thumbnail_suffix})")
        else:
            self._output.append(node.url)
        return None

    def visit_emphasis(self, node: Emphasis) -> Optional[TransformCommand]:
        content = node.text
        if node.bold > 0:
            content = f"**{content}**"
        if node.italic > 0:
            content = f"*{content}*"
        if node.strikethrough > 0:
            content = f"~~{content}~~"
        self._output.append(content)
        return None

    def visit_heading(self, node: Heading) -> Optional[TransformCommand]:
        self._output.append(f"{'#' * node.level} {node.text}")
        return None

    def visit_block_quate(self, node: BlockQuate) -> Optional[TransformCommand]:
        self._output.append(f"`{node.value}`")
        return None

    def visit_code_block(self, node: CodeBlock) -> Optional[TransformCommand]:
        self._output.append(f"```{node.file_name}\n")
        for line in node.children:
            self._output.append(f"{line}\n")
        self._output.append("```\n")
        return None

    def visit_table(self, node: Table) -> Optional[TransformCommand]:
        """Render a pipe table; rows after the first empty row are dropped."""
        if not node.header:
            return None
        self._output.append(f"| {' | '.join(node.header)} |\n")
        self._output.append(f"| {' | '.join(['---'] * len(node.header))} |\n")
        for row in node.rows:
            if not row:
                break
            self._output.append(f"| {' | '.join(row)} |\n")
        return None

    def visit_image(self, node: Image) -> Optional[TransformCommand]:
        self._output.append(f"![]({node.uri})")
        return None

    def visit_math(self, node: Math) -> Optional[TransformCommand]:
        self._output.append(f"$${node.value}$$")
        return None

    def visit_text(self, node: Text) -> Optional[TransformCommand]:
        self._output.append(node.value)
        return None
