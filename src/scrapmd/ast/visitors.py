#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scrapmd/ast/visitors.py
"""Visitor pattern implementation for AST traversal and in-place rewriting.

``NodeVisitor`` owns a depth-first, pre-order walk over a ``Page``. For every
slot it calls the handler named after the slot's payload kind. A handler may
return a transform command:

- ``None`` leaves the slot untouched
- ``Replace(kind)`` stores ``kind`` in the slot; the walk does not descend
  into the replacement
- ``Delete()`` stores a ``Nop`` tombstone in the slot

Container handlers (``visit_paragraph`` and ``visit_list``) recurse into
their children by default; every leaf handler defaults to doing nothing.
Subclasses override only the kinds they care about. Passes and printers are
both visitors.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

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
    Math,
    Node,
    NodeKind,
    Nop,
    Page,
    Paragraph,
    Table,
    Text,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Replace:
    """Swap the visited slot's payload for ``kind``."""

    kind: NodeKind


@dataclass(frozen=True)
class Delete:
    """Tombstone the visited slot."""


TransformCommand = Union[Replace, Delete]


class NodeVisitor:
    """Base class for walks over a ``Page``.

    Override ``is_finished`` to stop a walk early; it is checked before every
    slot, and once it returns True no further handlers run.

    Examples
    --------
    Removing every hashtag:

        >>> class DropHashTags(NodeVisitor):
        ...     def visit_hashtag(self, node):
        ...         return Delete()
        >>> DropHashTags().visit(page)

    """

    def is_finished(self) -> bool:
        """Return True to stop the walk before the next slot."""
        return False

    def visit(self, page: Page) -> None:
        """Walk ``page`` once, applying any commands returned by handlers."""
        page.accept(self)

    def visit_page(self, page: Page) -> None:
        self.visit_children(page.nodes)

    def visit_children(self, nodes: list[Node]) -> None:
        """Visit each slot of ``nodes`` in order, honouring ``is_finished``."""
        for node in nodes:
            if self.is_finished():
                return
            self.visit_node(node)

    def visit_node(self, node: Node) -> None:
        """Dispatch on the slot's payload and apply the returned command.

        Parameters
        ----------
        node : Node
            Slot to visit; its ``kind`` may be overwritten

        """
        if self.is_finished():
            return
        command = node.kind.accept(self)
        if command is None:
            return
        if isinstance(command, Replace):
            logger.debug("Replacing %s with %s", type(node.kind).__name__, type(command.kind).__name__)
            node.kind = command.kind
        elif isinstance(command, Delete):
            logger.debug("Deleting %s", type(node.kind).__name__)
            node.kind = Nop()

    def visit_paragraph(self, node: Paragraph) -> Optional[TransformCommand]:
        self.visit_children(node.children)
        return None

    def visit_list(self, node: List) -> Optional[TransformCommand]:
        for item in node.children:
            if self.is_finished():
                break
            self.visit_children(item.children)
        return None

    def visit_hashtag(self, node: HashTag) -> Optional[TransformCommand]:
        return None

    def visit_internal_link(self, node: InternalLink) -> Optional[TransformCommand]:
        return None

    def visit_external_link(self, node: ExternalLink) -> Optional[TransformCommand]:
        return None

    def visit_emphasis(self, node: Emphasis) -> Optional[TransformCommand]:
        return None

    def visit_heading(self, node: Heading) -> Optional[TransformCommand]:
        return None

    def visit_block_quate(self, node: BlockQuate) -> Optional[TransformCommand]:
        return None

    def visit_code_block(self, node: CodeBlock) -> Optional[TransformCommand]:
        return None

    def visit_table(self, node: Table) -> Optional[TransformCommand]:
        return None

    def visit_image(self, node: Image) -> Optional[TransformCommand]:
        return None

    def visit_math(self, node: Math) -> Optional[TransformCommand]:
        return None

    def visit_text(self, node: Text) -> Optional[TransformCommand]:
        return None

    def visit_nop(self, node: Nop) -> Optional[TransformCommand]:
        return None
