#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scrapmd/ast/nodes.py
"""AST node classes shared by the Markdown and Scrapbox dialects.

A parsed document is a ``Page`` holding a flat sequence of ``Node`` slots.
Each slot owns exactly one payload (its ``kind``), and the payload classes
below are the closed set of kinds both grammars produce. Container payloads
(``Paragraph``, ``List`` and the ``ListItem`` entries of a list) own their
child slots; there are no shared or parent references.

Transforms never move slots around. A visitor handler rewrites a slot in place
by swapping its ``kind`` for another payload, or tombstones it by setting the
kind to ``Nop``, so child positions stay stable for the whole walk.

Node Kinds
----------
Block-like kinds:
    - Paragraph, List (of ListItem), CodeBlock, Table

Inline kinds:
    - Text, HashTag, InternalLink, ExternalLink, Emphasis, Heading
    - BlockQuate (inline code span), Image, Math

Tombstone:
    - Nop

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from scrapmd.constants import DUMMY_NODE_ID


class NodeKind(ABC):
    """Abstract base class for node payloads.

    Every payload dispatches to the visitor method named after its kind.
    """

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Dispatch to the matching ``visit_*`` method of ``visitor``.

        Parameters
        ----------
        visitor : Any
            A visitor object implementing the visit method for this kind

        Returns
        -------
        Any
            Whatever the visitor method returns (a transform command or None)

        """


@dataclass
class Node:
    """A slot in the tree holding a single payload.

    Parameters
    ----------
    kind : NodeKind
        The payload currently stored in this slot
    id : int, default = DUMMY_NODE_ID
        Reserved identifier, a placeholder until nodes are numbered

    """

    kind: NodeKind
    id: int = DUMMY_NODE_ID

    def accept(self, visitor: Any) -> Any:
        """Let ``visitor`` visit this slot (and apply any command it returns)."""
        return visitor.visit_node(self)


@dataclass
class Page:
    """Root of a parsed document.

    Parameters
    ----------
    nodes : list of Node, default = empty list
        Top-level nodes in document order

    """

    nodes: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Let ``visitor`` walk the whole page."""
        return visitor.visit_page(self)


@dataclass
class Paragraph(NodeKind):
    """One logical line or block of inline content.

    Parameters
    ----------
    children : list of Node, default = empty list
        Inline nodes in order; an empty paragraph is a blank line

    """

    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_paragraph``."""
        return visitor.visit_paragraph(self)


class ListKind(Enum):
    """Marker style of a list item."""

    DISC = "disc"
    DECIMAL = "decimal"
    ALPHABET = "alphabet"


@dataclass
class ListItem:
    """A single entry of a ``List``.

    The level is the indentation depth measured while parsing, not a pointer
    to a parent item, so a list is always flat.

    Parameters
    ----------
    kind : ListKind
        Marker style of the item
    level : int
        0-based indentation depth
    children : list of Node, default = empty list
        Inline content of the item

    """

    kind: ListKind
    level: int
    children: list[Node] = field(default_factory=list)

    @classmethod
    def disc(cls, level: int, children: Optional[list[Node]] = None) -> ListItem:
        """Create a bulleted item."""
        return cls(ListKind.DISC, level, children or [])

    @classmethod
    def decimal(cls, level: int, children: Optional[list[Node]] = None) -> ListItem:
        """Create a numbered item."""
        return cls(ListKind.DECIMAL, level, children or [])


@dataclass
class List(NodeKind):
    """A maximal run of contiguous list items.

    Parameters
    ----------
    children : list of ListItem, default = empty list
        The items in document order

    """

    children: list[ListItem] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_list``."""
        return visitor.visit_list(self)


@dataclass
class HashTag(NodeKind):
    """A ``#tag``; ``value`` excludes the leading ``#``."""

    value: str

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_hashtag(self)


@dataclass
class InternalLink(NodeKind):
    """A link to another page of the same wiki, by title."""

    title: str

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_internal_link(self)


@dataclass
class ExternalLink(NodeKind):
    """A link to a URL.

    Parameters
    ----------
    url : str
        Target URL including its scheme
    title : str or None, default = None
        Link text; None renders the bare URL

    """

    url: str
    title: Optional[str] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_external_link(self)


@dataclass
class Emphasis(NodeKind):
    """Decorated text.

    Each level counts how many markers of that decoration were stacked, so
    ``[** text]`` in Scrapbox has ``bold == 2``. A level of zero means the
    decoration is absent.

    Parameters
    ----------
    text : str
        The decorated text
    bold : int, default = 0
        Number of bold markers
    italic : int, default = 0
        Number of italic markers
    strikethrough : int, default = 0
        Number of strikethrough markers

    """

    text: str
    bold: int = 0
    italic: int = 0
    strikethrough: int = 0

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_emphasis(self)


@dataclass
class Heading(NodeKind):
    """A heading with a 1-based level (1 is the most important)."""

    text: str
    level: int

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_heading(self)


@dataclass
class BlockQuate(NodeKind):
    """An inline code span.

    Also carries single-line command text such as Scrapbox ``$ ls`` lines,
    which render as inline code in Markdown.
    """

    value: str

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_block_quate(self)


@dataclass
class CodeBlock(NodeKind):
    """A multi-line fenced code block.

    Parameters
    ----------
    file_name : str
        Name (or language) written after the opening fence
    children : list of str, default = empty list
        Code lines without their line terminators or indentation prefix

    """

    file_name: str
    children: list[str] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_code_block(self)


@dataclass
class Table(NodeKind):
    """A table; rows may be ragged relative to the header.

    Parameters
    ----------
    name : str
        Table name (Scrapbox ``table:name``)
    header : list of str, default = empty list
        Header cells; an empty header renders nothing
    rows : list of list of str, default = empty list
        Body rows

    """

    name: str
    header: list[str] = field(default_factory=list)
    rows: list[list[str]] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_table(self)


@dataclass
class Image(NodeKind):
    uri: str

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_image(self)


@dataclass
class Math(NodeKind):
    """Inline TeX source."""

    value: str

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_math(self)


@dataclass
class Text(NodeKind):
    value: str

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_text(self)


@dataclass
class Nop(NodeKind):
    """Tombstone left in a slot whose node was deleted."""

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_nop(self)
