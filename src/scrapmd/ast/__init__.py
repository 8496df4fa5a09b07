#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scrapmd/ast/__init__.py
"""Syntax tree shared by the Markdown and Scrapbox dialects.

The module consists of:

- nodes: the ``Page``/``Node`` slots and the payload kinds
- visitors: the depth-first walker with Replace/Delete commands
- serialization: JSON dump of a tree for diagnostics

Examples
--------
    >>> from scrapmd.ast import HashTag, Node, Page, Paragraph, Text
    >>> page = Page([Node(Paragraph([Node(HashTag("tag")), Node(Text(" more"))]))])

"""

from __future__ import annotations

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
    ListItem,
    ListKind,
    Math,
    Node,
    NodeKind,
    Nop,
    Page,
    Paragraph,
    Table,
    Text,
)
from scrapmd.ast.serialization import ast_to_dict, ast_to_json
from scrapmd.ast.visitors import Delete, NodeVisitor, Replace, TransformCommand

__all__ = [
    "BlockQuate",
    "CodeBlock",
    "Delete",
    "Emphasis",
    "ExternalLink",
    "HashTag",
    "Heading",
    "Image",
    "InternalLink",
    "List",
    "ListItem",
    "ListKind",
    "Math",
    "Node",
    "NodeKind",
    "NodeVisitor",
    "Nop",
    "Page",
    "Paragraph",
    "Replace",
    "Table",
    "Text",
    "TransformCommand",
    "ast_to_dict",
    "ast_to_json",
]
