#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scrapmd/ast/serialization.py
"""JSON dump of parsed pages for diagnostics.

Each slot is flattened into its payload's fields plus the slot ``id`` and a
``node_type`` discriminator. There is no loader: pages are not persisted.

Examples
--------
    >>> from scrapmd.ast import Node, Page, Paragraph, Text
    >>> from scrapmd.ast.serialization import ast_to_json
    >>> page = Page([Node(Paragraph([Node(Text("Hello"))]))])
    >>> print(ast_to_json(page, indent=None))
    {"node_type": "Page", "nodes": [{"node_type": "Paragraph", "id": 0, "children": [...]}]}

"""

from __future__ import annotations

import json
from typing import Any, Callable, Union

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
    Math,
    Node,
    NodeKind,
    Nop,
    Page,
    Paragraph,
    Table,
    Text,
)

Serializable = Union[Page, Node, NodeKind, ListItem]


def _serialize_children(nodes: list[Node]) -> list[dict[str, Any]]:
    return [ast_to_dict(node) for node in nodes]


def _serialize_list_item(item: ListItem) -> dict[str, Any]:
    return {
        "node_type": "ListItem",
        "kind": item.kind.value,
        "level": item.level,
        "children": _serialize_children(item.children),
    }


_SERIALIZATION_DISPATCH: dict[type, Callable[[Any], dict[str, Any]]] = {
    Page: lambda page: {"node_type": "Page", "nodes": _serialize_children(page.nodes)},
    Paragraph: lambda node: {"node_type": "Paragraph", "children": _serialize_children(node.children)},
    List: lambda node: {"node_type": "List", "children": [_serialize_list_item(item) for item in node.children]},
    ListItem: _serialize_list_item,
    HashTag: lambda node: {"node_type": "HashTag", "value": node.value},
    InternalLink: lambda node: {"node_type": "InternalLink", "title": node.title},
    ExternalLink: lambda node: {"node_type": "ExternalLink", "title": node.title, "url": node.url},
    Emphasis: lambda node: {
        "node_type": "Emphasis",
        "text": node.text,
        "bold": node.bold,
        "italic": node.italic,
        "strikethrough": node.strikethrough,
    },
    Heading: lambda node: {"node_type": "Heading", "text": node.text, "level": node.level},
    BlockQuate: lambda node: {"node_type": "BlockQuate", "value": node.value},
    CodeBlock: lambda node: {"node_type": "CodeBlock", "file_name": node.file_name, "children": list(node.children)},
    Table: lambda node: {
        "node_type": "Table",
        "name": node.name,
        "header": list(node.header),
        "rows": [list(row) for row in node.rows],
    },
    Image: lambda node: {"node_type": "Image", "uri": node.uri},
    Math: lambda node: {"node_type": "Math", "value": node.value},
    Text: lambda node: {"node_type": "Text", "value": node.value},
    Nop: lambda node: {"node_type": "Nop"},
}


def ast_to_dict(node: Serializable) -> dict[str, Any]:
    """Convert a page, slot, payload or list item to a dictionary.

    Parameters
    ----------
    node : Page, Node, NodeKind or ListItem
        The tree element to convert

    Returns
    -------
    dict
        Dictionary representation; slots include their ``id``

    Raises
    ------
    ValueError
        If the object is not a known tree element

    Examples
    --------
    >>> ast_to_dict(Node(Text("Hello")))
    {'node_type': 'Text', 'value': 'Hello', 'id': 0}

    """
    if isinstance(node, Node):
        result = ast_to_dict(node.kind)
        result["id"] = node.id
        return result

    serializer = _SERIALIZATION_DISPATCH.get(type(node))
    if serializer:
        return serializer(node)

    raise ValueError(f"Unknown node type for serialization: {type(node).__name__}")


def ast_to_json(node: Serializable, indent: int | None = 2) -> str:
    """Serialize a tree element to a JSON string.

    Parameters
    ----------
    node : Page, Node, NodeKind or ListItem
        The tree element to serialize
    indent : int or None, default = 2
        Number of spaces for indentation (None for compact output)

    Returns
    -------
    str
        JSON text with non-ASCII characters preserved

    """
    return json.dumps(ast_to_dict(node), indent=indent, ensure_ascii=False)
