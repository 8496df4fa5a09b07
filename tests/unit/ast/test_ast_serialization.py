#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for the JSON tree dump."""
import json

import pytest

from scrapmd.ast import (
    Emphasis,
    ExternalLink,
    HashTag,
    List,
    ListItem,
    Node,
    Nop,
    Page,
    Paragraph,
    Table,
    Text,
)
from scrapmd.ast.serialization import ast_to_dict, ast_to_json


@pytest.mark.unit
class TestAstToDict:
    """Test conversion of tree elements to dictionaries."""

    def test_slot_includes_id(self) -> None:
        """Test that a slot merges its payload fields with its id."""
        assert ast_to_dict(Node(Text("Hello"), id=3)) == {"node_type": "Text", "value": "Hello", "id": 3}

    def test_payload_without_slot(self) -> None:
        """Test converting a bare payload."""
        assert ast_to_dict(HashTag("tag")) == {"node_type": "HashTag", "value": "tag"}

    def test_external_link_keeps_missing_title(self) -> None:
        """Test that an absent title is dumped as None."""
        result = ast_to_dict(ExternalLink(url="https://example.com/"))
        assert result == {"node_type": "ExternalLink", "title": None, "url": "https://example.com/"}

    def test_emphasis_levels(self) -> None:
        """Test that all decoration levels are dumped."""
        result = ast_to_dict(Emphasis("x", bold=2, strikethrough=1))
        assert result["bold"] == 2
        assert result["italic"] == 0
        assert result["strikethrough"] == 1

    def test_list_items_use_kind_value(self) -> None:
        """Test that list item kinds are dumped as strings."""
        result = ast_to_dict(List([ListItem.decimal(2, [Node(Text("a"))])]))
        item = result["children"][0]
        assert item["node_type"] == "ListItem"
        assert item["kind"] == "decimal"
        assert item["level"] == 2
        assert item["children"] == [{"node_type": "Text", "value": "a", "id": 0}]

    def test_table_rows_copied(self) -> None:
        """Test that table cells are dumped as lists."""
        result = ast_to_dict(Table("t", ["a"], [["b"], []]))
        assert result == {"node_type": "Table", "name": "t", "header": ["a"], "rows": [["b"], []]}

    def test_nop(self) -> None:
        """Test dumping a tombstone."""
        assert ast_to_dict(Nop()) == {"node_type": "Nop"}

    def test_unknown_type_raises(self) -> None:
        """Test that non-tree objects are rejected."""
        with pytest.raises(ValueError, match="Unknown node type"):
            ast_to_dict("not a node")


@pytest.mark.unit
class TestAstToJson:
    """Test JSON output."""

    def test_page_round_trips_through_json(self) -> None:
        """Test that the output is valid JSON with the page structure."""
        page = Page([Node(Paragraph([Node(HashTag("tag"))]))])
        data = json.loads(ast_to_json(page))

        assert data["node_type"] == "Page"
        assert data["nodes"][0]["node_type"] == "Paragraph"
        assert data["nodes"][0]["children"][0] == {"node_type": "HashTag", "value": "tag", "id": 0}

    def test_non_ascii_kept(self) -> None:
        """Test that non-ASCII text is not escaped."""
        output = ast_to_json(Text("日本語"), indent=None)
        assert "日本語" in output

    def test_compact_output(self) -> None:
        """Test that indent=None produces a single line."""
        assert "\n" not in ast_to_json(Page([Node(Text("a"))]), indent=None)
