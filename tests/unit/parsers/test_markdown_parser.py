#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for the Markdown grammar and MarkdownParser."""
import io
import logging
import time

import pytest

from scrapmd.ast import (
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
    Page,
    Paragraph,
    Table,
    Text,
)
from scrapmd.exceptions import InternalParserError, InvalidOptionsError, ParsingError
from scrapmd.options import IndentKind, MarkdownParserOptions, ScrapboxParserOptions
from scrapmd.parsers.cursor import Cursor
from scrapmd.parsers.markdown import (
    MarkdownContext,
    MarkdownParser,
    code_block,
    list_block,
    node,
    page,
    paragraph,
    table,
)


def span(value: str, indent=None) -> Cursor:
    return Cursor(value, MarkdownContext(indent=indent))


@pytest.mark.unit
class TestInlineNodes:
    """Test single inline constructs."""

    @pytest.mark.parametrize(
        "source,expected",
        [
            ("#tag", HashTag("tag")),
            ("[[internal link]]", InternalLink("internal link")),
            ("[Rust](https://www.rust-lang.org/)", ExternalLink(url="https://www.rust-lang.org/", title="Rust")),
            ("https://www.rust-lang.org/", ExternalLink(url="https://www.rust-lang.org/")),
            ("`let x = 1;`", BlockQuate("let x = 1;")),
            ("**bold**", Emphasis("bold", bold=1)),
            ("*italic*", Emphasis("italic", italic=1)),
            ("~~gone~~", Emphasis("gone", strikethrough=1)),
            ("$$e = mc^2$$", Math("e = mc^2")),
            ("## Title", Heading("Title", 2)),
            ("![alt](https://example.com/a.png)", Image("https://example.com/a.png")),
            ("![[diagram.png]]", Image("diagram.png")),
        ],
    )
    def test_node(self, source, expected) -> None:
        """Test that each construct parses to its node."""
        rest, result = node(span(source))
        assert result == Node(expected)
        assert rest.at_end()

    def test_image_requires_image_extension(self) -> None:
        """Test that an image embed of a page falls back to text plus a link."""
        rest, first = node(span("![alt](https://example.com/page)"))
        assert first.kind == Text("!")
        _, second = node(rest)
        assert second.kind == ExternalLink(url="https://example.com/page", title="alt")

    def test_heading_needs_space(self) -> None:
        """Test that '#' followed by text is a hashtag, not a heading."""
        assert node(span("#Title"))[1].kind == HashTag("Title")


@pytest.mark.unit
class TestParagraph:
    """Test single-line paragraphs."""

    def test_mixed_inline_content(self) -> None:
        """Test a line holding several inline constructs."""
        rest, result = paragraph(span("#efg [[internal link]][Rust](https://www.rust-lang.org/)\n"))

        assert result == Paragraph(
            [
                Node(HashTag("efg")),
                Node(Text(" ")),
                Node(InternalLink("internal link")),
                Node(ExternalLink(url="https://www.rust-lang.org/", title="Rust")),
            ]
        )
        assert rest.at_end()

    def test_blank_line_is_empty_paragraph(self) -> None:
        """Test that an empty line is an empty paragraph."""
        rest, result = paragraph(span("\nabc"))
        assert result == Paragraph([])
        assert rest.remaining == "abc"

    def test_requires_line_break(self) -> None:
        """Test that the last line without a break is not a paragraph."""
        with pytest.raises(ParsingError):
            paragraph(span("abc"))

    def test_lone_backtick_is_text(self) -> None:
        """Test that an unmatched backtick does not stop the line."""
        rest, result = paragraph(span("it`s fine\n"))
        assert result == Paragraph([Node(Text("it")), Node(Text("`")), Node(Text("s fine"))])
        assert rest.at_end()


@pytest.mark.unit
class TestLists:
    """Test list items and indentation locking."""

    def test_unindented_item_is_level_zero(self) -> None:
        """Test an item without indentation."""
        _, result = list_block(span("* 123abc\n"))
        assert result == List([ListItem.disc(0, [Node(Text("123abc"))])])

    def test_first_indent_counts_as_one_level(self) -> None:
        """Test that the first indented item locks its indentation as one unit."""
        _, result = list_block(span("    * 123abc\n"))
        assert result == List([ListItem.disc(1, [Node(Text("123abc"))])])

    def test_decimal_item(self) -> None:
        """Test a numbered item."""
        _, result = list_block(span("  123. abc\n"))
        assert result == List([ListItem.decimal(1, [Node(Text("abc"))])])

    def test_dash_marker(self) -> None:
        """Test that '-' is accepted as a bullet."""
        _, result = list_block(span("- a\n"))
        assert result.children[0].children == [Node(Text("a"))]

    def test_levels_follow_locked_space_unit(self) -> None:
        """Test that deeper items count repetitions of the locked unit."""
        rest, result = list_block(span("* a\n  * b\n    * c\n"))
        assert [item.level for item in result.children] == [0, 1, 2]
        assert rest.context.indent is None

    def test_levels_follow_locked_tab_unit(self) -> None:
        """Test tab-indented lists."""
        _, result = list_block(span("\t* a\n\t\t* b\n"))
        assert [item.level for item in result.children] == [1, 2]

    def test_locked_unit_is_used(self) -> None:
        """Test that an already locked unit is honoured by the next item."""
        _, result = list_block(span("    * a\n", indent=IndentKind.space(2)))
        assert result.children[0].level == 2

    def test_each_list_locks_its_own_unit(self) -> None:
        """Test that the lock is released when a list ends."""
        _, result = page(span("  * a\nx\n    * b\n    * c\n"))

        first, _, second = (n.kind for n in result.nodes)
        assert [item.level for item in first.children] == [1]
        assert [item.level for item in second.children] == [1, 1]

    def test_item_with_inline_content(self) -> None:
        """Test that list items hold inline nodes."""
        _, result = list_block(span("* see [[Page]]\n"))
        assert result.children[0].children == [Node(Text("see ")), Node(InternalLink("Page"))]


@pytest.mark.unit
class TestCodeBlocks:
    """Test fenced code blocks."""

    def test_lines_keep_indentation(self) -> None:
        """Test that code lines are kept verbatim."""
        rest, result = code_block(span("```hello.rs\n    panic!()\n    panic!()\n```\n"))
        assert result == CodeBlock("hello.rs", ["    panic!()", "    panic!()"])
        assert rest.at_end()

    def test_empty_block(self) -> None:
        """Test a fence without content."""
        assert code_block(span("```\n```\n"))[1] == CodeBlock("", [])

    def test_unterminated_last_line_is_internal_error(self) -> None:
        """Test that content not ending in a line break cannot be split into lines."""
        with pytest.raises(InternalParserError):
            code_block(span("```x\nabc```\n"))

    def test_missing_closing_fence(self) -> None:
        """Test that an unclosed fence fails."""
        with pytest.raises(ParsingError):
            code_block(span("```x\nabc\n"))


@pytest.mark.unit
class TestTables:
    """Test pipe tables."""

    def test_header_only(self) -> None:
        """Test a table with no body rows."""
        _, result = table(span("| a | b | c |\n| --- | --- | --- |\n"))
        assert result == Table("table", ["a", "b", "c"], [])

    def test_body_rows(self) -> None:
        """Test that body rows follow the separator."""
        _, result = table(span("| a | b |\n| --- | --- |\n| 1 | 2 |\n| 3 | 4 |\n"))
        assert result.rows == [["1", "2"], ["3", "4"]]

    def test_text_after_last_cell_is_not_a_table(self) -> None:
        """Test that a row with trailing text falls back to a paragraph."""
        _, result = page(span("| a | b | x\n"))
        assert result.nodes == [Node(Paragraph([Node(Text("| a | b | x"))]))]


@pytest.mark.unit
class TestPage:
    """Test whole-page parsing."""

    def test_paragraphs(self) -> None:
        """Test a page of paragraph lines."""
        _, result = page(span("abc\n#efg [[internal link]][Rust](https://www.rust-lang.org/)\n"))

        assert result.nodes[0] == Node(Paragraph([Node(Text("abc"))]))
        assert result.nodes[1].kind.children[0] == Node(HashTag("efg"))

    def test_blank_lines(self) -> None:
        """Test that blank lines are kept as empty paragraphs."""
        _, result = page(span("a\n\nb\n"))
        assert result == Page(
            [
                Node(Paragraph([Node(Text("a"))])),
                Node(Paragraph([])),
                Node(Paragraph([Node(Text("b"))])),
            ]
        )

    def test_heading_line(self) -> None:
        """Test that a heading sits inside its line's paragraph."""
        _, result = page(span("## Title\n"))
        assert result.nodes == [Node(Paragraph([Node(Heading("Title", 2))]))]

    def test_last_line_without_break(self) -> None:
        """Test that input without a trailing line break still parses."""
        rest, result = page(span("hoge"))
        assert result.nodes == [Node(Text("hoge"))]
        assert rest.at_end()


@pytest.mark.unit
class TestMarkdownParser:
    """Test the parser class."""

    def test_parse_string(self) -> None:
        """Test parsing from a string."""
        result = MarkdownParser().parse("* item\n")
        assert result == Page([Node(List([ListItem.disc(0, [Node(Text("item"))])]))])

    def test_parse_bytes(self) -> None:
        """Test that bytes are decoded as UTF-8."""
        result = MarkdownParser().parse("日本語\n".encode("utf-8"))
        assert result.nodes[0].kind == Paragraph([Node(Text("日本語"))])

    def test_parse_path(self, temp_dir) -> None:
        """Test parsing a file."""
        path = temp_dir / "page.md"
        path.write_text("abc\n", encoding="utf-8")
        assert MarkdownParser().parse(path).nodes[0].kind == Paragraph([Node(Text("abc"))])

    @pytest.mark.parametrize("stream", [io.StringIO("abc\n"), io.BytesIO(b"abc\n")])
    def test_parse_stream(self, stream) -> None:
        """Test parsing from text and binary streams."""
        assert MarkdownParser().parse(stream).nodes[0].kind == Paragraph([Node(Text("abc"))])

    def test_wrong_options_type(self) -> None:
        """Test that options of another dialect are rejected."""
        with pytest.raises(InvalidOptionsError) as exc_info:
            MarkdownParser(ScrapboxParserOptions())
        assert exc_info.value.converter_name == "markdown"

    def test_unmatched_backtick_parses(self) -> None:
        """Test that a stray backtick on the last line is read as text."""
        result = MarkdownParser().parse("a\n`b")
        assert result == Page([Node(Paragraph([Node(Text("a"))])), Node(Text("`")), Node(Text("b"))])

    def test_strict_reports_location(self, stopping_parser) -> None:
        """Test that a strict parse fails where the stuck block starts."""
        with pytest.raises(ParsingError) as exc_info:
            stopping_parser(MarkdownParser)().parse("a\n%%b")
        assert exc_info.value.line == 2
        assert exc_info.value.offset == 2

    def test_lenient_drops_remainder(self, stopping_parser, caplog) -> None:
        """Test that a lenient parse returns the parsed prefix and warns."""
        parser = stopping_parser(MarkdownParser)(MarkdownParserOptions(strict=False))
        with caplog.at_level(logging.WARNING, logger="scrapmd.parsers.base"):
            result = parser.parse("a\n%%b")

        assert result == Page([Node(Paragraph([Node(Text("a"))]))])
        assert "Dropping unparsed markdown input at line 2" in caplog.text

    def test_internal_errors_propagate_when_lenient(self) -> None:
        """Test that grammar invariant violations are never dropped."""
        parser = MarkdownParser(MarkdownParserOptions(strict=False))
        with pytest.raises(InternalParserError):
            parser.parse("```x\nabc```\n")

    def test_long_document_parses_quickly(self) -> None:
        """Test that parsing time grows linearly with the number of lines."""
        source = "* list item with some words in it\n" * 4000
        started = time.perf_counter()
        result = MarkdownParser().parse(source)
        assert time.perf_counter() - started < 5.0
        assert len(result.nodes[0].kind.children) == 4000
