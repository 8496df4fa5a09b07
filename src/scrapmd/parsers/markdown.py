#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scrapmd/parsers/markdown.py
"""Markdown grammar and parser.

A page is a sequence of blocks, each tried in priority order: fenced code
block, table, list, a paragraph line, and finally a single inline node so that
input without a trailing line break still parses. Paragraph lines are split
off first and their inline content is parsed inside that one-line window.

List indentation is locked per list: the first indented item decides whether
the list is indented with tabs or with runs of N spaces, and every following
item counts repetitions of that unit to get its level. The lock lives in the
cursor context and is cleared when the list ends, so the next list in the
document picks its own unit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from scrapmd.ast.nodes import (
    CodeBlock,
    Emphasis,
    ExternalLink,
    Heading,
    Image,
    InternalLink,
    List,
    ListItem,
    ListKind,
    Math,
    Node,
    Page,
    Paragraph,
    Table,
)
from scrapmd.constants import MARKDOWN_TABLE_NAME
from scrapmd.options.common import IndentKind
from scrapmd.options.markdown import MarkdownParserOptions
from scrapmd.parsers.base import BaseParser
from scrapmd.parsers.combinators import (
    alt,
    as_node,
    bracketed,
    digits,
    exhaust,
    external_link_plain,
    hashtag,
    inline_code,
    is_image_url,
    many0,
    many1,
    parenthesized,
    tag,
    take_until,
    take_until_eol,
    take_while,
    text,
)
from scrapmd.parsers.cursor import Cursor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MarkdownContext:
    """Parse state of the Markdown grammar.

    Parameters
    ----------
    indent : IndentKind or None, default None
        Indentation unit locked by the list being parsed, if any

    """

    indent: Optional[IndentKind] = None


Span = Cursor[MarkdownContext]


# =============================================================================
# Inline rules
# =============================================================================


def heading(cursor: Span) -> tuple[Span, Heading]:
    """``## text`` up to the end of the line."""
    cursor, marks = many1(cursor, lambda c: tag(c, "#"))
    cursor, _ = tag(cursor, " ")
    cursor, value = take_until_eol(cursor)
    return cursor, Heading(value, len(marks))


def image(cursor: Span) -> tuple[Span, Image]:
    """``![alt](url)`` whose URL names an image file."""
    start = cursor
    cursor, _ = tag(cursor, "!")
    cursor, _ = bracketed(cursor)
    cursor, uri = parenthesized(cursor)
    if not is_image_url(uri):
        raise start.error(f"not an image URL: {uri!r}")
    return cursor, Image(uri)


def _delimited(cursor: Span, delimiter: str) -> tuple[Span, str]:
    cursor, _ = tag(cursor, delimiter)
    cursor, value = take_while(cursor, lambda c: c != delimiter[0])
    cursor, _ = tag(cursor, delimiter)
    return cursor, value


def bold(cursor: Span) -> tuple[Span, Emphasis]:
    cursor, value = _delimited(cursor, "**")
    return cursor, Emphasis(value, bold=1)


def italic(cursor: Span) -> tuple[Span, Emphasis]:
    cursor, value = _delimited(cursor, "*")
    return cursor, Emphasis(value, italic=1)


def strikethrough(cursor: Span) -> tuple[Span, Emphasis]:
    cursor, value = _delimited(cursor, "~~")
    return cursor, Emphasis(value, strikethrough=1)


def emphasis(cursor: Span) -> tuple[Span, Emphasis]:
    """Bold, italic or strikethrough; markers do not nest or mix."""
    return alt(cursor, bold, italic, strikethrough)


def external_link(cursor: Span) -> tuple[Span, ExternalLink]:
    """``[title](url)``."""
    cursor, title = bracketed(cursor)
    cursor, address = parenthesized(cursor)
    return cursor, ExternalLink(url=address, title=title)


def math(cursor: Span) -> tuple[Span, Math]:
    cursor, value = _delimited(cursor, "$$")
    return cursor, Math(value)


def _wiki_link(cursor: Span) -> tuple[Span, str]:
    cursor, _ = tag(cursor, "[[")
    cursor, value = take_while(cursor, lambda c: c != "]")
    cursor, _ = tag(cursor, "]]")
    return cursor, value


def image_embed(cursor: Span) -> tuple[Span, Image]:
    """``![[file.png]]``."""
    start = cursor
    cursor, _ = tag(cursor, "!")
    cursor, uri = _wiki_link(cursor)
    if not is_image_url(uri):
        raise start.error(f"not an image: {uri!r}")
    return cursor, Image(uri)


def internal_link(cursor: Span) -> tuple[Span, InternalLink]:
    """``[[title]]``."""
    cursor, title = _wiki_link(cursor)
    return cursor, InternalLink(title)


_INLINE_RULES = tuple(
    as_node(rule)
    for rule in (
        heading,
        hashtag,
        inline_code,
        image,
        emphasis,
        external_link,
        math,
        image_embed,
        internal_link,
        external_link_plain,
        text,
    )
)


def node(cursor: Span) -> tuple[Span, Node]:
    """A single inline node."""
    return alt(cursor, *_INLINE_RULES)


def _inline_nodes(cursor: Span) -> tuple[Span, list[Node]]:
    return many0(cursor, node)


# =============================================================================
# Block rules
# =============================================================================


def paragraph(cursor: Span) -> tuple[Span, Paragraph]:
    """One physical line; its inline content must account for the whole line."""
    rest, line = take_until_eol(cursor)
    rest, _ = tag(rest, "\n")
    children = exhaust(cursor.window(len(line)), _inline_nodes, "paragraph")
    return rest, Paragraph(children)


def _item_indent(cursor: Span) -> tuple[Span, int]:
    locked = cursor.context.indent
    if locked is not None:
        cursor, units = many0(cursor, lambda c: tag(c, locked.unit))
        return cursor, len(units)

    cursor, leading = take_while(cursor, lambda c: c in " \t")
    if not leading:
        return cursor, 0
    unit = IndentKind.tab() if leading[0] == "\t" else IndentKind.space(len(leading))
    logger.debug("List indent locked to %s at line %d", unit, cursor.line)
    return cursor.update_context(indent=unit), 1


def _decimal_item(cursor: Span) -> tuple[Span, tuple[ListKind, list[Node]]]:
    cursor, _ = digits(cursor)
    cursor, _ = tag(cursor, ". ")
    cursor, children = _inline_nodes(cursor)
    cursor, _ = tag(cursor, "\n")
    return cursor, (ListKind.DECIMAL, children)


def _disc_item(cursor: Span) -> tuple[Span, tuple[ListKind, list[Node]]]:
    cursor, _ = alt(cursor, lambda c: tag(c, "* "), lambda c: tag(c, "- "))
    cursor, children = _inline_nodes(cursor)
    cursor, _ = tag(cursor, "\n")
    return cursor, (ListKind.DISC, children)


def list_item(cursor: Span) -> tuple[Span, ListItem]:
    """``N. item`` or ``* item`` / ``- item`` after the item's indentation."""
    cursor, level = _item_indent(cursor)
    cursor, (kind, children) = alt(cursor, _decimal_item, _disc_item)
    return cursor, ListItem(kind, level, children)


def list_block(cursor: Span) -> tuple[Span, List]:
    """A run of list items sharing one indentation unit."""
    cursor, items = many1(cursor, list_item)
    return cursor.update_context(indent=None), List(items)


def _code_line(cursor: Span) -> tuple[Span, str]:
    cursor, line = take_while(cursor, lambda c: c != "\n")
    cursor, _ = tag(cursor, "\n")
    return cursor, line


def code_block(cursor: Span) -> tuple[Span, CodeBlock]:
    """A fenced block: opening fence with a file name, lines, closing fence."""
    cursor, _ = tag(cursor, "```")
    cursor, file_name = take_until(cursor, "\n")
    cursor, _ = tag(cursor, "\n")
    body = cursor
    cursor, content = take_until(cursor, "```")
    cursor, _ = tag(cursor, "```\n")
    lines = exhaust(body.window(len(content)), lambda c: many0(c, _code_line), "code_block")
    return cursor, CodeBlock(file_name, lines)


def _table_cell(cursor: Span) -> tuple[Span, str]:
    cursor, cell = take_until(cursor, "|")
    cursor, _ = tag(cursor, "|")
    return cursor, cell


def table_row(cursor: Span) -> tuple[Span, list[str]]:
    """``| a | b |``; cells are trimmed."""
    rest, line = take_until_eol(cursor)
    rest, _ = tag(rest, "\n")
    row = cursor.window(len(line))
    row, _ = tag(row, "|")
    row, cells = many1(row, _table_cell)
    if not row.at_end():
        raise row.error("unexpected text after the last table cell")
    return rest, [cell.strip() for cell in cells]


def table(cursor: Span) -> tuple[Span, Table]:
    """Header row, separator row, then body rows."""
    cursor, header = table_row(cursor)
    cursor, _ = table_row(cursor)
    cursor, rows = many0(cursor, table_row)
    return cursor, Table(MARKDOWN_TABLE_NAME, header, rows)


_BLOCK_RULES = (
    as_node(code_block),
    as_node(table),
    as_node(list_block),
    as_node(paragraph),
    node,
)


def block(cursor: Span) -> tuple[Span, Node]:
    """A single top-level node."""
    return alt(cursor, *_BLOCK_RULES)


def page(cursor: Span) -> tuple[Span, Page]:
    cursor, nodes = many0(cursor, block)
    return cursor, Page(nodes)


class MarkdownParser(BaseParser):
    """Parse Markdown text into a ``Page``.

    Parameters
    ----------
    options : MarkdownParserOptions or None, default = None
        Parser configuration

    Examples
    --------
        >>> page = MarkdownParser().parse("* a\\n  * b\\n")
        >>> [item.level for item in page.nodes[0].kind.children]
        [0, 1]

    """

    dialect = "markdown"

    def __init__(self, options: MarkdownParserOptions | None = None):
        """Initialize the parser with options."""
        BaseParser._validate_options_type(options, MarkdownParserOptions, self.dialect)
        super().__init__(options or MarkdownParserOptions())
        self.options: MarkdownParserOptions = self.options

    def _start(self, text: str) -> Span:
        return Cursor(text, MarkdownContext())

    def _page(self, cursor: Span) -> tuple[Span, Page]:
        return page(cursor)

    def _block(self, cursor: Span) -> tuple[Span, Node]:
        return block(cursor)
