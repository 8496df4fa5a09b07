#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scrapmd/parsers/scrapbox.py
"""Scrapbox grammar and parser.

A page is a sequence of lists and paragraphs. A line starting with tabs,
spaces or full-width spaces is a list item whose level is the number of those
characters; every item measures its own indentation and nothing is locked
across items. Any other line is a paragraph, and blank lines become empty
paragraphs.

Most inline markup is bracket based, so the inline rules below are mostly
different readings of ``[...]`` tried in a fixed order. ``code:`` and
``table:`` blocks span several lines; their lines must start with one space
more than the current list depth, which the list item rule records in the
cursor context.
"""

from __future__ import annotations

from dataclasses import dataclass

from scrapmd.ast.nodes import (
    BlockQuate,
    CodeBlock,
    Emphasis,
    ExternalLink,
    Image,
    InternalLink,
    List,
    ListItem,
    ListKind,
    Math,
    Node,
    NodeKind,
    Page,
    Paragraph,
    Table,
)
from scrapmd.constants import (
    BOLD_MARKER,
    COMMAND_LINE_PROMPTS,
    DECORATION_MARKERS,
    DEFAULT_SCRAPBOX_BASE_URL,
    FULL_WIDTH_SPACE,
    ITALIC_MARKER,
    STRIKETHROUGH_MARKER,
)
from scrapmd.exceptions import ParsingError
from scrapmd.options.scrapbox import ScrapboxParserOptions
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
    line_ending,
    many0,
    many1,
    opt,
    space0,
    space1,
    tag,
    take_until,
    take_until_eol,
    take_while,
    take_while1,
    text,
    url,
)
from scrapmd.parsers.cursor import Cursor

_LIST_INDENT = frozenset({"\t", " ", FULL_WIDTH_SPACE})


@dataclass(frozen=True)
class ScrapboxContext:
    """Parse state of the Scrapbox grammar.

    Parameters
    ----------
    indent : int, default 0
        Depth of the list item being parsed; 0 outside lists
    base_url : str, default "https://scrapbox.io"
        Origin for ``[/project/page]`` links

    """

    indent: int = 0
    base_url: str = DEFAULT_SCRAPBOX_BASE_URL


Span = Cursor[ScrapboxContext]


def _block_prefix(cursor: Span) -> str:
    return " " * (cursor.context.indent + 1)


# =============================================================================
# Multi-line blocks
# =============================================================================


def _block_line(cursor: Span, prefix: str) -> tuple[Span, str]:
    cursor, _ = tag(cursor, prefix)
    cursor, line = take_while(cursor, lambda c: c != "\n")
    cursor, _ = line_ending(cursor)
    return cursor, line


def code_block(cursor: Span) -> tuple[Span, CodeBlock]:
    """``code:name`` followed by indented lines."""
    prefix = _block_prefix(cursor)
    cursor, _ = tag(cursor, "code:")
    cursor, file_name = take_until(cursor, "\n")
    cursor, _ = tag(cursor, "\n")
    cursor, lines = many0(cursor, lambda c: _block_line(c, prefix))
    return cursor, CodeBlock(file_name, lines)


def table_row(cursor: Span) -> tuple[Span, list[str]]:
    """An indented line of tab-separated cells; a trailing empty cell is dropped."""
    cursor, _ = tag(cursor, _block_prefix(cursor))
    cursor, line = take_until_eol(cursor)
    cursor, _ = opt(cursor, lambda c: tag(c, "\n"))
    cells = line.split("\t")
    if not cells[-1]:
        cells.pop()
    return cursor, cells


def table(cursor: Span) -> tuple[Span, Table]:
    """``table:name``, an optional header row, then body rows."""
    cursor, _ = tag(cursor, "table:")
    cursor, name = take_until(cursor, "\n")
    cursor, _ = tag(cursor, "\n")
    cursor, header = opt(cursor, table_row)
    if header is None:
        return cursor, Table(name)
    cursor, rows = many0(cursor, table_row)
    return cursor, Table(name, header, rows)


# =============================================================================
# Bracket rules
# =============================================================================


def decoration(cursor: Span) -> tuple[Span, Emphasis]:
    """``[*/- text]``: each marker character adds one level of its decoration."""
    start = cursor
    cursor, content = bracketed(cursor)
    inner = start.advance(1).window(len(content))
    inner, markers = take_while(inner, lambda c: c in DECORATION_MARKERS)
    inner, _ = tag(inner, " ")
    return cursor, Emphasis(
        inner.remaining.strip(),
        bold=markers.count(BOLD_MARKER),
        italic=markers.count(ITALIC_MARKER),
        strikethrough=markers.count(STRIKETHROUGH_MARKER),
    )


def fenced_bold(cursor: Span) -> tuple[Span, Emphasis]:
    """``[[text]]``."""
    cursor, _ = tag(cursor, "[[")
    cursor, value = take_while(cursor, lambda c: c != "]")
    cursor, _ = tag(cursor, "]]")
    return cursor, Emphasis(value.strip(), bold=1)


def math(cursor: Span) -> tuple[Span, Math]:
    """``[$ tex]``."""
    cursor, _ = tag(cursor, "[$")
    cursor, value = take_while(cursor, lambda c: c != "]")
    cursor, _ = tag(cursor, "]")
    return cursor, Math(value.strip())


def _url_then_title(inner: Span) -> tuple[Span, ExternalLink]:
    inner, _ = space0(inner)
    inner, address = url(inner)
    inner, _ = space0(inner)
    title = inner.remaining
    return inner.advance(len(inner)), ExternalLink(url=address, title=title or None)


def _title_then_url(inner: Span) -> tuple[Span, ExternalLink]:
    content = inner.remaining
    split = max(content.rfind(" "), content.rfind(FULL_WIDTH_SPACE), 0)
    title = content[:split]
    link, _ = space1(inner.advance(split))
    link, address = url(link)
    if not link.at_end():
        raise link.error("unexpected text after URL")
    return link, ExternalLink(url=address, title=title or None)


def link_or_image(cursor: Span) -> tuple[Span, NodeKind]:
    """``[url]``, ``[url title]`` or ``[title url]``, as a link or an image.

    The URL side decides first: a URL with an image extension is an image.
    Otherwise a title with an image extension is the image, as in
    ``[https://example.com https://i.gyazo.com/abc.png]``.
    """
    start = cursor
    cursor, content = bracketed(cursor)
    inner = start.advance(1).window(len(content))
    link = exhaust(inner, lambda c: alt(c, _url_then_title, _title_then_url), "link_or_image")

    if is_image_url(link.url):
        return cursor, Image(link.url)
    if link.title is not None and is_image_url(link.title):
        return cursor, Image(link.title)
    return cursor, link


def other_project_link(cursor: Span) -> tuple[Span, ExternalLink]:
    """``[/project/page]`` linking into another project."""
    cursor, content = bracketed(cursor)
    if not content.startswith("/"):
        raise cursor.error("expected '/' at the start of a project link")
    path = content[1:]
    base_url = cursor.context.base_url.rstrip("/")
    return cursor, ExternalLink(url=f"{base_url}/{path}", title=content)


def internal_link(cursor: Span) -> tuple[Span, InternalLink]:
    cursor, title = bracketed(cursor)
    return cursor, InternalLink(title)


def command_line(cursor: Span) -> tuple[Span, BlockQuate]:
    """``$ command`` or ``% command`` up to the end of the line."""
    for prompt in COMMAND_LINE_PROMPTS:
        if cursor.startswith(prompt):
            cursor, command = take_until_eol(cursor.advance(len(prompt)))
            return cursor, BlockQuate(prompt + command)
    raise cursor.error("expected command prompt")


_INLINE_RULES = tuple(
    as_node(rule)
    for rule in (
        code_block,
        table,
        hashtag,
        inline_code,
        fenced_bold,
        decoration,
        math,
        link_or_image,
        other_project_link,
        internal_link,
        external_link_plain,
        command_line,
        text,
    )
)

# inline nodes that consume their own trailing line break
_MULTI_LINE_KINDS = (CodeBlock, Table)


def node(cursor: Span) -> tuple[Span, Node]:
    """A single inline node."""
    return alt(cursor, *_INLINE_RULES)


# =============================================================================
# Lines
# =============================================================================


def paragraph(cursor: Span) -> tuple[Span, Paragraph]:
    """Inline nodes up to a line break or the end of input."""
    if cursor.at_end():
        raise cursor.error("expected paragraph")
    cursor, children = many0(cursor, node)
    cursor, _ = line_ending(cursor)
    return cursor, Paragraph(children)


def _item_children(cursor: Span) -> tuple[Span, list[Node], bool]:
    children: list[Node] = []
    while True:
        try:
            rest, child = node(cursor)
        except ParsingError:
            return cursor, children, False
        if rest.offset == cursor.offset:
            return cursor, children, False
        children.append(child)
        cursor = rest
        if isinstance(child.kind, _MULTI_LINE_KINDS):
            return cursor, children, True


def _decimal_marker(cursor: Span) -> tuple[Span, str]:
    cursor, number = digits(cursor)
    cursor, _ = tag(cursor, ". ")
    return cursor, number


def list_item(cursor: Span) -> tuple[Span, ListItem]:
    """Indented line; its level is the number of indentation characters.

    A code block or table ends the item, since it already consumed the line
    break of its last line.
    """
    cursor, indent = take_while1(cursor, lambda c: c in _LIST_INDENT, "indentation")
    cursor, number = opt(cursor, _decimal_marker)
    kind = ListKind.DISC if number is None else ListKind.DECIMAL
    level = len(indent)

    cursor, children, closed = _item_children(cursor.update_context(indent=level))
    cursor = cursor.update_context(indent=0)
    if not closed:
        cursor, _ = line_ending(cursor)
    return cursor, ListItem(kind, level, children)


def list_block(cursor: Span) -> tuple[Span, List]:
    cursor, items = many1(cursor, list_item)
    return cursor, List(items)


_BLOCK_RULES = (as_node(list_block), as_node(paragraph))


def block(cursor: Span) -> tuple[Span, Node]:
    """A single top-level node."""
    return alt(cursor, *_BLOCK_RULES)


def page(cursor: Span) -> tuple[Span, Page]:
    cursor, nodes = many0(cursor, block)
    return cursor, Page(nodes)


class ScrapboxParser(BaseParser):
    """Parse Scrapbox text into a ``Page``.

    Parameters
    ----------
    options : ScrapboxParserOptions or None, default = None
        Parser configuration

    Examples
    --------
        >>> page = ScrapboxParser().parse("#tag [internal link]\\n")
        >>> [type(n.kind).__name__ for n in page.nodes[0].kind.children]
        ['HashTag', 'Text', 'InternalLink']

    """

    dialect = "scrapbox"

    def __init__(self, options: ScrapboxParserOptions | None = None):
        """Initialize the parser with options."""
        BaseParser._validate_options_type(options, ScrapboxParserOptions, self.dialect)
        super().__init__(options or ScrapboxParserOptions())
        self.options: ScrapboxParserOptions = self.options

    def _start(self, text: str) -> Span:
        return Cursor(text, ScrapboxContext(base_url=self.options.project_base_url))

    def _page(self, cursor: Span) -> tuple[Span, Page]:
        return page(cursor)

    def _block(self, cursor: Span) -> tuple[Span, Node]:
        return block(cursor)
