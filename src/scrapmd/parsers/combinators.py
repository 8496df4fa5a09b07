#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scrapmd/parsers/combinators.py
"""Dialect-agnostic parsing primitives shared by both grammars.

Every rule here is a plain function taking a ``Cursor`` (plus arguments) and
returning ``(cursor, value)``, or raising ``ParsingError`` located where the
rule stopped matching. Higher-order helpers (``alt``, ``many0``, ``opt``...)
take rules as callables, so grammar modules compose them with small local
functions and lambdas.

The free-text rule is the interesting one. Text is whatever is left when no
structured inline rule matches, so it must stop right before anything a more
specific rule could claim. ``shortest_match`` runs several non-consuming
lookaheads (up to the next hashtag, bracket, backtick or line end) and keeps
the shortest span any of them produced.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Optional, TypeVar

from scrapmd.ast.nodes import BlockQuate, ExternalLink, HashTag, Node, NodeKind, Text
from scrapmd.constants import FULL_WIDTH_SPACE, HASHTAG_TERMINATORS, IMAGE_EXTENSIONS, URL_SCHEMES
from scrapmd.exceptions import ParsingError
from scrapmd.parsers.cursor import Cursor

T = TypeVar("T")

_DIGITS = frozenset("0123456789")


# =============================================================================
# Character classes
# =============================================================================


def is_space(char: str) -> bool:
    """ASCII space or the full-width (ideographic) space."""
    return char == " " or char == FULL_WIDTH_SPACE


def is_token_char(char: str) -> bool:
    """Printable non-space ASCII, the characters a bare URL may contain."""
    return 33 <= ord(char) <= 126


def is_digit(char: str) -> bool:
    return char in _DIGITS


def is_image_url(url: str) -> bool:
    """Return True if ``url`` ends with a known image extension."""
    return url.endswith(IMAGE_EXTENSIONS)


# =============================================================================
# Primitives
# =============================================================================


def tag(cursor: Cursor[Any], literal: str) -> tuple[Cursor[Any], str]:
    """Match ``literal`` exactly."""
    if not cursor.startswith(literal):
        raise cursor.error(f"expected {literal!r}")
    return cursor.advance(len(literal)), literal


def take_while(cursor: Cursor[Any], predicate: Callable[[str], bool]) -> tuple[Cursor[Any], str]:
    """Consume the longest (possibly empty) run of characters matching ``predicate``."""
    text = cursor.text
    index = cursor.offset
    while index < cursor.end and predicate(text[index]):
        index += 1
    return cursor.take(index - cursor.offset)


def take_while1(
    cursor: Cursor[Any], predicate: Callable[[str], bool], expected: str = "character"
) -> tuple[Cursor[Any], str]:
    """Like ``take_while`` but fail unless at least one character matches."""
    rest, value = take_while(cursor, predicate)
    if not value:
        raise cursor.error(f"expected {expected}")
    return rest, value


def take_until(cursor: Cursor[Any], needle: str) -> tuple[Cursor[Any], str]:
    """Consume everything before the next ``needle``; fail if there is none."""
    distance = cursor.find(needle)
    if distance < 0:
        raise cursor.error(f"expected {needle!r} before end of input")
    return cursor.take(distance)


def take_until_eol(cursor: Cursor[Any]) -> tuple[Cursor[Any], str]:
    """Consume the rest of the line, excluding the line break. Never fails."""
    distance = cursor.find("\n")
    if distance < 0:
        distance = len(cursor)
    return cursor.take(distance)


def line_ending(cursor: Cursor[Any]) -> tuple[Cursor[Any], str]:
    """Match a line break, or succeed without consuming at the end of input."""
    if cursor.at_end():
        return cursor, ""
    return tag(cursor, "\n")


def digits(cursor: Cursor[Any]) -> tuple[Cursor[Any], str]:
    return take_while1(cursor, is_digit, "digit")


def bracketed(cursor: Cursor[Any], open: str = "[", close: str = "]") -> tuple[Cursor[Any], str]:
    """Return the text strictly between ``open`` and the next ``close``.

    Examples
    --------
    ``[ab]c]def`` yields ``"ab"`` and leaves ``c]def``.

    """
    cursor, _ = tag(cursor, open)
    distance = cursor.find(close)
    cursor, content = cursor.take(distance if distance >= 0 else len(cursor))
    cursor, _ = tag(cursor, close)
    return cursor, content


def parenthesized(cursor: Cursor[Any]) -> tuple[Cursor[Any], str]:
    return bracketed(cursor, "(", ")")


def space0(cursor: Cursor[Any]) -> tuple[Cursor[Any], str]:
    return take_while(cursor, is_space)


def space1(cursor: Cursor[Any]) -> tuple[Cursor[Any], str]:
    return take_while1(cursor, is_space, "space")


def url(cursor: Cursor[Any]) -> tuple[Cursor[Any], str]:
    """Match ``http://`` or ``https://`` followed by a run of token characters."""
    for scheme in URL_SCHEMES:
        if cursor.startswith(scheme):
            rest, address = take_while(cursor.advance(len(scheme)), is_token_char)
            return rest, scheme + address
    raise cursor.error("expected URL")


# =============================================================================
# Combinators
# =============================================================================


def alt(cursor: Cursor[Any], *rules: Callable[[Cursor[Any]], tuple[Cursor[Any], T]]) -> tuple[Cursor[Any], T]:
    """Return the result of the first rule that matches.

    When every rule fails, the error of the last one is raised.
    ``InternalParserError`` is not a ``ParsingError`` and propagates at once.
    """
    error: Optional[ParsingError] = None
    for rule in rules:
        try:
            return rule(cursor)
        except ParsingError as e:
            error = e
    if error is None:
        raise cursor.error("no alternatives to try")
    raise error


def many0(cursor: Cursor[Any], rule: Callable[[Cursor[Any]], tuple[Cursor[Any], T]]) -> tuple[Cursor[Any], list[T]]:
    """Apply ``rule`` until it fails or stops consuming input."""
    values: list[T] = []
    while True:
        try:
            rest, value = rule(cursor)
        except ParsingError:
            return cursor, values
        if rest.offset == cursor.offset:
            return cursor, values
        values.append(value)
        cursor = rest


def many1(cursor: Cursor[Any], rule: Callable[[Cursor[Any]], tuple[Cursor[Any], T]]) -> tuple[Cursor[Any], list[T]]:
    """Like ``many0`` but the first application must succeed."""
    cursor, first = rule(cursor)
    cursor, rest = many0(cursor, rule)
    return cursor, [first, *rest]


def opt(
    cursor: Cursor[Any], rule: Callable[[Cursor[Any]], tuple[Cursor[Any], T]]
) -> tuple[Cursor[Any], Optional[T]]:
    """Apply ``rule`` if it matches, otherwise return None without consuming."""
    try:
        return rule(cursor)
    except ParsingError:
        return cursor, None


def exhaust(cursor: Cursor[Any], rule: Callable[[Cursor[Any]], tuple[Cursor[Any], T]], rule_name: str) -> T:
    """Run ``rule`` over a bounded window that it must consume completely.

    Parameters
    ----------
    cursor : Cursor
        A windowed cursor (see ``Cursor.window``)
    rule : callable
        The sub-rule to run on the window
    rule_name : str
        Name of the calling grammar rule, for the internal error

    Raises
    ------
    InternalParserError
        If the sub-rule leaves part of the window unread

    """
    rest, value = rule(cursor)
    if not rest.at_end():
        raise rest.internal_error(f"sub-parse stopped before the end of its input: {rest.remaining!r}", rule_name)
    return value


def as_node(rule: Callable[[Cursor[Any]], tuple[Cursor[Any], NodeKind]]) -> Callable[[Cursor[Any]], tuple[Cursor[Any], Node]]:
    """Wrap a rule producing a payload into one producing a ``Node`` slot."""

    def wrapped(cursor: Cursor[Any]) -> tuple[Cursor[Any], Node]:
        cursor, kind = rule(cursor)
        return cursor, Node(kind)

    wrapped.__name__ = getattr(rule, "__name__", "rule")
    return wrapped


# =============================================================================
# Inline rules shared by both dialects
# =============================================================================


def hashtag(cursor: Cursor[Any]) -> tuple[Cursor[Any], HashTag]:
    """``#tag``, ending at a space, full-width space or line break."""
    cursor, _ = tag(cursor, "#")
    cursor, value = take_while(cursor, lambda c: c not in HASHTAG_TERMINATORS)
    return cursor, HashTag(value)


def inline_code(cursor: Cursor[Any]) -> tuple[Cursor[Any], BlockQuate]:
    """A backtick-delimited code span."""
    cursor, value = bracketed(cursor, "`", "`")
    return cursor, BlockQuate(value)


def external_link_plain(cursor: Cursor[Any]) -> tuple[Cursor[Any], ExternalLink]:
    """A bare URL."""
    cursor, address = url(cursor)
    return cursor, ExternalLink(url=address)


def _current_line(cursor: Cursor[Any]) -> Cursor[Any]:
    distance = cursor.find("\n")
    return cursor.window(distance if distance >= 0 else len(cursor))


# lookaheads stop at the line end, which take_until_eol already bounds


def _until_hashtag(cursor: Cursor[Any]) -> tuple[Cursor[Any], str]:
    # only a hashtag preceded by a space ends text, but text stops at the first "#"
    line = _current_line(cursor)
    if line.find("#") < 0 or (line.find(" #") < 0 and cursor.find(" #") < 0):
        raise cursor.error("no hashtag ahead")
    return take_until(line, "#")


def _until_bracket(cursor: Cursor[Any]) -> tuple[Cursor[Any], str]:
    line = _current_line(cursor)
    distance = line.find("[")
    return line.take(distance if distance >= 0 else len(line))


def _until_backtick(cursor: Cursor[Any]) -> tuple[Cursor[Any], str]:
    return take_until(_current_line(cursor), "`")


TEXT_BOUNDARIES: tuple[Callable[[Cursor[Any]], tuple[Cursor[Any], str]], ...] = (
    _until_hashtag,
    _until_bracket,
    take_until_eol,
    _until_backtick,
)


def shortest_match(
    cursor: Cursor[Any], lookaheads: Iterable[Callable[[Cursor[Any]], tuple[Cursor[Any], str]]]
) -> tuple[Cursor[Any], str]:
    """Consume the shortest span produced by any succeeding lookahead.

    The lookaheads are run from the same position and their cursors are
    discarded, so none of them consumes input.

    Raises
    ------
    ParsingError
        If every lookahead fails or the shortest span is empty

    """
    lengths = []
    for lookahead in lookaheads:
        try:
            _, value = lookahead(cursor)
        except ParsingError:
            continue
        lengths.append(len(value))
    if not lengths:
        raise cursor.error("no text boundary found")
    shortest = min(lengths)
    if shortest == 0:
        raise cursor.error("empty text")
    return cursor.take(shortest)


def text(cursor: Cursor[Any]) -> tuple[Cursor[Any], Text]:
    """Free text up to the next construct another rule could claim.

    Examples
    --------
    ``"abc #tag"`` yields ``Text("abc ")``. A ``[`` or a backtick that no
    other rule matched is a one-character ``Text``, so ``"it`s"`` reads as
    ``Text("it")``, ``Text("`")``, ``Text("s")``.

    """
    if cursor.at_end():
        raise cursor.error("expected text")
    if cursor.startswith("#"):
        raise cursor.error("text cannot start with '#'")
    if cursor.startswith("[") or cursor.startswith("`"):
        cursor, value = cursor.take(1)
        return cursor, Text(value)
    cursor, value = shortest_match(cursor, TEXT_BOUNDARIES)
    return cursor, Text(value)
