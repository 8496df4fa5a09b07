#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scrapmd/parsers/cursor.py
"""Position-tracked view over the text being parsed.

A ``Cursor`` is an immutable value: the complete document, the current
position, the end of the region the cursor may read (rules parsing the inside
of a bracket or a single line get a narrowed window), the current line number
and a dialect-specific context value. Every grammar rule takes a cursor and
returns a new one together with what it parsed, so context changes made by a
rule reach exactly the rules that run after it and are discarded with the
cursor when an alternative fails.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Generic, TypeVar

from scrapmd.exceptions import InternalParserError, ParsingError

ContextT = TypeVar("ContextT")


@dataclass(frozen=True)
class Cursor(Generic[ContextT]):
    """The unparsed remainder of a document plus its parse context.

    Parameters
    ----------
    text : str
        The complete document
    context : ContextT
        Dialect-specific parse state threaded through every rule
    offset : int, default 0
        Character index of the next unread character
    end : int, default -1
        Character index one past the last readable character; negative means
        the end of ``text``
    line : int, default 1
        1-based line number at ``offset``

    """

    text: str
    context: ContextT
    offset: int = 0
    end: int = -1
    line: int = 1

    def __post_init__(self) -> None:
        if self.end < 0:
            object.__setattr__(self, "end", len(self.text))

    def __len__(self) -> int:
        return self.end - self.offset

    @property
    def remaining(self) -> str:
        """The readable text from the current position to the window end."""
        return self.text[self.offset : self.end]

    def at_end(self) -> bool:
        return self.offset >= self.end

    def peek(self) -> str:
        """Return the next character, or an empty string at the end."""
        if self.offset >= self.end:
            return ""
        return self.text[self.offset]

    def startswith(self, prefix: str) -> bool:
        return self.text.startswith(prefix, self.offset, self.end)

    def find(self, needle: str) -> int:
        """Return the distance to the next ``needle`` inside the window, or -1."""
        index = self.text.find(needle, self.offset, self.end)
        if index < 0:
            return -1
        return index - self.offset

    def advance(self, count: int) -> Cursor[ContextT]:
        """Return a cursor moved ``count`` characters forward."""
        target = min(self.offset + count, self.end)
        lines = self.text.count("\n", self.offset, target)
        return replace(self, offset=target, line=self.line + lines)

    def take(self, count: int) -> tuple[Cursor[ContextT], str]:
        """Consume ``count`` characters, returning the new cursor and the text."""
        value = self.text[self.offset : min(self.offset + count, self.end)]
        return self.advance(len(value)), value

    def window(self, length: int) -> Cursor[ContextT]:
        """Return a cursor restricted to the next ``length`` characters."""
        return replace(self, end=min(self.offset + length, self.end))

    def with_context(self, context: ContextT) -> Cursor[ContextT]:
        return replace(self, context=context)

    def update_context(self, **changes: Any) -> Cursor[ContextT]:
        """Return a cursor whose (dataclass) context has ``changes`` applied."""
        return replace(self, context=replace(self.context, **changes))  # type: ignore[type-var]

    def error(self, message: str) -> ParsingError:
        """Build a ``ParsingError`` located at this cursor."""
        return ParsingError(message, line=self.line, position=self.offset, source=self.text)

    def internal_error(self, message: str, rule: str) -> InternalParserError:
        """Build an ``InternalParserError`` located at this cursor."""
        return InternalParserError(message, rule=rule, line=self.line, position=self.offset, source=self.text)
