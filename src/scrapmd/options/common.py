#  Copyright (c) 2025 Tom Villani, Ph.D.

# scrapmd/options/common.py
"""Common options shared across parsers and renderers.

``IndentKind`` describes a list indentation unit. The Markdown grammar locks
one per list while parsing, and the Markdown renderer repeats one per level.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from scrapmd.constants import DEFAULT_INDENT_SIZE, IndentType
from scrapmd.exceptions import ValidationError


@dataclass(frozen=True)
class IndentKind:
    """An indentation unit: one tab, or a fixed run of spaces.

    Parameters
    ----------
    type : {"tab", "space"}, default "space"
        Indent character
    size : int, default 2
        Number of spaces in one unit; ignored for tabs

    Examples
    --------
    >>> IndentKind.space(4).unit
    '    '
    >>> IndentKind.from_dict({"type": "Tab"}).unit
    '\\t'

    """

    type: IndentType = field(
        default="space",
        metadata={"help": "Indent character", "choices": ["tab", "space"], "importance": "core"},
    )
    size: int = field(
        default=DEFAULT_INDENT_SIZE,
        metadata={"help": "Spaces per indent level", "type": int, "importance": "core"},
    )

    def __post_init__(self) -> None:
        """Validate the indent type and size.

        Raises
        ------
        ValueError
            If the type is unknown or a space indent is not positive.

        """
        if self.type not in ("tab", "space"):
            raise ValueError(f"indent type must be 'tab' or 'space', got {self.type!r}")
        if self.type == "space" and self.size <= 0:
            raise ValueError(f"indent size must be positive, got {self.size}")

    @classmethod
    def tab(cls) -> IndentKind:
        return cls(type="tab", size=1)

    @classmethod
    def space(cls, size: int = DEFAULT_INDENT_SIZE) -> IndentKind:
        return cls(type="space", size=size)

    @property
    def unit(self) -> str:
        """The string repeated once per indentation level."""
        if self.type == "tab":
            return "\t"
        return " " * self.size

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> IndentKind:
        """Build an indent from ``{"type": "Tab"}`` or ``{"type": "Space", "size": N}``.

        Parameters
        ----------
        data : Mapping
            Indent record; ``type`` is case-insensitive and ``size`` defaults to 2

        Returns
        -------
        IndentKind
            The parsed indent

        Raises
        ------
        ValidationError
            If the record is malformed

        """
        if not isinstance(data, Mapping):
            raise ValidationError(
                f"indent must be a table with a 'type' key, got {type(data).__name__}",
                parameter_name="indent",
                parameter_value=data,
            )
        kind = str(data.get("type", "")).lower()
        try:
            if kind == "tab":
                return cls.tab()
            if kind == "space":
                return cls.space(int(data.get("size", DEFAULT_INDENT_SIZE)))
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Invalid indent: {e}", parameter_name="indent", parameter_value=data) from e
        raise ValidationError(
            f"indent type must be 'Tab' or 'Space', got {data.get('type')!r}",
            parameter_name="indent",
            parameter_value=data,
        )

    @classmethod
    def from_string(cls, value: str) -> IndentKind:
        """Parse the command-line spelling: ``tab``, ``spaces`` or ``spaces:N``.

        Raises
        ------
        ValidationError
            If the spelling is not recognised

        """
        name, _, size = value.strip().lower().partition(":")
        if name == "tab" and not size:
            return cls.tab()
        if name in ("space", "spaces"):
            try:
                return cls.space(int(size) if size else DEFAULT_INDENT_SIZE)
            except ValueError as e:
                raise ValidationError(f"Invalid indent {value!r}: {e}", parameter_name="indent") from e
        raise ValidationError(
            f"Invalid indent {value!r}; use 'tab' or 'spaces:N'", parameter_name="indent", parameter_value=value
        )

    def to_dict(self) -> dict[str, Any]:
        if self.type == "tab":
            return {"type": "Tab"}
        return {"type": "Space", "size": self.size}
