#  Copyright (c) 2025 Tom Villani, Ph.D.
# scrapmd/options/config.py
"""The conversion configuration record.

``ConversionConfig`` is the small record a caller hands to the conversion
entry points. It drives the heading-mapping pass and the list indentation of
the Markdown renderer, and the Scrapbox renderer writes headings back with the
same level mapping so that a round trip through both dialects is stable.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from typing import Any, Mapping

from scrapmd.constants import DEFAULT_BOLD_TO_HEADING, DEFAULT_HEADING1_MAPPING
from scrapmd.exceptions import ValidationError
from scrapmd.options.base import CloneFrozenMixin
from scrapmd.options.common import IndentKind

logger = logging.getLogger(__name__)

# camelCase spellings written by the browser front end
_KEY_ALIASES = {
    "heading1Mapping": "heading1_mapping",
    "heading1LevelMapping": "heading1_mapping",
    "boldToHeading": "bold_to_heading",
}


@dataclass(frozen=True)
class ConversionConfig(CloneFrozenMixin):
    """Settings shared by a whole conversion.

    Parameters
    ----------
    heading1_mapping : int, default 3
        Number of Scrapbox bold markers that mean a level-1 heading.
        ``[*** x]`` becomes ``# x`` with the default, ``[** x]`` becomes ``## x``.
    bold_to_heading : bool, default False
        Also promote single-marker bold (``[* x]``) to the lowest heading
        level instead of leaving it as bold text
    indent : IndentKind, default two spaces
        List indentation unit of the Markdown output

    Examples
    --------
    >>> ConversionConfig.from_dict({"heading1Mapping": 4, "indent": {"type": "Tab"}})
    ConversionConfig(heading1_mapping=4, bold_to_heading=False, indent=IndentKind(type='tab', size=1))

    """

    heading1_mapping: int = field(
        default=DEFAULT_HEADING1_MAPPING,
        metadata={"help": "Bold markers that map to a level-1 heading", "type": int, "importance": "core"},
    )
    bold_to_heading: bool = field(
        default=DEFAULT_BOLD_TO_HEADING,
        metadata={"help": "Promote single-marker bold to a heading", "importance": "core"},
    )
    indent: IndentKind = field(
        default_factory=IndentKind.space,
        metadata={"help": "Markdown list indentation (tab or spaces:N)", "importance": "core"},
    )

    def __post_init__(self) -> None:
        """Validate the configuration.

        Raises
        ------
        ValueError
            If heading1_mapping is not a positive integer, bold_to_heading is
            not a bool, or indent is not an IndentKind.

        """
        if isinstance(self.heading1_mapping, bool) or not isinstance(self.heading1_mapping, int):
            raise ValueError(f"heading1_mapping must be an integer, got {self.heading1_mapping!r}")
        if self.heading1_mapping <= 0:
            raise ValueError(f"heading1_mapping must be positive, got {self.heading1_mapping}")
        if not isinstance(self.bold_to_heading, bool):
            raise ValueError(f"bold_to_heading must be true or false, got {self.bold_to_heading!r}")
        if not isinstance(self.indent, IndentKind):
            raise ValueError(f"indent must be an IndentKind, got {type(self.indent).__name__}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ConversionConfig:
        """Build a config from a plain mapping (a loaded config file).

        Both snake_case and the camelCase keys of the browser front end are
        accepted. ``indent`` may be a record (``{"type": "Space", "size": 2}``)
        or a command-line spelling (``"tab"``, ``"spaces:4"``).

        Parameters
        ----------
        data : Mapping
            Configuration values

        Returns
        -------
        ConversionConfig
            The validated configuration

        Raises
        ------
        ValidationError
            If a key is unknown or a value is invalid

        """
        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in data.items():
            name = _KEY_ALIASES.get(key, key)
            if name not in known:
                raise ValidationError(f"Unknown configuration key: {key!r}", parameter_name=key, parameter_value=value)
            values[name] = value

        indent = values.get("indent")
        if isinstance(indent, str):
            values["indent"] = IndentKind.from_string(indent)
        elif indent is not None and not isinstance(indent, IndentKind):
            values["indent"] = IndentKind.from_dict(indent)

        try:
            config = cls(**values)
        except ValueError as e:
            raise ValidationError(f"Invalid configuration: {e}", original_error=e) from e
        logger.debug("Loaded conversion config: %s", config)
        return config

    def to_dict(self) -> dict[str, Any]:
        return {
            "heading1_mapping": self.heading1_mapping,
            "bold_to_heading": self.bold_to_heading,
            "indent": self.indent.to_dict(),
        }
