#  Copyright (c) 2025 Tom Villani, Ph.D.
# scrapmd/options/scrapbox.py
"""Configuration options for Scrapbox parsing and rendering."""

from __future__ import annotations

from dataclasses import dataclass, field

from scrapmd.constants import (
    DEFAULT_SCRAPBOX_BASE_URL,
    DEFAULT_SCRAPBOX_HEADING1_MAPPING,
    DEFAULT_SCRAPBOX_INDENT,
)
from scrapmd.options.base import BaseParserOptions, BaseRendererOptions


@dataclass(frozen=True)
class ScrapboxParserOptions(BaseParserOptions):
    """Configuration options for parsing Scrapbox.

    Parameters
    ----------
    project_base_url : str, default "https://scrapbox.io"
        Origin that ``[/project/page]`` links resolve against

    """

    project_base_url: str = field(
        default=DEFAULT_SCRAPBOX_BASE_URL,
        metadata={"help": "Origin for [/project/page] links", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        if not self.project_base_url:
            raise ValueError("project_base_url must not be empty")


@dataclass(frozen=True)
class ScrapboxRendererOptions(BaseRendererOptions):
    """Configuration options for rendering a page as Scrapbox.

    Parameters
    ----------
    indent : str, default "\\t"
        String repeated ``level + 1`` times in front of list items
    heading1_mapping : int, default 4
        Number of ``*`` markers a level-1 heading is written with; each
        deeper level drops one marker, never going below one

    """

    indent: str = field(
        default=DEFAULT_SCRAPBOX_INDENT,
        metadata={"help": "List indentation string", "importance": "core"},
    )
    heading1_mapping: int = field(
        default=DEFAULT_SCRAPBOX_HEADING1_MAPPING,
        metadata={"help": "Bold markers used for a level-1 heading", "type": int, "importance": "core"},
    )

    def __post_init__(self) -> None:
        """Validate renderer options.

        Raises
        ------
        ValueError
            If the indent is empty or heading1_mapping is not positive.

        """
        if not self.indent:
            raise ValueError("indent must not be empty")
        if self.heading1_mapping <= 0:
            raise ValueError(f"heading1_mapping must be positive, got {self.heading1_mapping}")
