#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scrapmd/parsers/base.py
"""Base class for the dialect parsers.

Parsing is all-or-nothing: a ``Page`` is returned only when the page rule
consumed the whole document. When it stops early, the block rule is run once
more at the stopping point so that the caller sees the error of the block that
could not be parsed, located where it failed.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Any, ClassVar, Union

from scrapmd.ast.nodes import Node, Page
from scrapmd.exceptions import InvalidOptionsError, ParsingError
from scrapmd.options.base import BaseParserOptions
from scrapmd.parsers.cursor import Cursor

logger = logging.getLogger(__name__)

ParserInput = Union[str, bytes, Path, IO[str], IO[bytes]]


class BaseParser(ABC):
    """Abstract base class for the dialect parsers.

    Subclasses provide the dialect's initial cursor, its page rule and its
    block rule; ``parse`` drives them.

    Parameters
    ----------
    options : BaseParserOptions or None, default = None
        Dialect-specific parsing options

    """

    dialect: ClassVar[str] = ""

    def __init__(self, options: BaseParserOptions | None = None):
        """Initialize the parser with options."""
        self.options = options or BaseParserOptions()

    @staticmethod
    def _validate_options_type(options: BaseParserOptions | None, expected_type: type, parser_name: str) -> None:
        """Validate that options are of the correct type.

        Parameters
        ----------
        options : BaseParserOptions or None
            Options object to validate
        expected_type : type
            The expected options class type
        parser_name : str
            Name of the parser for error messages

        Raises
        ------
        InvalidOptionsError
            If options is not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=parser_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @staticmethod
    def _read_input(input_data: ParserInput) -> str:
        """Load document text from a string, UTF-8 bytes, a path or a stream."""
        if isinstance(input_data, str):
            return input_data
        if isinstance(input_data, bytes):
            return input_data.decode("utf-8")
        if isinstance(input_data, Path):
            return input_data.read_text(encoding="utf-8")
        content = input_data.read()
        if isinstance(content, bytes):
            return content.decode("utf-8")
        return content

    @abstractmethod
    def _start(self, text: str) -> Cursor[Any]:
        """Return the cursor a parse of ``text`` starts from."""

    @abstractmethod
    def _page(self, cursor: Cursor[Any]) -> tuple[Cursor[Any], Page]:
        """Run the page rule."""

    @abstractmethod
    def _block(self, cursor: Cursor[Any]) -> tuple[Cursor[Any], Node]:
        """Run the block rule once (used to report where parsing stopped)."""

    def parse(self, input_data: ParserInput) -> Page:
        """Parse a document into a ``Page``.

        Parameters
        ----------
        input_data : str, bytes, Path or file-like
            Document text, UTF-8 bytes, a path to read, or a readable stream

        Returns
        -------
        Page
            The parsed document

        Raises
        ------
        ParsingError
            If part of the document does not match the grammar and the
            parser is strict
        InternalParserError
            If a grammar rule breaks one of its invariants

        """
        text = self._read_input(input_data)
        logger.debug("Parsing %d characters of %s", len(text), self.dialect)

        cursor, page = self._page(self._start(text))
        if not cursor.at_end():
            if self.options.strict:
                raise self._failure(cursor)
            logger.warning(
                "Dropping unparsed %s input at line %d (%d characters)", self.dialect, cursor.line, len(cursor)
            )

        logger.debug("Parsed %d top-level nodes", len(page.nodes))
        return page

    def _failure(self, cursor: Cursor[Any]) -> ParsingError:
        try:
            rest, _ = self._block(cursor)
        except ParsingError as e:
            return e
        # the block matched without consuming anything
        return rest.error(f"unable to parse input: {cursor.remaining[:40]!r}")
