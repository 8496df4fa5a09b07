#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the scrapmd library.

This module defines the exception classes raised while parsing, transforming
and rendering documents. Parse failures are ordinary values of the grammar
machinery: every rule that does not match raises ``ParsingError`` and the
combinators catch it to try the next alternative. Violated grammar invariants
raise ``InternalParserError`` instead, which no combinator catches.

Exception Hierarchy
-------------------
- ScrapmdError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class for a parser or renderer)
    - UnsupportedDialectError (unknown dialect name)

  - ParsingError (input document does not match the grammar)

  - InternalParserError (grammar invariant violated)

  - TransformError (unknown or misconfigured transform)

"""

from __future__ import annotations

from typing import Any


class ScrapmdError(Exception):
    """Base exception class for all scrapmd-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(ScrapmdError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """Exception raised when an options object of the wrong class is supplied.

    Parameters
    ----------
    converter_name : str
        Name of the parser or renderer that rejected the options
    expected_type : type
        The options class that was expected
    received_type : type
        The class of the options object actually passed

    """

    def __init__(self, converter_name: str, expected_type: type, received_type: type):
        """Initialize with the converter name and the mismatched types."""
        message = (
            f"Invalid options type for '{converter_name}': "
            f"expected {expected_type.__name__}, got {received_type.__name__}"
        )
        super().__init__(message, parameter_name="options", parameter_value=received_type)
        self.converter_name = converter_name
        self.expected_type = expected_type
        self.received_type = received_type


class UnsupportedDialectError(ValidationError):
    """Exception raised when a dialect name is not recognised."""

    def __init__(self, dialect: str, supported: tuple[str, ...] = ()):
        """Initialize with the rejected dialect name."""
        message = f"Unsupported dialect: {dialect!r}"
        if supported:
            message += f" (expected one of: {', '.join(supported)})"
        super().__init__(message, parameter_name="dialect", parameter_value=dialect)
        self.dialect = dialect


def _byte_offset(text: str | None, position: int) -> int:
    if text is None:
        return position
    return len(text[:position].encode("utf-8"))


class ParsingError(ScrapmdError):
    """Exception raised when input text does not match the grammar.

    The location is kept as a character position into the source text and
    converted to a UTF-8 byte offset only when ``offset`` is read, so the
    many failures raised and caught while trying alternatives stay cheap.

    Parameters
    ----------
    message : str
        Description of what the failing rule expected
    line : int, default 1
        1-based line number of the failure
    position : int, default 0
        Character index of the failure within ``source``
    source : str, optional
        The complete document text the position refers to

    Attributes
    ----------
    line : int
        1-based line number
    position : int
        Character index into the document

    """

    def __init__(
        self,
        message: str,
        line: int = 1,
        position: int = 0,
        source: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the parsing error with its source location."""
        super().__init__(message, original_error=original_error)
        self.line = line
        self.position = position
        self._source = source
        self._offset: int | None = None

    @property
    def offset(self) -> int:
        """UTF-8 byte offset of the failure within the document."""
        if self._offset is None:
            self._offset = _byte_offset(self._source, self.position)
        return self._offset

    def __str__(self) -> str:
        return f"line {self.line}, byte {self.offset}: {self.message}"


class InternalParserError(ScrapmdError):
    """Exception raised when a grammar rule breaks one of its own invariants.

    Typical cause: a sub-parse over a bounded slice of the input (the inside of
    a bracket, a single physical line) stopped before the end of the slice.
    This indicates a bug in the grammar rather than malformed input, so it is
    deliberately not a ``ParsingError`` and propagates through alternatives.

    Parameters
    ----------
    message : str
        Description of the violated invariant
    rule : str
        Name of the grammar rule that detected the violation
    line : int, default 1
        1-based line number
    position : int, default 0
        Character index into ``source``
    source : str, optional
        The complete document text

    """

    def __init__(
        self,
        message: str,
        rule: str,
        line: int = 1,
        position: int = 0,
        source: str | None = None,
    ):
        """Initialize the internal error with the offending rule and location."""
        super().__init__(message)
        self.rule = rule
        self.line = line
        self.position = position
        self._source = source

    @property
    def offset(self) -> int:
        """UTF-8 byte offset of the violation within the document."""
        return _byte_offset(self._source, self.position)

    def __str__(self) -> str:
        return f"internal parser error in '{self.rule}' at line {self.line}, byte {self.offset}: {self.message}"


class TransformError(ScrapmdError):
    """Exception raised when a transform cannot be resolved or constructed.

    Parameters
    ----------
    message : str
        Description of the error
    transform_name : str, optional
        Name of the transform involved

    """

    def __init__(
        self,
        message: str,
        transform_name: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the transform error."""
        super().__init__(message, original_error=original_error)
        self.transform_name = transform_name
