#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scrapmd/renderers/base.py
"""Base classes for page renderers.

Renderers are visitors: one walk over the page appends literal syntax to an
output buffer. Rendering never fails on a well-formed page.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Union

from scrapmd.ast.nodes import Page
from scrapmd.exceptions import InvalidOptionsError
from scrapmd.options.base import BaseRendererOptions

RenderOutput = Union[str, Path, IO[bytes], IO[str]]


class BaseRenderer(ABC):
    """Abstract base class for page renderers.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Dialect-specific rendering options

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the renderer with optional configuration."""
        self.options = options

    @staticmethod
    def _validate_options_type(
        options: BaseRendererOptions | None, expected_type: type, renderer_name: str
    ) -> None:
        """Validate that options are of the correct type.

        Raises
        ------
        InvalidOptionsError
            If options is not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @abstractmethod
    def render_to_string(self, page: Page) -> str:
        """Render ``page`` to a string.

        Parameters
        ----------
        page : Page
            Page to render

        Returns
        -------
        str
            Rendered document text

        """

    def render(self, page: Page, output: RenderOutput) -> None:
        """Render ``page`` and write the text to ``output``.

        Parameters
        ----------
        page : Page
            Page to render
        output : str, Path, IO[bytes] or IO[str]
            File path, or a stream in binary or text mode

        """
        self.write_text_output(self.render_to_string(page), output)

    @staticmethod
    def write_text_output(text: str, output: RenderOutput) -> None:
        """Write text to a file path or stream, encoding as UTF-8 where needed.

        Examples
        --------
            >>> from io import StringIO
            >>> buffer = StringIO()
            >>> BaseRenderer.write_text_output("#tag\\n", buffer)
            >>> buffer.getvalue()
            '#tag\\n'

        """
        if isinstance(output, (str, Path)):
            Path(output).write_text(text, encoding="utf-8")
            return
        try:
            output.write(text)  # type: ignore[arg-type]
        except TypeError:
            output.write(text.encode("utf-8"))  # type: ignore[arg-type]
