#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Shared roots of the parser and renderer option classes.

Options are frozen dataclasses. A variant is made with ``create_updated``
rather than by mutation, so one options object can be handed to several
parsers or renderers.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Copy-with-changes for frozen dataclasses.

    Examples
    --------
        >>> from scrapmd.options import ScrapboxParserOptions
        >>> ScrapboxParserOptions().create_updated(strict=False).strict
        False

    """

    def create_updated(self, **kwargs: Any) -> Self:
        """Return a copy with the given fields replaced.

        ``__post_init__`` validation runs again on the copy.
        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class BaseRendererOptions(CloneFrozenMixin):
    """Root of the per-dialect renderer options."""


@dataclass(frozen=True)
class BaseParserOptions(CloneFrozenMixin):
    """Root of the per-dialect parser options.

    Parameters
    ----------
    strict : bool, default True
        Raise ``ParsingError`` when the page rule stops before the end of the
        document. When False the parsed prefix is returned and the rest is
        dropped with a warning.

    """

    strict: bool = field(
        default=True,
        metadata={"help": "Fail on unparsable input instead of dropping the remainder", "importance": "core"},
    )
