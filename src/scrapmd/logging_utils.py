#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Logging setup for the scrapmd command line.

Library modules only create module-level loggers. Handlers are attached
here, once, when the command-line front end starts.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

CONSOLE_FORMAT = "%(levelname)s: %(message)s"
TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_log_level(log_level: int | str) -> int:
    """Return the numeric level for ``log_level``; unknown names mean WARNING."""
    if isinstance(log_level, int):
        return log_level
    level = logging.getLevelName(str(log_level).upper())
    return level if isinstance(level, int) else logging.WARNING


def _make_formatter(trace_mode: bool) -> logging.Formatter:
    if trace_mode:
        return logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT)
    return logging.Formatter(CONSOLE_FORMAT)


def _attach(root: logging.Logger, handler: logging.Handler, level: int, formatter: logging.Formatter) -> None:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    root.addHandler(handler)


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Replace the root handlers with a stderr handler and an optional file handler.

    Parameters
    ----------
    log_level : int | str
        Numeric level or level name such as ``"debug"``
    log_file : str, optional
        File that receives a copy of the log; skipped with a warning if it
        cannot be opened
    trace_mode : bool, default False
        Prefix messages with a timestamp and the logger name

    Returns
    -------
    logging.Logger
        The root logger

    """
    level = resolve_log_level(log_level)
    formatter = _make_formatter(trace_mode)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    _attach(root, logging.StreamHandler(sys.stderr), level, formatter)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            root.warning("Could not open log file %s: %s", log_file, exc)
            return root
        _attach(root, file_handler, level, formatter)
        root.info("Logging to file: %s", log_file)

    return root
