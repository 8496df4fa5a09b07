"""Command-line interface for converting between Scrapbox and Markdown.

The tool reads one document from a file or stdin, converts it and writes the
result to a file or stdout. Settings come from a configuration file (see
``scrapmd.cli.config``) and are overridden by command-line flags.

Examples
--------
Convert a Scrapbox page to Markdown::

    $ scrapmd page.txt -o page.md

Convert Markdown back to Scrapbox from stdin::

    $ cat notes.md | scrapmd --from markdown --to scrapbox

Dump the parsed tree::

    $ scrapmd --to ast page.txt

Use tabs for nested Markdown lists and five-marker level-1 headings::

    $ scrapmd --indent tab --heading1-mapping 5 page.txt

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from scrapmd import __version__
from scrapmd.api import convert, default_transforms, normalize_dialect
from scrapmd.cli.config import CONFIG_ENV_VAR, build_conversion_config, load_config_with_priority
from scrapmd.constants import AST_TARGET, DIALECT_MARKDOWN, DIALECT_SCRAPBOX
from scrapmd.exceptions import InternalParserError, ParsingError, TransformError, ValidationError
from scrapmd.logging_utils import configure_logging
from scrapmd.options.markdown import MarkdownParserOptions
from scrapmd.options.scrapbox import ScrapboxParserOptions
from scrapmd.renderers.base import BaseRenderer
from scrapmd.transforms.registry import transform_registry

logger = logging.getLogger(__name__)

__all__ = [
    "EXIT_SUCCESS",
    "EXIT_PARSING_ERROR",
    "EXIT_VALIDATION_ERROR",
    "EXIT_INTERNAL_ERROR",
    "create_parser",
    "main",
]

EXIT_SUCCESS = 0
EXIT_PARSING_ERROR = 1
EXIT_VALIDATION_ERROR = 2
EXIT_INTERNAL_ERROR = 3


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="scrapmd",
        description="Convert documents between Scrapbox and Markdown.",
    )
    parser.add_argument("input", nargs="?", default="-", help="Input file (default: stdin)")
    parser.add_argument("-o", "--output", help="Output file (default: stdout)")
    parser.add_argument(
        "--from",
        dest="source",
        default=DIALECT_SCRAPBOX,
        help="Source dialect: markdown (md) or scrapbox (sb) (default: %(default)s)",
    )
    parser.add_argument(
        "--to",
        dest="target",
        default=DIALECT_MARKDOWN,
        help=f"Target dialect: markdown, scrapbox or {AST_TARGET} (default: %(default)s)",
    )
    parser.add_argument("--config", help=f"Configuration file (default: ${CONFIG_ENV_VAR} or auto-discovered)")
    parser.add_argument(
        "--heading1-mapping",
        type=int,
        help="Number of Scrapbox bold markers that mean a level-1 heading",
    )
    parser.add_argument(
        "--bold-to-heading",
        action="store_true",
        default=None,
        help="Promote single-marker bold to the lowest heading level",
    )
    parser.add_argument("--indent", help="Markdown list indent: tab or spaces:N")
    parser.add_argument(
        "--transform",
        action="append",
        dest="transforms",
        metavar="NAME",
        help="Run a named transform (repeatable)",
    )
    parser.add_argument(
        "--no-default-transforms",
        action="store_true",
        help="Skip the transforms the conversion direction runs by default",
    )
    parser.add_argument("--list-transforms", action="store_true", help="List available transforms and exit")
    parser.add_argument(
        "--lenient",
        action="store_true",
        help="Keep the part of the input that parses instead of failing",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: %(default)s)",
    )
    parser.add_argument("--log-file", help="Also write log messages to this file")
    parser.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging level based on command-line arguments."""
    log_level = logging.DEBUG if parsed_args.trace else getattr(logging, parsed_args.log_level)
    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _resolve_transforms(parsed_args: argparse.Namespace, source: str, target: str) -> Optional[list[str]]:
    """Return the transform list for ``convert``; ``None`` keeps the defaults."""
    requested = parsed_args.transforms or []
    if not requested and not parsed_args.no_default_transforms:
        return None

    for name in requested:
        if not transform_registry.has_transform(name):
            # raises with the list of available names
            transform_registry.get_metadata(name)

    base = [] if parsed_args.no_default_transforms else default_transforms(source, target)
    return base + requested


def _read_input(path: str) -> str | Path:
    if path == "-":
        return sys.stdin.read()
    return Path(path)


def _list_transforms() -> None:
    for name in transform_registry.list_transforms():
        print(f"{name}\t{transform_registry.get_metadata(name).description}")


def main(args: list[str] | None = None) -> int:
    """Execute the CLI and return the process exit code."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    _setup_logging_level(parsed_args)

    if parsed_args.list_transforms:
        _list_transforms()
        return EXIT_SUCCESS

    try:
        source = normalize_dialect(parsed_args.source)
        target = normalize_dialect(parsed_args.target, allow_ast=True)
        file_config = load_config_with_priority(parsed_args.config, os.environ.get(CONFIG_ENV_VAR))
        config = build_conversion_config(
            file_config,
            {
                "heading1_mapping": parsed_args.heading1_mapping,
                "bold_to_heading": parsed_args.bold_to_heading,
                "indent": parsed_args.indent,
            },
        )
        transforms = _resolve_transforms(parsed_args, source, target)
    except (argparse.ArgumentTypeError, ValidationError, TransformError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    parser_options = (
        MarkdownParserOptions(strict=not parsed_args.lenient)
        if source == DIALECT_MARKDOWN
        else ScrapboxParserOptions(strict=not parsed_args.lenient)
    )
    logger.debug("Conversion config: %s", config)

    try:
        result = convert(
            _read_input(parsed_args.input),
            source,
            target,
            config,
            transforms,
            parser_options=parser_options,
        )
        if parsed_args.output:
            BaseRenderer.write_text_output(result, parsed_args.output)
        else:
            sys.stdout.write(result)
    except ParsingError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_PARSING_ERROR
    except InternalParserError as e:
        logger.debug("Internal parser error", exc_info=True)
        print(f"Internal error: {e}", file=sys.stderr)
        return EXIT_INTERNAL_ERROR
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
