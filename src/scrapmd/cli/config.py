#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the scrapmd CLI.

A configuration file holds the fields of ``ConversionConfig``. It may be
JSON, TOML or YAML, or the ``[tool.scrapmd]`` table of a ``pyproject.toml``.
Without ``--config`` the working directory and its parents are searched,
then the user's home directory.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Callable, Dict, Optional

import yaml

from scrapmd.constants import CONFIG_FILENAMES, PYPROJECT_SECTION
from scrapmd.exceptions import ValidationError
from scrapmd.options.config import ConversionConfig

logger = logging.getLogger(__name__)

PYPROJECT_FILENAME = "pyproject.toml"
CONFIG_ENV_VAR = "SCRAPMD_CONFIG"


def _read_toml(path: Path) -> Any:
    with open(path, "rb") as f:
        return tomllib.load(f)


def _read_json(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _read_yaml(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


_READERS: Dict[str, Callable[[Path], Any]] = {
    ".toml": _read_toml,
    ".json": _read_json,
    ".yaml": _read_yaml,
    ".yml": _read_yaml,
}


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the ``[tool.scrapmd]`` table of a pyproject.toml.

    Returns
    -------
    dict
        The table, or an empty dict if the file has none

    Raises
    ------
    argparse.ArgumentTypeError
        If the file is not valid TOML or the section is not a table

    """
    try:
        data = _read_toml(pyproject_path)
    except tomllib.TOMLDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid TOML in {pyproject_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading {pyproject_path}: {e}") from e

    section = data.get("tool", {}).get(PYPROJECT_SECTION, {})
    if not isinstance(section, dict):
        raise argparse.ArgumentTypeError(
            f"[tool.{PYPROJECT_SECTION}] section in {pyproject_path} must be a table, got {type(section).__name__}"
        )
    return section


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file in ``start_dir`` or one of its parents.

    In each directory the dedicated files are checked in the order of
    ``CONFIG_FILENAMES``, then a ``pyproject.toml`` that has a
    ``[tool.scrapmd]`` table.

    Parameters
    ----------
    start_dir : Path, optional
        Directory to start from, defaults to the working directory

    Returns
    -------
    Path or None
        The first configuration file found

    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            candidate = current / filename
            if candidate.is_file():
                return candidate

        pyproject = current / PYPROJECT_FILENAME
        if pyproject.is_file():
            try:
                if _load_pyproject_section(pyproject):
                    return pyproject
            except argparse.ArgumentTypeError as e:
                logger.debug("Skipping unreadable %s: %s", pyproject, e)

        if current.parent == current:
            return None
        current = current.parent


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Discover a configuration file, falling back to the home directory."""
    found = find_config_in_parents(start_dir)
    if found:
        return found

    home = Path.home()
    for filename in CONFIG_FILENAMES:
        candidate = home / filename
        if candidate.is_file():
            return candidate
    return None


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load a configuration mapping from a file.

    The format follows the file name: ``pyproject.toml`` yields its
    ``[tool.scrapmd]`` table, other files are read by extension.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        The configuration mapping

    Raises
    ------
    argparse.ArgumentTypeError
        If the file is missing, unreadable, malformed or not a mapping

    Examples
    --------
    >>> load_config_file(".scrapmd.toml")
    {'heading1_mapping': 4, 'indent': 'tab'}

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise argparse.ArgumentTypeError(f"Configuration file does not exist: {config_path}")
    if not config_path.is_file():
        raise argparse.ArgumentTypeError(f"Configuration path is not a file: {config_path}")

    if config_path.name.lower() == PYPROJECT_FILENAME:
        return _load_pyproject_section(config_path)

    ext = config_path.suffix.lower()
    reader = _READERS.get(ext)
    if reader is None:
        raise argparse.ArgumentTypeError(f"Unsupported config file format: {ext}. Use .json, .toml, or .yaml")

    try:
        data = reader(config_path)
    except (tomllib.TOMLDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise argparse.ArgumentTypeError(f"Invalid config file {config_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading config file {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise argparse.ArgumentTypeError(
            f"Config file {config_path} must contain a mapping, got {type(data).__name__}"
        )
    logger.debug("Loaded configuration from %s", config_path)
    return data


def load_config_with_priority(
    explicit_path: Optional[str] = None, env_var_path: Optional[str] = None
) -> Dict[str, Any]:
    """Load configuration with proper priority handling.

    Priority order (highest to lowest):
    1. Explicit config file path (``--config``)
    2. Path from the ``SCRAPMD_CONFIG`` environment variable
    3. Auto-discovered config file

    Returns
    -------
    dict
        The configuration mapping, empty if no file was found

    """
    if explicit_path:
        return load_config_file(explicit_path)
    if env_var_path:
        return load_config_file(env_var_path)

    discovered = discover_config_file()
    if discovered:
        return load_config_file(discovered)
    return {}


def build_conversion_config(data: Dict[str, Any], overrides: Optional[Dict[str, Any]] = None) -> ConversionConfig:
    """Build a ``ConversionConfig`` from file values and command-line overrides.

    Parameters
    ----------
    data : dict
        Values loaded from a configuration file
    overrides : dict, optional
        Values from command-line flags; ``None`` entries are ignored

    Raises
    ------
    argparse.ArgumentTypeError
        If a key is unknown or a value is invalid

    """
    merged = dict(data)
    for key, value in (overrides or {}).items():
        if value is not None:
            merged[key] = value
    try:
        return ConversionConfig.from_dict(merged)
    except ValidationError as e:
        raise argparse.ArgumentTypeError(str(e)) from e
