#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for scrapmd CLI configuration management.

This module tests configuration file discovery, loading in each supported
format, priority handling and merging with command-line overrides.
"""

import argparse
import json
from pathlib import Path
from unittest.mock import patch

import pytest

from scrapmd.cli.config import (
    build_conversion_config,
    discover_config_file,
    find_config_in_parents,
    load_config_file,
    load_config_with_priority,
)
from scrapmd.options import ConversionConfig, IndentKind


@pytest.mark.unit
@pytest.mark.cli
class TestConfigDiscovery:
    """Test configuration file discovery functionality."""

    def test_find_in_start_dir(self, temp_dir):
        """Test finding a dedicated config file in the start directory."""
        config_file = temp_dir / ".scrapmd.toml"
        config_file.write_text("heading1_mapping = 4\n")

        assert find_config_in_parents(temp_dir) == config_file.resolve()

    def test_find_in_parent(self, temp_dir):
        """Test that parent directories are searched."""
        config_file = temp_dir / ".scrapmd.yaml"
        config_file.write_text("indent: tab\n")
        child = temp_dir / "a" / "b"
        child.mkdir(parents=True)

        assert find_config_in_parents(child) == config_file.resolve()

    def test_dedicated_file_precedes_pyproject(self, temp_dir):
        """Test the lookup order within one directory."""
        (temp_dir / "pyproject.toml").write_text("[tool.scrapmd]\nheading1_mapping = 2\n")
        config_file = temp_dir / ".scrapmd.json"
        config_file.write_text("{}")

        assert find_config_in_parents(temp_dir) == config_file.resolve()

    def test_pyproject_with_section(self, temp_dir):
        """Test that a pyproject.toml with a [tool.scrapmd] table is found."""
        pyproject = temp_dir / "pyproject.toml"
        pyproject.write_text("[project]\nname = 'x'\n\n[tool.scrapmd]\nheading1_mapping = 2\n")

        assert find_config_in_parents(temp_dir) == pyproject.resolve()

    def test_pyproject_without_section_skipped(self, temp_dir):
        """Test that a pyproject.toml without the table is ignored."""
        (temp_dir / "pyproject.toml").write_text("[project]\nname = 'x'\n")
        with patch("scrapmd.cli.config.CONFIG_FILENAMES", ()):
            assert find_config_in_parents(temp_dir) is None

    def test_discover_falls_back_to_home(self, temp_dir):
        """Test discovering a config file in the home directory."""
        cwd = temp_dir / "work"
        home = temp_dir / "home"
        cwd.mkdir()
        home.mkdir()
        config_file = home / ".scrapmd.json"
        config_file.write_text('{"heading1_mapping": 5}')

        with patch("scrapmd.cli.config.find_config_in_parents", return_value=None):
            with patch("pathlib.Path.home", return_value=home):
                assert discover_config_file(cwd) == config_file

    def test_discover_nothing(self, temp_dir):
        """Test that no file yields None."""
        with patch("scrapmd.cli.config.find_config_in_parents", return_value=None):
            with patch("pathlib.Path.home", return_value=temp_dir):
                assert discover_config_file(temp_dir) is None


@pytest.mark.unit
@pytest.mark.cli
class TestConfigLoading:
    """Test loading configuration files."""

    def test_load_toml(self, temp_dir):
        """Test loading a TOML file."""
        path = temp_dir / "config.toml"
        path.write_text('heading1_mapping = 4\nindent = "tab"\n')
        assert load_config_file(path) == {"heading1_mapping": 4, "indent": "tab"}

    def test_load_json(self, temp_dir):
        """Test loading a JSON file."""
        path = temp_dir / "config.json"
        path.write_text(json.dumps({"boldToHeading": True}))
        assert load_config_file(str(path)) == {"boldToHeading": True}

    @pytest.mark.parametrize("suffix", [".yaml", ".yml"])
    def test_load_yaml(self, temp_dir, suffix):
        """Test loading YAML files."""
        path = temp_dir / f"config{suffix}"
        path.write_text("indent:\n  type: Space\n  size: 4\n")
        assert load_config_file(path) == {"indent": {"type": "Space", "size": 4}}

    def test_load_pyproject_section(self, temp_dir):
        """Test that a pyproject.toml yields only its [tool.scrapmd] table."""
        path = temp_dir / "pyproject.toml"
        path.write_text("[project]\nname = 'x'\n\n[tool.scrapmd]\nbold_to_heading = true\n")
        assert load_config_file(path) == {"bold_to_heading": True}

    def test_pyproject_section_must_be_table(self, temp_dir):
        """Test that a non-table section is rejected."""
        path = temp_dir / "pyproject.toml"
        path.write_text('[tool]\nscrapmd = "oops"\n')
        with pytest.raises(argparse.ArgumentTypeError, match="must be a table"):
            load_config_file(path)

    def test_missing_file(self, temp_dir):
        """Test that a missing file is reported."""
        with pytest.raises(argparse.ArgumentTypeError, match="does not exist"):
            load_config_file(temp_dir / "missing.toml")

    def test_directory(self, temp_dir):
        """Test that a directory is rejected."""
        with pytest.raises(argparse.ArgumentTypeError, match="not a file"):
            load_config_file(temp_dir)

    def test_unsupported_extension(self, temp_dir):
        """Test that unknown formats are rejected."""
        path = temp_dir / "config.ini"
        path.write_text("[x]\n")
        with pytest.raises(argparse.ArgumentTypeError, match="Unsupported config file format"):
            load_config_file(path)

    @pytest.mark.parametrize(
        "name,content",
        [
            ("bad.toml", "heading1_mapping = \n"),
            ("bad.json", "{not json"),
            ("bad.yaml", "indent: [unclosed\n"),
        ],
    )
    def test_malformed(self, temp_dir, name, content):
        """Test that syntax errors are reported as invalid config."""
        path = temp_dir / name
        path.write_text(content)
        with pytest.raises(argparse.ArgumentTypeError, match="Invalid config file"):
            load_config_file(path)

    def test_not_a_mapping(self, temp_dir):
        """Test that a top-level list is rejected."""
        path = temp_dir / "config.json"
        path.write_text("[1, 2]")
        with pytest.raises(argparse.ArgumentTypeError, match="must contain a mapping"):
            load_config_file(path)


@pytest.mark.unit
@pytest.mark.cli
class TestConfigPriority:
    """Test which configuration source wins."""

    def test_explicit_path_wins(self, temp_dir):
        """Test that --config beats the environment variable."""
        explicit = temp_dir / "explicit.json"
        explicit.write_text('{"heading1_mapping": 1}')
        env = temp_dir / "env.json"
        env.write_text('{"heading1_mapping": 2}')

        assert load_config_with_priority(str(explicit), str(env)) == {"heading1_mapping": 1}

    def test_env_path_used(self, temp_dir):
        """Test that the environment path is used without --config."""
        env = temp_dir / "env.json"
        env.write_text('{"heading1_mapping": 2}')
        assert load_config_with_priority(None, str(env)) == {"heading1_mapping": 2}

    def test_discovered_file_used(self, temp_dir):
        """Test falling back to discovery."""
        found = temp_dir / ".scrapmd.json"
        found.write_text('{"indent": "tab"}')
        with patch("scrapmd.cli.config.discover_config_file", return_value=found):
            assert load_config_with_priority() == {"indent": "tab"}

    def test_nothing_found(self):
        """Test that no configuration gives an empty mapping."""
        with patch("scrapmd.cli.config.discover_config_file", return_value=None):
            assert load_config_with_priority() == {}


@pytest.mark.unit
@pytest.mark.cli
class TestBuildConversionConfig:
    """Test merging file values with command-line overrides."""

    def test_overrides_win(self):
        """Test that flags override file values."""
        config = build_conversion_config({"heading1_mapping": 4, "indent": "tab"}, {"heading1_mapping": 2})
        assert config == ConversionConfig(heading1_mapping=2, indent=IndentKind.tab())

    def test_none_overrides_ignored(self):
        """Test that unset flags keep the file values."""
        config = build_conversion_config({"bold_to_heading": True}, {"bold_to_heading": None, "indent": None})
        assert config.bold_to_heading is True

    def test_invalid_value(self):
        """Test that invalid values become argument errors."""
        with pytest.raises(argparse.ArgumentTypeError, match="Unknown configuration key"):
            build_conversion_config({"colour": "red"})

    def test_invalid_indent_flag(self):
        """Test that a bad --indent value is reported."""
        with pytest.raises(argparse.ArgumentTypeError, match="Invalid indent"):
            build_conversion_config({}, {"indent": "wide"})
