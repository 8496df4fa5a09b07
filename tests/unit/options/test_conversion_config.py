#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for ConversionConfig."""
import pytest

from scrapmd.exceptions import ValidationError
from scrapmd.options import ConversionConfig, IndentKind


@pytest.mark.unit
class TestConversionConfig:
    """Test construction and validation."""

    def test_defaults(self) -> None:
        """Test the default settings."""
        config = ConversionConfig()
        assert config.heading1_mapping == 3
        assert config.bold_to_heading is False
        assert config.indent == IndentKind.space(2)

    @pytest.mark.parametrize("value", [0, -1, "3", 2.5, True])
    def test_invalid_heading1_mapping(self, value) -> None:
        """Test that the mapping must be a positive integer."""
        with pytest.raises(ValueError):
            ConversionConfig(heading1_mapping=value)

    @pytest.mark.parametrize("value", ["false", 0, 1, None])
    def test_invalid_bold_to_heading(self, value) -> None:
        """Test that bold_to_heading must be a real boolean."""
        with pytest.raises(ValueError, match="bold_to_heading"):
            ConversionConfig(bold_to_heading=value)

    def test_invalid_indent(self) -> None:
        """Test that the indent must be an IndentKind."""
        with pytest.raises(ValueError):
            ConversionConfig(indent="tab")  # type: ignore[arg-type]

    def test_create_updated(self) -> None:
        """Test cloning with changed fields."""
        config = ConversionConfig().create_updated(bold_to_heading=True)
        assert config.bold_to_heading is True
        assert config.heading1_mapping == 3


@pytest.mark.unit
class TestConversionConfigFromDict:
    """Test loading a config from a mapping."""

    def test_snake_case_keys(self) -> None:
        """Test the Python spelling of every key."""
        config = ConversionConfig.from_dict(
            {"heading1_mapping": 4, "bold_to_heading": True, "indent": {"type": "Space", "size": 4}}
        )
        assert config == ConversionConfig(4, True, IndentKind.space(4))

    @pytest.mark.parametrize("key", ["heading1Mapping", "heading1LevelMapping"])
    def test_camel_case_keys(self, key) -> None:
        """Test the browser front end spellings."""
        config = ConversionConfig.from_dict({key: 2, "boldToHeading": True})
        assert config.heading1_mapping == 2
        assert config.bold_to_heading is True

    def test_indent_string(self) -> None:
        """Test that the indent may use the command-line spelling."""
        assert ConversionConfig.from_dict({"indent": "tab"}).indent == IndentKind.tab()

    def test_indent_instance_passed_through(self) -> None:
        """Test that an IndentKind value is used as is."""
        indent = IndentKind.space(3)
        assert ConversionConfig.from_dict({"indent": indent}).indent is indent

    def test_empty_mapping(self) -> None:
        """Test that an empty mapping gives the defaults."""
        assert ConversionConfig.from_dict({}) == ConversionConfig()

    def test_unknown_key(self) -> None:
        """Test that unknown keys are rejected by name."""
        with pytest.raises(ValidationError, match="Unknown configuration key") as exc_info:
            ConversionConfig.from_dict({"heading_level": 3})
        assert exc_info.value.parameter_name == "heading_level"

    def test_invalid_value(self) -> None:
        """Test that value errors become ValidationError."""
        with pytest.raises(ValidationError, match="Invalid configuration") as exc_info:
            ConversionConfig.from_dict({"heading1_mapping": 0})
        assert isinstance(exc_info.value.original_error, ValueError)

    def test_string_boolean_rejected(self) -> None:
        """Test that a quoted boolean from a config file is not taken as true."""
        with pytest.raises(ValidationError, match="Invalid configuration") as exc_info:
            ConversionConfig.from_dict({"bold_to_heading": "false"})
        assert isinstance(exc_info.value.original_error, ValueError)

    def test_invalid_indent_record(self) -> None:
        """Test that a bad indent record is reported."""
        with pytest.raises(ValidationError):
            ConversionConfig.from_dict({"indent": {"type": "Dash"}})

    def test_to_dict_round_trip(self) -> None:
        """Test that the dict form loads back to an equal config."""
        config = ConversionConfig(5, True, IndentKind.tab())
        assert ConversionConfig.from_dict(config.to_dict()) == config
