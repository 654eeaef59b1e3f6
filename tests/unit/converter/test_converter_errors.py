"""Unit tests for converter.errors module."""

import pytest

from react2horizon.cli.errors import CLIError, InputFileError, OutputFileError
from react2horizon.config.errors import ConfigError, FilesystemError
from react2horizon.converter.errors import ConversionFailure, ConverterError, MarkupSyntaxError


class TestMarkupSyntaxError:
    """Test cases for MarkupSyntaxError."""

    def test_message_includes_position(self):
        error = MarkupSyntaxError("Unterminated tag <div", 12)

        assert str(error) == "Unterminated tag <div (at offset 12)"
        assert error.position == 12
        assert error.original_message == "Unterminated tag <div"

    def test_message_without_position(self):
        error = MarkupSyntaxError("Unterminated closing tag")

        assert str(error) == "Unterminated closing tag"
        assert error.position is None


class TestConversionFailure:
    """Test cases for ConversionFailure."""

    def test_message_prefix(self):
        cause = ValueError("bad input")

        error = ConversionFailure(str(cause), cause=cause)

        assert str(error) == "Conversion failed: bad input"
        assert error.reason == "bad input"
        assert error.cause is cause


class TestErrorHierarchy:
    """All application errors share one base class."""

    @pytest.mark.parametrize("error", [
        MarkupSyntaxError("x"),
        ConversionFailure("x"),
        ConfigError("x"),
        FilesystemError("a.yaml", "read"),
        InputFileError("a.jsx"),
        OutputFileError("a.ts"),
    ])
    def test_inherits_converter_error(self, error):
        assert isinstance(error, ConverterError)

    def test_cli_errors_inherit_cli_error(self):
        assert issubclass(InputFileError, CLIError)
        assert issubclass(OutputFileError, CLIError)

    def test_config_error_field(self):
        error = ConfigError("must be positive", "effect_summary_length")

        assert str(error) == "must be positive"
        assert error.config_field == "effect_summary_length"

    def test_config_error_in_file_names_the_file(self):
        error = ConfigError("must be positive", "effect_summary_length").in_file("cfg.yaml")

        assert str(error) == "cfg.yaml: must be positive"
        assert error.config_field == "effect_summary_length"
        assert error.config_path == "cfg.yaml"

    def test_filesystem_error_reason(self):
        error = FilesystemError("cfg.yaml", "read", "Permission denied")

        assert str(error) == "Cannot read config file cfg.yaml: Permission denied"

    def test_input_file_error_message(self):
        assert str(InputFileError("App.jsx", "File not found")) == "Cannot read input App.jsx: File not found"
