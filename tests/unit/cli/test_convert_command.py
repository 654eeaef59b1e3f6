"""Unit tests for cli.convert_command module."""

import io
import json
from unittest.mock import Mock, patch

import pytest

from react2horizon.cli.convert_command import ConvertCommand
from react2horizon.cli.models import ExitCode
from react2horizon.config.models import ConverterConfig
from react2horizon.converter.pipeline import PREAMBLE_HEADER
from tests.fixtures.sample_components import MALFORMED_COMPONENT, WELCOME_COMPONENT


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Run every test in an empty directory so no stray config file applies."""
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def output_handler():
    return Mock()


@pytest.fixture
def welcome_file(tmp_path):
    path = tmp_path / "Welcome.jsx"
    path.write_text(WELCOME_COMPONENT, encoding="utf-8")
    return path


class TestConvertCommandRun:
    """Test cases for ConvertCommand.run()."""

    def test_writes_default_output_file(self, welcome_file, tmp_path, output_handler):
        command = ConvertCommand(output_handler=output_handler)

        exit_code = command.run(str(welcome_file))

        destination = tmp_path / "Welcome.horizon.ts"
        assert exit_code == ExitCode.SUCCESS
        assert destination.read_text(encoding="utf-8").startswith(PREAMBLE_HEADER)
        output_handler.success.assert_called_once_with(f"Wrote {destination}")
        output_handler.print_report.assert_called_once()

    def test_reports_progress_and_config(self, welcome_file, output_handler):
        command = ConvertCommand(output_handler=output_handler)

        command.run(str(welcome_file))

        output_handler.info.assert_called_once_with(f"Converting {welcome_file}")
        config_line = output_handler.debug.call_args[0][0]
        assert "state_style=binding" in config_line
        assert "output_suffix=.horizon.ts" in config_line

    def test_writes_explicit_output_file(self, welcome_file, tmp_path, output_handler):
        destination = tmp_path / "out.ts"
        command = ConvertCommand(output_handler=output_handler)

        exit_code = command.run(str(welcome_file), output_path=str(destination))

        assert exit_code == ExitCode.SUCCESS
        assert "class Welcome extends UIComponent" in destination.read_text(encoding="utf-8")

    def test_stdout_mode_prints_code(self, welcome_file, tmp_path, output_handler, capsys):
        command = ConvertCommand(output_handler=output_handler)

        exit_code = command.run(str(welcome_file), to_stdout=True)

        assert exit_code == ExitCode.SUCCESS
        assert capsys.readouterr().out.startswith(PREAMBLE_HEADER)
        assert not (tmp_path / "Welcome.horizon.ts").exists()

    def test_json_mode_prints_result(self, welcome_file, output_handler, capsys):
        command = ConvertCommand(output_handler=output_handler)

        exit_code = command.run(str(welcome_file), as_json=True)

        data = json.loads(capsys.readouterr().out)
        assert exit_code == ExitCode.SUCCESS
        assert data["success"] is True
        assert data["components"][0]["name"] == "Welcome"
        assert data["components"][0]["isClass"] is False
        output_handler.print_report.assert_not_called()

    def test_stdin_input_prints_to_stdout(self, output_handler, capsys):
        command = ConvertCommand(output_handler=output_handler)

        with patch('sys.stdin', io.StringIO(WELCOME_COMPONENT)):
            exit_code = command.run("-")

        assert exit_code == ExitCode.SUCCESS
        assert "class Welcome extends UIComponent" in capsys.readouterr().out

    def test_conversion_error_returns_exit_code_2(self, tmp_path, output_handler):
        source = tmp_path / "Broken.jsx"
        source.write_text(MALFORMED_COMPONENT, encoding="utf-8")
        command = ConvertCommand(output_handler=output_handler)

        exit_code = command.run(str(source))

        assert exit_code == ExitCode.CONVERSION_FAILED
        assert not (tmp_path / "Broken.horizon.ts").exists()
        result = output_handler.print_report.call_args[0][0]
        assert result.success is False

    def test_missing_input_returns_general_error(self, tmp_path, output_handler):
        command = ConvertCommand(output_handler=output_handler)

        exit_code = command.run(str(tmp_path / "Missing.jsx"))

        assert exit_code == ExitCode.GENERAL_ERROR
        message = output_handler.error.call_args[0][0]
        assert message.startswith("Error: Cannot read input")
        assert "File not found" in message

    def test_missing_config_returns_general_error(self, welcome_file, tmp_path, output_handler):
        command = ConvertCommand(output_handler=output_handler)

        exit_code = command.run(str(welcome_file), config_path=str(tmp_path / "none.yaml"))

        assert exit_code == ExitCode.GENERAL_ERROR
        message = output_handler.error.call_args[0][0]
        assert message.startswith("Configuration error: Cannot read config file")
        assert message.count("Configuration error") == 1

    def test_unwritable_output_returns_general_error(self, welcome_file, tmp_path, output_handler):
        command = ConvertCommand(output_handler=output_handler)

        exit_code = command.run(str(welcome_file), output_path=str(tmp_path))

        assert exit_code == ExitCode.GENERAL_ERROR
        assert "Cannot write output" in output_handler.error.call_args[0][0]

    def test_unexpected_exception_returns_general_error(self, welcome_file, output_handler):
        converter = Mock()
        converter.convert.side_effect = RuntimeError("boom")
        command = ConvertCommand(output_handler=output_handler, converter=converter)

        exit_code = command.run(str(welcome_file))

        assert exit_code == ExitCode.GENERAL_ERROR
        output_handler.error.assert_called_once_with("Unexpected error: boom")

    def test_default_config_file_sets_output_suffix(self, welcome_file, tmp_path, output_handler):
        (tmp_path / ".react2horizon.yaml").write_text("output_suffix: .ui.ts\n")
        command = ConvertCommand(output_handler=output_handler)

        exit_code = command.run(str(welcome_file))

        assert exit_code == ExitCode.SUCCESS
        assert (tmp_path / "Welcome.ui.ts").exists()


class TestDefaultOutputPath:
    """Test cases for ConvertCommand.default_output_path()."""

    def test_replaces_extension_with_suffix(self, tmp_path):
        result = ConvertCommand.default_output_path(str(tmp_path / "Welcome.jsx"), ConverterConfig())

        assert result == str(tmp_path / "Welcome.horizon.ts")

    def test_custom_suffix(self):
        result = ConvertCommand.default_output_path("Card.tsx", ConverterConfig(output_suffix=".ts"))

        assert result == "Card.ts"
