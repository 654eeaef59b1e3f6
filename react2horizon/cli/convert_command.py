"""Convert command orchestration for CLI.

This module provides the ConvertCommand class that reads a React source
file, runs ReactToHorizonConverter on it and writes or prints the result
together with the conversion report.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import typer

from react2horizon.cli.errors import CLIError, InputFileError, OutputFileError
from react2horizon.cli.models import ExitCode
from react2horizon.cli.output import OutputHandler
from react2horizon.config import ConfigError, ConfigLoader, ConverterConfig, FilesystemError
from react2horizon.converter import ReactToHorizonConverter
from react2horizon.models import ConversionResult

logger = logging.getLogger(__name__)

STDIN_PATH = "-"


class ConvertCommand:
    """Orchestrates a single conversion for the CLI.

    The workflow:
        1. Load configuration (explicit --config file or the default one)
        2. Read the React source from a file or stdin
        3. Convert it
        4. Write the code to a file, or print it (or the JSON report) to stdout
        5. Display errors and warnings, and return an exit code

    Example:
        >>> output = OutputHandler(verbosity=1)
        >>> command = ConvertCommand(output_handler=output)
        >>> exit_code = command.run("Welcome.jsx")
        >>> sys.exit(exit_code)
    """

    def __init__(
        self,
        output_handler: Optional[OutputHandler] = None,
        converter: Optional[ReactToHorizonConverter] = None,
    ):
        """Initialize convert command with dependencies.

        Args:
            output_handler: OutputHandler for terminal output (optional)
            converter: Converter to use instead of one built from the config
        """
        self.output_handler = output_handler or OutputHandler()
        self.converter = converter

    def run(
        self,
        input_path: str,
        output_path: Optional[str] = None,
        to_stdout: bool = False,
        as_json: bool = False,
        config_path: Optional[str] = None,
    ) -> ExitCode:
        """Execute the conversion.

        Args:
            input_path: React source file, or "-" for stdin
            output_path: Destination file (defaults to <stem><output_suffix>
                         beside the input)
            to_stdout: Print the converted code instead of writing a file
            as_json: Print the full result as JSON instead of writing a file
            config_path: Explicit configuration file

        Returns:
            ExitCode indicating success or specific failure type
        """
        try:
            config = ConfigLoader.load_default(config_path)
            converter = self.converter or ReactToHorizonConverter(config)
            self.output_handler.debug(
                f"Config: state_style={config.state_style}, import_module={config.import_module}, "
                f"output_suffix={config.output_suffix}"
            )

            source = self._read_source(input_path)
            logger.info(f"Converting {input_path} ({len(source)} characters)")
            self.output_handler.info(f"Converting {input_path}")
            result = converter.convert(source)

            if as_json:
                typer.echo(json.dumps(result.to_dict(), indent=2))
            elif to_stdout or (input_path == STDIN_PATH and output_path is None):
                if result.code:
                    typer.echo(result.code, nl=False)
            elif result.success:
                destination = output_path or self.default_output_path(input_path, config)
                self._write_output(destination, result.code)
                self.output_handler.success(f"Wrote {destination}")

            if not as_json:
                self.output_handler.print_report(result)

            return self._exit_code(result)

        except (ConfigError, FilesystemError) as e:
            logger.error(f"Configuration error: {e}")
            self.output_handler.error(f"Configuration error: {e}")
            return ExitCode.GENERAL_ERROR

        except CLIError as e:
            logger.error(f"CLI error: {e}")
            self.output_handler.error(f"Error: {e}")
            return ExitCode.GENERAL_ERROR

        except Exception as e:
            logger.exception("Unexpected error during conversion")
            self.output_handler.error(f"Unexpected error: {e}")
            return ExitCode.GENERAL_ERROR

    @staticmethod
    def default_output_path(input_path: str, config: ConverterConfig) -> str:
        """Return ``<stem><output_suffix>`` in the input's directory.

        Example:
            >>> ConvertCommand.default_output_path("src/Welcome.jsx", ConverterConfig())
            'src/Welcome.horizon.ts'
        """
        path = Path(input_path)
        return str(path.with_name(path.stem + config.output_suffix))

    @staticmethod
    def _read_source(input_path: str) -> str:
        if input_path == STDIN_PATH:
            return sys.stdin.read()
        try:
            with open(input_path, 'r', encoding='utf-8') as f:
                return f.read()
        except FileNotFoundError:
            raise InputFileError(input_path, "File not found")
        except UnicodeDecodeError:
            raise InputFileError(input_path, "File is not valid UTF-8 text")
        except OSError as e:
            raise InputFileError(input_path, str(e))

    @staticmethod
    def _write_output(output_path: str, code: str) -> None:
        try:
            with open(output_path, 'w', encoding='utf-8') as f:
                f.write(code)
        except OSError as e:
            raise OutputFileError(output_path, str(e))
        logger.info(f"Wrote {len(code)} characters to {output_path}")

    @staticmethod
    def _exit_code(result: ConversionResult) -> ExitCode:
        if result.success:
            return ExitCode.SUCCESS
        return ExitCode.CONVERSION_FAILED
