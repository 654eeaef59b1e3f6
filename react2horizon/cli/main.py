"""Main CLI entry point for the react2horizon command.

This module provides the Typer application that serves as the entry point
for the react2horizon command-line tool. It uses options on the main command
rather than subcommands for a simpler user experience.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import typer

from react2horizon import __version__
from react2horizon.cli.convert_command import STDIN_PATH, ConvertCommand
from react2horizon.cli.output import OutputHandler

app = typer.Typer(
    name="react2horizon",
    help="""Convert React components into Meta Horizon Worlds UIComponent classes.

EXAMPLES:
  react2horizon Welcome.jsx                  # Writes Welcome.horizon.ts
  react2horizon Counter.tsx -o out/Counter.ts
  cat App.jsx | react2horizon - > App.ts     # stdin to stdout
  react2horizon TodoList.jsx --json          # Full report as JSON""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=True,
)

logger = logging.getLogger(__name__)


VERBOSITY_LEVELS = {0: logging.WARNING, 1: logging.INFO}
CONSOLE_FORMAT = "react2horizon: %(levelname)s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Route the 'react2horizon' logger to stderr and, optionally, a log file.

    Verbosity 0 shows warnings, 1 adds info and 2 or more adds debug output.
    Only the package logger is touched; calling this again replaces its
    handlers.
    """
    level = VERBOSITY_LEVELS.get(verbosity, logging.DEBUG)
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    handlers[0].setFormatter(logging.Formatter(CONSOLE_FORMAT))

    if logdir:
        log_dir = Path(logdir)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f"react2horizon_{datetime.now():%Y%m%d_%H%M%S}.log"
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        handlers.append(file_handler)

    app_logger = logging.getLogger("react2horizon")
    app_logger.setLevel(level)
    app_logger.handlers.clear()
    for handler in handlers:
        app_logger.addHandler(handler)
    if logdir:
        logger.info(f"Logging to file: {log_file}")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"react2horizon version {__version__}")
        raise typer.Exit()


@app.command(no_args_is_help=True)
def main_command(
    input_path: str = typer.Argument(
        ...,
        help="React component file to convert, or '-' to read stdin",
        metavar="INPUT",
    ),
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file (default: <input stem>.horizon.ts beside the input)",
        metavar="FILE",
    ),
    stdout: bool = typer.Option(
        False,
        "--stdout",
        help="Print converted code to stdout instead of writing a file",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the full conversion result as JSON",
    ),
    config: Optional[str] = typer.Option(
        None,
        "--config",
        help="Configuration file (default: .react2horizon.yaml if present)",
        metavar="PATH",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Convert a React component file into a Horizon UIComponent.

    \b
    Exit codes:
      0  conversion succeeded (warnings may still need review)
      1  configuration, input or output error
      2  the converter reported an error
    """
    _configure_logging(verbosity, logdir)

    # Keep stdout for code when it is the destination
    machine_output = stdout or as_json or (input_path == STDIN_PATH and output is None)
    output_handler = OutputHandler(verbosity=verbosity, no_color=no_color, stderr=machine_output)

    command = ConvertCommand(output_handler=output_handler)
    exit_code = command.run(
        input_path=input_path,
        output_path=output,
        to_stdout=stdout,
        as_json=as_json,
        config_path=config,
    )
    raise typer.Exit(exit_code)


def main() -> None:
    """Main entry point for the CLI application.

    This function is called when the module is executed directly or
    when the console script is invoked.
    """
    app()


# Allow running as: python -m react2horizon.cli.main
if __name__ == "__main__":
    main()
