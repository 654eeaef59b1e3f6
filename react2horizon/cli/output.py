"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output.
Uses Rich for colored status lines and the conversion report. Supports
verbosity levels and the --no-color flag.
"""

from typing import List

from rich.console import Console
from rich.markup import escape

from react2horizon.models.conversion_result import ConversionResult


class OutputHandler:
    """Handles all terminal output using Rich library.

    Messages are escaped before printing, so converter text such as
    ``[count]`` is never read as Rich markup.

    Attributes:
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console instance for output

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Converted Welcome.jsx")
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False, stderr: bool = False):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=summary, 1=info, 2=debug)
            no_color: Disable color output if True
            stderr: Write to stderr so stdout stays free for converted code
        """
        self.verbosity = verbosity
        self.console = Console(
            stderr=stderr,
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        """Display success message in green."""
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def error(self, message: str) -> None:
        """Display error message in red."""
        self.console.print(f"[red]✗[/red] {escape(message)}", style="red")

    def warning(self, message: str) -> None:
        """Display warning message in yellow."""
        self.console.print(f"[yellow]⚠[/yellow] {escape(message)}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(escape(message))

    def debug(self, message: str) -> None:
        """Display debug message (only if verbosity >= 2)."""
        if self.verbosity >= 2:
            self.console.print(f"[dim]{escape(message)}[/dim]")

    def print_report(self, result: ConversionResult) -> None:
        """Display the conversion report: components, errors, then warnings.

        Args:
            result: Result returned by the converter
        """
        if result.components and self.verbosity >= 1:
            self.console.print("\n[bold]Components:[/bold]")
            for component in result.components:
                kind = "class" if component.is_class else "functional"
                self.console.print(f"  • {escape(component.name)} ({kind})")
                self._print_details("props", component.props)
                self._print_details("state", component.state)
                self._print_details("effects", component.effects)

        if result.errors:
            self.console.print(f"\n[red]Errors ({len(result.errors)}):[/red]")
            for message in result.errors:
                self.error(message)

        if result.has_warnings:
            self.console.print(f"\n[yellow]Warnings ({len(result.warnings)}):[/yellow]")
            for message in result.warnings:
                self.warning(message)

        if result.success:
            self.console.print("\n[green]Conversion completed successfully[/green]")
        else:
            self.console.print("\n[red]Conversion failed[/red]")

    def _print_details(self, label: str, values: List[str]) -> None:
        if values:
            self.console.print(f"      [dim]{label}:[/dim] {escape(', '.join(values))}")
