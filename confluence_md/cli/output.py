"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output.
Supports verbosity levels and the --no-color flag.
"""

from rich.console import Console
from rich.markup import escape

from confluence_md.cli.models import ConversionSummary


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console instance for output

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Converted page.xml")
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=summary, 1=info, 2=debug)
            no_color: Disable color output if True
        """
        self.verbosity = verbosity
        self.console = Console(
            force_terminal=not no_color,
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def error(self, message: str) -> None:
        self.console.print(f"[red]✗[/red] {escape(message)}", style="red")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]⚠[/yellow] {escape(message)}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(escape(message))

    def debug(self, message: str) -> None:
        """Display debug message (only if verbosity >= 2)."""
        if self.verbosity >= 2:
            self.console.print(f"[dim]{escape(message)}[/dim]")

    def print(self, message: str) -> None:
        self.console.print(escape(message))

    def print_summary(self, summary: ConversionSummary) -> None:
        """Display conversion summary with color coding.

        Args:
            summary: Results of the conversion run
        """
        self.console.print("\n[bold]Conversion Summary:[/bold]")
        if summary.converted_count > 0:
            self.console.print(f"  [green]✓[/green] Converted: {summary.converted_count} document(s)")
        if summary.failed_count > 0:
            self.console.print(f"  [red]✗[/red] Failed: {summary.failed_count} document(s)")
        if summary.asset_count > 0:
            self.console.print(f"  [blue]↓[/blue] Assets referenced: {summary.asset_count}")

        if not summary.results:
            self.console.print("\n[yellow]No documents to convert[/yellow]")
        elif summary.failed_count > 0:
            self.console.print("\n[red]Conversion completed with failures[/red]")
        else:
            self.console.print("\n[green]Conversion completed successfully[/green]")
