"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output.
Status messages go to stderr through a Rich console so that the converted
Markdown, which is written to stdout, can be piped or redirected unchanged.
Supports verbosity levels and the --no-color flag.
"""

import sys
from typing import Optional

from rich.console import Console

from src.models.conversion_result import ConversionResult


class OutputHandler:
    """Handles all terminal output using Rich library.

    Provides methods for displaying messages and export summaries with color
    coding and verbosity level control.

    Attributes:
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console instance for status output (stderr)

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Exported notes.md")
        >>> handler.print_markdown("# Title")
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=summary, 1=info, 2=debug)
            no_color: Disable color output if True
        """
        self.verbosity = verbosity
        self.console = Console(
            stderr=True,
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        """Display success message in green.

        Args:
            message: Success message to display
        """
        self.console.print(f"[green]✓[/green] {message}")

    def error(self, message: str) -> None:
        """Display error message in red.

        Args:
            message: Error message to display
        """
        self.console.print(f"[red]✗[/red] {message}", style="red")

    def warning(self, message: str) -> None:
        """Display warning message in yellow.

        Args:
            message: Warning message to display
        """
        self.console.print(f"[yellow]⚠[/yellow] {message}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1).

        Args:
            message: Info message to display
        """
        if self.verbosity >= 1:
            self.console.print(message)

    def debug(self, message: str) -> None:
        """Display debug message (only if verbosity >= 2).

        Args:
            message: Debug message to display
        """
        if self.verbosity >= 2:
            self.console.print(f"[dim]{message}[/dim]")

    def print_markdown(self, markdown: str) -> None:
        """Write converted Markdown to stdout exactly as produced.

        No markup or highlighting is applied; a final newline is added so the
        shell prompt starts on its own line.

        Args:
            markdown: Markdown text to write
        """
        sys.stdout.write(markdown)
        if markdown and not markdown.endswith("\n"):
            sys.stdout.write("\n")
        sys.stdout.flush()

    def print_summary(
        self,
        result: ConversionResult,
        destination: Optional[str] = None,
    ) -> None:
        """Display export summary with color coding.

        Args:
            result: Result of the conversion
            destination: File the Markdown was written to, None for stdout
        """
        self.console.print("\n[bold]Export Summary:[/bold]")

        title = result.metadata.get("title")
        if title:
            self.console.print(f"  [blue]•[/blue] Title: {title}")

        self.console.print(f"  [green]✓[/green] Characters: {len(result.markdown)}")

        if destination:
            self.console.print(f"  [green]→[/green] Written to: {destination}")

        for warning in result.warnings:
            self.console.print(f"  [yellow]⚠[/yellow] {warning}")

        if not result.converted:
            self.console.print("\n[red]Export completed with errors[/red]")
        elif result.warnings:
            self.console.print("\n[yellow]Export completed with warnings[/yellow]")
        else:
            self.console.print("\n[green]Export completed successfully[/green]")
