"""Rich-powered console output for schemaguard."""

from __future__ import annotations

from rich.console import Console as RichConsole
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn
from rich.table import Table

from schemaguard.checker import CheckResult


class Console:
    """Terminal status output. Reports themselves go to stdout via click.echo."""

    def __init__(self, stderr: bool = True) -> None:
        self.console = RichConsole(stderr=stderr)

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    def error(self, message: str) -> None:
        self.console.print(f"[red]✗[/red] {message}")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]![/yellow] {message}")

    def info(self, message: str) -> None:
        self.console.print(f"[blue]i[/blue] {message}")

    def parsing_progress(self) -> Progress:
        """Create a progress bar for changelog parsing."""
        return Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
            console=self.console,
            transient=True,
        )

    def show_summary(self, result: CheckResult) -> None:
        """Display a summary table of the check."""
        table = Table(title="Changelog Check", border_style="cyan")
        table.add_column("Metric", style="bold")
        table.add_column("Count", justify="right", style="cyan")

        table.add_row("Changelogs", str(len(result.files)))
        table.add_row("Structural changes", str(result.total_events))
        breaking = len(result.breaking)
        style = "red" if breaking else "green"
        table.add_row("Breaking changes", f"[{style}]{breaking}[/{style}]")

        self.console.print(table)
