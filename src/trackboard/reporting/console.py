"""Rich-powered console output."""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from trackboard.models import BuildReport

_console = Console()


def print_banner() -> None:
    """Display the startup banner."""
    _console.print(
        Panel.fit(
            "[bold cyan]Trackboard[/bold cyan]  —  Job Search Status Page Builder",
            border_style="cyan",
        )
    )


def print_warnings(warnings: list[str]) -> None:
    if not warnings:
        return
    _console.print(f"[bold yellow]{len(warnings)} data warning(s):[/bold yellow]")
    for warning in warnings:
        _console.print(f"  [yellow]•[/yellow] {warning}", markup=False, highlight=False)


def print_build_report(report: BuildReport) -> None:
    """Display a build summary table."""
    table = Table(title="Build Report", show_header=True, header_style="bold magenta")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("Active roles", str(report.active_count))
    table.add_row("Applied", str(report.applied_count))
    table.add_row("Interviewing", str(report.interviewing_count))
    table.add_row("Pending tasks", str(report.pending_tasks))
    table.add_row("Overdue tasks", str(report.overdue_tasks))
    table.add_row("Contacts", str(report.contact_count))
    table.add_row("Detail pages", str(len(report.detail_pages)))
    table.add_row("Warnings", str(len(report.warnings)))
    table.add_row("As of", report.today)
    table.add_row("Output", report.index_path or "—")

    _console.print()
    _console.print(table)
    _console.print()
