"""Rich terminal rendering of a snapshot comparison."""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..diff.models import Comparison


def _fmt_diff(diff: float) -> str:
    if float(diff).is_integer():
        diff = int(diff)
    else:
        diff = round(diff, 2)
    return f"+{diff}" if diff > 0 else str(diff)


def _styled(text: str, improved: bool, changed: bool) -> str:
    if not changed:
        return f"[dim]{text}[/dim]"
    return f"[green]{text}[/green]" if improved else f"[red]{text}[/red]"


def render_comparison(comparison: Comparison, console: Console) -> None:
    """Print the gate verdict, measure and issue tables, and the summary."""
    summary = comparison.summary
    gate = comparison.quality_gate_change

    if gate.improved:
        gate_line = f"[green]{summary.quality_gate}[/green]"
    elif gate.degraded:
        gate_line = f"[red]{summary.quality_gate}[/red]"
    elif gate.available:
        statuses = f"{gate.from_status} -> {gate.to_status}"
        gate_line = f"{summary.quality_gate} ({escape(statuses)})"
    else:
        gate_line = "[dim]Not available[/dim]"

    header = (
        f"[bold]{escape(comparison.project)}[/bold]  "
        f"{escape(comparison.from_date)} -> {escape(comparison.to_date)}\n"
        f"Quality gate: {gate_line}"
    )
    console.print(Panel(header, title="[bold cyan]Quality Comparison[/bold cyan]", expand=False))

    measures = comparison.measures_change
    if measures.available and measures.changes:
        table = Table(title="Measures", expand=False)
        table.add_column("Metric", style="yellow")
        table.add_column("From", justify="right")
        table.add_column("To", justify="right")
        table.add_column("Diff", justify="right")
        for metric, change in measures.changes.items():
            changed = change.diff != 0
            table.add_row(
                escape(metric),
                escape(change.from_value),
                escape(change.to_value),
                _styled(_fmt_diff(change.diff), change.improved, changed),
            )
        console.print(table)
    elif not measures.available:
        console.print("[dim]Measures: not available in one of the snapshots[/dim]")

    for warning in measures.warnings:
        console.print(
            f"[yellow]Warning:[/yellow] {escape(warning.metric)} ({warning.side}) "
            f"value {escape(repr(warning.raw_value))} is not a number, counted as 0"
        )

    issues = comparison.issues_change
    if issues.available:
        table = Table(title="Issues", expand=False)
        table.add_column("Severity", style="yellow")
        table.add_column("From", justify="right")
        table.add_column("To", justify="right")
        table.add_column("Diff", justify="right")
        for severity, change in issues.changes.items():
            table.add_row(
                severity, str(change.from_count), str(change.to_count),
                _styled(_fmt_diff(change.diff), change.improved, change.diff != 0),
            )
        total = issues.total
        table.add_row(
            "[bold]TOTAL[/bold]", str(total.from_count), str(total.to_count),
            _styled(_fmt_diff(total.diff), total.improved, total.diff != 0),
        )
        console.print(table)
    else:
        console.print("[dim]Issues: not available in one of the snapshots[/dim]")

    for entry in summary.improvements:
        console.print(f"  [green]+[/green] {escape(entry)}")
    for entry in summary.degradations:
        console.print(f"  [red]-[/red] {escape(entry)}")
    if not summary.improvements and not summary.degradations:
        console.print("[dim]No notable changes.[/dim]")
    console.print()
