"""Compare command: diff two saved quality snapshots."""

from typing import Optional

import click
import typer
from rich.markup import escape

from ..diff import compare
from ..exceptions import MissingInputError, SonarInsightError
from ..formatters import save_to_file
from ..storage import load_snapshot
from . import app
from ._common import console, fail, file_timestamp, get_settings, get_storage
from ._compare_output import render_comparison


@app.command(name="compare")
def compare_cmd(
    ctx: typer.Context,
    from_name: Optional[str] = typer.Option(
        None, "--from",
        help="Earlier snapshot file in the output directory (required)",
    ),
    to_name: Optional[str] = typer.Option(
        None, "--to",
        help="Later snapshot file in the output directory (required)",
    ),
    project: Optional[str] = typer.Option(
        None, "--project", "-p",
        help="Project key used in the default output name",
    ),
    format: Optional[str] = typer.Option(
        None, "--format", "-f",
        help="Output format (default: DEFAULT_FORMAT or json)",
        click_type=click.Choice(["json", "csv", "text"], case_sensitive=False),
    ),
    output: Optional[str] = typer.Option(
        None, "--output", "-o",
        help="Output file name without extension",
    ),
    strict: bool = typer.Option(
        False, "--strict",
        help="Report measure values that are not numbers instead of silently using 0",
    ),
    fail_on_degradation: bool = typer.Option(
        False, "--fail-on-degradation",
        help="Exit 1 when the gate degraded or any degradation is reported",
    ),
):
    """Compare two saved snapshots and write the result.

    [bold cyan]Examples:[/bold cyan]

      sonar-insight compare --from proj_quality_report_a --to proj_quality_report_b

      sonar-insight compare --from a.json --to b.json -f text --fail-on-degradation
    """
    settings = get_settings(ctx)
    try:
        missing = [flag for flag, value in (("--from", from_name), ("--to", to_name)) if not value]
        if missing:
            raise MissingInputError(missing)

        storage = get_storage(ctx)
        from_snapshot = load_snapshot(from_name, storage)
        to_snapshot = load_snapshot(to_name, storage)
        comparison = compare(from_snapshot, to_snapshot, strict=strict)

        fmt = (format or settings.default_format).lower()
        label = project or settings.project_key or comparison.project
        filename = output or f"{label}_quality_comparison_{file_timestamp()}"
        path = save_to_file(comparison, filename, fmt, settings.output_dir)
    except SonarInsightError as e:
        fail(e)

    if settings.verbosity != "quiet":
        render_comparison(comparison, console)
    console.print(f"[green]Comparison saved to: {escape(str(path))}[/green]")

    if fail_on_degradation and comparison.has_degradations:
        raise typer.Exit(1)
