"""Report command: summary, detailed and issue reports."""

from typing import Optional

import click
import typer
from rich.markup import escape

from ..api import SonarCloudClient
from ..exceptions import SnapshotParseError, SonarInsightError
from ..formatters import save_to_file
from ..reports import TEMPLATES, generate_report
from ..snapshot.models import Snapshot
from ..storage import load_snapshot
from . import app
from ._common import console, fail, file_timestamp, get_settings, get_storage, resolve_project


@app.command()
def report(
    ctx: typer.Context,
    project: Optional[str] = typer.Option(
        None, "--project", "-p",
        help="Project key (default: DEFAULT_PROJECT_KEY)",
    ),
    template: str = typer.Option(
        "summary", "--template", "-t",
        help="Report template",
        click_type=click.Choice(list(TEMPLATES), case_sensitive=False),
    ),
    format: str = typer.Option(
        "text", "--format", "-f",
        help="Output format",
        click_type=click.Choice(["json", "text"], case_sensitive=False),
    ),
    output: Optional[str] = typer.Option(
        None, "--output", "-o",
        help="Output file name without extension",
    ),
    from_file: Optional[str] = typer.Option(
        None, "--from-file",
        help="Build the report from a saved snapshot instead of the live API",
    ),
):
    """Generate a quality report from live data or a saved snapshot."""
    settings = get_settings(ctx)
    try:
        if from_file:
            snapshot = load_snapshot(from_file, get_storage(ctx))
            project_key = project or (snapshot.project_info.key if snapshot.project_info else None)
            project_key = project_key or settings.project_key or "project"
        else:
            project_key = resolve_project(ctx, project)
            console.print(f"Generating {template} report for [bold]{escape(project_key)}[/bold]...")
            with SonarCloudClient.from_settings(settings) as client:
                snapshot = Snapshot.from_dict(client.get_full_quality_report(project_key))

        data = generate_report(template.lower(), snapshot)
        filename = output or f"{project_key}_{template.lower()}_report_{file_timestamp()}"
        path = save_to_file(data, filename, format.lower(), settings.output_dir)
    except ValueError as e:
        fail(SnapshotParseError(project_key, str(e)))
    except SonarInsightError as e:
        fail(e)

    console.print(f"[green]Report saved to: {escape(str(path))}[/green]")
