"""Fetch command: download quality data from SonarCloud."""

from typing import Optional

import click
import typer
from rich.markup import escape

from ..api import SonarCloudClient
from ..exceptions import SonarInsightError
from ..formatters import save_to_file
from ..logging_config import get_logger
from . import app
from ._common import console, fail, file_timestamp, get_settings, resolve_project

logger = get_logger(__name__)


@app.command()
def fetch(
    ctx: typer.Context,
    project: Optional[str] = typer.Option(
        None, "--project", "-p",
        help="Project key (default: DEFAULT_PROJECT_KEY)",
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
    metrics: Optional[str] = typer.Option(
        None, "--metrics", "-m",
        help="Only fetch these measures (comma separated metric keys)",
    ),
):
    """Fetch a full quality report, or selected measures, and save it.

    Save in json format to use the result with [cyan]compare[/cyan].
    """
    settings = get_settings(ctx)
    try:
        project_key = resolve_project(ctx, project)
        fmt = (format or settings.default_format).lower()
        console.print(f"Fetching quality data for [bold]{escape(project_key)}[/bold]...")

        with SonarCloudClient.from_settings(settings) as client:
            if metrics:
                logger.info(f"Fetching selected measures: {metrics}")
                data = client.get_project_measures(project_key, metrics)
            else:
                data = client.get_full_quality_report(project_key)

        payload = data
        if fmt == "csv" and isinstance(data, dict):
            # A full report is not tabular; write its measures
            payload = data.get("measures") or []

        filename = output or f"{project_key}_quality_report_{file_timestamp()}"
        path = save_to_file(payload, filename, fmt, settings.output_dir)
    except SonarInsightError as e:
        fail(e)

    console.print(f"[green]Quality data saved to: {escape(str(path))}[/green]")
