"""Issues command: sorted issue dumps with per-component statistics."""

from typing import List, Optional

import typer
from rich.markup import escape

from ..api import SonarCloudClient
from ..exceptions import SnapshotParseError, SonarInsightError
from ..issues import component_statistics, filter_by_status, simplify_issue, sort_by_component
from ..snapshot.models import Issue
from ..storage import load_snapshot
from . import app
from ._common import console, fail, get_settings, get_storage, resolve_project


@app.command()
def issues(
    ctx: typer.Context,
    project: Optional[str] = typer.Option(
        None, "--project", "-p",
        help="Project key (default: DEFAULT_PROJECT_KEY)",
    ),
    status: Optional[str] = typer.Option(
        None, "--status", "-s",
        help="Only keep issues with this status, e.g. OPEN (default: all)",
    ),
    simplify: bool = typer.Option(
        False, "--simplify",
        help="Keep only component, line, message, severity, type and rule",
    ),
    from_file: Optional[str] = typer.Option(
        None, "--from-file",
        help="Read issues from a saved snapshot instead of the live API",
    ),
    output: Optional[str] = typer.Option(
        None, "--output", "-o",
        help="Base file name without extension",
    ),
):
    """Dump issues sorted by component and count them per component."""
    settings = get_settings(ctx)
    storage = get_storage(ctx)
    try:
        if from_file:
            snapshot = load_snapshot(from_file, storage)
            if snapshot.issues is None:
                raise SnapshotParseError(from_file, "snapshot has no issue list")
            found: List[Issue] = list(snapshot.issues)
            if status:
                found = filter_by_status(found, status.upper())
        else:
            project_key = resolve_project(ctx, project)
            scope_label = escape(status.upper()) if status else "all"
            console.print(f"Fetching {scope_label} issues for [bold]{escape(project_key)}[/bold]...")
            with SonarCloudClient.from_settings(settings) as client:
                raw = client.get_issues(project_key, statuses=status.upper() if status else None)
            try:
                found = [Issue.from_dict(item) for item in raw]
            except ValueError as e:
                raise SnapshotParseError(project_key, str(e)) from e
    except SonarInsightError as e:
        fail(e)

    if not found:
        console.print("[yellow]No issues found.[/yellow]")
        raise typer.Exit(1)

    ordered = sort_by_component(found)
    records = [simplify_issue(i) if simplify else i.to_dict() for i in ordered]

    scope = status.lower() if status else "all"
    base = output or (f"{scope}_issues_simplified" if simplify else f"{scope}_issues_sorted_by_component")
    issues_path = storage.save_data(records, f"{base}.json")
    stats_path = storage.save_data(component_statistics(ordered), f"{base}_component_statistics.json")

    console.print(f"[green]{len(records)} issues saved to: {escape(str(issues_path))}[/green]")
    console.print(f"[green]Component statistics saved to: {escape(str(stats_path))}[/green]")
