"""Shared CLI helpers."""

from datetime import datetime, timezone
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape

from ..config import Settings
from ..exceptions import MissingInputError, SonarInsightError
from ..storage import Storage

console = Console()


def get_settings(ctx: typer.Context) -> Settings:
    return ctx.obj["settings"]


def get_storage(ctx: typer.Context) -> Storage:
    return Storage(get_settings(ctx).output_dir)


def resolve_project(ctx: typer.Context, project: Optional[str]) -> str:
    """Explicit --project, else the configured default project key."""
    key = project or get_settings(ctx).project_key
    if not key:
        raise MissingInputError(["--project (or DEFAULT_PROJECT_KEY)"])
    return key


def file_timestamp() -> str:
    """UTC ISO timestamp safe for file names (``:`` and ``.`` replaced by ``-``)."""
    stamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return stamp.replace(":", "-").replace(".", "-")


def fail(error: SonarInsightError) -> NoReturn:
    """Print a user-facing error and exit with status 1."""
    console.print(f"[red]Error:[/red] {escape(str(error))}")
    if error.hint:
        console.print(f"[dim]{escape(error.hint)}[/dim]")
    raise typer.Exit(1)
