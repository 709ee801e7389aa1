"""List command: saved snapshots and artifacts in the output directory."""

import typer
from rich.markup import escape
from rich.table import Table

from . import app
from ._common import console, get_storage


@app.command(name="list")
def list_cmd(ctx: typer.Context):
    """List saved JSON files that can be passed to compare and --from-file."""
    storage = get_storage(ctx)
    names = storage.list_files(".json")
    if not names:
        console.print(f"[yellow]No JSON files in {escape(str(storage.output_dir))}[/yellow]")
        raise typer.Exit(0)

    table = Table(title=escape(str(storage.output_dir)), expand=False)
    table.add_column("File", style="yellow")
    table.add_column("Size", justify="right")
    for name in names:
        size = storage.path_for(name).stat().st_size
        table.add_row(escape(name), f"{size:,} B")
    console.print(table)
