"""Global options: configuration, output directory and logging."""

from pathlib import Path
from typing import Optional

import typer

from .. import __version__
from ..config import load_settings
from ..exceptions import SonarInsightError
from ..logging_config import setup_logging
from . import app
from ._common import console, fail


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"sonar-insight {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    output_dir: Optional[Path] = typer.Option(
        None,
        "--output-dir",
        help="Directory for snapshots and reports (default: ./output or OUTPUT_DIR)",
        file_okay=False,
        dir_okay=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only log errors",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Also append log records to this file",
        hidden=True,
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """
    Fetch SonarCloud quality data, compare saved snapshots and build reports.

    [bold cyan]Examples:[/bold cyan]

      sonar-insight fetch -p my-org_my-project

      sonar-insight compare --from before.json --to after.json

      sonar-insight report -t detailed -f json
    """
    setup_logging(verbose=verbose, quiet=quiet, log_file=str(log_file) if log_file else None)
    try:
        settings = load_settings(
            config_file=config,
            output_dir=str(output_dir) if output_dir else None,
            verbose=verbose,
            quiet=quiet,
        )
    except SonarInsightError as e:
        fail(e)
    ctx.obj = {"settings": settings}
