"""CLI entry point: registers all subcommands."""

import typer

app = typer.Typer(
    name="sonar-insight",
    help="Sonar Insight - fetch, compare and report SonarCloud quality data",
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Import subcommands to register them
from .root import main as _main_callback  # noqa: F401, E402
from .fetch import fetch as _fetch  # noqa: F401, E402
from .compare import compare_cmd as _compare  # noqa: F401, E402
from .report import report as _report  # noqa: F401, E402
from .issues import issues as _issues  # noqa: F401, E402
from .snapshots import list_cmd as _list  # noqa: F401, E402


def main() -> None:
    """Console script entry point."""
    app()
