"""Logging setup for Sonar Insight.

Log records go to stderr through rich so they never mix with the artifacts
and tables printed on stdout. Module loggers live under ``sonar_insight.``.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "sonar_insight"

# Chatty HTTP libraries; their DEBUG output is only useful with --verbose
_HTTP_LOGGERS = ("urllib3", "requests")

_FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def resolve_level(verbose: bool = False, quiet: bool = False) -> int:
    """Map the global CLI flags to a log level; ``quiet`` wins over ``verbose``."""
    if quiet:
        return logging.ERROR
    if verbose:
        return logging.DEBUG
    return logging.WARNING


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """Install the stderr handler (and optionally a file handler).

    Safe to call more than once; earlier handlers are replaced.

    Returns:
        The ``sonar_insight`` package logger
    """
    level = resolve_level(verbose, quiet)

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            markup=False,
            rich_tracebacks=True,
            show_time=verbose,
            show_path=verbose,
        )
    ]
    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))
        handlers.append(file_handler)

    logging.basicConfig(level=level, format="%(message)s", handlers=handlers, force=True)

    http_level = logging.INFO if verbose else logging.WARNING
    for name in _HTTP_LOGGERS:
        logging.getLogger(name).setLevel(http_level)

    package_logger = logging.getLogger(ROOT_LOGGER)
    package_logger.setLevel(level)
    return package_logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger for a module, e.g. ``get_logger(__name__)``."""
    if not name:
        return logging.getLogger(ROOT_LOGGER)
    if name != ROOT_LOGGER and not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
