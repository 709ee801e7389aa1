"""Output formatters for Sonar Insight artifacts."""

from pathlib import Path
from typing import Any, Optional, Sequence, Union

from ..logging_config import get_logger
from .base import BaseFormatter
from .csv_formatter import CsvFormatter
from .json_formatter import JsonFormatter
from .text_formatter import TextFormatter

logger = get_logger(__name__)

_FORMATTERS = {
    "json": JsonFormatter,
    "csv": CsvFormatter,
    "text": TextFormatter,
}


def get_formatter(name: str, headers: Optional[Sequence[str]] = None) -> BaseFormatter:
    """Get a formatter instance by name.

    Args:
        name: One of "json", "csv", "text"
        headers: Column order for CSV output (inferred when omitted)

    Raises:
        ValueError: If name is not recognized
    """
    cls = _FORMATTERS.get(name)
    if cls is None:
        raise ValueError(f"Unknown formatter: {name!r}. Choose from: {', '.join(sorted(_FORMATTERS))}")
    if cls is CsvFormatter:
        return CsvFormatter(headers=headers)
    return cls()


def save_to_file(
    data: Any,
    filename: str,
    format: str,
    output_dir: Union[str, Path],
    headers: Optional[Sequence[str]] = None,
) -> Path:
    """Render ``data`` and write it to ``output_dir/filename<ext>``.

    Returns:
        Path of the written file
    """
    formatter = get_formatter(format, headers=headers)
    content = formatter.format(data)

    directory = Path(output_dir)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{filename}{formatter.extension}"
    path.write_text(content, encoding="utf-8")
    logger.info(f"Wrote {format} output to {path}")
    return path


__all__ = [
    "BaseFormatter",
    "CsvFormatter",
    "JsonFormatter",
    "TextFormatter",
    "get_formatter",
    "save_to_file",
]
