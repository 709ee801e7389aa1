"""Flat-file artifact store for fetched reports and rendered output."""

import json
from pathlib import Path
from typing import Any, List, Optional, Union

from .exceptions import SnapshotNotFoundError, SnapshotParseError
from .logging_config import get_logger
from .snapshot.models import Snapshot

logger = get_logger(__name__)


class Storage:
    """JSON files under a single output directory.

    Usage::

        storage = Storage("./output")
        storage.save_data(report, "proj_quality_report.json")
        snapshot = load_snapshot("proj_quality_report", storage)
    """

    def __init__(self, output_dir: Union[str, Path]) -> None:
        self.output_dir = Path(output_dir)

    def _ensure_output_dir(self) -> None:
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def path_for(self, filename: str) -> Path:
        return self.output_dir / filename

    def save_data(self, data: Any, filename: str) -> Path:
        """Write ``data`` as indented JSON and return the file path."""
        self._ensure_output_dir()
        path = self.path_for(filename)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        logger.info(f"Saved {path}")
        return path

    def load_data(self, filename: str) -> Any:
        """Read and decode a JSON file.

        Raises:
            SnapshotNotFoundError: If the file does not exist
            SnapshotParseError: If the content is not UTF-8 encoded JSON
        """
        path = self.path_for(filename)
        if not path.is_file():
            raise SnapshotNotFoundError(filename, path)
        try:
            with open(path, encoding="utf-8") as f:
                return json.load(f)
        except UnicodeDecodeError as e:
            raise SnapshotParseError(filename, f"not UTF-8 text: {e}") from e
        except OSError as e:
            raise SnapshotNotFoundError(filename, path) from e
        except json.JSONDecodeError as e:
            raise SnapshotParseError(filename, f"invalid JSON: {e}") from e

    def list_files(self, extension: Optional[str] = None) -> List[str]:
        """File names in the output directory, sorted, optionally by suffix."""
        self._ensure_output_dir()
        names = sorted(p.name for p in self.output_dir.iterdir() if p.is_file())
        if extension:
            return [n for n in names if n.endswith(extension)]
        return names

    def file_exists(self, filename: str) -> bool:
        return self.path_for(filename).is_file()

    def delete_file(self, filename: str) -> bool:
        """Delete a file; returns False when it did not exist."""
        path = self.path_for(filename)
        if not path.is_file():
            return False
        path.unlink()
        return True


def resolve_snapshot_name(identifier: str, storage: Storage) -> str:
    """Return the stored file name for ``identifier``.

    The identifier is used as-is when such a file exists, otherwise
    ``<identifier>.json`` is tried.
    """
    if storage.file_exists(identifier) or identifier.endswith(".json"):
        return identifier
    candidate = f"{identifier}.json"
    if storage.file_exists(candidate):
        return candidate
    return identifier


def load_snapshot(identifier: str, storage: Storage) -> Snapshot:
    """Load a saved quality report as a Snapshot.

    Raises:
        SnapshotNotFoundError: If the identifier does not resolve to a file
        SnapshotParseError: If the file is not a valid snapshot encoding
    """
    name = resolve_snapshot_name(identifier, storage)
    data = storage.load_data(name)
    try:
        snapshot = Snapshot.from_dict(data)
    except (TypeError, ValueError, OverflowError) as e:
        raise SnapshotParseError(identifier, str(e)) from e
    logger.debug(
        "Loaded snapshot %s (measures=%s, issues=%s)",
        name,
        "-" if snapshot.measures is None else len(snapshot.measures),
        "-" if snapshot.issues is None else len(snapshot.issues),
    )
    return snapshot
