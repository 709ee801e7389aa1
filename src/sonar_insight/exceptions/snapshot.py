"""Snapshot storage exceptions: unresolvable identifiers and bad encodings."""

from pathlib import Path

from .base import SonarInsightError


class SnapshotError(SonarInsightError):
    """Base class for snapshot loading errors."""

    pass


class SnapshotNotFoundError(SnapshotError):
    """Raised when a snapshot identifier does not resolve to a readable file."""

    def __init__(self, identifier: str, path: Path):
        super().__init__(
            f"Snapshot not found: {identifier}",
            details={"path": str(path)},
            hint="Run 'sonar-insight list' to see the saved snapshots",
        )
        self.identifier = identifier
        self.path = path


class SnapshotParseError(SnapshotError):
    """Raised when stored content is not a valid snapshot encoding."""

    def __init__(self, identifier: str, reason: str):
        super().__init__(
            f"Cannot parse snapshot: {identifier}",
            details={"reason": reason},
        )
        self.identifier = identifier
        self.reason = reason
