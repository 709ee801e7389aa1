"""Exception hierarchy for Sonar Insight."""

from .api import SonarCloudAPIError
from .base import SonarInsightError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    MissingInputError,
    MissingTokenError,
)
from .output import OutputFormatError
from .snapshot import SnapshotError, SnapshotNotFoundError, SnapshotParseError

__all__ = [
    "SonarInsightError",
    "ConfigurationError",
    "InvalidConfigError",
    "MissingTokenError",
    "MissingInputError",
    "SnapshotError",
    "SnapshotNotFoundError",
    "SnapshotParseError",
    "SonarCloudAPIError",
    "OutputFormatError",
]
