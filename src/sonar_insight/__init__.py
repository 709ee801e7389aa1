"""
Sonar Insight - SonarCloud quality data downloader and snapshot comparer

Fetches quality gate status, measures and issues from the SonarCloud REST API,
stores them as JSON/CSV/text artifacts, and compares two saved snapshots
metric by metric.
"""

__version__ = "1.0.0"

from .diff import Comparison, compare
from .snapshot import Snapshot
from .storage import Storage, load_snapshot

__all__ = [
    "compare",  # Main entry point
    "Comparison",
    "Snapshot",
    "Storage",
    "load_snapshot",
]
