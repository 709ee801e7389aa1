"""Snapshot layer: frozen records of one SonarCloud data-collection run."""

from .models import Issue, Measure, ProjectInfo, QualityGate, Snapshot

__all__ = [
    "Issue",
    "Measure",
    "ProjectInfo",
    "QualityGate",
    "Snapshot",
]
