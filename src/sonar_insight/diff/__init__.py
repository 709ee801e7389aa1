"""Diff layer: quality-gate, measure and issue deltas between two snapshots."""

from .engine import (
    compare,
    compare_issues,
    compare_measures,
    compare_quality_gate,
    generate_summary,
)
from .metrics import (
    SEVERITY_ORDER,
    KnownMetric,
    MetricKind,
    Polarity,
    Severity,
    UnknownMetric,
    classify_metric,
)
from .models import (
    Comparison,
    ComparisonSummary,
    CountChange,
    IssuesChange,
    MeasureChange,
    MeasuresChange,
    ParseWarning,
    QualityGateChange,
)

__all__ = [
    "Comparison",
    "ComparisonSummary",
    "CountChange",
    "IssuesChange",
    "KnownMetric",
    "MeasureChange",
    "MeasuresChange",
    "MetricKind",
    "ParseWarning",
    "Polarity",
    "QualityGateChange",
    "SEVERITY_ORDER",
    "Severity",
    "UnknownMetric",
    "classify_metric",
    "compare",
    "compare_issues",
    "compare_measures",
    "compare_quality_gate",
    "generate_summary",
]
