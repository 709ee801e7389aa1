"""Comparison engine: computes structured deltas between two quality snapshots.

The comparison works in four passes:
  1. Quality gate: did the verdict move between passed and failed.
  2. Measures: union of metric keys, numeric delta, polarity lookup.
  3. Issues: per-severity counts in priority order plus an aggregate total.
  4. Summary: one-line descriptions of every notable change.

Pure functions: inputs are never mutated and nothing is read or written.
Missing or non-list inputs degrade a block to ``available=False``.
"""

import math
import re
from dataclasses import replace
from typing import Dict, List, Optional, Sequence, Tuple

from ..logging_config import get_logger
from ..snapshot.models import Issue, Measure, QualityGate, Snapshot
from .metrics import SEVERITY_ORDER, classify_metric
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

logger = get_logger(__name__)

PASSED = "OK"

# Plain decimal or exponent notation; no inf/nan words, no digit separators
_NUMBER = re.compile(r"\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?\s*")


def _is_sequence(value: object) -> bool:
    return isinstance(value, (list, tuple))


def _parse_value(raw: Optional[str]) -> Tuple[float, bool]:
    """Return (number, ok). ``None``, empty, non-numeric and non-finite text become 0.0."""
    if raw is None or not _NUMBER.fullmatch(raw):
        return 0.0, False
    number = float(raw)
    if math.isinf(number):
        return 0.0, False
    return number, True


# ── Quality gate ─────────────────────────────────────────────────────────────

def compare_quality_gate(
    from_gate: Optional[QualityGate],
    to_gate: Optional[QualityGate],
) -> QualityGateChange:
    """Classify the gate movement; only OK <-> non-OK transitions count."""
    if from_gate is None or to_gate is None:
        return QualityGateChange(available=False)

    from_passed = from_gate.status == PASSED
    to_passed = to_gate.status == PASSED
    return QualityGateChange(
        available=True,
        from_status=from_gate.status,
        to_status=to_gate.status,
        improved=not from_passed and to_passed,
        degraded=from_passed and not to_passed,
    )


# ── Measures ─────────────────────────────────────────────────────────────────

def _measure_map(measures: Sequence[Measure]) -> Dict[str, Optional[str]]:
    values: Dict[str, Optional[str]] = {}
    for measure in measures:
        values[measure.metric] = measure.value
    return values


def compare_measures(
    from_measures: Optional[Sequence[Measure]],
    to_measures: Optional[Sequence[Measure]],
    strict: bool = False,
) -> MeasuresChange:
    """Compute per-metric deltas over the union of metric keys.

    A metric absent on one side counts as 0 and displays as ``"0"``.
    Values that do not parse as numbers also count as 0. With
    ``strict=True`` each such value is additionally reported as a
    ``ParseWarning``; the deltas are identical in both modes.
    """
    if not _is_sequence(from_measures) or not _is_sequence(to_measures):
        return MeasuresChange(available=False)

    from_map = _measure_map(from_measures)
    to_map = _measure_map(to_measures)

    all_metrics = list(from_map)
    all_metrics.extend(m for m in to_map if m not in from_map)

    changes: Dict[str, MeasureChange] = {}
    warnings: List[ParseWarning] = []

    for metric in all_metrics:
        from_raw = from_map.get(metric)
        to_raw = to_map.get(metric)
        from_num, from_ok = _parse_value(from_raw)
        to_num, to_ok = _parse_value(to_raw)

        if strict:
            if metric in from_map and not from_ok:
                warnings.append(ParseWarning(metric=metric, side="from", raw_value=from_raw))
            if metric in to_map and not to_ok:
                warnings.append(ParseWarning(metric=metric, side="to", raw_value=to_raw))

        diff = to_num - from_num
        changes[metric] = MeasureChange(
            from_value=from_raw or "0",
            to_value=to_raw or "0",
            diff=diff,
            improved=classify_metric(metric).is_improvement(diff),
        )

    for warning in warnings:
        logger.warning(
            "Unparseable %s value for %s: %r (counted as 0)",
            warning.side, warning.metric, warning.raw_value,
        )

    return MeasuresChange(available=True, changes=changes, warnings=tuple(warnings))


# ── Issues ───────────────────────────────────────────────────────────────────

def _count_by_severity(issues: Sequence[Issue]) -> Dict[str, int]:
    counts = {severity: 0 for severity in SEVERITY_ORDER}
    for issue in issues:
        if issue.severity in counts:
            counts[issue.severity] += 1
    return counts


def compare_issues(
    from_issues: Optional[Sequence[Issue]],
    to_issues: Optional[Sequence[Issue]],
) -> IssuesChange:
    """Count issues per severity on both sides.

    Totals are the sum of the per-severity counts, so issues with an absent
    or unrecognised severity are left out of them.
    """
    if not _is_sequence(from_issues) or not _is_sequence(to_issues):
        return IssuesChange(available=False)

    from_counts = _count_by_severity(from_issues)
    to_counts = _count_by_severity(to_issues)

    changes = {
        severity: CountChange.between(from_counts[severity], to_counts[severity])
        for severity in SEVERITY_ORDER
    }
    total = CountChange.between(sum(from_counts.values()), sum(to_counts.values()))

    dropped = (len(from_issues) - total.from_count, len(to_issues) - total.to_count)
    if any(dropped):
        logger.debug("Issues without a known severity excluded: from=%d to=%d", *dropped)

    return IssuesChange(available=True, changes=changes, total=total)


# ── Summary ──────────────────────────────────────────────────────────────────

def generate_summary(comparison: Comparison) -> ComparisonSummary:
    """Describe the notable changes of an assembled comparison."""
    quality_gate = "No change"
    gate = comparison.quality_gate_change
    if gate.available:
        if gate.improved:
            quality_gate = "Improved (Failed -> Passed)"
        elif gate.degraded:
            quality_gate = "Degraded (Passed -> Failed)"

    improvements: List[str] = []
    degradations: List[str] = []

    if comparison.measures_change.available:
        for metric, change in comparison.measures_change.changes.items():
            if abs(change.diff) == 0:
                continue
            line = f"{metric}: {change.from_value} -> {change.to_value}"
            if change.improved:
                improvements.append(line)
            else:
                degradations.append(line)

    issues = comparison.issues_change
    if issues.available and issues.total.diff != 0:
        total = issues.total
        if total.improved:
            improvements.append(
                f"Total issues: {total.from_count} -> {total.to_count} ({abs(total.diff)} fixed)"
            )
        else:
            degradations.append(
                f"Total issues: {total.from_count} -> {total.to_count} ({abs(total.diff)} new)"
            )

    return ComparisonSummary(
        quality_gate=quality_gate,
        improvements=tuple(improvements),
        degradations=tuple(degradations),
    )


# ── Orchestration ────────────────────────────────────────────────────────────

def compare(from_snapshot: Snapshot, to_snapshot: Snapshot, strict: bool = False) -> Comparison:
    """Compare two snapshots.

    Raises:
        TypeError: If either argument is not a Snapshot.
    """
    for label, snapshot in (("from_snapshot", from_snapshot), ("to_snapshot", to_snapshot)):
        if not isinstance(snapshot, Snapshot):
            raise TypeError(f"{label} must be a Snapshot, got {type(snapshot).__name__}")

    comparison = Comparison(
        project=to_snapshot.project_name or "Unknown",
        from_date=from_snapshot.timestamp or "Unknown",
        to_date=to_snapshot.timestamp or "Unknown",
        quality_gate_change=compare_quality_gate(from_snapshot.quality_gate, to_snapshot.quality_gate),
        measures_change=compare_measures(from_snapshot.measures, to_snapshot.measures, strict=strict),
        issues_change=compare_issues(from_snapshot.issues, to_snapshot.issues),
    )
    return replace(comparison, summary=generate_summary(comparison))
