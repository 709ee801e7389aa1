"""Data models for snapshot comparison: quality gate, measure and issue deltas.

Every block is always present on a ``Comparison``; a block whose inputs were
missing carries ``available=False`` and neutral values. ``to_dict`` produces
the wire encoding written by the JSON renderer (camelCase keys), and
``from_dict`` reads it back.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple


@dataclass(frozen=True)
class QualityGateChange:
    """Quality gate status movement between two snapshots."""

    available: bool
    from_status: Optional[str] = None
    to_status: Optional[str] = None
    improved: bool = False
    degraded: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "available": self.available,
            "fromStatus": self.from_status,
            "toStatus": self.to_status,
            "improved": self.improved,
            "degraded": self.degraded,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "QualityGateChange":
        return cls(
            available=bool(data.get("available", False)),
            from_status=data.get("fromStatus"),
            to_status=data.get("toStatus"),
            improved=bool(data.get("improved", False)),
            degraded=bool(data.get("degraded", False)),
        )


@dataclass(frozen=True)
class MeasureChange:
    """Delta of one metric. ``from_value``/``to_value`` keep the display strings."""

    from_value: str
    to_value: str
    diff: float
    improved: bool

    def to_dict(self) -> Dict[str, Any]:
        return {"from": self.from_value, "to": self.to_value, "diff": self.diff, "improved": self.improved}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MeasureChange":
        return cls(
            from_value=str(data["from"]),
            to_value=str(data["to"]),
            diff=float(data["diff"]),
            improved=bool(data["improved"]),
        )


@dataclass(frozen=True)
class ParseWarning:
    """A measure value that could not be parsed and was counted as zero."""

    metric: str
    side: str  # "from" | "to"
    raw_value: Optional[str]

    def to_dict(self) -> Dict[str, Any]:
        return {"metric": self.metric, "side": self.side, "rawValue": self.raw_value}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ParseWarning":
        return cls(metric=data["metric"], side=data["side"], raw_value=data.get("rawValue"))


@dataclass(frozen=True)
class MeasuresChange:
    """Per-metric deltas over the union of metric keys."""

    available: bool
    changes: Dict[str, MeasureChange] = field(default_factory=dict)
    warnings: Tuple[ParseWarning, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "available": self.available,
            "changes": {metric: c.to_dict() for metric, c in self.changes.items()},
            "warnings": [w.to_dict() for w in self.warnings],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MeasuresChange":
        return cls(
            available=bool(data.get("available", False)),
            changes={m: MeasureChange.from_dict(c) for m, c in (data.get("changes") or {}).items()},
            warnings=tuple(ParseWarning.from_dict(w) for w in data.get("warnings") or ()),
        )


@dataclass(frozen=True)
class CountChange:
    """Delta of an issue count; fewer issues is an improvement."""

    from_count: int
    to_count: int
    diff: int
    improved: bool

    @classmethod
    def between(cls, from_count: int, to_count: int) -> "CountChange":
        diff = to_count - from_count
        return cls(from_count=from_count, to_count=to_count, diff=diff, improved=diff < 0)

    def to_dict(self) -> Dict[str, Any]:
        return {"from": self.from_count, "to": self.to_count, "diff": self.diff, "improved": self.improved}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CountChange":
        return cls(
            from_count=int(data["from"]),
            to_count=int(data["to"]),
            diff=int(data["diff"]),
            improved=bool(data["improved"]),
        )


@dataclass(frozen=True)
class IssuesChange:
    """Per-severity issue count deltas plus the aggregate total."""

    available: bool
    changes: Dict[str, CountChange] = field(default_factory=dict)
    total: CountChange = field(default_factory=lambda: CountChange(0, 0, 0, False))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "available": self.available,
            "changes": {sev: c.to_dict() for sev, c in self.changes.items()},
            "total": self.total.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "IssuesChange":
        total = data.get("total")
        return cls(
            available=bool(data.get("available", False)),
            changes={s: CountChange.from_dict(c) for s, c in (data.get("changes") or {}).items()},
            total=CountChange.from_dict(total) if total else CountChange(0, 0, 0, False),
        )


@dataclass(frozen=True)
class ComparisonSummary:
    """Human-readable notable changes.

    The order of ``improvements``/``degradations`` follows metric iteration
    order and carries no meaning.
    """

    quality_gate: str = "No change"
    improvements: Tuple[str, ...] = ()
    degradations: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "qualityGate": self.quality_gate,
            "improvements": list(self.improvements),
            "degradations": list(self.degradations),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ComparisonSummary":
        return cls(
            quality_gate=data.get("qualityGate", "No change"),
            improvements=tuple(data.get("improvements") or ()),
            degradations=tuple(data.get("degradations") or ()),
        )


@dataclass(frozen=True)
class Comparison:
    """Complete comparison of two snapshots."""

    project: str
    from_date: str
    to_date: str
    quality_gate_change: QualityGateChange
    measures_change: MeasuresChange
    issues_change: IssuesChange
    summary: ComparisonSummary = field(default_factory=ComparisonSummary)

    @property
    def has_degradations(self) -> bool:
        return bool(self.summary.degradations) or self.quality_gate_change.degraded

    def to_dict(self) -> Dict[str, Any]:
        return {
            "project": self.project,
            "fromDate": self.from_date,
            "toDate": self.to_date,
            "qualityGateChange": self.quality_gate_change.to_dict(),
            "measuresChange": self.measures_change.to_dict(),
            "issuesChange": self.issues_change.to_dict(),
            "summary": self.summary.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Comparison":
        return cls(
            project=data.get("project", "Unknown"),
            from_date=data.get("fromDate", "Unknown"),
            to_date=data.get("toDate", "Unknown"),
            quality_gate_change=QualityGateChange.from_dict(data.get("qualityGateChange") or {}),
            measures_change=MeasuresChange.from_dict(data.get("measuresChange") or {}),
            issues_change=IssuesChange.from_dict(data.get("issuesChange") or {}),
            summary=ComparisonSummary.from_dict(data.get("summary") or {}),
        )
