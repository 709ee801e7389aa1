"""Data models for quality snapshots: immutable records of a single fetch run.

The stored encoding is the JSON written by ``sonar-insight fetch``: the raw
SonarCloud payloads under camelCase keys (``projectInfo``, ``qualityGate``,
``measures``, ``issues``, ``coverageDetails``, ``timestamp``).
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple


def _require_mapping(value: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ValueError(f"{what} must be an object, got {type(value).__name__}")
    return value


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def _optional_line(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return int(value)


def _present(value: Any) -> bool:
    """A mapping counts as present even when empty; other falsy values do not."""
    return isinstance(value, Mapping) or bool(value)


@dataclass(frozen=True)
class ProjectInfo:
    """Identifying metadata of the analysed project."""

    key: Optional[str] = None
    name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ProjectInfo":
        data = _require_mapping(data, "projectInfo")
        return cls(key=_optional_str(data.get("key")), name=_optional_str(data.get("name")))


@dataclass(frozen=True)
class QualityGate:
    """Quality gate verdict; ``status == "OK"`` means passed."""

    status: Optional[str] = None
    conditions: Tuple[Dict[str, Any], ...] = ()

    @property
    def passed(self) -> bool:
        return self.status == "OK"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "QualityGate":
        data = _require_mapping(data, "qualityGate")
        conditions = data.get("conditions") or ()
        if not isinstance(conditions, (list, tuple)):
            conditions = ()
        return cls(
            status=_optional_str(data.get("status")),
            conditions=tuple(dict(c) for c in conditions if isinstance(c, Mapping)),
        )


@dataclass(frozen=True)
class Measure:
    """One metric reading. ``value`` is kept as the raw API string."""

    metric: str
    value: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Measure":
        data = _require_mapping(data, "measure")
        metric = data.get("metric")
        if not metric:
            raise ValueError("measure is missing 'metric'")
        return cls(metric=str(metric), value=_optional_str(data.get("value")))


@dataclass(frozen=True)
class Issue:
    """One issue record as returned by /issues/search."""

    key: Optional[str] = None
    severity: Optional[str] = None
    type: Optional[str] = None
    component: Optional[str] = None
    message: Optional[str] = None
    line: Optional[int] = None
    creation_date: Optional[str] = None
    rule: Optional[str] = None
    status: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Issue":
        data = _require_mapping(data, "issue")
        return cls(
            key=_optional_str(data.get("key")),
            severity=_optional_str(data.get("severity")),
            type=_optional_str(data.get("type")),
            component=_optional_str(data.get("component")),
            message=_optional_str(data.get("message")),
            line=_optional_line(data.get("line")),
            creation_date=_optional_str(data.get("creationDate")),
            rule=_optional_str(data.get("rule")),
            status=_optional_str(data.get("status")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "severity": self.severity,
            "type": self.type,
            "component": self.component,
            "message": self.message,
            "line": self.line,
            "creationDate": self.creation_date,
            "rule": self.rule,
            "status": self.status,
        }


@dataclass(frozen=True)
class Snapshot:
    """Complete, immutable record of one fetch run.

    ``measures`` and ``issues`` are ``None`` when the stored report lacks
    them or holds something other than a list; the comparison engine
    reports those blocks as unavailable instead of failing.
    """

    project_info: Optional[ProjectInfo] = None
    quality_gate: Optional[QualityGate] = None
    measures: Optional[Tuple[Measure, ...]] = None
    issues: Optional[Tuple[Issue, ...]] = None
    coverage_details: Tuple[Dict[str, Any], ...] = field(default_factory=tuple)
    timestamp: Optional[str] = None

    @property
    def project_name(self) -> Optional[str]:
        return self.project_info.name if self.project_info else None

    def measure_map(self) -> Dict[str, Optional[str]]:
        """Metric -> raw value; later duplicates win."""
        return {m.metric: m.value for m in self.measures or ()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Snapshot":
        """Parse the stored report encoding.

        Raises:
            ValueError: If the top level is not an object or a list entry
                is malformed.
        """
        data = _require_mapping(data, "snapshot")

        project_info = data.get("projectInfo")
        quality_gate = data.get("qualityGate")
        measures = data.get("measures")
        issues = data.get("issues")
        coverage = data.get("coverageDetails")

        return cls(
            project_info=ProjectInfo.from_dict(project_info) if _present(project_info) else None,
            quality_gate=QualityGate.from_dict(quality_gate) if _present(quality_gate) else None,
            measures=(
                tuple(Measure.from_dict(m) for m in measures) if isinstance(measures, list) else None
            ),
            issues=tuple(Issue.from_dict(i) for i in issues) if isinstance(issues, list) else None,
            coverage_details=(
                tuple(dict(c) for c in coverage if isinstance(c, Mapping))
                if isinstance(coverage, list)
                else ()
            ),
            timestamp=_optional_str(data.get("timestamp")),
        )
