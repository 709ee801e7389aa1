"""Report templates built from a quality snapshot.

Three templates are available: ``summary`` (headline metrics and issue
counts), ``detailed`` (summary plus gate conditions, every metric, issue
types, latest issues and coverage) and ``issues`` (issues grouped by
severity).
"""

from collections import Counter
from typing import Any, Callable, Dict, List, Optional

from .snapshot.models import Issue, Snapshot

TEMPLATES = ("summary", "detailed", "issues")

NOT_AVAILABLE = "N/A"
UNKNOWN = "UNKNOWN"

_LATEST_ISSUE_COUNT = 10


def _strip_project_prefix(component: Optional[str], project_key: Optional[str]) -> Optional[str]:
    if component and project_key and component.startswith(f"{project_key}:"):
        return component[len(project_key) + 1:]
    return component


def _severity_counts(issues: List[Issue]) -> Dict[str, int]:
    return dict(Counter(issue.severity or UNKNOWN for issue in issues))


def generate_summary_report(snapshot: Snapshot) -> Dict[str, Any]:
    metrics = snapshot.measure_map()
    issues = list(snapshot.issues or ())
    project = snapshot.project_info
    gate = snapshot.quality_gate

    def metric(key: str) -> str:
        return metrics.get(key) or NOT_AVAILABLE

    return {
        "project": {
            "name": project.name if project else None,
            "key": project.key if project else None,
            "lastAnalysisDate": snapshot.timestamp,
        },
        "qualityGate": {
            "status": gate.status if gate else None,
            "passed": gate.passed if gate else False,
        },
        "metrics": {
            "codeSize": metric("ncloc"),
            "coverage": metric("coverage"),
            "duplications": metric("duplicated_lines_density"),
            "bugs": metric("bugs"),
            "vulnerabilities": metric("vulnerabilities"),
            "codeSmells": metric("code_smells"),
            "securityHotspots": metric("security_hotspots"),
        },
        "issues": {
            "total": len(issues),
            "bySeverity": _severity_counts(issues),
        },
    }


def generate_detailed_report(snapshot: Snapshot) -> Dict[str, Any]:
    summary = generate_summary_report(snapshot)
    issues = list(snapshot.issues or ())
    project_key = snapshot.project_info.key if snapshot.project_info else None
    gate = snapshot.quality_gate

    return {
        **summary,
        "qualityGate": {
            **summary["qualityGate"],
            "conditions": [dict(c) for c in gate.conditions] if gate else [],
        },
        "metrics": {
            **summary["metrics"],
            "all": snapshot.measure_map(),
        },
        "issues": {
            **summary["issues"],
            "byType": dict(Counter(issue.type or UNKNOWN for issue in issues)),
            "latest": [
                {
                    "key": issue.key,
                    "message": issue.message,
                    "severity": issue.severity,
                    "type": issue.type,
                    "component": _strip_project_prefix(issue.component, project_key),
                }
                for issue in issues[:_LATEST_ISSUE_COUNT]
            ],
        },
        "coverage": {
            "overall": snapshot.measure_map().get("coverage") or NOT_AVAILABLE,
            "details": [dict(c) for c in snapshot.coverage_details],
        },
    }


def generate_issues_report(snapshot: Snapshot) -> Dict[str, Any]:
    project_name = snapshot.project_name
    if snapshot.issues is None:
        return {
            "project": project_name,
            "timestamp": snapshot.timestamp,
            "issues": {"total": 0, "bySeverity": {}, "items": []},
        }

    project_key = snapshot.project_info.key if snapshot.project_info else None
    groups: Dict[str, List[Dict[str, Any]]] = {}
    for issue in snapshot.issues:
        groups.setdefault(issue.severity or UNKNOWN, []).append({
            "key": issue.key,
            "message": issue.message,
            "component": _strip_project_prefix(issue.component, project_key),
            "line": issue.line,
            "type": issue.type,
            "creationDate": issue.creation_date,
        })

    return {
        "project": project_name,
        "timestamp": snapshot.timestamp,
        "issues": {
            "total": len(snapshot.issues),
            "bySeverity": {severity: len(items) for severity, items in groups.items()},
            "items": [
                {"severity": severity, "count": len(items), "issues": items}
                for severity, items in groups.items()
            ],
        },
    }


_GENERATORS: Dict[str, Callable[[Snapshot], Dict[str, Any]]] = {
    "summary": generate_summary_report,
    "detailed": generate_detailed_report,
    "issues": generate_issues_report,
}


def generate_report(template: str, snapshot: Snapshot) -> Dict[str, Any]:
    """Render ``snapshot`` with the named template; unknown names use ``summary``."""
    return _GENERATORS.get(template, generate_summary_report)(snapshot)
