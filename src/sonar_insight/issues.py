"""Issue list utilities: status filtering, component ordering and statistics."""

from typing import Any, Dict, Iterable, List, Sequence

from .snapshot.models import Issue


def filter_by_status(issues: Iterable[Issue], status: str = "OPEN") -> List[Issue]:
    return [issue for issue in issues if issue.status == status]


def sort_by_component(issues: Iterable[Issue]) -> List[Issue]:
    """Stable sort by component path; issues without one sort first."""
    return sorted(issues, key=lambda issue: issue.component or "")


def simplify_issue(issue: Issue) -> Dict[str, Any]:
    """Keep only the fields needed to locate and triage an issue."""
    return {
        "component": issue.component,
        "line": issue.line,
        "message": issue.message,
        "severity": issue.severity,
        "type": issue.type,
        "rule": issue.rule,
    }


def component_statistics(issues: Sequence[Issue]) -> Dict[str, int]:
    """Issue count per component, in first-seen order."""
    counts: Dict[str, int] = {}
    for issue in issues:
        component = issue.component or ""
        counts[component] = counts.get(component, 0) + 1
    return counts
