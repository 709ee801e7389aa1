"""Plain-text formatter: readable quality and comparison reports."""

from datetime import datetime
from typing import Any, Dict, List

from ..diff.metrics import SEVERITY_ORDER
from .base import BaseFormatter, is_comparison, to_plain

METRIC_LABELS = {
    "ncloc": "Lines of code",
    "coverage": "Coverage",
    "duplicated_lines_density": "Duplicated lines",
    "bugs": "Bugs",
    "vulnerabilities": "Vulnerabilities",
    "code_smells": "Code smells",
    "security_hotspots": "Security hotspots",
}

_PERCENT_METRICS = frozenset({"coverage", "duplicated_lines_density"})


def _is_quality_report(data: Any) -> bool:
    return isinstance(data, dict) and all(k in data for k in ("projectInfo", "qualityGate", "measures"))


def _signed(value: float) -> str:
    if float(value).is_integer():
        value = int(value)
    return f"+{value}" if value > 0 else str(value)


class TextFormatter(BaseFormatter):
    """Markdown-flavoured text for reports, comparisons and generic data."""

    name = "text"
    extension = ".txt"

    def format(self, data: Any) -> str:
        data = to_plain(data)
        if is_comparison(data):
            return self._format_comparison(data)
        if _is_quality_report(data):
            return self._format_quality_report(data)
        return "\n".join(self._outline(data, 0)) + "\n"

    def _format_quality_report(self, data: Dict[str, Any]) -> str:
        project = data.get("projectInfo") or {}
        gate = data.get("qualityGate") or {}
        lines = [
            f"# SonarCloud Quality Report: {project.get('name') or project.get('key') or 'Unknown'}",
            "",
            f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
            "",
            "## Quality Gate",
            "",
            f"Status: {'Passed' if gate.get('status') == 'OK' else 'Failed'}",
            "",
            "## Key Metrics",
            "",
        ]
        for measure in data.get("measures") or []:
            metric = measure.get("metric")
            value = measure.get("value")
            if metric in _PERCENT_METRICS:
                value = f"{value}%"
            lines.append(f"- {METRIC_LABELS.get(metric, metric)}: {value}")

        issues = data.get("issues") or []
        if issues:
            counts: Dict[str, int] = {}
            for issue in issues:
                severity = issue.get("severity") or "UNKNOWN"
                counts[severity] = counts.get(severity, 0) + 1
            lines.extend(["", "## Issue Summary", ""])
            for severity in SEVERITY_ORDER:
                if severity in counts:
                    lines.append(f"- {severity}: {counts[severity]} issues")
        return "\n".join(lines) + "\n"

    def _format_comparison(self, data: Dict[str, Any]) -> str:
        summary = data["summary"]
        lines = [
            f"# Quality Comparison: {data.get('project', 'Unknown')}",
            "",
            f"From: {data.get('fromDate', 'Unknown')}",
            f"To:   {data.get('toDate', 'Unknown')}",
            "",
            "## Quality Gate",
            "",
        ]
        gate = data["qualityGateChange"]
        if gate.get("available"):
            lines.append(f"{summary['qualityGate']} ({gate.get('fromStatus')} -> {gate.get('toStatus')})")
        else:
            lines.append("Not available")

        lines.extend(["", "## Measures", ""])
        measures = data["measuresChange"]
        if measures.get("available"):
            for metric, change in measures["changes"].items():
                label = METRIC_LABELS.get(metric, metric)
                lines.append(
                    f"- {label}: {change['from']} -> {change['to']} ({_signed(change['diff'])})"
                )
        else:
            lines.append("Not available")

        lines.extend(["", "## Issues", ""])
        issues = data["issuesChange"]
        if issues.get("available"):
            for severity, change in issues["changes"].items():
                lines.append(f"- {severity}: {change['from']} -> {change['to']} ({_signed(change['diff'])})")
            total = issues["total"]
            lines.append(f"- Total: {total['from']} -> {total['to']} ({_signed(total['diff'])})")
        else:
            lines.append("Not available")

        for title, entries in (("Improvements", summary["improvements"]), ("Degradations", summary["degradations"])):
            lines.extend(["", f"## {title}", ""])
            if entries:
                lines.extend(f"- {entry}" for entry in entries)
            else:
                lines.append("None")
        return "\n".join(lines) + "\n"

    def _outline(self, data: Any, depth: int) -> List[str]:
        indent = "  " * depth
        lines: List[str] = []
        if isinstance(data, dict):
            for key, value in data.items():
                if isinstance(value, (dict, list)) and value:
                    lines.append(f"{indent}{key}:")
                    lines.extend(self._outline(value, depth + 1))
                else:
                    lines.append(f"{indent}{key}: {_scalar(value)}")
        elif isinstance(data, list):
            for item in data:
                if isinstance(item, (dict, list)):
                    lines.append(f"{indent}-")
                    lines.extend(self._outline(item, depth + 1))
                else:
                    lines.append(f"{indent}- {_scalar(item)}")
        else:
            lines.append(f"{indent}{_scalar(data)}")
        return lines


def _scalar(value: Any) -> str:
    if value is None:
        return "-"
    if value == {} or value == []:
        return "(none)"
    return str(value)
