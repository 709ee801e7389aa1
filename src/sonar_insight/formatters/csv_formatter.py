"""CSV formatter for Sonar Insight."""

import csv
import io
import json
from typing import Any, Dict, List, Optional, Sequence

from ..exceptions import OutputFormatError
from .base import BaseFormatter, is_comparison, to_plain

COMPARISON_HEADERS = ["section", "key", "from", "to", "diff", "improved"]


def _cell(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return value


def _infer_headers(rows: Sequence[Dict[str, Any]]) -> List[str]:
    headers: List[str] = []
    for row in rows:
        for key in row:
            if key not in headers:
                headers.append(key)
    return headers


class CsvFormatter(BaseFormatter):
    """Render record lists, or a comparison flattened to one row per delta."""

    name = "csv"
    extension = ".csv"

    def __init__(self, headers: Optional[Sequence[str]] = None) -> None:
        self.headers = list(headers) if headers else None

    def format(self, data: Any) -> str:
        data = to_plain(data)
        if is_comparison(data):
            return self._format_comparison(data)
        if not isinstance(data, list):
            raise OutputFormatError("csv", "CSV output needs a list of records or a comparison")

        rows = [to_plain(item) for item in data]
        if not all(isinstance(row, dict) for row in rows):
            raise OutputFormatError("csv", "every CSV record must be an object")
        headers = self.headers or _infer_headers(rows)

        output = io.StringIO()
        writer = csv.writer(output, lineterminator="\n")
        writer.writerow(headers)
        for row in rows:
            writer.writerow([_cell(row.get(h)) for h in headers])
        return output.getvalue()

    def _format_comparison(self, data: Dict[str, Any]) -> str:
        output = io.StringIO()
        writer = csv.writer(output, lineterminator="\n")
        writer.writerow(COMPARISON_HEADERS)

        gate = data["qualityGateChange"]
        if gate.get("available"):
            writer.writerow([
                "quality_gate", "status", gate.get("fromStatus"), gate.get("toStatus"),
                "", gate.get("improved"),
            ])

        measures = data["measuresChange"]
        for metric, change in (measures.get("changes") or {}).items():
            writer.writerow([
                "measure", metric, change["from"], change["to"], change["diff"], change["improved"],
            ])

        issues = data["issuesChange"]
        if issues.get("available"):
            for severity, change in (issues.get("changes") or {}).items():
                writer.writerow([
                    "issues", severity, change["from"], change["to"], change["diff"], change["improved"],
                ])
            total = issues["total"]
            writer.writerow([
                "issues", "TOTAL", total["from"], total["to"], total["diff"], total["improved"],
            ])
        return output.getvalue()
