"""Tests for issue list utilities."""

from sonar_insight.issues import component_statistics, filter_by_status, simplify_issue, sort_by_component
from sonar_insight.snapshot import Issue


def _issue(key, component, status="OPEN"):
    return Issue(key=key, severity="MINOR", component=component, status=status, message="m", line=3)


class TestIssueUtilities:
    def test_filter_by_status(self):
        issues = [_issue("a", "x"), _issue("b", "x", status="CLOSED")]
        assert [i.key for i in filter_by_status(issues)] == ["a"]
        assert [i.key for i in filter_by_status(issues, "CLOSED")] == ["b"]

    def test_sort_is_stable(self):
        issues = [_issue("1", "p:b.js"), _issue("2", "p:a.js"), _issue("3", "p:b.js"), _issue("4", None)]
        assert [i.key for i in sort_by_component(issues)] == ["4", "2", "1", "3"]

    def test_simplify(self):
        simple = simplify_issue(_issue("a", "p:a.js"))
        assert simple == {
            "component": "p:a.js",
            "line": 3,
            "message": "m",
            "severity": "MINOR",
            "type": None,
            "rule": None,
        }

    def test_component_statistics(self):
        issues = [_issue("1", "p:b.js"), _issue("2", "p:a.js"), _issue("3", "p:b.js")]
        assert component_statistics(issues) == {"p:b.js": 2, "p:a.js": 1}
