"""End-to-end tests for the CLI commands via typer's CliRunner."""

import importlib
import json

import pytest
from typer.testing import CliRunner

from sonar_insight import __version__
from sonar_insight.cli import app

runner = CliRunner()


@pytest.fixture
def snapshots(write_report, make_report, make_issue):
    write_report("before.json", make_report(
        gate="ERROR",
        measures=[{"metric": "coverage", "value": "70"}, {"metric": "bugs", "value": "2"}],
        issues=[make_issue("MAJOR"), make_issue("MINOR")],
    ))
    write_report("after.json", make_report(
        gate="OK",
        measures=[{"metric": "coverage", "value": "80"}, {"metric": "bugs", "value": "4"}],
        issues=[make_issue("MAJOR")],
    ))


class FakeClient:
    """Stands in for SonarCloudClient; returns canned payloads."""

    report = None
    issues = []

    @classmethod
    def from_settings(cls, settings):
        settings.require_token()
        return cls()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return None

    def get_full_quality_report(self, project_key):
        return self.report

    def get_project_measures(self, project_key, metric_keys):
        return [{"metric": key, "value": "1"} for key in metric_keys.split(",")]

    def get_issues(self, project_key, statuses=None):
        return [i for i in self.issues if statuses is None or i["status"] == statuses]


@pytest.fixture
def fake_client(monkeypatch, make_report, make_issue):
    FakeClient.report = make_report(issues=[make_issue("CRITICAL")])
    FakeClient.issues = [
        make_issue("MAJOR", key="b", component="acme_pharmacy-pos:src/b.js"),
        make_issue("MINOR", key="a", component="acme_pharmacy-pos:src/a.js"),
        make_issue("MINOR", key="c", component="acme_pharmacy-pos:src/b.js", status="CLOSED"),
    ]
    for name in ("fetch", "report", "issues"):
        module = importlib.import_module(f"sonar_insight.cli.{name}")
        monkeypatch.setattr(module, "SonarCloudClient", FakeClient)
    monkeypatch.setenv("SONAR_TOKEN", "t0k")
    return FakeClient


class TestGlobalOptions:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_invalid_config_value(self, monkeypatch):
        monkeypatch.setenv("SONAR_HOST_URL", "sonarcloud.io")
        result = runner.invoke(app, ["list"])
        assert result.exit_code == 1
        assert "host_url" in result.output


class TestCompare:
    def test_writes_comparison(self, snapshots, output_dir):
        result = runner.invoke(app, ["compare", "--from", "before.json", "--to", "after", "-o", "cmp"])
        assert result.exit_code == 0, result.output
        data = json.loads((output_dir / "cmp.json").read_text(encoding="utf-8"))
        assert data["project"] == "Pharmacy POS"
        assert data["summary"]["qualityGate"] == "Improved (Failed -> Passed)"
        assert data["issuesChange"]["total"] == {"from": 2, "to": 1, "diff": -1, "improved": True}

    def test_text_format(self, snapshots, output_dir):
        result = runner.invoke(
            app, ["-q", "compare", "--from", "before", "--to", "after", "-f", "text", "-o", "cmp"]
        )
        assert result.exit_code == 0, result.output
        assert "# Quality Comparison: Pharmacy POS" in (output_dir / "cmp.txt").read_text(encoding="utf-8")

    def test_default_output_name(self, snapshots, output_dir):
        result = runner.invoke(app, ["compare", "--from", "before", "--to", "after", "-p", "pos"])
        assert result.exit_code == 0, result.output
        assert len(list(output_dir.glob("pos_quality_comparison_*.json"))) == 1

    def test_missing_inputs(self):
        result = runner.invoke(app, ["compare", "--from", "before.json"])
        assert result.exit_code == 1
        assert "--to" in result.output

    def test_missing_snapshot_file(self, output_dir):
        result = runner.invoke(app, ["compare", "--from", "nope", "--to", "nope2"])
        assert result.exit_code == 1
        assert "not found" in result.output.lower()

    def test_fail_on_degradation(self, snapshots):
        result = runner.invoke(
            app, ["compare", "--from", "before", "--to", "after", "--fail-on-degradation"]
        )
        # bugs went up
        assert result.exit_code == 1

    def test_no_degradation_passes(self, write_report, make_report):
        write_report("a.json", make_report())
        write_report("b.json", make_report())
        result = runner.invoke(app, ["compare", "--from", "a", "--to", "b", "--fail-on-degradation"])
        assert result.exit_code == 0, result.output


class TestList:
    def test_empty_directory(self):
        result = runner.invoke(app, ["list"])
        assert result.exit_code == 0
        assert "No JSON files" in result.output

    def test_lists_json_files(self, snapshots):
        result = runner.invoke(app, ["list"])
        assert result.exit_code == 0
        assert "after.json" in result.output
        assert "before.json" in result.output


class TestReport:
    def test_from_file(self, snapshots, output_dir):
        result = runner.invoke(
            app, ["report", "--from-file", "after", "-t", "summary", "-f", "json", "-o", "rep"]
        )
        assert result.exit_code == 0, result.output
        data = json.loads((output_dir / "rep.json").read_text(encoding="utf-8"))
        assert data["qualityGate"] == {"status": "OK", "passed": True}
        assert data["metrics"]["coverage"] == "80"

    def test_live_text_report(self, fake_client, output_dir):
        result = runner.invoke(app, ["report", "-p", "acme_pharmacy-pos", "-t", "issues", "-o", "rep"])
        assert result.exit_code == 0, result.output
        text = (output_dir / "rep.txt").read_text(encoding="utf-8")
        assert "project: Pharmacy POS" in text

    def test_requires_project(self, fake_client):
        result = runner.invoke(app, ["report"])
        assert result.exit_code == 1
        assert "--project" in result.output


class TestFetch:
    def test_full_report(self, fake_client, output_dir):
        result = runner.invoke(app, ["fetch", "-p", "acme_pharmacy-pos", "-o", "snap"])
        assert result.exit_code == 0, result.output
        data = json.loads((output_dir / "snap.json").read_text(encoding="utf-8"))
        assert data["issues"][0]["severity"] == "CRITICAL"

    def test_csv_writes_measures(self, fake_client, output_dir):
        result = runner.invoke(app, ["fetch", "-p", "acme_pharmacy-pos", "-f", "csv", "-o", "snap"])
        assert result.exit_code == 0, result.output
        lines = (output_dir / "snap.csv").read_text(encoding="utf-8").splitlines()
        assert lines == ["metric,value", "coverage,70.0", "bugs,5"]

    def test_selected_metrics(self, fake_client, output_dir, monkeypatch):
        monkeypatch.setenv("DEFAULT_PROJECT_KEY", "acme_pharmacy-pos")
        result = runner.invoke(app, ["fetch", "-m", "ncloc,bugs", "-o", "m"])
        assert result.exit_code == 0, result.output
        data = json.loads((output_dir / "m.json").read_text(encoding="utf-8"))
        assert [m["metric"] for m in data] == ["ncloc", "bugs"]

    def test_missing_token(self, fake_client, monkeypatch):
        monkeypatch.delenv("SONAR_TOKEN")
        result = runner.invoke(app, ["fetch", "-p", "acme_pharmacy-pos"])
        assert result.exit_code == 1
        assert "SONAR_TOKEN" in result.output


class TestIssues:
    def test_live_sorted_with_statistics(self, fake_client, output_dir):
        result = runner.invoke(app, ["issues", "-p", "acme_pharmacy-pos", "-s", "open"])
        assert result.exit_code == 0, result.output
        records = json.loads((output_dir / "open_issues_sorted_by_component.json").read_text(encoding="utf-8"))
        assert [r["key"] for r in records] == ["a", "b"]
        stats = json.loads(
            (output_dir / "open_issues_sorted_by_component_component_statistics.json").read_text(encoding="utf-8")
        )
        assert stats == {"acme_pharmacy-pos:src/a.js": 1, "acme_pharmacy-pos:src/b.js": 1}

    def test_from_file_simplified(self, snapshots, output_dir):
        result = runner.invoke(app, ["issues", "--from-file", "before", "--simplify"])
        assert result.exit_code == 0, result.output
        records = json.loads((output_dir / "all_issues_simplified.json").read_text(encoding="utf-8"))
        assert len(records) == 2
        assert set(records[0]) == {"component", "line", "message", "severity", "type", "rule"}

    def test_no_issues(self, write_report, make_report):
        write_report("clean.json", make_report(issues=[]))
        result = runner.invoke(app, ["issues", "--from-file", "clean"])
        assert result.exit_code == 1
        assert "No issues found" in result.output


class TestMarkupInData:
    def test_bracketed_project_name(self, write_report, make_report, output_dir):
        name = "legacy [/bold] app"
        write_report("a.json", make_report(name=name, measures=[{"metric": "coverage", "value": "[1]"}]))
        write_report("b.json", make_report(name=name, measures=[{"metric": "coverage", "value": "2"}]))

        result = runner.invoke(app, ["compare", "--from", "a", "--to", "b", "--strict", "-o", "cmp"])

        assert result.exit_code == 0, result.output
        assert name in result.output
        assert "[1]" in result.output
        assert (output_dir / "cmp.json").exists()

    def test_bracketed_project_key(self, fake_client, output_dir):
        result = runner.invoke(app, ["fetch", "-p", "[red]key", "-o", "snap"])
        assert result.exit_code == 0, result.output
        assert "[red]key" in result.output
