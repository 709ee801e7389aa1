"""Shared test fixtures for Sonar Insight tests."""

import json

import pytest

_ENV_VARS = (
    "SONAR_TOKEN",
    "SONAR_ORGANIZATION",
    "SONAR_HOST_URL",
    "DEFAULT_PROJECT_KEY",
    "OUTPUT_DIR",
    "DEFAULT_FORMAT",
    "SONAR_INSIGHT_TIMEOUT_SECONDS",
    "SONAR_INSIGHT_RETRIES",
    "SONAR_INSIGHT_PAGE_SIZE",
    "SONAR_INSIGHT_MAX_PAGES",
    "SONAR_INSIGHT_VERBOSITY",
)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Run every test in an empty directory with no config in the environment."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    return work


def _make_report(
    gate="OK",
    measures=None,
    issues=None,
    name="Pharmacy POS",
    key="acme_pharmacy-pos",
    timestamp="2025-01-01T00:00:00.000Z",
):
    """Snapshot encoding as written by the fetch command."""
    return {
        "projectInfo": {"key": key, "name": name},
        "qualityGate": {"status": gate, "conditions": []} if gate is not None else None,
        "measures": measures if measures is not None else [
            {"metric": "coverage", "value": "70.0"},
            {"metric": "bugs", "value": "5"},
        ],
        "issues": issues if issues is not None else [],
        "coverageDetails": [],
        "timestamp": timestamp,
    }


def _make_issue(severity="MAJOR", component="acme_pharmacy-pos:src/app.js", **extra):
    issue = {
        "key": extra.pop("key", f"AX-{severity}"),
        "severity": severity,
        "type": "CODE_SMELL",
        "component": component,
        "message": "Refactor this function",
        "line": 10,
        "creationDate": "2025-01-01T00:00:00+0000",
        "rule": "javascript:S3776",
        "status": "OPEN",
    }
    issue.update(extra)
    return issue


@pytest.fixture
def output_dir(isolated_env):
    path = isolated_env / "output"
    path.mkdir()
    return path


@pytest.fixture
def write_report(output_dir):
    """Write a report dict into the output directory and return its file name."""

    def _write(name, data):
        (output_dir / name).write_text(json.dumps(data), encoding="utf-8")
        return name

    return _write


@pytest.fixture
def make_report():
    return _make_report


@pytest.fixture
def make_issue():
    return _make_issue
