"""Tests for the exception hierarchy."""

from sonar_insight.exceptions import (
    ConfigurationError,
    InvalidConfigError,
    MissingInputError,
    MissingTokenError,
    OutputFormatError,
    SnapshotError,
    SnapshotNotFoundError,
    SnapshotParseError,
    SonarCloudAPIError,
    SonarInsightError,
)


class TestExceptionHierarchy:
    def test_all_derive_from_base(self):
        for cls in (
            ConfigurationError, InvalidConfigError, MissingTokenError, MissingInputError,
            SnapshotError, SnapshotNotFoundError, SnapshotParseError,
            SonarCloudAPIError, OutputFormatError,
        ):
            assert issubclass(cls, SonarInsightError)

    def test_details_rendered(self):
        error = SonarInsightError("boom", details={"a": "1", "b": "2"})
        assert str(error) == "boom (a=1, b=2)"
        assert str(SonarInsightError("plain")) == "plain"

    def test_api_error_details(self):
        error = SonarCloudAPIError("Failed", endpoint="/issues/search", status_code=500, reason="down")
        assert error.details == {"endpoint": "/issues/search", "status": "500", "reason": "down"}

    def test_missing_input_names(self):
        error = MissingInputError(["--from", "--to"])
        assert error.names == ["--from", "--to"]
        assert "--from" in str(error) and "--to" in str(error)

    def test_missing_token_mentions_variable(self):
        assert "SONAR_TOKEN" in str(MissingTokenError())

    def test_snapshot_not_found_path(self, tmp_path):
        error = SnapshotNotFoundError("x.json", tmp_path / "x.json")
        assert error.path == tmp_path / "x.json"
        assert isinstance(error, SnapshotError)


class TestHints:
    def test_status_hints(self):
        assert "SONAR_TOKEN" in SonarCloudAPIError("x", endpoint="/e", status_code=401).hint
        assert SonarCloudAPIError("x", endpoint="/e", status_code=500).hint is None
        assert SonarCloudAPIError("x", endpoint="/e").hint is None

    def test_fixed_hints(self, tmp_path):
        assert MissingTokenError().hint
        assert "sonar-insight list" in SnapshotNotFoundError("x", tmp_path).hint
        assert MissingInputError(["--to"]).hint is None

    def test_explicit_hint(self):
        assert SonarInsightError("boom", hint="try again").hint == "try again"
        assert SonarInsightError("boom").hint is None
