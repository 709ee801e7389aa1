"""Tests for the flat-file store and snapshot loader."""

import pytest

from sonar_insight.exceptions import SnapshotNotFoundError, SnapshotParseError
from sonar_insight.storage import Storage, load_snapshot


class TestStorage:
    def test_save_and_load(self, tmp_path):
        storage = Storage(tmp_path / "out")
        path = storage.save_data({"a": [1, 2]}, "data.json")

        assert path == tmp_path / "out" / "data.json"
        assert storage.load_data("data.json") == {"a": [1, 2]}

    def test_load_missing_file(self, tmp_path):
        storage = Storage(tmp_path)
        with pytest.raises(SnapshotNotFoundError) as exc:
            storage.load_data("nope.json")
        assert exc.value.path == tmp_path / "nope.json"

    def test_load_invalid_json(self, tmp_path):
        (tmp_path / "bad.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(SnapshotParseError):
            Storage(tmp_path).load_data("bad.json")

    def test_list_files(self, tmp_path):
        storage = Storage(tmp_path / "out")
        assert storage.list_files() == []
        storage.save_data({}, "b.json")
        storage.save_data({}, "a.json")
        (tmp_path / "out" / "report.txt").write_text("x", encoding="utf-8")

        assert storage.list_files() == ["a.json", "b.json", "report.txt"]
        assert storage.list_files(".json") == ["a.json", "b.json"]

    def test_exists_and_delete(self, tmp_path):
        storage = Storage(tmp_path)
        storage.save_data({}, "x.json")
        assert storage.file_exists("x.json")
        assert storage.delete_file("x.json") is True
        assert not storage.file_exists("x.json")
        assert storage.delete_file("x.json") is False


class TestLoadSnapshot:
    def test_loads_by_file_name(self, output_dir, write_report, make_report):
        write_report("before.json", make_report(gate="ERROR"))
        snapshot = load_snapshot("before.json", Storage(output_dir))
        assert snapshot.quality_gate.status == "ERROR"

    def test_json_suffix_is_optional(self, output_dir, write_report, make_report):
        write_report("before.json", make_report())
        snapshot = load_snapshot("before", Storage(output_dir))
        assert snapshot.project_name == "Pharmacy POS"

    def test_not_found(self, output_dir):
        with pytest.raises(SnapshotNotFoundError):
            load_snapshot("missing", Storage(output_dir))

    def test_top_level_list_is_parse_error(self, output_dir, write_report):
        # fetch --metrics saves a bare measure list, which is not a snapshot
        write_report("measures.json", [{"metric": "bugs", "value": "1"}])
        with pytest.raises(SnapshotParseError):
            load_snapshot("measures.json", Storage(output_dir))

    def test_partial_snapshot_loads(self, output_dir, write_report):
        write_report("partial.json", {"timestamp": "t", "measures": None})
        snapshot = load_snapshot("partial.json", Storage(output_dir))
        assert snapshot.measures is None

    def test_non_utf8_file_is_parse_error(self, output_dir):
        (output_dir / "bin.json").write_bytes(b'{"timestamp": "\xff\xfe"}')
        with pytest.raises(SnapshotParseError):
            load_snapshot("bin.json", Storage(output_dir))

    def test_infinite_line_number_loads(self, output_dir):
        (output_dir / "inf.json").write_text(
            '{"issues": [{"severity": "MAJOR", "line": Infinity}]}', encoding="utf-8"
        )
        snapshot = load_snapshot("inf", Storage(output_dir))
        assert snapshot.issues[0].line is None
        assert snapshot.issues[0].severity == "MAJOR"
