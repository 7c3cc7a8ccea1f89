"""Tests for the mysql-slowlog command line."""

from __future__ import annotations

import json

import pytest

from mysql_slowlog.__main__ import main


@pytest.fixture
def import_config(tmp_path, slow_log_file):
    path = tmp_path / "import.yaml"
    path.write_text(
        "slowlog:\n"
        "  sources:\n"
        f"    - path: {slow_log_file.name}\n"
        "      host: db1\n"
        "  output:\n"
        "    db: events.db\n"
    )
    return path


class TestParseCommand:
    def test_prints_json_lines(self, slow_log_file, capsys):
        assert main(["parse", str(slow_log_file)]) == 0
        lines = capsys.readouterr().out.strip().splitlines()
        events = [json.loads(line) for line in lines]
        assert len(events) == 3
        assert events[0]["User"] == "root"
        assert events[0]["Timestamp"] == "2021-01-01 00:00:00"

    def test_gz(self, gz_slow_log_file, capsys):
        assert main(["parse", str(gz_slow_log_file)]) == 0
        assert len(capsys.readouterr().out.strip().splitlines()) == 3

    def test_missing_file(self, tmp_path, capsys):
        assert main(["parse", str(tmp_path / "nope.log")]) == 1
        assert "not found" in capsys.readouterr().out


class TestImportAndSummary:
    def test_validate(self, import_config, capsys):
        assert main(["validate", str(import_config)]) == 0
        assert "Valid" in capsys.readouterr().out

    def test_validate_invalid(self, tmp_path, capsys):
        path = tmp_path / "bad.yaml"
        path.write_text("slowlog:\n  sources: []\n  output:\n    db: x.db\n")
        assert main(["validate", str(path)]) == 1
        assert "At least one source is required" in capsys.readouterr().out

    def test_import_then_summary(self, tmp_path, import_config, capsys):
        assert main(["import", str(import_config)]) == 0
        assert "Imported 3 events" in capsys.readouterr().out
        assert (tmp_path / "events.db").exists()

        assert main(["summary", str(tmp_path / "events.db"), "--top", "5"]) == 0
        out = capsys.readouterr().out
        assert "select * from orders where id = ?" in out
        assert "select name from customers where id in (?+)" in out
        assert "2021-01-01 00:00:00 .. 2021-01-01 00:00:09" in out

    def test_import_missing_source(self, tmp_path, capsys):
        path = tmp_path / "import.yaml"
        path.write_text("slowlog:\n  sources: [missing-slow.log]\n  output:\n    db: events.db\n")
        assert main(["import", str(path)]) == 1
        assert "Path not found" in capsys.readouterr().out

    def test_summary_missing_db(self, tmp_path, capsys):
        assert main(["summary", str(tmp_path / "nope.db")]) == 1


class TestListParsers:
    def test_lists_mysql_slow(self, capsys):
        assert main(["list-parsers"]) == 0
        assert "mysql_slow" in capsys.readouterr().out
