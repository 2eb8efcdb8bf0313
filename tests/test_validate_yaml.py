#!/usr/bin/env python3
"""Tests for validate_yaml schema validation."""

from validate_yaml import detect_kind, main, validate_file


class TestDetectKind:
    def test_rules(self):
        assert detect_kind({"rules": []}) == "rules"

    def test_vehicle(self):
        assert detect_kind({"vehicle": {"id": 1}}) == "vehicle"


class TestValidateFile:
    """Tests for validate_file function."""

    def test_valid_vehicle(self, tmp_path):
        path = tmp_path / "valid.yaml"
        path.write_text("""
vehicle:
  id: 1
  currentMileage: 56000
history:
  - category: oil_change
    date: 2025-03-10
    mileage: 50000
""")
        assert validate_file(path) == []

    def test_valid_rules(self, tmp_path):
        path = tmp_path / "rules.yaml"
        path.write_text("""
rules:
  - component: Engine Oil
    mileageInterval: 5000
    timeIntervalMonths: 6
""")
        assert validate_file(path) == []

    def test_zero_interval(self, tmp_path):
        path = tmp_path / "rules.yaml"
        path.write_text("""
rules:
  - component: Engine Oil
    mileageInterval: 0
    timeIntervalMonths: 6
""")
        errors = validate_file(path)
        assert errors[0].startswith("Schema validation error")
        assert "rules.0.mileageInterval" in errors[1]

    def test_missing_vehicle(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("history: []\n")
        assert validate_file(path)

    def test_yaml_parse_error(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("vehicle: [unclosed\n")
        assert validate_file(path)[0].startswith("YAML parse error")


class TestMain:
    def test_reports_each_file(self, tmp_path, capsys):
        good = tmp_path / "good.yaml"
        good.write_text("vehicle:\n  id: 1\n")
        bad = tmp_path / "bad.yaml"
        bad.write_text("history: []\n")
        assert main([str(good), str(bad)]) == 1
        out = capsys.readouterr().out
        assert "OK: good.yaml" in out
        assert "FAIL: bad.yaml" in out


class TestValidateDates:
    """History dates must be plain YYYY-MM-DD dates."""

    def test_timestamp_date_fails(self, tmp_path):
        path = tmp_path / "v.yaml"
        path.write_text("""
vehicle:
  id: 1
history:
  - category: oil_change
    date: 2025-03-10 09:30:00
""")
        errors = validate_file(path)
        assert errors[0].startswith("Schema validation error")
        assert "history.0.date" in errors[1]

    def test_quoted_date_passes(self, tmp_path):
        path = tmp_path / "v.yaml"
        path.write_text(
            "vehicle:\n  id: 1\nhistory:\n  - category: oil_change\n    date: '2025-03-10'\n"
        )
        assert validate_file(path) == []


class TestUnreadableFiles:
    def test_non_utf8_reported_and_run_continues(self, tmp_path, capsys):
        bad = tmp_path / "bad.yaml"
        bad.write_bytes(b"vehicle:\n  id: 1\n  name: \xff\xfe\n")
        good = tmp_path / "good.yaml"
        good.write_text("vehicle:\n  id: 1\n")

        assert main([str(bad), str(good)]) == 1
        out = capsys.readouterr().out
        assert "FAIL: bad.yaml" in out
        assert "OK: good.yaml" in out
