"""Tests for the data-profiler command line."""

import json

import pytest

from data_profiler.cli import main

PEOPLE_CSV = "Name,Age,Email\nJohn,30,john@example.com\nJane,25,jane@example.com\n"


@pytest.fixture
def people_csv(tmp_path):
    path = tmp_path / "people.csv"
    path.write_text(PEOPLE_CSV)
    return path


class TestAnalyzeCommand:
    def test_prints_json_profile(self, people_csv, capsys):
        assert main(["analyze", str(people_csv)]) == 0

        out = json.loads(capsys.readouterr().out)
        assert out["sourceType"] == "csv"
        assert out["totalRecords"] == 2
        assert out["metadata"]["fileName"] == "people.csv"
        assert [f["normalizedName"] for f in out["fields"]] == ["name", "age", "email"]
        assert "pattern" not in out["fields"][0]

    def test_flags_enable_optional_facets(self, people_csv, capsys):
        assert main(["analyze", str(people_csv), "-p", "-u", "-s", "1"]) == 0

        out = json.loads(capsys.readouterr().out)
        assert out["totalRecords"] == 2
        assert out["fields"][0]["pattern"] == "alpha"
        assert out["fields"][0]["isUnique"] is True
        assert out["fields"][0]["examples"] == ["John"]

    def test_writes_output_file(self, people_csv, tmp_path, capsys):
        target = tmp_path / "profile.json"
        assert main(["analyze", str(people_csv), "-o", str(target)]) == 0

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Analysis saved to" in captured.err
        assert json.loads(target.read_text())["totalRecords"] == 2

    def test_detect_delimiter_flag(self, tmp_path, capsys):
        path = tmp_path / "export.txt"
        path.write_text("name|age|email\nJohn|30|john@example.com\n")
        assert main(["analyze", str(path), "--detect-delimiter"]) == 0

        out = json.loads(capsys.readouterr().out)
        assert len(out["fields"]) == 3

    def test_fixed_widths_flag(self, tmp_path, capsys):
        path = tmp_path / "legacy.txt"
        path.write_text("0001John      \n0002Jane      \n")
        assert main(["analyze", str(path), "-w", "4,10"]) == 0

        out = json.loads(capsys.readouterr().out)
        assert [f["originalHeader"] for f in out["fields"]] == ["column1", "column2"]

    def test_config_file_with_flag_override(self, people_csv, tmp_path, capsys):
        config = tmp_path / "profile.yaml"
        config.write_text("detect_patterns: true\nsample_size: 1\n")
        assert main(["analyze", str(people_csv), "-c", str(config), "-s", "2"]) == 0

        out = json.loads(capsys.readouterr().out)
        assert out["fields"][0]["pattern"] == "alpha"
        assert out["fields"][0]["examples"] == ["John", "Jane"]


class TestAnalyzeFailures:
    def test_missing_file(self, tmp_path, capsys):
        assert main(["analyze", str(tmp_path / "nope.csv")]) == 1
        assert "File not found" in capsys.readouterr().err

    def test_unsupported_extension(self, tmp_path, capsys):
        path = tmp_path / "report.pdf"
        path.write_bytes(b"%PDF")
        assert main(["analyze", str(path)]) == 1
        assert "Unsupported file format" in capsys.readouterr().err

    def test_validation_errors_reported(self, tmp_path, capsys):
        path = tmp_path / "dup.csv"
        path.write_text("a,A\nx,y\n")
        assert main(["analyze", str(path)]) == 1
        assert "Duplicate headers found: a" in capsys.readouterr().err

    def test_invalid_sample_size_reported(self, people_csv, capsys):
        assert main(["analyze", str(people_csv), "-s", "0"]) == 1
        assert "Sample size must be greater than 0" in capsys.readouterr().err

    def test_unknown_config_key(self, people_csv, tmp_path, capsys):
        config = tmp_path / "bad.yaml"
        config.write_text("colour: blue\n")
        assert main(["analyze", str(people_csv), "-c", str(config)]) == 1
        assert "colour" in capsys.readouterr().err

    def test_bad_widths_rejected_by_parser(self, people_csv):
        with pytest.raises(SystemExit):
            main(["analyze", str(people_csv), "-w", "4,x"])

    def test_zero_fixed_width_reported(self, tmp_path, capsys):
        path = tmp_path / "legacy.txt"
        path.write_text("0001John      \n")
        assert main(["analyze", str(path), "-w", "4,0"]) == 1
        assert "Fixed widths must be positive integers" in capsys.readouterr().err

    def test_scalar_fixed_widths_in_config(self, tmp_path, capsys):
        path = tmp_path / "legacy.txt"
        path.write_text("0001John      \n")
        config = tmp_path / "layout.yaml"
        config.write_text("fixed_widths: 5\n")
        assert main(["analyze", str(path), "-c", str(config)]) == 1
        assert "list of column widths" in capsys.readouterr().err

    def test_unwritable_output_path(self, people_csv, tmp_path, capsys):
        target = tmp_path / "missing" / "dir" / "out.json"
        assert main(["analyze", str(people_csv), "-o", str(target)]) == 1
        assert "cannot write" in capsys.readouterr().err
        assert not target.exists()
