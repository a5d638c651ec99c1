"""Tests for the command line interface."""

import io
import json

import pytest

import cli
from config import TechsignalConfig


@pytest.fixture(autouse=True)
def default_config(monkeypatch):
    """Ignore config files and environment on the test machine."""
    monkeypatch.setattr(cli, "get_config", lambda: TechsignalConfig())


@pytest.fixture
def chart_file(tmp_path, chart_document):
    path = tmp_path / "ERIC-B.ST.json"
    path.write_text(json.dumps(chart_document))
    return path


class TestAnalyze:

    def test_markdown_to_stdout(self, chart_file, capsys):
        assert cli.main(["analyze", str(chart_file)]) == 0
        out = capsys.readouterr().out
        assert out.startswith("# Ericsson B (ERIC-B.ST)")
        assert "SEK" in out

    def test_json_output(self, chart_file, capsys):
        assert cli.main(["analyze", str(chart_file), "--format", "json", "--no-series"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["symbol"] == "ERIC-B.ST"
        assert data["current_price"] > 0
        assert "historical" not in data["indicators"]["rsi"]

    def test_output_file(self, chart_file, tmp_path):
        output = tmp_path / "out.json"
        assert cli.main(["analyze", str(chart_file), "-f", "json", "-o", str(output)]) == 0
        data = json.loads(output.read_text(encoding="utf-8"))
        assert len(data["indicators"]["macd"]["series"]["histogram"]) > 0

    def test_stdin(self, chart_document, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps(chart_document)))
        assert cli.main(["analyze", "-", "-f", "json"]) == 0
        assert json.loads(capsys.readouterr().out)["display_name"] == "Ericsson B"

    def test_fixed_policy_reports_insufficient_history(self, chart_file, capsys):
        assert cli.main(["analyze", str(chart_file), "--policy", "fixed"]) == 1
        err = capsys.readouterr().err
        assert "Insufficient price history" in err
        assert "119" in err

    def test_unparseable_input(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text("not json")
        assert cli.main(["analyze", str(path)]) == 1
        assert "Failed to parse chart document" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        assert cli.main(["analyze", str(tmp_path / "nope.json")]) == 1
        assert "cannot read" in capsys.readouterr().err

    def test_invalid_utf8_file(self, tmp_path, capsys):
        path = tmp_path / "binary.json"
        path.write_bytes(b"\xff\xfe")
        assert cli.main(["analyze", str(path)]) == 1
        assert "cannot read" in capsys.readouterr().err


class TestLookup:

    @pytest.fixture
    def chart_dirs(self, tmp_path, monkeypatch):
        fresh, archive = tmp_path / "fresh", tmp_path / "archive"
        fresh.mkdir()
        archive.mkdir()
        config = TechsignalConfig(source={"directories": [str(fresh), str(archive)]})
        monkeypatch.setattr(cli, "get_config", lambda: config)
        return fresh, archive

    def test_reads_from_fallback_directory(self, chart_dirs, chart_document, capsys):
        _, archive = chart_dirs
        (archive / "ERIC-B.ST.json").write_text(json.dumps(chart_document))
        assert cli.main(["lookup", "eric-b.st", "-f", "json", "--no-series"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["symbol"] == "ERIC-B.ST"
        assert data["currency"] == "SEK"

    def test_unknown_symbol(self, chart_dirs, capsys):
        assert cli.main(["lookup", "NOPE"]) == 1
        err = capsys.readouterr().err
        assert "[E601]" in err
        assert "NOPE.json" in err


class TestPolicy:

    def test_adaptive_lookbacks(self, capsys):
        assert cli.main(["policy", "120"]) == 0
        out = capsys.readouterr().out
        assert "Policy: adaptive" in out
        assert "Long MA: 100" in out

    def test_fixed_short_history(self, capsys):
        assert cli.main(["policy", "120", "--policy", "fixed"]) == 0
        out = capsys.readouterr().out
        assert "Required points: 200" in out
        assert "not enough history" in out
