"""CLI: table rendering and exports from a saved grid."""

import json
import sys

import pytest

import main as cli
from src.grid import GridModel, serialize
from src.utils import format_score


def _blob_file(tmp_path):
    m = GridModel()
    m.set_score("Teacher 1", "Teaching Quality", 8)
    m.set_score("Teacher 1", "Communication", 7)
    path = tmp_path / "grid.json"
    path.write_text(serialize(m.snapshot()), encoding="utf-8")
    return path


def test_format_score():
    assert format_score(8) == "8"
    assert format_score(8.0) == "8"
    assert format_score(7.25) == "7.2"


def test_format_table_has_totals_and_averages():
    m = GridModel()
    m.set_score("Teacher 1", "Teaching Quality", 8)
    lines = cli.format_table(m).splitlines()
    assert lines[0].split()[0] == "Subject"
    assert lines[-1].startswith("Average")
    assert "4.0" in lines[-1]
    assert lines[2].split()[-1] == "8"


def test_main_json_output(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["main.py", str(_blob_file(tmp_path)), "--json"])
    cli.main()
    out = json.loads(capsys.readouterr().out)
    assert out["row_totals"]["Teacher 1"] == 15
    assert out["column_averages"]["Teaching Quality"] == 4.0


def test_main_writes_report_and_pdf(tmp_path, monkeypatch):
    report = tmp_path / "report.json"
    pdf = tmp_path / "report.pdf"
    monkeypatch.setattr(
        sys, "argv", ["main.py", str(_blob_file(tmp_path)), "--report", str(report), "--pdf", str(pdf)]
    )
    cli.main()
    assert json.loads(report.read_text(encoding="utf-8"))["ranking"][0] == "Teacher 1"
    assert pdf.read_bytes().startswith(b"%PDF")


def test_main_missing_store_entry_exits(tmp_path, monkeypatch):
    monkeypatch.setattr(sys, "argv", ["main.py", "--data-dir", str(tmp_path / "empty")])
    with pytest.raises(SystemExit) as exc_info:
        cli.main()
    assert exc_info.value.code == 1


def test_main_malformed_file_exits(tmp_path, monkeypatch):
    bad = tmp_path / "bad.json"
    bad.write_text('{"subjects": []}', encoding="utf-8")
    monkeypatch.setattr(sys, "argv", ["main.py", str(bad)])
    with pytest.raises(SystemExit):
        cli.main()
