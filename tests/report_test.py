"""Summary report and PDF export."""

import json

from src.grid import GridModel
from src.run_report import build_summary, write_summary_report
from evaluation_app.report_pdf import generate_grid_pdf, write_grid_pdf


def _model():
    m = GridModel()
    m.set_score("Teacher 1", "Teaching Quality", 8)
    m.set_score("Teacher 2", "Communication", 9.5)
    return m


def test_build_summary_ranking():
    summary = build_summary(_model().snapshot())
    assert summary["row_totals"] == {"Teacher 1": 8, "Teacher 2": 9.5}
    assert summary["ranking"] == ["Teacher 2", "Teacher 1"]
    assert summary["column_averages"]["Communication"] == 4.75


def test_ranking_ties_keep_subject_order():
    assert build_summary(GridModel().snapshot())["ranking"] == ["Teacher 1", "Teacher 2"]


def test_write_summary_report(tmp_path):
    path = tmp_path / "out" / "report.json"
    report = write_summary_report(path, _model().snapshot(), storage_key="teacherEvaluation")
    on_disk = json.loads(path.read_text(encoding="utf-8"))
    assert on_disk == report
    assert len(report["grid_hash"]) == 64
    assert report["grid"]["subjects"] == ["Teacher 1", "Teacher 2"]


def test_grid_hash_is_deterministic(tmp_path):
    a = write_summary_report(tmp_path / "a.json", _model().snapshot())
    b = write_summary_report(tmp_path / "b.json", _model().snapshot())
    assert a["grid_hash"] == b["grid_hash"]


def test_pdf_generation(tmp_path):
    assert generate_grid_pdf(_model().snapshot()).startswith(b"%PDF")
    assert generate_grid_pdf(GridModel(subjects=[], criteria=[]).snapshot()).startswith(b"%PDF")
    path = write_grid_pdf(_model().snapshot(), tmp_path / "r.pdf", title="Fall <Review>")
    assert path.read_bytes().startswith(b"%PDF")
