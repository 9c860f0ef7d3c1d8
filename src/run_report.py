"""Generate a summary report (totals, averages) for a grid snapshot."""

import json
from pathlib import Path

from src.grid.codec import serialize
from src.grid.model import GridSnapshot
from src.utils import hash_text, iso_now


def build_summary(snapshot: GridSnapshot) -> dict:
    """Totals per subject, averages per criterion, and the ranking by total."""
    totals = {s: snapshot.row_total(s) for s in snapshot.subjects}
    averages = {c: snapshot.column_average(c) for c in snapshot.criteria}
    ranking = sorted(snapshot.subjects, key=lambda s: (-totals[s], snapshot.subjects.index(s)))
    return {
        "num_subjects": len(snapshot.subjects),
        "num_criteria": len(snapshot.criteria),
        "row_totals": totals,
        "column_averages": averages,
        "ranking": ranking,
    }


def write_summary_report(output_path: Path, snapshot: GridSnapshot, storage_key: str | None = None) -> dict:
    """
    Write a JSON summary report with a content hash of the serialized grid.
    Returns the report dict.
    """
    report = {
        "timestamp": iso_now(),
        "storage_key": storage_key,
        "grid_hash": hash_text(serialize(snapshot)),
        **build_summary(snapshot),
        "grid": snapshot.to_dict(),
    }
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(report, indent=2, ensure_ascii=False), encoding="utf-8")
    return report
