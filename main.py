#!/usr/bin/env python3
"""CLI for viewing and exporting a saved evaluation grid."""

import argparse
import json
import sys
from pathlib import Path

from src.grid import GridModel, MalformedBlob, deserialize
from src.run_report import build_summary, write_summary_report
from src.utils import format_score
from evaluation_app import config
from evaluation_app.report_pdf import write_grid_pdf
from evaluation_app.store import BlobStore


def format_table(model: GridModel) -> str:
    """Plain-text table with a Total column and an Average row."""
    header = ["Subject", *model.criteria, "Total"]
    rows = [header]
    for s in model.subjects:
        rows.append([s, *(format_score(model.score(s, c)) for c in model.criteria), format_score(model.row_total(s))])
    rows.append(["Average", *(f"{model.column_average(c):.1f}" for c in model.criteria), ""])

    widths = [max(len(r[i]) for r in rows) for i in range(len(header))]
    lines = []
    for i, r in enumerate(rows):
        lines.append("  ".join(cell.ljust(w) for cell, w in zip(r, widths)).rstrip())
        if i == 0 or i == len(rows) - 2:
            lines.append("  ".join("-" * w for w in widths))
    return "\n".join(lines)


def main():
    parser = argparse.ArgumentParser(
        description="Show or export an evaluation grid saved by the evaluation app."
    )
    parser.add_argument(
        "blob_file",
        type=Path,
        nargs="?",
        default=None,
        help="Path to a serialized grid (JSON). Defaults to the blob store entry for --key",
    )
    parser.add_argument(
        "--key",
        type=str,
        default=config.STORAGE_KEY,
        help=f"Blob store key to read (default: {config.STORAGE_KEY})",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=config.DATA_DIR,
        help="Blob store directory (default: EVALUATION_DATA_DIR or ./data)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output grid and summary as JSON",
    )
    parser.add_argument(
        "--pdf",
        type=Path,
        default=None,
        help="Write a PDF report to this path",
    )
    parser.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Write a JSON summary report to this path",
    )

    args = parser.parse_args()

    # Load blob
    if args.blob_file:
        if not args.blob_file.exists():
            print(f"Error: Grid file not found: {args.blob_file}", file=sys.stderr)
            sys.exit(1)
        blob = args.blob_file.read_text(encoding="utf-8")
    else:
        try:
            blob = BlobStore(args.data_dir).get(args.key)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        if blob is None:
            print(f"Error: No saved evaluation under key {args.key!r} in {args.data_dir}", file=sys.stderr)
            sys.exit(1)

    try:
        model = deserialize(blob)
    except MalformedBlob as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    snapshot = model.snapshot()

    if args.json:
        print(json.dumps({**snapshot.to_dict(), **build_summary(snapshot)}, indent=2, ensure_ascii=False))
    else:
        print(format_table(model))

    if args.report:
        write_summary_report(args.report, snapshot, storage_key=None if args.blob_file else args.key)
        print(f"\nSummary report saved to: {args.report}")

    if args.pdf:
        try:
            write_grid_pdf(snapshot, args.pdf)
            print(f"\nPDF report saved to: {args.pdf}")
        except Exception as e:
            print(f"Error generating PDF: {e}", file=sys.stderr)
            sys.exit(1)


if __name__ == "__main__":
    main()
