"""PDF export of the evaluation table (scores, totals, averages)."""

from io import BytesIO
from pathlib import Path
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import landscape, letter
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from src.grid.model import GridSnapshot
from src.run_report import build_summary
from src.utils import format_score


def _table_rows(snapshot: GridSnapshot, cell_style) -> list[list]:
    header = [Paragraph("<b>Subject</b>", cell_style)]
    header += [Paragraph(f"<b>{escape(c)}</b>", cell_style) for c in snapshot.criteria]
    header.append(Paragraph("<b>Total</b>", cell_style))
    rows = [header]
    for s in snapshot.subjects:
        row = [Paragraph(escape(s), cell_style)]
        row += [format_score(snapshot.scores[s][c]) for c in snapshot.criteria]
        row.append(format_score(snapshot.row_total(s)))
        rows.append(row)
    footer = [Paragraph("<b>Average</b>", cell_style)]
    footer += [f"{snapshot.column_average(c):.1f}" for c in snapshot.criteria]
    footer.append("")
    rows.append(footer)
    return rows


def generate_grid_pdf(snapshot: GridSnapshot, title: str = "Evaluation Report") -> bytes:
    """Render the grid as a one-table PDF document. Returns the PDF bytes."""
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=landscape(letter),
        rightMargin=0.75 * inch,
        leftMargin=0.75 * inch,
        topMargin=0.75 * inch,
        bottomMargin=0.75 * inch,
    )

    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        "GridTitle",
        parent=styles["Heading1"],
        fontSize=18,
        spaceAfter=12,
        alignment=TA_CENTER,
    )
    heading_style = ParagraphStyle(
        "GridHeading",
        parent=styles["Heading2"],
        fontSize=12,
        spaceBefore=12,
        spaceAfter=6,
    )
    cell_style = ParagraphStyle("GridCell", parent=styles["Normal"], fontSize=9, leading=11)
    body_style = styles["Normal"]

    story = [Paragraph(escape(title), title_style), Spacer(1, 0.2 * inch)]

    if not snapshot.subjects or not snapshot.criteria:
        story.append(Paragraph("The evaluation grid is empty.", body_style))
        doc.build(story)
        return buffer.getvalue()

    table = Table(_table_rows(snapshot, cell_style), repeatRows=1)
    last = len(snapshot.subjects) + 1
    style = [
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#e2e8f0")),
        ("BACKGROUND", (0, last), (-1, last), colors.HexColor("#e2e8f0")),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("ALIGN", (1, 1), (-1, -1), "RIGHT"),
    ]
    # Zebra striping on even data rows
    for i in range(1, last, 2):
        style.append(("BACKGROUND", (0, i), (-1, i), colors.HexColor("#f8fafc")))
    table.setStyle(TableStyle(style))
    story.append(table)

    summary = build_summary(snapshot)
    story.append(Paragraph("Ranking by Total", heading_style))
    for pos, s in enumerate(summary["ranking"], start=1):
        story.append(Paragraph(f"{pos}. {escape(s)} ({format_score(summary['row_totals'][s])})", body_style))

    doc.build(story)
    return buffer.getvalue()


def write_grid_pdf(snapshot: GridSnapshot, output_path: str | Path, title: str = "Evaluation Report") -> Path:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(generate_grid_pdf(snapshot, title))
    return output_path
