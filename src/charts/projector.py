"""Chart-ready projections of a grid snapshot. Pure functions, no side effects."""

from src.grid.model import GridSnapshot

# Series colours, cycled by series index
PALETTE = ["#0088FE", "#00C49F", "#FFBB28", "#FF8042", "#8884d8", "#82ca9d", "#ffc658", "#8dd1e1"]
RADAR_DOMAIN = (0, 10)
LABEL_KEY_CANDIDATES = ("name", "label", "_name", "_label")


def pick_label_key(snapshot: GridSnapshot) -> str:
    """First label key not used by any live subject or criterion."""
    taken = set(snapshot.subjects) | set(snapshot.criteria)
    for key in LABEL_KEY_CANDIDATES:
        if key not in taken:
            return key
    n = 0
    while f"_label{n}" in taken:
        n += 1
    return f"_label{n}"


def _resolve_label_key(snapshot: GridSnapshot, label_key: str | None, series_keys) -> str:
    if label_key is None:
        return pick_label_key(snapshot)
    if label_key in series_keys:
        raise ValueError(f"label_key {label_key!r} collides with a series name")
    return label_key


def by_subject_series(snapshot: GridSnapshot, label_key: str | None = None) -> list[dict]:
    """
    One record per subject: {label_key: subject, <criterion>: score, ...}.
    label_key defaults to "name", or the next free key if a name is taken.
    """
    label_key = _resolve_label_key(snapshot, label_key, snapshot.criteria)
    records = []
    for s in snapshot.subjects:
        record = {label_key: s}
        for c in snapshot.criteria:
            record[c] = snapshot.scores[s][c]
        records.append(record)
    return records


def by_criterion_series(snapshot: GridSnapshot, label_key: str | None = None) -> list[dict]:
    """Transpose of by_subject_series: one record per criterion with every subject's score."""
    label_key = _resolve_label_key(snapshot, label_key, snapshot.subjects)
    records = []
    for c in snapshot.criteria:
        record = {label_key: c}
        for s in snapshot.subjects:
            record[s] = snapshot.scores[s][c]
        records.append(record)
    return records


def totals_distribution(snapshot: GridSnapshot, label_key: str | None = None) -> list[dict]:
    """
    One record per subject with its row total and share of the grand total.
    share is 0 for everyone when the grand total is 0.
    """
    label_key = _resolve_label_key(snapshot, label_key, ("total", "share"))
    totals = [(s, snapshot.row_total(s)) for s in snapshot.subjects]
    grand_total = sum(t for _, t in totals)
    return [
        {label_key: s, "total": t, "share": (t / grand_total) if grand_total else 0.0}
        for s, t in totals
    ]


def radar_series(snapshot: GridSnapshot, label_key: str | None = None) -> list[dict]:
    """
    Same records as by_subject_series, for radial charts.
    Every record carries the full criterion key set.
    """
    return by_subject_series(snapshot, label_key=label_key)


def series_colors(names) -> dict[str, str]:
    """Map each series name to a palette colour by position."""
    return {n: PALETTE[i % len(PALETTE)] for i, n in enumerate(names)}


def chart_payload(snapshot: GridSnapshot, label_key: str | None = None) -> dict:
    """
    All projections plus palette assignments, as one document for a rendering layer.
    label_key in the payload names the record key holding the subject/criterion label.
    """
    if label_key is None:
        label_key = pick_label_key(snapshot)
    return {
        "label_key": label_key,
        "subjects": list(snapshot.subjects),
        "criteria": list(snapshot.criteria),
        "by_subject": by_subject_series(snapshot, label_key),
        "by_criterion": by_criterion_series(snapshot, label_key),
        "totals": totals_distribution(snapshot, label_key),
        "radar": radar_series(snapshot, label_key),
        "radar_domain": list(RADAR_DOMAIN),
        "criterion_colors": series_colors(snapshot.criteria),
        "subject_colors": series_colors(snapshot.subjects),
    }
