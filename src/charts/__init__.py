"""Chart projections of the evaluation grid."""

from src.charts.projector import (
    by_criterion_series,
    by_subject_series,
    chart_payload,
    radar_series,
    totals_distribution,
)

__all__ = [
    "by_subject_series",
    "by_criterion_series",
    "totals_distribution",
    "radar_series",
    "chart_payload",
]
