"""Evaluation App - session, persistence, audit and export around the evaluation grid."""

from evaluation_app.store import BlobStore
from evaluation_app.session import EvaluationSession, parse_score_input
from evaluation_app.report_pdf import generate_grid_pdf

__all__ = ["BlobStore", "EvaluationSession", "parse_score_input", "generate_grid_pdf"]
