"""Evaluation grid: subjects x criteria score matrix."""

from src.grid.codec import deserialize, from_document, serialize, to_document
from src.grid.errors import DuplicateName, GridError, InvalidName, MalformedBlob, NotFound
from src.grid.model import (
    DEFAULT_CRITERIA,
    DEFAULT_SUBJECTS,
    ClampPolicy,
    GridModel,
    GridSnapshot,
)

__all__ = [
    "GridModel",
    "GridSnapshot",
    "ClampPolicy",
    "DEFAULT_SUBJECTS",
    "DEFAULT_CRITERIA",
    "GridError",
    "InvalidName",
    "DuplicateName",
    "NotFound",
    "MalformedBlob",
    "serialize",
    "deserialize",
    "to_document",
    "from_document",
]
