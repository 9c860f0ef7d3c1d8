"""Serialization contract for grid snapshots: {subjects, criteria, scores} as JSON text."""

import json

import jsonschema

from src.grid.errors import MalformedBlob
from src.grid.model import ClampPolicy, GridModel, GridSnapshot
from src.validation import validate_grid_document


def to_document(snapshot: GridSnapshot) -> dict:
    return snapshot.to_dict()


def serialize(snapshot: GridSnapshot) -> str:
    """Encode a snapshot as a JSON blob."""
    return json.dumps(to_document(snapshot), ensure_ascii=False, allow_nan=False)


def from_document(doc, clamp: ClampPolicy | None = None) -> GridModel:
    """
    Build a live model from a decoded document.
    Sparse score maps are filled with 0; rows/columns for names not listed are dropped.
    Raises MalformedBlob if the document does not have the expected shape.
    """
    if not isinstance(doc, dict):
        raise MalformedBlob(f"Grid document must be an object, got {type(doc).__name__}")
    try:
        validate_grid_document(doc)
    except jsonschema.ValidationError as e:
        path = "/".join(str(p) for p in e.absolute_path) or "<root>"
        raise MalformedBlob(f"Grid document invalid at {path}: {e.message}") from e

    try:
        return GridModel(doc["subjects"], doc["criteria"], doc["scores"], clamp=clamp)
    except (TypeError, ValueError) as e:
        raise MalformedBlob(f"Grid document rejected: {e}") from e


def deserialize(blob, clamp: ClampPolicy | None = None) -> GridModel:
    """Decode a JSON blob (str/bytes) or an already-decoded mapping into a GridModel."""
    if isinstance(blob, (str, bytes, bytearray)):
        try:
            doc = json.loads(blob)
        except ValueError as e:
            raise MalformedBlob(f"Grid blob is not valid JSON: {e}") from e
    else:
        doc = blob
    return from_document(doc, clamp=clamp)
