"""Schema validation for persisted grid documents."""

import json
from pathlib import Path

import jsonschema

SCHEMAS_DIR = Path(__file__).resolve().parent.parent / "schemas"


def _load_schema(name: str) -> dict:
    path = SCHEMAS_DIR / f"{name}.schema.json"
    return json.loads(path.read_text(encoding="utf-8"))


def validate_grid_document(data: dict) -> None:
    """Validate a grid document against schema. Raises jsonschema.ValidationError if invalid."""
    schema = _load_schema("grid_snapshot")
    jsonschema.validate(data, schema)
