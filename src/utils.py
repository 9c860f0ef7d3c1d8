"""Shared helpers: content hashing, timestamps, score display."""

import hashlib
from datetime import datetime, timezone


def hash_text(text: str) -> str:
    """SHA256 hex digest of text, used to fingerprint serialized grids."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def iso_now() -> str:
    """Current UTC timestamp, millisecond precision, Z suffix."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


def format_score(value) -> str:
    """Display form of a score: integers without decimals, others to one place."""
    if isinstance(value, float):
        return f"{value:.0f}" if value.is_integer() else f"{value:.1f}"
    return str(value)
