"""File-backed key-value blob store: one JSON file per key."""

import logging
import os
import re
import tempfile
from pathlib import Path

log = logging.getLogger("evaluation_app.store")

KEY_PATTERN = re.compile(r"[A-Za-z0-9_-]+")


def _check_key(key: str) -> str:
    """Keys map 1:1 to filenames, so only [A-Za-z0-9_-] is accepted."""
    if not isinstance(key, str) or not KEY_PATTERN.fullmatch(key):
        raise ValueError(f"Storage key must match [A-Za-z0-9_-]+, got {key!r}")
    return key


class BlobStore:
    """Stores serialized grid blobs under a directory, keyed like browser local storage."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{_check_key(key)}.json"

    def put(self, key: str, blob: str) -> Path:
        """Write blob under key, replacing any previous value."""
        path = self._path(key)
        self.directory.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", dir=self.directory, prefix=f".{key}.", suffix=".tmp", delete=False
        ) as tmp:
            tmp.write(blob)
        try:
            os.replace(tmp.name, path)
        except OSError:
            Path(tmp.name).unlink(missing_ok=True)
            raise
        log.debug("Stored blob key=%s bytes=%d", key, len(blob))
        return path

    def get(self, key: str) -> str | None:
        """Return the stored blob, or None if nothing is stored under key."""
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def delete(self, key: str) -> bool:
        path = self._path(key)
        if not path.exists():
            return False
        path.unlink()
        return True

    def keys(self) -> list[str]:
        if not self.directory.exists():
            return []
        return sorted(p.stem for p in self.directory.glob("*.json"))
