"""Audit trail for grid mutations and persistence operations."""

import json
import logging
from pathlib import Path

from src.utils import iso_now
from evaluation_app import config

LOGGER_NAME = "evaluation_app"


def _audit_dir() -> Path:
    return Path(config.LOG_DIR)


def _ensure_log_dir() -> Path:
    d = _audit_dir()
    d.mkdir(parents=True, exist_ok=True)
    return d


def audit_log(
    action: str,
    status: str,
    *,
    subject: str | None = None,
    criterion: str | None = None,
    storage_key: str | None = None,
    error: str | None = None,
    error_code: str | None = None,
    extra: dict | None = None,
):
    """Append a structured audit entry to the audit log (JSONL)."""
    audit_file = _ensure_log_dir() / "audit.log"
    entry = {
        "timestamp": iso_now(),
        "action": action,
        "status": status,
    }
    if subject is not None:
        entry["subject"] = subject
    if criterion is not None:
        entry["criterion"] = criterion
    if storage_key:
        entry["storage_key"] = storage_key
    if error:
        entry["error"] = error
    if error_code:
        entry["error_code"] = error_code
    if extra:
        entry.update(extra)

    with open(audit_file, "a", encoding="utf-8") as f:
        f.write(json.dumps(entry, default=str) + "\n")


def setup_app_logging():
    """Configure application logging to console and file."""
    log_dir = _ensure_log_dir()
    logger = logging.getLogger(LOGGER_NAME)
    if logger.handlers:
        return logger
    logger.setLevel(logging.DEBUG)
    console_level = getattr(logging, config.LOG_LEVEL.upper(), logging.INFO)

    fmt = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"

    # Console
    ch = logging.StreamHandler()
    ch.setLevel(console_level)
    ch.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    logger.addHandler(ch)

    # File
    fh = logging.FileHandler(log_dir / "app.log", encoding="utf-8")
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    logger.addHandler(fh)

    return logger
