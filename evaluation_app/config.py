"""Environment-driven settings (.env supported)."""

import os
from pathlib import Path

from dotenv import load_dotenv

from src.grid.model import ClampPolicy

load_dotenv()

PROJECT_ROOT = Path(__file__).resolve().parent.parent

DATA_DIR = Path(os.getenv("EVALUATION_DATA_DIR") or PROJECT_ROOT / "data")
LOG_DIR = Path(os.getenv("LOG_DIR") or PROJECT_ROOT / "logs")
STORAGE_KEY = os.getenv("EVALUATION_STORAGE_KEY", "teacherEvaluation")
PORT = int(os.getenv("PORT", "5000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def score_clamp() -> ClampPolicy | None:
    """Clamp applied on score writes. SCORE_CLAMP=off disables; default bounds are [0, 10]."""
    if os.getenv("SCORE_CLAMP", "on").strip().lower() in ("off", "0", "false", "no"):
        return None
    return ClampPolicy(float(os.getenv("SCORE_MIN", "0")), float(os.getenv("SCORE_MAX", "10")))
