"""
Runtime configuration for Math 6 Master.

Values come from environment variables, optionally loaded from a .env file
in the project root or current working directory.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).parent.parent

load_dotenv(PROJECT_ROOT / ".env")
load_dotenv()


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# -----------------------------------------------------------------------------
# Content generation
# -----------------------------------------------------------------------------

DEFAULT_MODEL = os.environ.get("MATHMASTER_MODEL", "gemini-2.5-flash")
SUBJECT_LABEL = "Toán Lớp 6 - Kết nối tri thức"


def get_gemini_api_key() -> str | None:
    """Return the Gemini API key, checking the legacy variable names too."""
    for name in ("GEMINI_API_KEY", "VITE_GEMINI_API_KEY", "API_KEY"):
        value = os.environ.get(name)
        if value:
            return value
    return None


# -----------------------------------------------------------------------------
# Progress persistence
# -----------------------------------------------------------------------------

DEFAULT_PROGRESS_DIR = Path.home() / ".mathmaster"
DEFAULT_PROGRESS_DB = Path(
    os.environ.get("MATHMASTER_PROGRESS_DB", str(DEFAULT_PROGRESS_DIR / "progress.db"))
)
STORAGE_KEY = "math6_kntt_progress"


# -----------------------------------------------------------------------------
# Scoring and progression
# -----------------------------------------------------------------------------

MAX_SCORE = 10.0
PASS_THRESHOLD = 8.0

PART_A_POINTS = 3.0
PART_B_POINTS = 4.0
PART_C_POINTS = 3.0

# Content contract of the question generator (12 MCQ, 4 x 4 true/false, 6 short answers)
CONTRACT_PART_A_ITEMS = 12
CONTRACT_PART_B_ITEMS = 4
CONTRACT_PART_B_STATEMENTS = 4
CONTRACT_PART_C_ITEMS = 6
OPTIONS_PER_ITEM = 4

ASSESSMENT_DURATION_SECONDS = _env_int("MATHMASTER_ASSESSMENT_MINUTES", 60) * 60
