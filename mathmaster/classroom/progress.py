"""
ProgressStore - Best score per lesson, persisted in ~/.mathmaster/progress.db.

Progress is a single JSON blob, a flat mapping of lesson id -> best score,
stored under a fixed key in a SQLite key-value table. It is read once at
construction and rewritten whole on every mutation. A blob that fails to
parse, or a database file SQLite cannot read, is discarded with a warning
and progress starts empty.
"""

import json
import logging
import sqlite3
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from mathmaster.config import DEFAULT_PROGRESS_DB, PASS_THRESHOLD, STORAGE_KEY
from mathmaster.errors import PersistenceCorrupt
from mathmaster.schemas import ProgressRecord

logger = logging.getLogger(__name__)


def decode_progress(blob: str) -> ProgressRecord:
    """
    Parse a persisted progress blob.

    The blob is a flat {lesson_id: score} mapping. The wrapped
    {"scores": {...}} form is also accepted.

    Raises:
        PersistenceCorrupt: If the blob is not valid JSON or fails validation
    """
    try:
        data = json.loads(blob)
        if isinstance(data, dict) and set(data) == {"scores"} and isinstance(data["scores"], dict):
            data = data["scores"]
        return ProgressRecord(scores=data)
    except (ValidationError, ValueError, TypeError) as e:
        raise PersistenceCorrupt(str(e)) from e


def encode_progress(record: ProgressRecord) -> str:
    return json.dumps(record.scores, ensure_ascii=False, sort_keys=True)


class ProgressStore:
    """
    Durable mapping of lesson id -> best score.

    Scores only ever go up: record_if_better() ignores scores that do not
    beat the current best.
    """

    def __init__(self, db_path: Optional[Path] = None, storage_key: str = STORAGE_KEY):
        """
        Initialize progress store.

        Args:
            db_path: Path to progress.db (default: ~/.mathmaster/progress.db)
            storage_key: Key of the progress blob in the key-value table
        """
        self.db_path = Path(db_path) if db_path else DEFAULT_PROGRESS_DB
        self.storage_key = storage_key
        try:
            self._ensure_database()
            self._record = self._load()
        except sqlite3.DatabaseError as e:
            self._discard_database(e)
            self._ensure_database()
            self._record = ProgressRecord()

    def _discard_database(self, error: sqlite3.DatabaseError):
        """Move an unreadable database file aside so a fresh one can be created."""
        corrupt_path = self.db_path.with_name(self.db_path.name + ".corrupt")
        logger.warning(
            f"Discarding corrupt progress database {self.db_path} ({error}), "
            f"moved to {corrupt_path}"
        )
        self.db_path.replace(corrupt_path)

    def _ensure_database(self):
        """Create database and table if they don't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(str(self.db_path))
        try:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                );
            """)
            conn.commit()
        finally:
            conn.close()

    def _get_connection(self) -> sqlite3.Connection:
        """Get a new database connection."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    def _load(self) -> ProgressRecord:
        conn = self._get_connection()
        try:
            row = conn.execute(
                "SELECT value FROM kv_store WHERE key = ?", (self.storage_key,)
            ).fetchone()
        finally:
            conn.close()

        if row is None:
            return ProgressRecord()
        try:
            record = decode_progress(row["value"])
        except PersistenceCorrupt as e:
            logger.warning(f"Discarding corrupt progress blob in {self.db_path}: {e}")
            return ProgressRecord()
        logger.info(f"Loaded progress for {len(record.scores)} lessons from {self.db_path}")
        return record

    def _write(self, record: ProgressRecord):
        """Replace the stored blob in a single transaction."""
        conn = self._get_connection()
        try:
            with conn:
                conn.execute(
                    """INSERT INTO kv_store (key, value) VALUES (?, ?)
                       ON CONFLICT(key) DO UPDATE SET value = excluded.value""",
                    (self.storage_key, encode_progress(record))
                )
        finally:
            conn.close()

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get(self, lesson_id: str) -> Optional[float]:
        """Best score for a lesson, or None if never committed."""
        return self._record.scores.get(lesson_id)

    def scores(self) -> dict[str, float]:
        """Snapshot of all best scores."""
        return dict(self._record.scores)

    def all_passed(self) -> set[str]:
        """Lesson ids whose best score reaches the pass threshold."""
        return {
            lesson_id for lesson_id, score in self._record.scores.items()
            if score >= PASS_THRESHOLD
        }

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def record_if_better(self, lesson_id: str, score: float) -> bool:
        """
        Store score if it beats the current best (absent counts as 0).

        Returns:
            True if the stored best score changed
        """
        current = self._record.scores.get(lesson_id, 0.0)
        if score <= current:
            return False

        updated = ProgressRecord(scores={**self._record.scores, lesson_id: score})
        self._write(updated)
        self._record = updated
        logger.info(f"Best score for {lesson_id}: {current} -> {score}")
        return True

    def reset(self):
        """Wipe all progress."""
        self._write(ProgressRecord())
        self._record = ProgressRecord()
        logger.info("Progress reset")
