"""
SQLite-backed record store for weekly, daily and archived-week records.

Records are plain dicts carrying their own primary key under ``"id"``.
They are stored as JSON payloads, one table per record kind, and handed
back exactly as they were written. A missing record is ``None``; any
storage fault is raised as RecordStoreError with no retry.
"""

import json
import logging
import sqlite3
import threading
from contextlib import contextmanager
from typing import Generator, List, Optional

from .errors import RecordStoreError

logger = logging.getLogger(__name__)

WEEKLY = "weekly"
DAILY = "daily"
ARCHIVED_WEEK = "archived_week"

RECORD_KINDS = {
    WEEKLY: "weekly_data",
    DAILY: "daily_data",
    ARCHIVED_WEEK: "archived_weeks",
}


def daily_key(user_id: str, date_key: str) -> str:
    """Composite key for a daily record, e.g. ``user123-2025-01-06``."""
    return f"{user_id}-{date_key}"


class RecordStore:
    """
    Key-value record store on a single SQLite connection.

    The connection is shared across threads and guarded by a lock, so
    ``":memory:"`` works for tests as well as a file path.
    """

    def __init__(self, db_path: str = ":memory:"):
        self.db_path = db_path
        self._lock = threading.Lock()
        try:
            self._conn = sqlite3.connect(db_path, check_same_thread=False)
            self._create_tables()
        except sqlite3.Error as e:
            logger.error(f"[STORE] Could not open {db_path}: {e}")
            raise RecordStoreError(f"Could not open record store at {db_path}") from e
        logger.info(f"[STORE] Opened record store at {db_path}")

    def _create_tables(self) -> None:
        with self._conn:
            for table in RECORD_KINDS.values():
                self._conn.execute(
                    f"CREATE TABLE IF NOT EXISTS {table} ("
                    "id TEXT PRIMARY KEY, user_id TEXT, payload TEXT NOT NULL)"
                )

    @contextmanager
    def _cursor(self, action: str) -> Generator[sqlite3.Cursor, None, None]:
        """Run one locked transaction, converting SQLite faults."""
        with self._lock:
            try:
                with self._conn:
                    yield self._conn.cursor()
            except sqlite3.Error as e:
                logger.error(f"[STORE] Database error during {action}: {e}")
                raise RecordStoreError(f"Record store {action} failed: {e}") from e

    @staticmethod
    def _table(kind: str) -> str:
        try:
            return RECORD_KINDS[kind]
        except KeyError:
            raise ValueError(f"Unknown record kind: {kind}") from None

    @staticmethod
    def _decode(kind: str, key: str, payload: str) -> dict:
        try:
            return json.loads(payload)
        except json.JSONDecodeError as e:
            logger.error(f"[STORE] Corrupt {kind} record {key}: {e}")
            raise RecordStoreError(f"Corrupt {kind} record: {key}") from e

    # ------------------------------------------------------------------
    # Generic operations
    # ------------------------------------------------------------------

    def get(self, kind: str, key: str) -> Optional[dict]:
        """Load a record by key, or None if absent."""
        table = self._table(kind)
        with self._cursor(f"get {kind}") as cursor:
            cursor.execute(f"SELECT payload FROM {table} WHERE id = ?", (key,))
            row = cursor.fetchone()
        if row is None:
            return None
        return self._decode(kind, key, row[0])

    def put(self, kind: str, record: dict) -> None:
        """Upsert a record by its own ``id``."""
        table = self._table(kind)
        payload = json.dumps(record)
        with self._cursor(f"put {kind}") as cursor:
            cursor.execute(
                f"INSERT OR REPLACE INTO {table} (id, user_id, payload) VALUES (?, ?, ?)",
                (record["id"], record.get("user_id"), payload),
            )
        logger.debug(f"[STORE] Saved {kind} record {record['id']}")

    def delete(self, kind: str, key: str) -> None:
        """Delete a record; absent keys are ignored."""
        table = self._table(kind)
        with self._cursor(f"delete {kind}") as cursor:
            cursor.execute(f"DELETE FROM {table} WHERE id = ?", (key,))

    def scan(self, kind: str, user_id: str) -> List[dict]:
        """All records of ``kind`` belonging to ``user_id``, unordered."""
        table = self._table(kind)
        with self._cursor(f"scan {kind}") as cursor:
            cursor.execute(f"SELECT id, payload FROM {table} WHERE user_id = ?", (user_id,))
            rows = cursor.fetchall()
        return [self._decode(kind, key, payload) for key, payload in rows]

    def clear(self) -> None:
        """Remove every record of every kind."""
        with self._cursor("clear") as cursor:
            for table in RECORD_KINDS.values():
                cursor.execute(f"DELETE FROM {table}")
        logger.info("[STORE] Cleared all records")

    def close(self) -> None:
        with self._lock:
            self._conn.close()

    # ------------------------------------------------------------------
    # Weekly / daily / archive helpers
    # ------------------------------------------------------------------

    def save_weekly_data(self, record: dict) -> None:
        self.put(WEEKLY, record)

    def load_weekly_data(self, user_id: str) -> Optional[dict]:
        return self.get(WEEKLY, user_id)

    def delete_weekly_data(self, user_id: str) -> None:
        self.delete(WEEKLY, user_id)

    def save_daily_data(self, record: dict) -> None:
        self.put(DAILY, record)

    def load_daily_data(self, user_id: str, date_key: str) -> Optional[dict]:
        """
        Load a day's record.

        Args:
            user_id: Owner of the record
            date_key: Date string in YYYY-MM-DD format
        """
        return self.get(DAILY, daily_key(user_id, date_key))

    def delete_daily_data(self, user_id: str, date_key: str) -> None:
        self.delete(DAILY, daily_key(user_id, date_key))

    def save_archived_week(self, record: dict) -> None:
        self.put(ARCHIVED_WEEK, record)

    def list_archived_weeks(self, user_id: str) -> List[dict]:
        return self.scan(ARCHIVED_WEEK, user_id)

    def clear_all_data(self) -> None:
        self.clear()
