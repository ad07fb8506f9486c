# src/sessions/sqlite_backend.py - v1
"""SQLite-based session backend (SESSION_BACKEND=sqlite).

Uses stdlib sqlite3, no external dependency. Expiry is stored as a unix
timestamp so expired rows can be purged with one indexed DELETE.
"""

from __future__ import annotations

import json
import logging
import sqlite3
import time
from collections.abc import Callable
from pathlib import Path

from httpstore.sessions.base_session_backend import BaseSessionBackend

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS sessions (
    session_id TEXT PRIMARY KEY,
    data TEXT NOT NULL,
    updated_at REAL NOT NULL,
    expires_at REAL
);
CREATE INDEX IF NOT EXISTS idx_expires_at ON sessions(expires_at);
"""


class SqliteSessionBackend(BaseSessionBackend):
    """SQLite-backed session store for multi-process single-host setups."""

    def __init__(
        self,
        db_path: Path | str,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._db_path = Path(db_path).expanduser()
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._clock = clock
        self._conn = sqlite3.connect(str(self._db_path))
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.executescript(_SCHEMA)

    def load(self, session_id: str) -> dict[str, str] | None:
        cursor = self._conn.execute(
            "SELECT data, expires_at FROM sessions WHERE session_id = ?",
            (session_id,),
        )
        row = cursor.fetchone()
        if row is None:
            return None
        data, expires_at = row
        if expires_at is not None and expires_at <= self._clock():
            self.delete(session_id)
            return None
        try:
            return dict(json.loads(data))
        except (json.JSONDecodeError, TypeError, ValueError) as e:
            logger.warning("Failed to deserialize session %s: %s", session_id, e)
            return None

    def save(self, session_id: str, data: dict[str, str], ttl: int) -> None:
        """Store session data (upsert)."""
        now = self._clock()
        self._conn.execute(
            """INSERT OR REPLACE INTO sessions
               (session_id, data, updated_at, expires_at)
               VALUES (?, ?, ?, ?)""",
            (
                session_id,
                json.dumps(data),
                now,
                now + ttl if ttl > 0 else None,
            ),
        )
        self._conn.commit()

    def delete(self, session_id: str) -> None:
        self._conn.execute("DELETE FROM sessions WHERE session_id = ?", (session_id,))
        self._conn.commit()

    def purge_expired(self) -> int:
        cursor = self._conn.execute(
            "DELETE FROM sessions WHERE expires_at IS NOT NULL AND expires_at <= ?",
            (self._clock(),),
        )
        self._conn.commit()
        return cursor.rowcount

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()
