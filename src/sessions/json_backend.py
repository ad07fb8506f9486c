# src/sessions/json_backend.py - v1
"""JSON file-based session backend (SESSION_BACKEND=json).

Stores each session as an individual JSON file under SESSION_ROOT.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from pathlib import Path

from pydantic import ValidationError

from httpstore.sessions.base_session_backend import BaseSessionBackend
from httpstore.sessions.models import SessionRecord

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class JsonSessionBackend(BaseSessionBackend):
    """File-based session backend using one JSON file per session."""

    def __init__(
        self,
        session_root: Path | str,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._root = Path(session_root).expanduser()
        self._root.mkdir(parents=True, exist_ok=True)
        self._clock = clock

    def load(self, session_id: str) -> dict[str, str] | None:
        path = self._session_path(session_id)
        if not path.exists():
            return None
        try:
            record = SessionRecord.model_validate_json(path.read_text(encoding="utf-8"))
        except ValidationError as e:
            logger.warning("Failed to read session %s: %s", session_id, e)
            return None
        if record.is_expired(self._clock()):
            path.unlink(missing_ok=True)
            return None
        return dict(record.data)

    def save(self, session_id: str, data: dict[str, str], ttl: int) -> None:
        now = self._clock()
        record = SessionRecord(
            session_id=session_id,
            data=dict(data),
            updated_at=now,
            expires_at=now + timedelta(seconds=ttl) if ttl > 0 else None,
        )
        path = self._session_path(session_id)
        tmp = path.with_suffix(".tmp")
        tmp.write_text(record.model_dump_json(indent=2), encoding="utf-8")
        tmp.replace(path)

    def delete(self, session_id: str) -> None:
        self._session_path(session_id).unlink(missing_ok=True)

    def purge_expired(self) -> int:
        now = self._clock()
        removed = 0
        for path in self._root.glob("*.json"):
            try:
                record = SessionRecord.model_validate_json(path.read_text(encoding="utf-8"))
            except ValidationError:
                continue
            if record.is_expired(now):
                path.unlink(missing_ok=True)
                removed += 1
        return removed

    def _session_path(self, session_id: str) -> Path:
        """Return file path for a session id."""
        safe_id = session_id.replace("/", "_").replace("\\", "_")
        return self._root / f"{safe_id}.json"
