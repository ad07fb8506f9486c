# src/sessions/models.py - v1
"""Session domain model shared by the file-based backends."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class SessionRecord(BaseModel):
    """Persisted state of one session."""

    session_id: str
    data: dict[str, str] = {}
    updated_at: datetime
    expires_at: datetime | None = None

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and self.expires_at <= now
