# src/sessions/memory_backend.py - v1
"""In-process session backend (default SESSION_BACKEND=memory).

Suitable for a single worker process or tests; sessions are lost on
restart.
"""

from __future__ import annotations

import time
from collections.abc import Callable

from httpstore.sessions.base_session_backend import BaseSessionBackend


class MemorySessionBackend(BaseSessionBackend):
    """Dict-backed session store with per-session expiry timestamps."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._sessions: dict[str, tuple[dict[str, str], float | None]] = {}

    def load(self, session_id: str) -> dict[str, str] | None:
        item = self._sessions.get(session_id)
        if item is None:
            return None
        data, expires_at = item
        if expires_at is not None and expires_at <= self._clock():
            del self._sessions[session_id]
            return None
        return dict(data)

    def save(self, session_id: str, data: dict[str, str], ttl: int) -> None:
        expires_at = self._clock() + ttl if ttl > 0 else None
        self._sessions[session_id] = (dict(data), expires_at)

    def delete(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def purge_expired(self) -> int:
        now = self._clock()
        expired = [
            sid
            for sid, (_, expires_at) in self._sessions.items()
            if expires_at is not None and expires_at <= now
        ]
        for sid in expired:
            del self._sessions[sid]
        return len(expired)

    def __len__(self) -> int:
        return len(self._sessions)
