# src/sessions/manager.py - v1
"""Session manager: start/resume one session and write through to a backend.

The manager is the session medium seen by the Session store. Every write
is flushed to the backend immediately with the lifetime given to start().
"""

from __future__ import annotations

import logging
import re
import secrets
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Literal

from httpstore.core.errors import MediumUnavailable
from httpstore.sessions.base_session_backend import BaseSessionBackend

logger = logging.getLogger(__name__)

_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{16,128}$")


def generate_session_id() -> str:
    """Return a new random, URL-safe session id."""
    return secrets.token_urlsafe(32)


def is_valid_session_id(session_id: str | None) -> bool:
    return bool(session_id) and _ID_PATTERN.match(session_id) is not None


class SessionManager:
    """Lifecycle of one client session over a backend."""

    def __init__(
        self,
        backend: BaseSessionBackend,
        session_id: str | None = None,
        id_factory: Callable[[], str] = generate_session_id,
    ) -> None:
        self._backend = backend
        self._id_factory = id_factory
        # Ids that could not have been issued by us are ignored.
        self._session_id = session_id if is_valid_session_id(session_id) else None
        self._data: dict[str, str] = {}
        self._status: Literal["none", "active"] = "none"
        self._lifetime = 0
        self._is_new = False

    @property
    def backend(self) -> BaseSessionBackend:
        return self._backend

    @property
    def session_id(self) -> str | None:
        return self._session_id

    @property
    def status(self) -> Literal["none", "active"]:
        return self._status

    @property
    def is_new(self) -> bool:
        """True if start() opened a fresh session instead of resuming one."""
        return self._is_new

    @property
    def lifetime(self) -> int:
        return self._lifetime

    @property
    def data(self) -> Mapping[str, str]:
        return MappingProxyType(self._data)

    def start(self, lifetime: int) -> Mapping[str, str]:
        """Resume the session for the current id, or open a new one.

        Calling start() on an active session returns its data unchanged.
        Resuming refreshes the session's expiry.

        Raises:
            MediumUnavailable: If the backend cannot be read.
        """
        if self._status == "active":
            return self.data

        self._lifetime = lifetime
        stored = None
        if self._session_id is not None:
            try:
                stored = self._backend.load(self._session_id)
            except Exception as e:
                raise MediumUnavailable(f"Session backend read failed: {e}") from e

        if stored is None:
            self._session_id = self._id_factory()
            self._data = {}
            self._is_new = True
            logger.debug("Opened new session")
        else:
            self._data = dict(stored)
            self._is_new = False
            self._flush()
            logger.debug("Resumed session with %d keys", len(self._data))

        self._status = "active"
        return self.data

    def contains(self, key: str) -> bool:
        return self._status == "active" and key in self._data

    def write(self, key: str, raw: str) -> None:
        self._ensure_active()
        self._data[key] = raw
        self._flush()

    def delete(self, key: str) -> None:
        self._ensure_active()
        if key in self._data:
            del self._data[key]
            self._flush()

    def destroy(self) -> None:
        """Delete the session from the backend and deactivate it."""
        if self._session_id is not None:
            try:
                self._backend.delete(self._session_id)
            except Exception as e:
                raise MediumUnavailable(f"Session backend delete failed: {e}") from e
        self._data = {}
        self._status = "none"
        self._session_id = None
        self._is_new = False

    def regenerate_id(self) -> str:
        """Move the session data to a fresh id and return it."""
        self._ensure_active()
        old_id = self._session_id
        self._session_id = self._id_factory()
        self._flush()
        if old_id is not None:
            try:
                self._backend.delete(old_id)
            except Exception as e:
                raise MediumUnavailable(f"Session backend delete failed: {e}") from e
        self._is_new = True
        return self._session_id

    def _ensure_active(self) -> None:
        if self._status != "active":
            raise MediumUnavailable("Session is not started")

    def _flush(self) -> None:
        try:
            self._backend.save(self._session_id, self._data, self._lifetime)
        except Exception as e:
            raise MediumUnavailable(f"Session backend write failed: {e}") from e
