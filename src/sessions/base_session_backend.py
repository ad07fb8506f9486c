# src/sessions/base_session_backend.py - v1
"""Abstract session backend interface.

A backend persists a flat mapping of key -> raw value per session id.
Lifetimes are plain seconds; 0 means the session never expires.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class BaseSessionBackend(ABC):
    """Unified interface for session storage backends."""

    @abstractmethod
    def load(self, session_id: str) -> dict[str, str] | None:
        """Return the session data, or None if missing or expired."""

    @abstractmethod
    def save(self, session_id: str, data: dict[str, str], ttl: int) -> None:
        """Store the full session data with a lifetime in seconds."""

    @abstractmethod
    def delete(self, session_id: str) -> None:
        """Remove a session; no-op when missing."""

    @abstractmethod
    def purge_expired(self) -> int:
        """Delete expired sessions and return how many were removed."""

    def close(self) -> None:
        """Release backend resources."""
