# src/logging/context.py - v1
"""Contextual logging support: attach request_id, session_id, store to records."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

# Context variables for structured logging, set per request.
_request_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)
_session_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "session_id", default=None
)
_store: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "store", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    request_id: str | None = None
    session_id: str | None = None
    store: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        request_id=_request_id.get(),
        session_id=_session_id.get(),
        store=_store.get(),
    )


def set_request_context(request_id: str) -> None:
    """Set request-level context (called once per request)."""
    _request_id.set(request_id)


def set_session_context(session_id: str) -> None:
    """Record the active session.

    Only a short prefix is kept so full session ids never reach log files.
    """
    _session_id.set(session_id[:8])


def set_store_context(store: str | None) -> None:
    _store.set(store)


def clear_context() -> None:
    """Reset all context variables."""
    _request_id.set(None)
    _session_id.set(None)
    _store.set(None)
