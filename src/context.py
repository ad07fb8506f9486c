# src/context.py - v1
"""Request context: the external collaborators a registry reads from.

Holds the request-data snapshot (query, form, server variables,
environment, headers), the cookie transport and the session manager for
one request.
"""

from __future__ import annotations

import os
import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import parse_qsl

from httpstore.sessions.base_session_backend import BaseSessionBackend
from httpstore.sessions.manager import SessionManager
from httpstore.sessions.memory_backend import MemorySessionBackend
from httpstore.transport.cookies import CookieTransport

# WSGI environ keys that are headers without the HTTP_ prefix.
_UNPREFIXED_HEADERS = {"CONTENT_TYPE": "Content-Type", "CONTENT_LENGTH": "Content-Length"}


def header_name(environ_key: str) -> str:
    """Convert ``HTTP_X_FORWARDED_FOR`` to ``X-Forwarded-For``."""
    if environ_key in _UNPREFIXED_HEADERS:
        return _UNPREFIXED_HEADERS[environ_key]
    name = environ_key[5:] if environ_key.startswith("HTTP_") else environ_key
    return "-".join(part.capitalize() for part in name.split("_"))


def _new_session() -> SessionManager:
    return SessionManager(MemorySessionBackend())


def _new_request_id() -> str:
    return uuid.uuid4().hex[:12]


@dataclass
class RequestContext:
    """Everything the stores of one request snapshot or write to."""

    query: dict[str, Any] = field(default_factory=dict)
    form: dict[str, Any] = field(default_factory=dict)
    server: dict[str, Any] = field(default_factory=dict)
    env: dict[str, str] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    cookies: CookieTransport = field(default_factory=CookieTransport)
    session: SessionManager | None = field(default_factory=_new_session)
    request_id: str = field(default_factory=_new_request_id)

    @property
    def method(self) -> str:
        return str(self.server.get("REQUEST_METHOD") or "GET").upper()

    @classmethod
    def from_environ(
        cls,
        environ: Mapping[str, Any],
        session_backend: BaseSessionBackend | None = None,
        session_cookie_name: str = "HTTPSTORESESSID",
        form: Mapping[str, Any] | None = None,
        env: Mapping[str, str] | None = None,
    ) -> RequestContext:
        """Build a context from a WSGI environ.

        Args:
            environ: WSGI environ of the current request.
            session_backend: Backend for the session; in-memory when omitted.
            session_cookie_name: Cookie carrying the session id.
            form: Already parsed form fields (body parsing is not done here).
            env: Process environment; defaults to a copy of os.environ.
        """
        query = dict(parse_qsl(environ.get("QUERY_STRING", ""), keep_blank_values=True))
        headers = {
            header_name(key): str(value)
            for key, value in environ.items()
            if key.startswith("HTTP_") or key in _UNPREFIXED_HEADERS
        }
        server = {
            key: value for key, value in environ.items() if isinstance(value, str)
        }
        cookies = CookieTransport.from_header(environ.get("HTTP_COOKIE"))
        backend = session_backend if session_backend is not None else MemorySessionBackend()
        session = SessionManager(backend, cookies.incoming.get(session_cookie_name))

        return cls(
            query=query,
            form=dict(form or {}),
            server=server,
            env=dict(os.environ if env is None else env),
            headers=headers,
            cookies=cookies,
            session=session,
        )
