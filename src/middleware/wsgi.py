# src/middleware/wsgi.py - v1
"""WSGI middleware giving every request its own store registry.

The registry is published as ``environ["httpstore.registry"]``. Queued
cookie directives are appended to the response headers when the wrapped
application calls start_response, after which cookie writes fail with
MediumUnavailable.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from typing import Any

from httpstore.config.settings import Settings
from httpstore.context import RequestContext
from httpstore.core.registry import StoreRegistry
from httpstore.logging.context import clear_context, set_request_context
from httpstore.sessions.backend_factory import create_session_backend
from httpstore.sessions.base_session_backend import BaseSessionBackend

logger = logging.getLogger(__name__)

ENVIRON_KEY = "httpstore.registry"

WSGIApp = Callable[[dict[str, Any], Callable[..., Any]], Iterable[bytes]]


def get_registry(environ: dict[str, Any]) -> StoreRegistry:
    """Return the registry of the current request."""
    try:
        return environ[ENVIRON_KEY]
    except KeyError:
        raise RuntimeError("StoreMiddleware is not installed for this application") from None


class _ClosingIterable:
    """Response body wrapper that runs a callback when the server closes it."""

    def __init__(self, iterable: Iterable[bytes], on_close: Callable[[], None]) -> None:
        self._iterable = iterable
        self._on_close = on_close

    def __iter__(self) -> Iterator[bytes]:
        return iter(self._iterable)

    def close(self) -> None:
        try:
            close = getattr(self._iterable, "close", None)
            if close is not None:
                close()
        finally:
            self._on_close()


class StoreMiddleware:
    """Wrap a WSGI application with per-request store registries."""

    def __init__(
        self,
        app: WSGIApp,
        settings: Settings | None = None,
        session_backend: BaseSessionBackend | None = None,
    ) -> None:
        self._app = app
        self._settings = settings if settings is not None else Settings()
        self._backend = (
            session_backend
            if session_backend is not None
            else create_session_backend(self._settings)
        )

    @property
    def session_backend(self) -> BaseSessionBackend:
        return self._backend

    def __call__(
        self, environ: dict[str, Any], start_response: Callable[..., Any]
    ) -> Iterable[bytes]:
        context = RequestContext.from_environ(
            environ,
            session_backend=self._backend,
            session_cookie_name=self._settings.session_cookie_name,
        )
        registry = StoreRegistry(context, self._settings)
        environ[ENVIRON_KEY] = registry
        set_request_context(context.request_id)

        def _start_response(status: str, headers: list[tuple[str, str]], exc_info: Any = None) -> Any:
            cookie_headers = context.cookies.header_items()
            context.cookies.mark_headers_sent()
            if cookie_headers:
                logger.debug("Appending %d Set-Cookie headers", len(cookie_headers))
            return start_response(status, list(headers) + cookie_headers, exc_info)

        def _teardown() -> None:
            registry.close()
            clear_context()

        try:
            result = self._app(environ, _start_response)
        except Exception:
            _teardown()
            raise
        return _ClosingIterable(result, _teardown)
