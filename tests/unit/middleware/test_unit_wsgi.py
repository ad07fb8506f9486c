# tests/unit/middleware/test_unit_wsgi.py - v1
"""Tests for middleware/wsgi.py - per-request registries under WSGI."""

from __future__ import annotations

import pytest

from httpstore.adapters.cookie import Cookie
from httpstore.adapters.session import Session
from httpstore.core.errors import MediumUnavailable
from httpstore.logging.context import get_context
from httpstore.middleware.wsgi import ENVIRON_KEY, StoreMiddleware, get_registry
from httpstore.sessions.memory_backend import MemorySessionBackend


class StartResponse:
    def __init__(self) -> None:
        self.status = None
        self.headers: list[tuple[str, str]] = []

    def __call__(self, status, headers, exc_info=None):
        self.status = status
        self.headers = headers
        return lambda data: None

    def cookies(self) -> list[str]:
        return [value for name, value in self.headers if name == "Set-Cookie"]


def _call(app, environ=None):
    environ = {"REQUEST_METHOD": "GET", "HTTP_HOST": "example.com", **(environ or {})}
    start_response = StartResponse()
    result = app(environ, start_response)
    body = b"".join(result)
    if hasattr(result, "close"):
        result.close()
    return start_response, body, environ


@pytest.fixture
def backend() -> MemorySessionBackend:
    return MemorySessionBackend()


class TestGetRegistry:
    def test_missing_middleware(self):
        with pytest.raises(RuntimeError, match="StoreMiddleware"):
            get_registry({})


class TestStoreMiddleware:
    def test_registry_published(self, settings, backend):
        seen = {}

        def app(environ, start_response):
            seen["registry"] = get_registry(environ)
            seen["request_id"] = get_context().request_id
            start_response("200 OK", [])
            return [b"ok"]

        _, body, environ = _call(StoreMiddleware(app, settings, backend))
        assert body == b"ok"
        assert environ[ENVIRON_KEY] is seen["registry"]
        assert seen["request_id"] == seen["registry"].context.request_id

    def test_cookie_headers_appended(self, settings, backend):
        def app(environ, start_response):
            get_registry(environ).get_instance(Cookie).set("theme", "dark")
            start_response("200 OK", [("Content-Type", "text/plain")])
            return [b""]

        start_response, _, _ = _call(StoreMiddleware(app, settings, backend))
        assert start_response.headers[0] == ("Content-Type", "text/plain")
        (header,) = start_response.cookies()
        assert header.startswith("theme=%22dark%22;")

    def test_writes_fail_after_start_response(self, settings, backend):
        errors = []

        def app(environ, start_response):
            cookies = get_registry(environ).get_instance(Cookie)
            start_response("200 OK", [])
            try:
                cookies.set("late", 1)
            except MediumUnavailable as e:
                errors.append(e)
            return [b""]

        start_response, _, _ = _call(StoreMiddleware(app, settings, backend))
        assert len(errors) == 1
        assert start_response.cookies() == []

    def test_registries_are_per_request(self, settings, backend):
        registries = []

        def app(environ, start_response):
            registries.append(get_registry(environ))
            start_response("200 OK", [])
            return [b""]

        middleware = StoreMiddleware(app, settings, backend)
        _call(middleware)
        _call(middleware)
        assert registries[0] is not registries[1]

    def test_teardown_on_close(self, settings, backend):
        captured = {}

        def app(environ, start_response):
            registry = get_registry(environ)
            registry.get_instance(Cookie)
            captured["registry"] = registry
            start_response("200 OK", [])
            return [b""]

        _call(StoreMiddleware(app, settings, backend))
        assert not captured["registry"].instances
        assert get_context().request_id is None

    def test_wrapped_iterable_closed(self, settings, backend):
        class Body:
            closed = False

            def __iter__(self):
                return iter([b"x"])

            def close(self):
                Body.closed = True

        def app(environ, start_response):
            start_response("200 OK", [])
            return Body()

        _call(StoreMiddleware(app, settings, backend))
        assert Body.closed

    def test_teardown_on_exception(self, settings, backend):
        captured = {}

        def app(environ, start_response):
            captured["registry"] = get_registry(environ)
            captured["registry"].get_instance(Cookie)
            raise ValueError("boom")

        with pytest.raises(ValueError):
            _call(StoreMiddleware(app, settings, backend))
        assert not captured["registry"].instances

    def test_session_resumed_across_requests(self, settings, backend):
        def app(environ, start_response):
            session = get_registry(environ).get_instance(Session)
            session.set("visits", session.get("visits", 0) + 1)
            start_response("200 OK", [])
            return [str(session.get("visits")).encode()]

        middleware = StoreMiddleware(app, settings, backend)
        start_response, body, _ = _call(middleware)
        assert body == b"1"
        (header,) = start_response.cookies()
        pair = header.split(";", 1)[0]
        assert pair.startswith("HTTPSTORESESSID=")

        second_response, body, _ = _call(middleware, {"HTTP_COOKIE": pair})
        assert body == b"2"
        assert second_response.cookies() == []

    def test_default_backend_from_settings(self, settings):
        middleware = StoreMiddleware(lambda e, s: [], settings)
        assert isinstance(middleware.session_backend, MemorySessionBackend)
