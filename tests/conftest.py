# tests/conftest.py - v1
"""Shared test fixtures for all unit and integration tests.

Provides settings isolated from any .env file, request contexts with an
in-memory session backend, and registries bound to them. No network I/O.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from httpstore.config.settings import Settings
from httpstore.context import RequestContext
from httpstore.core.registry import StoreRegistry
from httpstore.logging.context import clear_context
from httpstore.sessions.manager import SessionManager
from httpstore.sessions.memory_backend import MemorySessionBackend
from httpstore.transport.cookies import CookieTransport


class FakeClock:
    """Monotonic fake time source in seconds."""

    def __init__(self, start: float = 1_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# === FIXTURES: Configuration ===


@pytest.fixture
def settings() -> Settings:
    """Default settings, never reading a local .env."""
    return Settings(_env_file=None)


@pytest.fixture
def strict_settings() -> Settings:
    return Settings(_env_file=None, decode_mode="strict")


# === FIXTURES: Transports ===


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def session_backend(clock: FakeClock) -> MemorySessionBackend:
    return MemorySessionBackend(clock=clock)


@pytest.fixture
def cookie_transport() -> CookieTransport:
    return CookieTransport()


@pytest.fixture
def context(
    session_backend: MemorySessionBackend, cookie_transport: CookieTransport
) -> RequestContext:
    """GET request to example.com:8080 over plain HTTP."""
    return RequestContext(
        query={"page": "2", "Sort": "name"},
        form={},
        server={
            "REQUEST_METHOD": "GET",
            "HTTP_HOST": "example.com:8080",
            "SERVER_PORT": "8080",
        },
        env={"APP_ENV": "test"},
        headers={"Host": "example.com:8080", "Accept": "text/html"},
        cookies=cookie_transport,
        session=SessionManager(session_backend),
        request_id="req-test",
    )


@pytest.fixture
def registry(context: RequestContext, settings: Settings) -> StoreRegistry:
    reg = StoreRegistry(context, settings)
    yield reg
    reg.close()


# === FIXTURES: Temp dirs ===


@pytest.fixture
def tmp_session_dir(tmp_path: Path) -> Path:
    """Temporary session directory."""
    sessions = tmp_path / "sessions"
    sessions.mkdir()
    return sessions


@pytest.fixture(autouse=True)
def _reset_log_context():
    clear_context()
    yield
    clear_context()
