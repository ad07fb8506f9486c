# src/sessions/backend_factory.py - v1
"""Factory for session backend instantiation."""

from __future__ import annotations

from httpstore.config.settings import Settings
from httpstore.sessions.base_session_backend import BaseSessionBackend


def create_session_backend(settings: Settings | None = None) -> BaseSessionBackend:
    """Instantiate the configured session backend.

    Args:
        settings: Application settings. Defaults to the memory backend.

    Returns:
        Configured BaseSessionBackend implementation.
    """
    backend = "memory" if settings is None else settings.session_backend

    if backend == "memory":
        from httpstore.sessions.memory_backend import MemorySessionBackend
        return MemorySessionBackend()

    if backend == "json":
        from httpstore.sessions.json_backend import JsonSessionBackend
        return JsonSessionBackend(session_root=settings.session_root)

    if backend == "sqlite":
        from httpstore.sessions.sqlite_backend import SqliteSessionBackend
        return SqliteSessionBackend(
            db_path=f"{settings.session_root}/httpstore_sessions.db"
        )

    if backend == "redis":
        from httpstore.sessions.redis_backend import RedisSessionBackend
        if not settings.session_redis_url:
            raise ValueError(
                "SESSION_REDIS_URL must be set when SESSION_BACKEND=redis"
            )
        return RedisSessionBackend(redis_url=settings.session_redis_url)

    raise ValueError(f"Unsupported session backend: {backend!r}")
