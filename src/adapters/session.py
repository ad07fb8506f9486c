# src/adapters/session.py - v1
"""Session-backed store.

``snapshot()`` starts or resumes the session with the store's lifetime and
hands out the session cookie for a fresh session. Writes go through the
SessionManager, which flushes them to the configured backend.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

from httpstore.adapters.cookie import build_directive, build_expiry_directive
from httpstore.config.settings import Settings
from httpstore.core.base_storage import BaseStorage
from httpstore.core.errors import MediumUnavailable
from httpstore.logging.context import set_session_context
from httpstore.sessions.manager import SessionManager

if TYPE_CHECKING:
    from httpstore.core.registry import StoreRegistry

logger = logging.getLogger(__name__)


def _manager(registry: StoreRegistry) -> SessionManager:
    manager = registry.context.session
    if manager is None:
        raise MediumUnavailable("No session transport configured for this request")
    return manager


def _emit_session_cookie(registry: StoreRegistry, manager: SessionManager) -> None:
    cookies = registry.context.cookies
    if cookies.headers_sent:
        logger.warning("Headers already sent; session cookie not issued")
        return
    cookies.emit(
        build_directive(
            registry,
            registry.settings.session_cookie_name,
            manager.session_id or "",
            manager.lifetime,
        )
    )


class Session(BaseStorage):
    """Store persisted to a server-side session."""

    codec_setting = "session_codec"

    @classmethod
    def snapshot(cls, registry: StoreRegistry) -> Mapping[str, str]:
        manager = _manager(registry)
        data = manager.start(registry.expiry_for(cls))
        if manager.is_new:
            _emit_session_cookie(registry, manager)
        if manager.session_id:
            set_session_context(manager.session_id)
        return dict(data)

    @classmethod
    def default_ttl(cls, settings: Settings) -> int:
        return settings.session_ttl

    @property
    def manager(self) -> SessionManager:
        return _manager(self._registry)

    @property
    def id(self) -> str | None:
        return self.manager.session_id

    def _persist(self, name: str, raw: str) -> None:
        self.manager.write(name, raw)

    def _discard(self, name: str) -> None:
        self.manager.delete(name)

    def _medium_contains(self, name: str) -> bool:
        return self.manager.contains(name)

    def regenerate(self) -> str:
        """Move the session to a new id and reissue the session cookie."""
        new_id = self.manager.regenerate_id()
        _emit_session_cookie(self._registry, self.manager)
        set_session_context(new_id)
        return new_id

    def destroy(self) -> None:
        """Delete the session everywhere.

        The store stays registered but empty; writes fail with
        MediumUnavailable until a new request starts a new session.
        """
        self.manager.destroy()
        self._data.clear()
        self._lookup.forget_all()
        cookies = self._registry.context.cookies
        if not cookies.headers_sent:
            cookies.emit(
                build_expiry_directive(self._registry, self._registry.settings.session_cookie_name)
            )
        logger.debug("Session destroyed")
