# src/request.py - v1
"""Request facade: one registry-managed object exposing every store.

Entries are the query parameters (plus form fields for POST, PUT and
PATCH) merged with the stores themselves under ``session``, ``cookie``,
``server``, ``env``, ``headers``, ``post`` and ``get``. Store entries win
over request fields with the same name.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from httpstore.adapters.cookie import Cookie
from httpstore.adapters.request_data import EnvVars, FormData, Headers, QueryParams, ServerVars
from httpstore.adapters.session import Session
from httpstore.core.snapshot_store import SnapshotStore

if TYPE_CHECKING:
    from httpstore.core.registry import StoreRegistry

logger = logging.getLogger(__name__)

_BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


class Request(SnapshotStore):
    """Aggregate view over the stores of one request."""

    @classmethod
    def snapshot(cls, registry: StoreRegistry) -> Mapping[str, Any]:
        settings = registry.settings
        if not registry.has_expiry(Session):
            registry.set_expiry(Session, settings.session_ttl)
        if not registry.has_expiry(Cookie):
            registry.set_expiry(Cookie, settings.cookie_ttl)

        context = registry.context
        data: dict[str, Any] = dict(context.query)
        if context.method in _BODY_METHODS:
            data.update(context.form)

        if context.session is not None:
            data["session"] = registry.get_instance(Session)
        else:
            logger.debug("No session transport; request has no session entry")
        data["cookie"] = registry.get_instance(Cookie)
        data["server"] = registry.get_instance(ServerVars)
        data["env"] = registry.get_instance(EnvVars)
        data["headers"] = registry.get_instance(Headers)
        data["post"] = registry.get_instance(FormData)
        data["get"] = registry.get_instance(QueryParams)
        return data

    @classmethod
    def configure_expiry(
        cls,
        registry: StoreRegistry,
        session_seconds: int = 3600,
        cookie_seconds: int = 3600,
    ) -> Request:
        """Set the session and cookie lifetimes, then return the request."""
        registry.set_expiry(Session, session_seconds)
        registry.set_expiry(Cookie, cookie_seconds)
        return registry.get_instance(cls)

    @property
    def method(self) -> str:
        return self._registry.context.method

    @property
    def session(self) -> Session:
        return self._registry.get_instance(Session)

    @property
    def cookies(self) -> Cookie:
        return self._registry.get_instance(Cookie)

    @property
    def query(self) -> QueryParams:
        return self._registry.get_instance(QueryParams)

    @property
    def form(self) -> FormData:
        return self._registry.get_instance(FormData)

    @property
    def server(self) -> ServerVars:
        return self._registry.get_instance(ServerVars)

    @property
    def env(self) -> EnvVars:
        return self._registry.get_instance(EnvVars)

    @property
    def headers(self) -> Headers:
        return self._registry.get_instance(Headers)
