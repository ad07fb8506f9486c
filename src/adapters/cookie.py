# src/adapters/cookie.py - v1
"""Cookie-backed store.

The bag and the incoming cookie set hold the same raw (encoded) values.
Every write or removal queues a Set-Cookie directive on the request's
cookie transport, so both fail once the response headers are sent.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

from httpstore.config.settings import Settings
from httpstore.core.base_storage import BaseStorage
from httpstore.core.errors import EncodingError, MediumUnavailable
from httpstore.transport.cookies import CookieDirective, CookieTransport

if TYPE_CHECKING:
    from httpstore.core.registry import StoreRegistry

logger = logging.getLogger(__name__)

# Browsers drop Set-Cookie headers above this size.
MAX_COOKIE_BYTES = 4096

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def request_host(registry: StoreRegistry) -> str | None:
    """Cookie domain: configured value, else the request host without port."""
    if registry.settings.cookie_domain:
        return registry.settings.cookie_domain
    server = registry.context.server
    host = server.get("HTTP_HOST") or registry.context.headers.get("Host") or server.get("SERVER_NAME")
    if not host:
        return None
    host = str(host)
    if host.startswith("["):
        return host.split("]", 1)[0] + "]"
    return host.rsplit(":", 1)[0] if host.count(":") == 1 else host


def request_is_secure(registry: StoreRegistry) -> bool:
    if registry.settings.cookie_secure:
        return True
    server = registry.context.server
    https = str(server.get("HTTPS") or "")
    if https and https.lower() != "off":
        return True
    if server.get("wsgi.url_scheme") == "https":
        return True
    return str(server.get("SERVER_PORT") or "") == "443"


def build_directive(
    registry: StoreRegistry,
    name: str,
    value: str,
    ttl: int,
    now: datetime | None = None,
) -> CookieDirective:
    """Directive for a cookie living ``ttl`` seconds (0 = browser session)."""
    settings: Settings = registry.settings
    now = now or datetime.now(timezone.utc)
    return CookieDirective(
        name=name,
        value=value,
        max_age=ttl if ttl > 0 else None,
        expires=now + timedelta(seconds=ttl) if ttl > 0 else None,
        path=settings.cookie_path,
        domain=request_host(registry),
        secure=request_is_secure(registry),
        httponly=settings.cookie_httponly,
        samesite=settings.cookie_samesite,
    )


def build_expiry_directive(registry: StoreRegistry, name: str) -> CookieDirective:
    """Directive telling the client to drop ``name`` now."""
    settings: Settings = registry.settings
    return CookieDirective(
        name=name,
        value="",
        max_age=0,
        expires=_EPOCH,
        path=settings.cookie_path,
        domain=request_host(registry),
        secure=request_is_secure(registry),
        httponly=settings.cookie_httponly,
        samesite=settings.cookie_samesite,
    )


class Cookie(BaseStorage):
    """Store persisted to the client through Set-Cookie headers."""

    codec_setting = "cookie_codec"

    @classmethod
    def snapshot(cls, registry: StoreRegistry) -> Mapping[str, str]:
        return dict(registry.context.cookies.incoming)

    @classmethod
    def default_ttl(cls, settings: Settings) -> int:
        return settings.cookie_ttl

    @property
    def transport(self) -> CookieTransport:
        return self._registry.context.cookies

    def _check_writable(self) -> None:
        if self.transport.headers_sent:
            raise MediumUnavailable("Headers already sent. Unable to set cookie.")

    def _persist(self, name: str, raw: str) -> None:
        directive = build_directive(self._registry, name, raw, self.ttl)
        header = directive.to_header()
        size = len(header.encode("utf-8"))
        if size > MAX_COOKIE_BYTES:
            raise EncodingError(
                f"Cookie {name!r} is {size} bytes; limit is {MAX_COOKIE_BYTES}"
            )
        self.transport.emit(directive)
        self.transport.incoming[name] = raw

    def _discard(self, name: str) -> None:
        self.transport.emit(build_expiry_directive(self._registry, name))
        self.transport.incoming.pop(name, None)

    def _medium_contains(self, name: str) -> bool:
        return name in self.transport.incoming
