# src/transport/cookies.py - v1
"""Cookie transport: incoming cookie set plus outgoing Set-Cookie directives.

The transport refuses new directives once the response headers have been
sent, which is what makes a cookie store unavailable for writes.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Literal
from urllib.parse import quote, unquote

from pydantic import BaseModel

from httpstore.core.errors import MediumUnavailable

logger = logging.getLogger(__name__)

# RFC 6265 cookie-octet minus the characters quote() would keep anyway.
_SAFE_VALUE_CHARS = "!#$&'()*+-./:<=>?@[]^_`{|}~"


class CookieDirective(BaseModel):
    """One Set-Cookie instruction."""

    name: str
    value: str = ""
    max_age: int | None = None
    expires: datetime | None = None
    path: str = "/"
    domain: str | None = None
    secure: bool = False
    httponly: bool = True
    samesite: Literal["Lax", "Strict", "None"] | None = None

    @property
    def is_deletion(self) -> bool:
        return self.max_age is not None and self.max_age <= 0

    def to_header(self) -> str:
        """Render the Set-Cookie header value."""
        parts = [f"{self.name}={quote(self.value, safe=_SAFE_VALUE_CHARS)}"]
        if self.expires is not None:
            expires = self.expires
            if expires.tzinfo is None:
                expires = expires.replace(tzinfo=timezone.utc)
            parts.append(
                f"Expires={format_datetime(expires.astimezone(timezone.utc), usegmt=True)}"
            )
        if self.max_age is not None:
            parts.append(f"Max-Age={self.max_age}")
        if self.path:
            parts.append(f"Path={self.path}")
        if self.domain:
            parts.append(f"Domain={self.domain}")
        if self.secure:
            parts.append("Secure")
        if self.httponly:
            parts.append("HttpOnly")
        if self.samesite:
            parts.append(f"SameSite={self.samesite}")
        return "; ".join(parts)


def parse_cookie_header(header: str | None) -> dict[str, str]:
    """Parse a request Cookie header into name -> decoded value.

    Malformed pairs are skipped; the first occurrence of a name wins.
    """
    cookies: dict[str, str] = {}
    if not header:
        return cookies
    for pair in header.split(";"):
        name, sep, value = pair.strip().partition("=")
        name = name.strip()
        if not sep or not name:
            continue
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] == '"':
            value = value[1:-1]
        cookies.setdefault(name, unquote(value))
    return cookies


class CookieTransport:
    """Request cookie set and response cookie directives for one request."""

    def __init__(self, incoming: dict[str, str] | None = None) -> None:
        self.incoming: dict[str, str] = dict(incoming or {})
        self._directives: list[CookieDirective] = []
        self._headers_sent = False

    @classmethod
    def from_header(cls, header: str | None) -> CookieTransport:
        return cls(parse_cookie_header(header))

    @property
    def headers_sent(self) -> bool:
        return self._headers_sent

    @property
    def directives(self) -> list[CookieDirective]:
        return list(self._directives)

    def emit(self, directive: CookieDirective) -> None:
        """Queue a directive for the response.

        Raises:
            MediumUnavailable: If headers were already sent.
        """
        if self._headers_sent:
            raise MediumUnavailable(
                f"Headers already sent; cannot set cookie {directive.name!r}"
            )
        # Later directives for the same cookie supersede earlier ones.
        self._directives = [d for d in self._directives if d.name != directive.name]
        self._directives.append(directive)
        logger.debug("Queued cookie directive for %r", directive.name)

    def mark_headers_sent(self) -> None:
        self._headers_sent = True

    def header_items(self) -> list[tuple[str, str]]:
        """Return the queued directives as (header-name, value) pairs."""
        return [("Set-Cookie", d.to_header()) for d in self._directives]
