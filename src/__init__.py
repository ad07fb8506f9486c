# src/__init__.py - v1
"""httpstore: per-request registry of typed, codec-aware key/value stores.

Typical use inside a WSGI handler::

    registry = get_registry(environ)
    session = registry.get_instance(Session)
    session.set("user_id", 42)
    registry.get_instance(Cookie)["theme"] = "dark"
"""

from httpstore.adapters.cookie import Cookie
from httpstore.adapters.session import Session
from httpstore.context import RequestContext
from httpstore.core.errors import (
    EncodingError,
    IdentityViolation,
    MediumUnavailable,
    StorageError,
)
from httpstore.core.registry import StoreRegistry
from httpstore.middleware.wsgi import StoreMiddleware, get_registry
from httpstore.request import Request
from httpstore.version import __version__

__all__ = [
    "Cookie",
    "EncodingError",
    "IdentityViolation",
    "MediumUnavailable",
    "Request",
    "RequestContext",
    "Session",
    "StorageError",
    "StoreMiddleware",
    "StoreRegistry",
    "__version__",
    "get_registry",
]
