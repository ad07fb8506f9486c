# src/core/errors.py - v1
"""Error kinds raised by stores, codecs and transports.

Absence of a key is never an error: lookups take a ``default`` instead.
"""

from __future__ import annotations


class StorageError(Exception):
    """Base class for every error raised by httpstore."""


class IdentityViolation(StorageError):
    """Raised when a registry-owned instance would be duplicated."""


class EncodingError(StorageError):
    """Raised when a value cannot be converted to or from its wire form."""


class MediumUnavailable(StorageError):
    """Raised when a store's backing medium refuses a write.

    Typical causes: response headers already sent for a cookie store, a
    session that was never started, or a session backend I/O failure.
    """
