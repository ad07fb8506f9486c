# src/core/base_storage.py - v1
"""Abstract mutable store: the operation set every adapter implements.

The property bag holds raw (encoded) values. ``get``/``all`` decode through
the store's codec, ``get_raw`` does not. Adapters mirror every mutation to
their medium through three hooks: ``_persist``, ``_discard`` and
``_medium_contains``.
"""

from __future__ import annotations

import logging
from abc import abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar

from httpstore.codec.codec_factory import create_codec
from httpstore.core.errors import EncodingError
from httpstore.core.snapshot_store import SnapshotStore

if TYPE_CHECKING:
    from httpstore.codec.base_codec import BaseCodec
    from httpstore.config.settings import Settings
    from httpstore.core.registry import StoreRegistry

logger = logging.getLogger(__name__)


class BaseStorage(SnapshotStore):
    """Mutable, codec-aware store with a per-type lifetime."""

    # Settings field naming the codec for this store type.
    codec_setting: ClassVar[str] = "session_codec"

    def __init__(self, registry: StoreRegistry) -> None:
        super().__init__(registry)
        settings = registry.settings
        self._codec: BaseCodec = create_codec(getattr(settings, self.codec_setting))
        self._strict = settings.decode_mode == "strict"

    @classmethod
    def default_ttl(cls, settings: Settings) -> int:
        return settings.session_ttl

    @property
    def ttl(self) -> int:
        """Lifetime in seconds applied to writes made now."""
        return self._registry.expiry_for(type(self))

    @property
    def codec(self) -> BaseCodec:
        return self._codec

    # --- Medium hooks ---

    @abstractmethod
    def _persist(self, name: str, raw: str) -> None:
        """Write ``raw`` under ``name`` to the medium."""

    @abstractmethod
    def _discard(self, name: str) -> None:
        """Delete ``name`` from the medium."""

    @abstractmethod
    def _medium_contains(self, name: str) -> bool:
        """True if the medium currently holds ``name``."""

    def _check_writable(self) -> None:
        """Raise MediumUnavailable if the medium refuses writes right now."""

    # --- Operations ---

    def _find(self, key: str) -> str | None:
        name = self._lookup.resolve(key)
        if name is None or not self._medium_contains(name):
            return None
        return name

    def has(self, key: str) -> bool:
        """True if ``key`` is in the bag and in the medium."""
        return self._find(key) is not None

    def set(self, key: str, value: Any) -> BaseStorage:
        """Encode ``value`` and store it under ``key``.

        A key that matches an existing one ignoring case overwrites that
        slot and keeps the existing casing.

        Raises:
            EncodingError: If the value cannot be encoded.
            MediumUnavailable: If the medium refuses the write.
        """
        self._check_writable()
        raw = self._codec.encode(value)
        name = self._lookup.resolve(key) or key
        self._persist(name, raw)
        self._data[name] = raw
        self._lookup.remember(name)
        logger.debug("%s set %r (%d bytes)", type(self).__name__, name, len(raw))
        return self

    def get(self, key: str, default: Any = None) -> Any:
        """Return the decoded value for ``key``, else ``default``."""
        name = self._find(key)
        if name is None:
            return default
        return self._decode(name, self._data[name])

    def get_raw(self, key: str, default: Any = None) -> Any:
        """Return the raw stored value for ``key``, else ``default``."""
        name = self._find(key)
        if name is None:
            return default
        return self._data[name]

    def remove(self, key: str) -> BaseStorage:
        """Delete ``key`` from the bag and the medium; no-op when absent."""
        name = self._lookup.resolve(key)
        if name is None:
            return self
        self._check_writable()
        self._discard(name)
        del self._data[name]
        self._lookup.forget(name)
        logger.debug("%s removed %r", type(self).__name__, name)
        return self

    def clear(self) -> BaseStorage:
        """Remove every key one by one; not atomic."""
        for name in list(self._data):
            self.remove(name)
        return self

    def all(self) -> dict[str, Any]:
        """Return every entry present in the bag and the medium, decoded."""
        return {
            name: self._decode(name, raw)
            for name, raw in self._data.items()
            if self._medium_contains(name)
        }

    def _decode(self, name: str, raw: Any) -> Any:
        if not isinstance(raw, str):
            return raw
        try:
            return self._codec.decode(raw)
        except EncodingError:
            if self._strict:
                raise
            logger.warning(
                "%s could not decode %r; returning raw value",
                type(self).__name__,
                name,
            )
            return raw

    # --- Python sugar ---

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def __delitem__(self, key: str) -> None:
        self.remove(key)
