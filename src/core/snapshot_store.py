# src/core/snapshot_store.py - v1
"""Read-only registry-managed store with case-insensitive access.

Every store type (request data, session, cookies, the request facade) is
built on this class. Instances are created only by a StoreRegistry, which
calls ``snapshot()`` once, then ``create()``, then loads the snapshot
entries into the property bag.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING, Any

from httpstore.core.errors import IdentityViolation
from httpstore.core.lookup import LookupCache

if TYPE_CHECKING:
    from httpstore.config.settings import Settings
    from httpstore.core.registry import StoreRegistry


class SnapshotStore(ABC):
    """Registry-owned key/value view over a one-time snapshot."""

    def __init__(self, registry: StoreRegistry) -> None:
        self._registry = registry
        self._data: dict[str, Any] = {}
        self._lookup = LookupCache(self._data)

    # --- Two-phase construction ---

    @classmethod
    @abstractmethod
    def snapshot(cls, registry: StoreRegistry) -> Mapping[str, Any]:
        """Read the initial entries from the store's medium.

        Called exactly once per registry, before ``create()``. Side effects
        such as starting a session belong here and nowhere else.
        """

    @classmethod
    def create(cls, registry: StoreRegistry) -> SnapshotStore:
        """Build an empty instance bound to ``registry``."""
        return cls(registry)

    @classmethod
    def default_ttl(cls, settings: Settings) -> int:
        """Lifetime used when the registry has no expiry for this type."""
        return 0

    def _load(self, entries: Mapping[str, Any]) -> None:
        for key, value in entries.items():
            self._data[str(key)] = value

    # --- Lookup ---

    @property
    def registry(self) -> StoreRegistry:
        return self._registry

    def has(self, key: str) -> bool:
        """True if ``key`` is present, ignoring case."""
        return self._lookup.resolve(key) is not None

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under ``key`` (any casing), else ``default``."""
        name = self._lookup.resolve(key)
        if name is None:
            return default
        return self._data[name]

    def keys(self) -> list[str]:
        return list(self._data)

    def all(self) -> dict[str, Any]:
        """Return a copy of every entry."""
        return dict(self._data)

    # --- Python sugar ---

    def __getitem__(self, key: str) -> Any:
        if not self.has(key):
            raise KeyError(key)
        return self.get(key)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        if not self.has(name):
            raise AttributeError(
                f"{type(self).__name__!r} has no entry {name!r}"
            )
        return self.get(name)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._data))

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} keys={len(self._data)}>"

    # --- Identity ---

    def __copy__(self) -> SnapshotStore:
        raise IdentityViolation(
            f"{type(self).__name__} is owned by its registry and cannot be copied"
        )

    def __deepcopy__(self, memo: dict[int, Any]) -> SnapshotStore:
        raise IdentityViolation(
            f"{type(self).__name__} is owned by its registry and cannot be copied"
        )

    def __reduce_ex__(self, protocol: Any) -> Any:
        raise IdentityViolation(
            f"{type(self).__name__} is owned by its registry and cannot be pickled"
        )
