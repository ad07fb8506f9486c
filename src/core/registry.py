# src/core/registry.py - v1
"""Store registry: at most one live instance per store type.

A registry is owned by one request context and passed around explicitly.
Long-lived servers create one per request (see middleware.wsgi), so no
state leaks between requests.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, TypeVar

from httpstore.config.settings import Settings
from httpstore.core.errors import StorageError
from httpstore.core.snapshot_store import SnapshotStore
from httpstore.logging.context import get_context, set_store_context

if TYPE_CHECKING:
    from httpstore.context import RequestContext

logger = logging.getLogger(__name__)

S = TypeVar("S", bound=SnapshotStore)
T = TypeVar("T", bound=type)


class RegistryError(StorageError):
    """Raised when a store type cannot be instantiated by the registry."""


class StoreRegistry:
    """Lifecycle manager for registry-owned stores.

    ``get_instance`` drives the two-phase construction protocol: the store
    type's ``snapshot()`` runs first (it may touch the medium), then
    ``create()`` builds the instance and the snapshot entries are loaded
    into it. Both run exactly once per type for the registry's lifetime.
    """

    def __init__(
        self,
        context: RequestContext | None = None,
        settings: Settings | None = None,
    ) -> None:
        if context is None:
            from httpstore.context import RequestContext
            context = RequestContext()
        self._context = context
        self._settings = settings if settings is not None else Settings()
        self._instances: dict[type[SnapshotStore], SnapshotStore] = {}
        self._expiry: dict[type, int] = {}
        self._pending: set[type] = set()

    @property
    def context(self) -> RequestContext:
        return self._context

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def instances(self) -> Mapping[type[SnapshotStore], SnapshotStore]:
        """Read-only view of the live instances."""
        return MappingProxyType(self._instances)

    def get_instance(self, store_type: type[S]) -> S:
        """Return the instance for ``store_type``, creating it on first use."""
        instance = self._instances.get(store_type)
        if instance is not None:
            return instance  # type: ignore[return-value]

        if not isinstance(store_type, type) or not issubclass(store_type, SnapshotStore):
            raise TypeError(f"{store_type!r} is not a SnapshotStore subclass")
        if store_type in self._pending:
            raise RegistryError(
                f"Circular snapshot while instantiating {store_type.__name__}"
            )

        self._pending.add(store_type)
        outer_store = get_context().store
        set_store_context(store_type.__name__)
        try:
            entries = store_type.snapshot(self)
            instance = store_type.create(self)
            instance._load(entries)
        finally:
            self._pending.discard(store_type)
            set_store_context(outer_store)

        self._instances[store_type] = instance
        logger.debug(
            "Instantiated %s with %d snapshot entries",
            store_type.__name__,
            len(entries),
        )
        return instance  # type: ignore[return-value]

    def has_instance(self, store_type: type[SnapshotStore]) -> bool:
        return store_type in self._instances

    def set_expiry(self, store_type: T, seconds: int) -> T:
        """Record the lifetime for every key of ``store_type``.

        Affects subsequent writes only; entries already persisted keep the
        lifetime they were written with.

        Returns:
            ``store_type``, so calls can be chained into ``get_instance``.
        """
        if isinstance(seconds, bool) or not isinstance(seconds, int):
            raise TypeError("seconds must be an int")
        if seconds < 0:
            raise ValueError("seconds must be >= 0")
        self._expiry[store_type] = seconds
        logger.debug("Expiry for %s set to %ds", store_type.__name__, seconds)
        return store_type

    def has_expiry(self, store_type: type) -> bool:
        return store_type in self._expiry

    def expiry_for(self, store_type: type[SnapshotStore]) -> int:
        """Configured lifetime for ``store_type``, else the type's default."""
        seconds = self._expiry.get(store_type)
        if seconds is None:
            return store_type.default_ttl(self._settings)
        return seconds

    def close(self) -> None:
        """Drop every instance and expiry entry."""
        if self._instances:
            logger.debug("Closing registry with %d instances", len(self._instances))
        self._instances.clear()
        self._expiry.clear()
