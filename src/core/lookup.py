# src/core/lookup.py - v1
"""Case-insensitive key resolution over a store's property bag.

The index maps a lower-cased key to the exact name stored in the bag, so a
lookup always reads the live value. Misses fall back to a linear scan and
memoize the first match found.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


class LookupCache:
    """Lazy secondary index: lower-cased key -> stored key name."""

    def __init__(self, bag: Mapping[str, Any]) -> None:
        self._bag = bag
        self._names: dict[str, str] = {}

    def resolve(self, key: str) -> str | None:
        """Return the stored name matching ``key`` ignoring case, or None."""
        folded = key.lower()
        name = self._names.get(folded)
        if name is not None:
            if name in self._bag:
                return name
            # Stale after a removal that bypassed forget().
            del self._names[folded]

        for candidate in self._bag:
            if candidate.lower() == folded:
                self._names[folded] = candidate
                return candidate
        return None

    def remember(self, name: str) -> None:
        """Index a name that was just written to the bag."""
        self._names.setdefault(name.lower(), name)

    def forget(self, name: str) -> None:
        """Drop the index entry for ``name``."""
        folded = name.lower()
        if self._names.get(folded) == name:
            del self._names[folded]

    def forget_all(self) -> None:
        self._names.clear()

    def __len__(self) -> int:
        return len(self._names)
