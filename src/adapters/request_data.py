# src/adapters/request_data.py - v1
"""Read-only stores over the request-data snapshot."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from httpstore.core.snapshot_store import SnapshotStore

if TYPE_CHECKING:
    from httpstore.core.registry import StoreRegistry


class QueryParams(SnapshotStore):
    """Query-string parameters."""

    @classmethod
    def snapshot(cls, registry: StoreRegistry) -> Mapping[str, Any]:
        return registry.context.query


class FormData(SnapshotStore):
    """Parsed form fields of the request body."""

    @classmethod
    def snapshot(cls, registry: StoreRegistry) -> Mapping[str, Any]:
        return registry.context.form


class ServerVars(SnapshotStore):
    """Server (CGI/WSGI) variables."""

    @classmethod
    def snapshot(cls, registry: StoreRegistry) -> Mapping[str, Any]:
        return registry.context.server


class EnvVars(SnapshotStore):
    """Process environment variables."""

    @classmethod
    def snapshot(cls, registry: StoreRegistry) -> Mapping[str, Any]:
        return registry.context.env


class Headers(SnapshotStore):
    """Request headers; lookups ignore case, so ``content-type`` works."""

    @classmethod
    def snapshot(cls, registry: StoreRegistry) -> Mapping[str, Any]:
        return registry.context.headers
