# src/codec/json_codec.py - v1
"""JSON codec (default for every store).

Supported shapes: str, int, float, bool, None, list and dict with string
keys, nested arbitrarily. Shapes are checked in strict mode so that values
which JSON would silently reshape (tuples, sets, non-string keys) are
rejected instead of coming back different.
"""

from __future__ import annotations

import math
from typing import Any

from pydantic import JsonValue, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from httpstore.codec.base_codec import BaseCodec
from httpstore.core.errors import EncodingError

_ADAPTER: TypeAdapter[JsonValue] = TypeAdapter(JsonValue)


def _has_non_finite(value: Any) -> bool:
    """True if a float inf or nan appears anywhere in ``value``."""
    if isinstance(value, float):
        return not math.isfinite(value)
    if isinstance(value, list):
        return any(_has_non_finite(item) for item in value)
    if isinstance(value, dict):
        return any(_has_non_finite(item) for item in value.values())
    return False


class JsonCodec(BaseCodec):
    """Compact JSON text codec backed by a pydantic TypeAdapter."""

    name = "json"

    def encode(self, value: Any) -> str:
        try:
            _ADAPTER.validate_python(value, strict=True)
        except ValidationError as e:
            raise EncodingError(
                f"Value of type {type(value).__name__} is not JSON-serializable: {e}"
            ) from e
        # JSON has no inf or nan; pydantic would write them as null.
        if _has_non_finite(value):
            raise EncodingError("Non-finite floats (inf, nan) are not JSON-serializable")
        try:
            return _ADAPTER.dump_json(value).decode("utf-8")
        except PydanticSerializationError as e:
            raise EncodingError(
                f"Value of type {type(value).__name__} is not JSON-serializable: {e}"
            ) from e

    def decode(self, raw: str) -> Any:
        try:
            value = _ADAPTER.validate_json(raw)
        except ValidationError as e:
            raise EncodingError(f"Invalid JSON payload: {e}") from e
        if _has_non_finite(value):
            raise EncodingError("Invalid JSON payload: non-finite number")
        return value
