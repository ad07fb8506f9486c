# src/codec/pickle_codec.py - v1
"""Pickle codec for server-side storage only.

Raw values are base64 text so that every session backend can store them
as plain strings. Never use this codec for data a client can tamper with;
settings validation rejects it for cookies.
"""

from __future__ import annotations

import base64
import binascii
import pickle
from typing import Any

from httpstore.codec.base_codec import BaseCodec
from httpstore.core.errors import EncodingError


class PickleCodec(BaseCodec):
    """Base64-wrapped pickle codec for arbitrary Python objects."""

    name = "pickle"

    def __init__(self, protocol: int = pickle.HIGHEST_PROTOCOL) -> None:
        self._protocol = protocol

    def encode(self, value: Any) -> str:
        try:
            payload = pickle.dumps(value, protocol=self._protocol)
        except (pickle.PicklingError, TypeError, AttributeError) as e:
            raise EncodingError(
                f"Value of type {type(value).__name__} cannot be pickled: {e}"
            ) from e
        return base64.b64encode(payload).decode("ascii")

    def decode(self, raw: str) -> Any:
        try:
            payload = base64.b64decode(raw.encode("ascii"), validate=True)
        except (binascii.Error, UnicodeEncodeError) as e:
            raise EncodingError(f"Invalid base64 payload: {e}") from e
        try:
            return pickle.loads(payload)  # noqa: S301
        except Exception as e:
            raise EncodingError(f"Invalid pickle payload: {e}") from e
