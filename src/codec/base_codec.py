# src/codec/base_codec.py - v1
"""Abstract value codec interface.

A codec converts a logical value into a durable text form (the raw value
kept in a store and written to its medium) and back.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class BaseCodec(ABC):
    """Unified interface for value serialization."""

    name: str = ""

    @abstractmethod
    def encode(self, value: Any) -> str:
        """Convert a logical value into its raw text form.

        Raises:
            EncodingError: If the value has an unsupported shape.
        """

    @abstractmethod
    def decode(self, raw: str) -> Any:
        """Convert a raw text form back into the logical value.

        Raises:
            EncodingError: If the text is not a valid encoding.
        """
