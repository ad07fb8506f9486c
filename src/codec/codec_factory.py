# src/codec/codec_factory.py - v1
"""Factory for codec instantiation."""

from __future__ import annotations

from httpstore.codec.base_codec import BaseCodec


def create_codec(name: str = "json") -> BaseCodec:
    """Instantiate a codec by name.

    Args:
        name: "json" (default) or "pickle".

    Returns:
        Configured BaseCodec implementation.
    """
    if name == "json":
        from httpstore.codec.json_codec import JsonCodec
        return JsonCodec()

    if name == "pickle":
        from httpstore.codec.pickle_codec import PickleCodec
        return PickleCodec()

    raise ValueError(f"Unsupported codec: {name!r}")
