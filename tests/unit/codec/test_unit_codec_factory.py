# tests/unit/codec/test_unit_codec_factory.py - v1
"""Tests for codec/codec_factory.py."""

from __future__ import annotations

import pytest

from httpstore.codec.base_codec import BaseCodec
from httpstore.codec.codec_factory import create_codec
from httpstore.codec.json_codec import JsonCodec
from httpstore.codec.pickle_codec import PickleCodec


class TestCreateCodec:
    def test_default_json(self):
        assert isinstance(create_codec(), JsonCodec)

    def test_pickle(self):
        assert isinstance(create_codec("pickle"), PickleCodec)

    def test_unsupported(self):
        with pytest.raises(ValueError, match="Unsupported codec"):
            create_codec("xml")


class TestBaseCodec:
    def test_cannot_instantiate(self):
        with pytest.raises(TypeError):
            BaseCodec()  # type: ignore[abstract]

    def test_names(self):
        assert JsonCodec.name == "json"
        assert PickleCodec.name == "pickle"
