# tests/unit/codec/test_unit_json_codec.py - v1
"""Tests for codec/json_codec.py."""

from __future__ import annotations

import pytest

from httpstore.codec.json_codec import JsonCodec
from httpstore.core.errors import EncodingError


@pytest.fixture
def codec():
    return JsonCodec()


class TestJsonCodecRoundTrip:
    @pytest.mark.parametrize(
        "value",
        [
            "text",
            "",
            "ünïcødé ☃",
            0,
            -17,
            3.25,
            True,
            False,
            None,
            [1, 2, 3],
            {"nested": {"list": [1, "two", None, {"deep": False}]}},
            [],
            {},
        ],
    )
    def test_round_trip(self, codec, value):
        assert codec.decode(codec.encode(value)) == value

    def test_bool_stays_bool(self, codec):
        assert codec.decode(codec.encode(True)) is True

    def test_encode_is_compact_json(self, codec):
        assert codec.encode({"a": [1, 2]}) == '{"a":[1,2]}'

    def test_string_is_quoted(self, codec):
        assert codec.encode("v") == '"v"'


class TestJsonCodecErrors:
    @pytest.mark.parametrize("value", [(1, 2), {1, 2}, b"bytes", object(), {1: "int key"}])
    def test_unsupported_shapes_rejected(self, codec, value):
        with pytest.raises(EncodingError):
            codec.encode(value)

    @pytest.mark.parametrize(
        "value",
        [
            float("inf"),
            float("-inf"),
            float("nan"),
            [1.0, float("inf")],
            {"outer": {"inner": [float("nan")]}},
        ],
    )
    def test_non_finite_floats_rejected(self, codec, value):
        with pytest.raises(EncodingError, match="Non-finite"):
            codec.encode(value)

    @pytest.mark.parametrize("raw", ["NaN", "[1, Infinity]", "{\"a\": -Infinity}"])
    def test_decode_non_finite_rejected(self, codec, raw):
        with pytest.raises(EncodingError):
            codec.decode(raw)

    def test_decode_invalid_json(self, codec):
        with pytest.raises(EncodingError, match="Invalid JSON"):
            codec.decode("{not json")

    def test_decode_plain_word(self, codec):
        with pytest.raises(EncodingError):
            codec.decode("hello")

    def test_encoding_error_chains_cause(self, codec):
        with pytest.raises(EncodingError) as exc_info:
            codec.encode(object())
        assert exc_info.value.__cause__ is not None
