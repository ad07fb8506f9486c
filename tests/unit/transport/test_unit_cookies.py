# tests/unit/transport/test_unit_cookies.py - v1
"""Tests for transport/cookies.py - header parsing and Set-Cookie rendering."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from httpstore.core.errors import MediumUnavailable
from httpstore.transport.cookies import CookieDirective, CookieTransport, parse_cookie_header


class TestParseCookieHeader:
    def test_basic(self):
        assert parse_cookie_header("a=1; b=two") == {"a": "1", "b": "two"}

    def test_empty(self):
        assert parse_cookie_header(None) == {}
        assert parse_cookie_header("") == {}

    def test_percent_decoded(self):
        assert parse_cookie_header("list=%5B1%2C2%5D") == {"list": "[1,2]"}

    def test_quoted_value(self):
        assert parse_cookie_header('name="quoted value"') == {"name": "quoted value"}

    def test_malformed_pairs_skipped(self):
        assert parse_cookie_header("novalue; =x; ok=1;;") == {"ok": "1"}

    def test_first_occurrence_wins(self):
        assert parse_cookie_header("a=1; a=2") == {"a": "1"}

    def test_value_with_equals(self):
        assert parse_cookie_header("tok=a=b") == {"tok": "a=b"}


class TestCookieDirective:
    def test_minimal_header(self):
        directive = CookieDirective(name="a", value="1", httponly=False)
        assert directive.to_header() == "a=1; Path=/"

    def test_full_header(self):
        directive = CookieDirective(
            name="theme",
            value='"dark"',
            max_age=60,
            expires=datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
            path="/app",
            domain="example.com",
            secure=True,
            httponly=True,
            samesite="Strict",
        )
        assert directive.to_header() == (
            "theme=%22dark%22; Expires=Fri, 02 Jan 2026 03:04:05 GMT; Max-Age=60; "
            "Path=/app; Domain=example.com; Secure; HttpOnly; SameSite=Strict"
        )

    def test_value_escaping(self):
        directive = CookieDirective(name="v", value='{"a":[1, 2]};', httponly=False, path="")
        assert directive.to_header() == "v={%22a%22:[1%2C%202]}%3B"

    def test_naive_expires_treated_as_utc(self):
        directive = CookieDirective(
            name="a", expires=datetime(1970, 1, 1), httponly=False, path=""
        )
        assert directive.to_header() == "a=; Expires=Thu, 01 Jan 1970 00:00:00 GMT"

    def test_is_deletion(self):
        assert CookieDirective(name="a", max_age=0).is_deletion
        assert not CookieDirective(name="a", max_age=10).is_deletion
        assert not CookieDirective(name="a").is_deletion

    def test_round_trip_through_parser(self):
        value = '{"cart":[1,2,3],"note":"a; b"}'
        header = CookieDirective(name="c", value=value).to_header()
        pair = header.split("; ", 1)[0]
        assert parse_cookie_header(pair) == {"c": value}


class TestCookieTransport:
    def test_from_header(self):
        transport = CookieTransport.from_header("a=1")
        assert transport.incoming == {"a": "1"}
        assert not transport.headers_sent

    def test_emit_and_header_items(self, cookie_transport):
        cookie_transport.emit(CookieDirective(name="a", value="1", httponly=False))
        assert cookie_transport.header_items() == [("Set-Cookie", "a=1; Path=/")]

    def test_later_directive_supersedes(self, cookie_transport):
        cookie_transport.emit(CookieDirective(name="a", value="1"))
        cookie_transport.emit(CookieDirective(name="b", value="2"))
        cookie_transport.emit(CookieDirective(name="a", value="3"))
        assert [(d.name, d.value) for d in cookie_transport.directives] == [
            ("b", "2"),
            ("a", "3"),
        ]

    def test_emit_after_headers_sent(self, cookie_transport):
        cookie_transport.mark_headers_sent()
        with pytest.raises(MediumUnavailable, match="Headers already sent"):
            cookie_transport.emit(CookieDirective(name="a", value="1"))
        assert cookie_transport.directives == []

    def test_directives_is_copy(self, cookie_transport):
        cookie_transport.emit(CookieDirective(name="a"))
        cookie_transport.directives.clear()
        assert len(cookie_transport.directives) == 1
