"""
Unit tests for base64url and JSON helpers
"""

import pytest

from jose_sdk.exceptions import MalformedToken
from jose_sdk.utils import b64url_decode, b64url_decode_text, b64url_encode, compact_json, parse_json


class TestBase64Url:
    """Test cases for unpadded base64url"""

    def test_encode_strips_padding(self):
        assert b64url_encode(b"{}") == "e30"
        assert b64url_encode("a") == "YQ"

    def test_encode_uses_url_alphabet(self):
        assert b64url_encode(b"\xfb\xff") == "-_8"

    def test_decode(self):
        assert b64url_decode("e30") == b"{}"
        assert b64url_decode("-_8") == b"\xfb\xff"
        assert b64url_decode("") == b""

    @pytest.mark.parametrize("segment", [
        "e30=",      # padding
        "ab+/",      # standard alphabet
        "e3 0",      # whitespace
        "abcde",     # length 1 mod 4
        "bla",       # non-zero trailing bits
        "YR",        # non-zero trailing bits
    ])
    def test_decode_rejects(self, segment):
        with pytest.raises(MalformedToken):
            b64url_decode(segment)

    def test_decode_text_requires_utf8(self):
        assert b64url_decode_text(b64url_encode("héllo")) == "héllo"

        with pytest.raises(MalformedToken, match="UTF-8"):
            b64url_decode_text(b64url_encode(b"\xff\xfe"))


class TestCompactJson:
    """Test cases for compact JSON serialization"""

    def test_no_whitespace(self):
        assert compact_json({"a": 1, "b": [1, 2]}) == '{"a":1,"b":[1,2]}'

    def test_non_ascii_kept(self):
        assert compact_json({"name": "é"}) == '{"name":"é"}'

    def test_non_finite_numbers_rejected(self):
        with pytest.raises(ValueError):
            compact_json({"exp": float("inf")})
        with pytest.raises(ValueError):
            compact_json({"n": float("nan")})


class TestParseJson:
    """Test cases for parsing segment JSON"""

    def test_parse(self):
        assert parse_json('{"a":[1,2.5,null]}') == {"a": [1, 2.5, None]}

    @pytest.mark.parametrize("text", ["NaN", "Infinity", '{"exp":-Infinity}'])
    def test_non_finite_constants(self, text):
        with pytest.raises(ValueError, match="not valid JSON"):
            parse_json(text)

    def test_deep_nesting(self):
        """Test that runaway nesting surfaces as ValueError, not RecursionError"""
        with pytest.raises(ValueError, match="too deep"):
            parse_json("[" * 200000)
