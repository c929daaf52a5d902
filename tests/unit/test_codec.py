# tests/unit/test_codec.py
# Unit tests for the token encoder/decoder

import base64

import pytest

from tabstate.constants import SHARE_PREFIX
from tabstate.middleware.error_handler import DecodeError
from tabstate.services.codec import (
    decode,
    encode,
    is_web_url,
    strip_locator_prefix,
    to_share_locator,
)


@pytest.fixture
def sample_urls():
    return [
        "https://example.com/",
        "http://news.ycombinator.com/item?id=1",
        "https://en.wikipedia.org/wiki/Base64#Examples",
    ]


class TestEncode:
    """Token format."""

    def test_token_is_base64_of_newline_joined_urls(self, sample_urls):
        token = encode(sample_urls)
        assert base64.b64decode(token).decode("utf-8") == "\n".join(sample_urls)

    def test_single_url_has_known_token(self):
        assert encode(["https://example.com"]) == "aHR0cHM6Ly9leGFtcGxlLmNvbQ=="

    def test_empty_list_gives_empty_token(self):
        assert encode([]) == ""

    def test_encode_is_deterministic(self, sample_urls):
        assert encode(sample_urls) == encode(list(sample_urls))

    def test_share_locator_is_prefix_plus_token(self, sample_urls):
        assert to_share_locator(sample_urls) == SHARE_PREFIX + encode(sample_urls)


class TestRoundTrip:
    """decode(encode(urls)) == urls"""

    @pytest.mark.parametrize(
        "urls",
        [
            [],
            ["https://example.com"],
            ["https://ja.wikipedia.org/wiki/東京", "https://example.com/caf%C3%A9", "https://例え.jp/ü?q=ñ"],
        ],
        ids=["empty", "single", "unicode"],
    )
    def test_round_trip(self, urls):
        assert decode(encode(urls)) == urls

    def test_round_trip_keeps_order_of_200_urls(self):
        urls = [f"https://example.com/page/{i}" for i in range(200)]
        assert decode(encode(urls)) == urls

    def test_strip_prefix_of_locator_gives_token(self, sample_urls):
        assert strip_locator_prefix(to_share_locator(sample_urls)) == encode(sample_urls)


class TestDecode:
    """Filtering and failure policy."""

    def test_non_url_lines_are_dropped(self):
        token = encode(["http://a", "not-a-url", "https://b"])
        assert decode(token) == ["http://a", "https://b"]

    def test_blank_lines_are_dropped(self):
        token = base64.b64encode(b"https://a\n\n\nhttps://b\n").decode()
        assert decode(token) == ["https://a", "https://b"]

    def test_missing_padding_is_accepted(self):
        token = encode(["https://example.com"]).rstrip("=")
        assert decode(token) == ["https://example.com"]

    def test_whitespace_inside_token_is_ignored(self):
        token = encode(["https://example.com/a/long/path"])
        wrapped = token[:10] + "\n" + token[10:20] + " " + token[20:]
        assert decode(wrapped) == ["https://example.com/a/long/path"]

    @pytest.mark.parametrize("token", ["abc$def", "Q", "QQ=A", "Q===", "====", "QQ======"])
    def test_invalid_base64_raises(self, token):
        with pytest.raises(DecodeError):
            decode(token)

    def test_bytes_that_are_not_utf8_raise(self):
        token = base64.b64encode(b"\xff\xfe\xfa").decode()
        with pytest.raises(DecodeError) as exc_info:
            decode(token)
        assert exc_info.value.error_code == "DECODE_ERROR"


class TestStripPrefix:

    def test_bare_token_is_returned_unchanged(self):
        assert strip_locator_prefix("aGVsbG8=") == "aGVsbG8="

    def test_prefix_only_removed_at_start(self):
        text = "x" + SHARE_PREFIX + "aGVsbG8="
        assert strip_locator_prefix(text) == text

    def test_custom_prefix(self):
        assert strip_locator_prefix("https://host/#abc", prefix="https://host/#") == "abc"


def test_is_web_url():
    assert is_web_url("https://a")
    assert is_web_url("http://a")
    assert not is_web_url("ftp://a")
    assert not is_web_url("chrome://settings")
