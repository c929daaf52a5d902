# tabstate/services/codec.py
from __future__ import annotations

import base64
import binascii
from typing import Iterable, List

from tabstate.constants import SHARE_PREFIX, URL_SEPARATOR, WEB_URL_PREFIX
from tabstate.middleware.error_handler import DecodeError

# --- Public API ---

def encode(urls: Iterable[str]) -> str:
    """
    Turn an ordered URL list into a compact reversible token.

    URLs are joined with a newline (no trailing separator), encoded as UTF-8
    and then base64 with the classic alphabet. An empty list gives "".
    """
    text = URL_SEPARATOR.join(urls)
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def to_share_locator(urls: Iterable[str], prefix: str = SHARE_PREFIX) -> str:
    return prefix + encode(urls)


def strip_locator_prefix(text: str, prefix: str = SHARE_PREFIX) -> str:
    """Remove the share prefix when it leads the text; otherwise return text as-is."""
    if text.startswith(prefix):
        return text[len(prefix):]
    return text


def decode(token: str) -> List[str]:
    """
    Invert encode() and keep only lines that look like web URLs.

    Lines not starting with "http" are dropped without error so newer
    exporters may add metadata lines. Raises DecodeError when the token is
    not base64 or its bytes are not UTF-8.
    """
    raw = _b64decode_forgiving(token)
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError("Token does not contain UTF-8 text", details={"reason": str(e)}) from e
    return filter_web_urls(text.split(URL_SEPARATOR))


def filter_web_urls(lines: Iterable[str]) -> List[str]:
    return [line for line in lines if is_web_url(line)]


def is_web_url(value: str) -> bool:
    return value.startswith(WEB_URL_PREFIX)


# --- Helpers (private) ---

_ASCII_WHITESPACE = " \t\n\f\r"


def _b64decode_forgiving(token: str) -> bytes:
    # same leniency as a browser atob(): whitespace ignored, padding optional
    data = "".join(ch for ch in token if ch not in _ASCII_WHITESPACE)
    # at most two padding characters may be dropped
    if len(data) % 4 == 0:
        if data.endswith("=="):
            data = data[:-2]
        elif data.endswith("="):
            data = data[:-1]
    if len(data) % 4 == 1 or "=" in data:
        raise DecodeError("Token is not valid base64", details={"length": len(data)})
    data += "=" * (-len(data) % 4)
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError("Token is not valid base64", details={"reason": str(e)}) from e
