# tabstate/services/parser.py
"""
Auto-detecting parser for pasted tab lists.

Accepted inputs, tried in this order (first match wins):
  1. a share locator or a bare token (base64 alphabet only)
  2. a newline separated list of links
  3. a JSON object with a "tabs" or "urls" list

Tier 1 is a heuristic: newline-free text made only of base64 characters is
always read as a token, even when it was meant as something else.
"""
from __future__ import annotations

import enum
import json
import re
from dataclasses import dataclass, field
from typing import Any, List

from tabstate.constants import SHARE_PREFIX, URL_SEPARATOR
from tabstate.middleware.error_handler import ParseError
from tabstate.services.codec import decode, filter_web_urls, strip_locator_prefix

TOKEN_PATTERN = re.compile(r"[A-Za-z0-9+/]+=*")


class InputKind(str, enum.Enum):
    TOKEN = "token"
    URL_LIST = "url_list"
    STRUCTURED = "structured"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class ClassifiedInput:
    kind: InputKind
    token: str = ""
    urls: List[str] = field(default_factory=list)


def classify(text: str, prefix: str = SHARE_PREFIX) -> ClassifiedInput:
    """Decide which input format the text is in without decoding any token."""
    trimmed = (text or "").strip()

    if trimmed.startswith(prefix) or TOKEN_PATTERN.fullmatch(trimmed):
        return ClassifiedInput(InputKind.TOKEN, token=strip_locator_prefix(trimmed, prefix))

    # strip each line so CRLF and indented pastes still match
    urls = filter_web_urls(line.strip() for line in trimmed.split(URL_SEPARATOR))
    if urls:
        return ClassifiedInput(InputKind.URL_LIST, urls=urls)

    structured = _parse_structured(trimmed)
    if structured is not None:
        return ClassifiedInput(InputKind.STRUCTURED, urls=structured)

    return ClassifiedInput(InputKind.UNRECOGNIZED)


def parse_any(text: str, prefix: str = SHARE_PREFIX) -> List[str]:
    """
    Turn pasted text into an ordered URL list.

    A token that fails to decode raises DecodeError (no fallback to later
    tiers); text matching no format raises ParseError.
    """
    return resolve(classify(text, prefix))


def resolve(classified: ClassifiedInput) -> List[str]:
    if classified.kind is InputKind.TOKEN:
        return decode(classified.token)
    if classified.kind is InputKind.UNRECOGNIZED:
        raise ParseError("Expected a share link, a token, a list of links or a JSON tab export")
    return list(classified.urls)


# --- Helpers (private) ---

def _parse_structured(text: str) -> List[str] | None:
    try:
        payload = json.loads(text)
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None

    items = payload.get("tabs")
    if not isinstance(items, list):
        items = payload.get("urls")
    if not isinstance(items, list):
        return None

    return filter_web_urls(u for u in (_item_url(i) for i in items) if u)


def _item_url(item: Any) -> str | None:
    if isinstance(item, str):
        return item
    if isinstance(item, dict) and isinstance(item.get("url"), str):
        return item["url"]
    return None
