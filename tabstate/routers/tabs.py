# tabstate/routers/tabs.py
# FastAPI router for encoding and decoding tab lists

from __future__ import annotations

from fastapi import APIRouter

from tabstate.schemas.tabs import (
    ExportResult,
    ParseRequest,
    ParseResponse,
    TokenRequest,
    UrlListRequest,
    UrlListResponse,
)
from tabstate.services.codec import decode, strip_locator_prefix
from tabstate.services.parser import classify, resolve
from tabstate.services.tabs_service import export_state
from tabstate.utils.logger import log_info


router = APIRouter(tags=["Tabs"])


@router.post("/tabs/encode", response_model=ExportResult)
async def encode_tabs(payload: UrlListRequest) -> ExportResult:
    """Return the token and share link for an ordered URL list."""
    result = export_state(payload.urls)
    log_info(f"encode: {result.tab_count} tabs -> {result.data_size} chars")
    return result


@router.post("/tabs/decode", response_model=UrlListResponse)
async def decode_tabs(payload: TokenRequest) -> UrlListResponse:
    """Decode a token or a full share link."""
    urls = decode(strip_locator_prefix(payload.token.strip()))
    return UrlListResponse(urls=urls, count=len(urls))


@router.post("/tabs/parse", response_model=ParseResponse)
async def parse_tabs(payload: ParseRequest) -> ParseResponse:
    """Auto-detect the pasted format and return its URLs."""
    classified = classify(payload.text)
    urls = resolve(classified)
    log_info(f"parse: detected {classified.kind.value}, {len(urls)} urls")
    return ParseResponse(urls=urls, count=len(urls), kind=classified.kind.value)
