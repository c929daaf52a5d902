# tabstate/repositories/history_repository.py
# Bounded, newest-first log of saved tab exports

from __future__ import annotations

import asyncio
import json
import logging
import time
from typing import Callable, List, Sequence
from urllib.parse import urlsplit

from pydantic import ValidationError

from tabstate.constants import HISTORY_CAPACITY, HISTORY_KEY, PREVIEW_HOSTS, PREVIEW_SEPARATOR
from tabstate.middleware.error_handler import NotFoundError
from tabstate.schemas.history import HistoryEntry
from tabstate.services.codec import decode, encode
from tabstate.utils.kv import KeyValueStore

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


def hostname_of(url: str) -> str:
    """ASCII (punycode) hostname of url, or "" when it cannot be extracted."""
    try:
        host = urlsplit(url).hostname or ""
        if host.isascii():
            return host
        return host.encode("idna").decode("ascii")
    except (ValueError, UnicodeError):
        return ""


def build_preview(urls: Sequence[str], limit: int = PREVIEW_HOSTS) -> str:
    return PREVIEW_SEPARATOR.join(hostname_of(u) for u in urls[:limit])


class HistoryRepository:
    """
    History of saved exports kept under a single storage key.

    Every mutation rewrites the whole log. Saves through one repository are
    serialised with a lock; separate processes sharing the key are
    last-writer-wins.
    """

    def __init__(
        self,
        store: KeyValueStore,
        key: str = HISTORY_KEY,
        capacity: int = HISTORY_CAPACITY,
        clock: Callable[[], int] = _now_ms,
    ):
        self.store = store
        self.key = key
        self.capacity = capacity
        self._clock = clock
        self._lock = asyncio.Lock()

    async def save(self, urls: Sequence[str]) -> HistoryEntry:
        """Encode urls, insert the entry at the front and evict past capacity."""
        urls = list(urls)
        token = encode(urls)
        preview = build_preview(urls)

        async with self._lock:
            history = await self.list()
            now = self._clock()
            entry_id = now
            # ids must stay unique when two saves share a millisecond
            if history and entry_id <= history[0].id:
                entry_id = history[0].id + 1
            entry = HistoryEntry(
                id=entry_id,
                timestamp=now,
                token=token,
                tab_count=len(urls),
                preview=preview,
            )
            history.insert(0, entry)
            evicted = history[self.capacity:]
            history = history[:self.capacity]
            await self._write(history)

        for old in evicted:
            logger.debug(f"History entry {old.id} evicted")
        logger.info(f"Saved history entry id={entry.id} tabs={entry.tab_count}")
        return entry

    async def list(self) -> List[HistoryEntry]:
        """Return the persisted log, newest first."""
        raw = await self.store.get(self.key)
        if not raw:
            return []
        try:
            items = json.loads(raw)
        except ValueError as e:
            logger.error(f"Unreadable history under key {self.key}, treating as empty: {e}")
            return []
        if not isinstance(items, list):
            logger.error(f"History under key {self.key} is not a JSON array, treating as empty")
            return []

        history = []
        for position, item in enumerate(items):
            try:
                history.append(HistoryEntry.model_validate(item))
            except ValidationError as e:
                # drop only the broken item; the rest of the log survives the next save
                logger.warning(f"Skipping invalid history item at position {position}: {e}")
        return history

    async def get(self, entry_id: int) -> HistoryEntry:
        for entry in await self.list():
            if entry.id == entry_id:
                return entry
        raise NotFoundError(f"History entry {entry_id} not found", details={"id": entry_id})

    async def restore(self, entry_id: int) -> List[str]:
        """Decode the URLs saved under entry_id."""
        entry = await self.get(entry_id)
        return decode(entry.token)

    async def _write(self, history: List[HistoryEntry]) -> None:
        payload = [e.model_dump(by_alias=True) for e in history]
        await self.store.set(self.key, json.dumps(payload, ensure_ascii=False))
