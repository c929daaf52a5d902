# tabstate/utils/kv.py
# Durable key-value get/set pair backing the history log

from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import redis.asyncio as aioredis

from tabstate.config import Settings

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """Whole-value storage: every write replaces the value under the key."""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        ...

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        return None


class MemoryKeyValueStore(KeyValueStore):
    def __init__(self):
        self._data: Dict[str, str] = {}

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value


class FileKeyValueStore(KeyValueStore):
    """All keys live in one JSON document; writes go through a temp file + replace."""

    def __init__(self, path: str):
        self.path = path

    async def get(self, key: str) -> Optional[str]:
        data = await asyncio.to_thread(self._read)
        return data.get(key)

    async def set(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._write_key, key, value)

    async def ping(self) -> bool:
        await asyncio.to_thread(self._read)
        return True

    def _read(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not hold a JSON object")
        return data

    def _write_key(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".tabstate-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise
        logger.debug(f"Stored key {key} in {self.path}")


class RedisKeyValueStore(KeyValueStore):
    """Redis-backed store; the client is created lazily on first use."""

    def __init__(self, url: str = "", client: Any = None):
        self.url = url
        self._client = client

    async def _get_client(self) -> Any:
        if self._client is None:
            self._client = aioredis.from_url(self.url, decode_responses=True)
        return self._client

    async def get(self, key: str) -> Optional[str]:
        client = await self._get_client()
        value = await client.get(key)
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    async def set(self, key: str, value: str) -> None:
        client = await self._get_client()
        await client.set(key, value)

    async def ping(self) -> bool:
        client = await self._get_client()
        return bool(await client.ping())

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None


def build_kv_store(settings: Settings) -> KeyValueStore:
    """Pick the backend named by STORAGE_BACKEND."""
    if settings.STORAGE_BACKEND == "redis":
        return RedisKeyValueStore(settings.REDIS_URL)
    if settings.STORAGE_BACKEND == "file":
        return FileKeyValueStore(settings.HISTORY_FILE)
    return MemoryKeyValueStore()
