from __future__ import annotations

import time
from typing import Any, Callable, Optional

from .base import TTL, M, decode, encode, ttl_seconds


class InMemoryCacheClient:
    """Dict-backed CacheClient for tests and local development.

    Values are stored encoded, exactly as Redis would hold them, so decode
    failures behave the same. Expired entries read as misses.
    """

    def __init__(self, namespace: str = "", *, clock: Callable[[], float] = time.monotonic):
        self._store: dict[str, tuple[str, float]] = {}
        self._ns = (namespace + ":") if namespace else ""
        self._clock = clock

    def _k(self, key: str) -> str:
        return self._ns + key

    async def get(self, key: str) -> Optional[str]:
        entry = self._store.get(self._k(key))
        if entry is None:
            return None
        val, expires_at = entry
        if self._clock() >= expires_at:
            self._store.pop(self._k(key), None)
            return None
        return val or None

    async def get_and_decode(self, key: str, model: type[M]) -> Optional[M]:
        val = await self.get(key)
        if val is None:
            return None
        return decode(val, model, key=key)

    async def set_encoded(self, key: str, value: Any, ttl: TTL) -> None:
        data = encode(value, key=key)
        self._store[self._k(key)] = (data, self._clock() + ttl_seconds(ttl))

    async def delete(self, key: str) -> None:
        self._store.pop(self._k(key), None)

    def put_raw(self, key: str, raw: str, ttl: TTL = 300) -> None:
        """Store ``raw`` without encoding, e.g. to plant a corrupt entry."""
        self._store[self._k(key)] = (raw, self._clock() + ttl_seconds(ttl))

    def __contains__(self, key: str) -> bool:
        return self._k(key) in self._store

    def __len__(self) -> int:
        return len(self._store)

    async def aclose(self) -> None:
        self._store.clear()
