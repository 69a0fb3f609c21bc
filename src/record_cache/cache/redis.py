from __future__ import annotations

import logging
from typing import Any, Optional

from redis import asyncio as redis
from redis.exceptions import RedisError

from ..exceptions import CacheDecodeError, CacheError
from .base import TTL, M, decode, encode, ttl_seconds
from .settings import CacheSettings

logger = logging.getLogger(__name__)


class RedisCacheClient:
    """CacheClient over ``redis.asyncio``.

    Redis errors surface as ``CacheError`` with the operation and key; there
    is no retry here, connection retry/backoff belongs to the redis client.
    """

    def __init__(self, client: redis.Redis, namespace: str = ""):
        self._client = client
        self._ns = (namespace + ":") if namespace else ""

    @classmethod
    def from_url(
        cls,
        url: str,
        *,
        namespace: str = "",
        socket_timeout: float | None = None,
    ) -> "RedisCacheClient":
        client = redis.from_url(url, decode_responses=True, socket_timeout=socket_timeout)
        return cls(client, namespace=namespace)

    @classmethod
    def from_settings(cls, settings: CacheSettings) -> "RedisCacheClient":
        return cls.from_url(
            settings.url,
            namespace=settings.namespace,
            socket_timeout=settings.socket_timeout,
        )

    def _k(self, key: str) -> str:
        return self._ns + key

    async def get(self, key: str) -> Optional[str]:
        try:
            val = await self._client.get(self._k(key))
        except RedisError as e:
            raise CacheError(f"failed to read from cache: {e}", op="get", key=key) from e
        except UnicodeDecodeError as e:
            raise CacheDecodeError(f"cached value is not valid utf-8: {e}", op="get", key=key) from e
        if val is None or val in ("", b""):
            return None
        return val

    async def get_and_decode(self, key: str, model: type[M]) -> Optional[M]:
        val = await self.get(key)
        if val is None:
            return None
        return decode(val, model, key=key)

    async def set_encoded(self, key: str, value: Any, ttl: TTL) -> None:
        data = encode(value, key=key)
        ex = ttl_seconds(ttl)
        try:
            await self._client.set(self._k(key), data, ex=ex)
        except RedisError as e:
            raise CacheError(f"failed to write to cache: {e}", op="set_encoded", key=key) from e

    async def delete(self, key: str) -> None:
        try:
            await self._client.delete(self._k(key))
        except RedisError as e:
            raise CacheError(f"failed to delete from cache: {e}", op="delete", key=key) from e

    async def ping(self) -> bool:
        try:
            return bool(await self._client.ping())
        except RedisError as e:
            logger.warning("Cache ping failed: %s", e)
            return False

    async def aclose(self) -> None:
        await self._client.aclose()
