"""
Root conftest.py for record-cache tests.

Fixtures are organized by category:
- Database fixtures (in-memory SQLite engine, SQL record store)
- Cache fixtures (in-memory client, mocked redis client)
- Service fixtures (RecordService wired to counting fakes)
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Optional
from unittest.mock import AsyncMock, Mock

import pytest
import pytest_asyncio

from record_cache.cache.memory import InMemoryCacheClient
from record_cache.db.models import UserRow
from record_cache.db.testing import ephemeral_db
from record_cache.records.models import Record
from record_cache.records.service import RecordService
from record_cache.records.store import SqlRecordStore


def pytest_configure(config):
    for name, desc in [
        ("cache", "Cache client tests"),
        ("db", "Durable store tests against SQLite"),
    ]:
        config.addinivalue_line("markers", f"{name}: {desc}")


# =============================================================================
# COUNTING FAKES
# =============================================================================


class CountingStore:
    """Wraps a RecordStore and counts calls per method.

    Set ``fail[method]`` to an exception to make that method raise it.
    """

    def __init__(self, inner):
        self.inner = inner
        self.calls: Counter[str] = Counter()
        self.fail: dict[str, BaseException] = {}

    async def _call(self, method: str, /, *args, **kwargs):
        self.calls[method] += 1
        if method in self.fail:
            raise self.fail[method]
        return await getattr(self.inner, method)(*args, **kwargs)

    async def get(self, record_id: int) -> Optional[Record]:
        return await self._call("get", record_id)

    async def list(self) -> list[Record]:
        return await self._call("list")

    async def create(self, *, name: str, email: str, password: str) -> Record:
        return await self._call("create", name=name, email=email, password=password)

    async def update(self, record_id: int, changes: dict[str, Any]) -> bool:
        return await self._call("update", record_id, changes)

    async def delete(self, record_id: int) -> int:
        return await self._call("delete", record_id)


class CountingCache(InMemoryCacheClient):
    """InMemoryCacheClient that counts calls and can be told to fail."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.calls: Counter[str] = Counter()
        self.fail: dict[str, BaseException] = {}

    def _hit(self, name: str) -> None:
        self.calls[name] += 1
        if name in self.fail:
            raise self.fail[name]

    async def get_and_decode(self, key, model):
        self._hit("get_and_decode")
        return await super().get_and_decode(key, model)

    async def set_encoded(self, key, value, ttl):
        self._hit("set_encoded")
        await super().set_encoded(key, value, ttl)

    async def delete(self, key):
        self._hit("delete")
        await super().delete(key)


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest_asyncio.fixture
async def db_engine():
    """In-memory SQLite engine with the users table created."""
    async with ephemeral_db() as engine:
        yield engine


@pytest.fixture
def sql_store(db_engine) -> SqlRecordStore:
    return SqlRecordStore(db_engine)


@pytest.fixture
def counting_store(sql_store) -> CountingStore:
    return CountingStore(sql_store)


@pytest.fixture
def seed_row(db_engine):
    """Insert a row directly, bypassing the service (and its hashing)."""

    async def seed(**data) -> None:
        async with db_engine.transaction() as session:
            session.add(UserRow(**data))

    return seed


# =============================================================================
# CACHE FIXTURES
# =============================================================================


@pytest.fixture
def counting_cache() -> CountingCache:
    return CountingCache()


@pytest.fixture
def mock_redis_client():
    """Mock of redis.asyncio.Redis with the calls the cache client makes."""
    client = Mock()
    client.get = AsyncMock(return_value=None)
    client.set = AsyncMock(return_value=True)
    client.delete = AsyncMock(return_value=1)
    client.ping = AsyncMock(return_value=True)
    client.aclose = AsyncMock()
    return client


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def service(counting_store, counting_cache) -> RecordService:
    return RecordService(counting_store, counting_cache, ttl=60)
