from __future__ import annotations

import logging
from datetime import timedelta
from unittest.mock import AsyncMock, Mock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from record_cache.app.bootstrap import Services, build_services
from record_cache.app.settings import AppSettings
from record_cache.cache.redis import RedisCacheClient
from record_cache.cache.settings import CacheSettings
from record_cache.db.settings import DBSettings
from record_cache.records.service import RecordService


@pytest.mark.asyncio
async def test_build_services_wires_explicit_dependencies(caplog):
    caplog.set_level(logging.INFO, logger="record_cache.app.bootstrap")
    services = build_services(
        DBSettings(database_url="sqlite+aiosqlite:///:memory:"),
        CacheSettings(url="redis://localhost:6379/0", ttl_seconds=90),
        AppSettings(name="users-api", version="1.2.3"),
    )
    try:
        assert isinstance(services.cache, RedisCacheClient)
        assert isinstance(services.records, RecordService)
        assert services.records.ttl == timedelta(seconds=90)
        assert await services.db.ping() is True
        assert "users-api 1.2.3 ready (cache ttl=90s)" in caplog.text
    finally:
        await services.aclose()


@pytest.mark.asyncio
async def test_aclose_disposes_db_even_if_cache_close_fails():
    db = Mock()
    db.dispose = AsyncMock()
    cache = Mock()
    cache.aclose = AsyncMock(side_effect=RedisConnectionError("already closed"))
    services = Services(db=db, cache=cache, records=Mock())

    with pytest.raises(RedisConnectionError):
        await services.aclose()

    db.dispose.assert_awaited_once()
