from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..cache.redis import RedisCacheClient
from ..cache.settings import CacheSettings, get_cache_settings
from ..db.engine import DBEngine
from ..db.settings import DBSettings, get_db_settings
from ..records.service import RecordService
from ..records.store import SqlRecordStore
from .settings import AppSettings, get_app_settings

logger = logging.getLogger(__name__)


@dataclass
class Services:
    """Process-wide handles, built once at startup and passed down explicitly."""

    db: DBEngine
    cache: RedisCacheClient
    records: RecordService

    async def aclose(self) -> None:
        try:
            logger.debug("Closing cache connection")
            await self.cache.aclose()
        finally:
            logger.debug("Closing database connection")
            await self.db.dispose()


def build_services(
    db_settings: Optional[DBSettings] = None,
    cache_settings: Optional[CacheSettings] = None,
    app_settings: Optional[AppSettings] = None,
) -> Services:
    app_settings = app_settings or get_app_settings()
    db_settings = db_settings or get_db_settings()
    cache_settings = cache_settings or get_cache_settings()

    db = DBEngine(db_settings)
    cache = RedisCacheClient.from_settings(cache_settings)
    records = RecordService(SqlRecordStore(db), cache, ttl=cache_settings.ttl)
    logger.info(
        "%s %s ready (cache ttl=%ss)",
        app_settings.name,
        app_settings.version,
        cache_settings.ttl_seconds,
    )
    return Services(db=db, cache=cache, records=records)


async def check_connections(services: Services) -> dict[str, bool]:
    """Ping both stores; used by the `check` command."""
    return {
        "database": await services.db.ping(),
        "cache": await services.cache.ping(),
    }
