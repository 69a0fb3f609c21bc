from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from .engine import DBEngine, create_schema
from .settings import DBSettings


def make_sqlite_memory_engine(*, echo: bool = False) -> DBEngine:
    settings = DBSettings(database_url="sqlite+aiosqlite:///:memory:", echo=echo)
    return DBEngine(settings)


@asynccontextmanager
async def ephemeral_db() -> AsyncIterator[DBEngine]:
    engine = make_sqlite_memory_engine()
    await create_schema(engine)
    try:
        yield engine
    finally:
        await engine.dispose()
