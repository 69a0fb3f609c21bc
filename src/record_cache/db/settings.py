from __future__ import annotations

import os
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Plain URL schemes mapped onto the async drivers the engine needs.
ASYNC_SCHEMES = {
    "postgres": "postgresql+asyncpg",
    "postgresql": "postgresql+asyncpg",
    "sqlite": "sqlite+aiosqlite",
}


def to_async_url(url: str) -> str:
    scheme, sep, rest = url.partition("://")
    if not sep:
        raise ValueError(f"not a database url: {url!r}")
    return f"{ASYNC_SCHEMES.get(scheme, scheme)}://{rest}"


class DBSettings(BaseSettings):
    """
    Connection settings for the users database.

    Read from DB_DATABASE_URL, DB_ECHO, DB_POOL_SIZE, DB_MAX_OVERFLOW,
    DB_POOL_RECYCLE and DB_STATEMENT_CACHE_SIZE. A bare DATABASE_URL is used
    when DB_DATABASE_URL is unset.
    """

    database_url: Optional[str] = Field(default=None)
    echo: bool = Field(default=False)
    pool_size: int = Field(default=10, gt=0)
    max_overflow: int = Field(default=20, ge=0)
    pool_recycle: Optional[int] = Field(default=None)  # seconds; None -> 1800
    statement_cache_size: int = Field(default=1000, ge=0)  # asyncpg only

    model_config = SettingsConfigDict(
        env_prefix="DB_",
        env_file=".env",
        extra="ignore",
    )

    @property
    def resolved_database_url(self) -> str:
        url = self.database_url or os.getenv("DATABASE_URL")
        if not url:
            raise ValueError(
                "DATABASE_URL or DB_DATABASE_URL must be set for database connectivity"
            )
        return to_async_url(url)


@lru_cache
def get_db_settings(**kwargs) -> DBSettings:
    return DBSettings(**{k: v for k, v in kwargs.items() if v is not None})
