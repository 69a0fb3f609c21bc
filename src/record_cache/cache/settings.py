from __future__ import annotations

from datetime import timedelta
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CacheSettings(BaseSettings):
    """
    Cache settings.

    Env support:
      CACHE_URL, CACHE_TTL_SECONDS, CACHE_NAMESPACE, CACHE_SOCKET_TIMEOUT
    """

    url: str = Field(default="redis://localhost:6379/0")
    ttl_seconds: int = Field(default=300, gt=0)
    namespace: str = Field(default="")
    socket_timeout: Optional[float] = Field(default=None)  # seconds; None -> redis default

    model_config = SettingsConfigDict(
        env_prefix="CACHE_",
        env_file=".env",
        extra="ignore",
    )

    @property
    def ttl(self) -> timedelta:
        return timedelta(seconds=self.ttl_seconds)


@lru_cache
def get_cache_settings(**kwargs) -> CacheSettings:
    filtered = {k: v for k, v in kwargs.items() if v is not None}
    return CacheSettings(**filtered)
