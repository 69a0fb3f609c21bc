from . import app, cache, db, records

from .cache import CacheClient, InMemoryCacheClient, RedisCacheClient
from .exceptions import (
    CacheDecodeError,
    CacheEncodeError,
    CacheError,
    InvalidRecordError,
    RecordCacheError,
    RecordServiceError,
    StoreError,
)
from .records import Record, RecordPatch, RecordService, SqlRecordStore

__all__ = [
    # Modules
    "app",
    "cache",
    "db",
    "records",
    # Cache
    "CacheClient",
    "InMemoryCacheClient",
    "RedisCacheClient",
    # Records
    "Record",
    "RecordPatch",
    "RecordService",
    "SqlRecordStore",
    # Errors
    "RecordCacheError",
    "CacheError",
    "CacheDecodeError",
    "CacheEncodeError",
    "StoreError",
    "RecordServiceError",
    "InvalidRecordError",
]
