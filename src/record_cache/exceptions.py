from __future__ import annotations

from typing import Any


class RecordCacheError(Exception):
    """Base class for every error raised by record_cache."""


class CacheError(RecordCacheError):
    """The cache store failed or rejected a call."""

    def __init__(self, message: str, *, op: str, key: str | None = None):
        super().__init__(f"[{op}] {message}" + (f" (key={key!r})" if key is not None else ""))
        self.op = op
        self.key = key


class CacheDecodeError(CacheError):
    """A cached value was fetched but could not be decoded."""


class CacheEncodeError(CacheError):
    """A value could not be encoded; nothing was written."""


class StoreError(RecordCacheError):
    """The durable store failed or rejected a call."""

    def __init__(self, message: str, *, op: str, record_id: Any = None):
        suffix = f" (id={record_id})" if record_id is not None else ""
        super().__init__(f"[{op}] {message}{suffix}")
        self.op = op
        self.record_id = record_id


class RecordServiceError(RecordCacheError):
    """Raised by RecordService; the underlying failure is chained as __cause__."""

    def __init__(self, message: str, *, op: str, record_id: Any = None):
        suffix = f" (id={record_id})" if record_id is not None else ""
        super().__init__(f"[in {op}] {message}{suffix}")
        self.op = op
        self.record_id = record_id


class InvalidRecordError(RecordCacheError, ValueError):
    """The caller passed an identifier or record the service cannot accept."""


__all__ = [
    "RecordCacheError",
    "CacheError",
    "CacheDecodeError",
    "CacheEncodeError",
    "StoreError",
    "RecordServiceError",
    "InvalidRecordError",
]
