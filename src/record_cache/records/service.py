from __future__ import annotations

import asyncio
import logging
from datetime import timedelta
from typing import Optional

from ..cache.base import TTL, CacheClient, ttl_seconds
from ..exceptions import (
    CacheError,
    InvalidRecordError,
    RecordServiceError,
    StoreError,
)
from ..security.passwords import hash_password
from .models import MAX_ID, Record, RecordPatch
from .store import RecordStore


def cache_key(record_id: int) -> str:
    return str(record_id)


def check_id(record_id: int) -> int:
    if isinstance(record_id, bool) or not isinstance(record_id, int):
        raise InvalidRecordError(f"record id must be an int, got {type(record_id).__name__}")
    if not 0 < record_id <= MAX_ID:
        raise InvalidRecordError(f"record id out of range: {record_id}")
    return record_id


class RecordService:
    """Cache-aside reads and cache-coherent writes for Records.

    Storage is the source of truth; the cache only holds copies of rows.

    Cache failures are never masked. A cache error on the read path fails the
    read instead of falling through to storage, and a failed cache write after
    a successful durable read or write fails the call too. The durable change,
    once committed, stands either way; the entry then ages out after ``ttl``.

    Not-found is ``None``. Cancellation and ``asyncio.timeout`` deadlines pass
    through untouched.
    """

    def __init__(
        self,
        store: RecordStore,
        cache: CacheClient,
        *,
        ttl: TTL = timedelta(minutes=5),
        logger: Optional[logging.Logger] = None,
    ):
        ttl_seconds(ttl)  # reject non-positive ttls up front
        self._store = store
        self._cache = cache
        self._ttl = ttl
        self._log = logger or logging.getLogger(__name__)

    @property
    def ttl(self) -> TTL:
        return self._ttl

    def _fail(self, op: str, record_id: Optional[int], message: str, exc: Exception) -> RecordServiceError:
        self._log.error("%s: %s", message, exc, extra={"op": op, "record_id": record_id})
        return RecordServiceError(f"{message}: {exc}", op=op, record_id=record_id)

    async def _cache_record(self, op: str, record: Record) -> None:
        self._log.debug("Setting record in cache", extra={"op": op, "record_id": record.id})
        try:
            await self._cache.set_encoded(cache_key(record.id), record, self._ttl)
        except CacheError as e:
            raise self._fail(op, record.id, "failed to write record to cache", e) from e

    async def read_record(self, record_id: int) -> Optional[Record]:
        """Return the record with ``record_id``, or None if storage has no such row."""
        op = "RecordService.read_record"
        check_id(record_id)
        self._log.debug("Reading record", extra={"op": op, "record_id": record_id})

        try:
            cached = await self._cache.get_and_decode(cache_key(record_id), Record)
        except CacheError as e:
            raise self._fail(op, record_id, "failed to read record from cache", e) from e

        if cached is not None:
            self._log.debug("Record found in cache", extra={"op": op, "record_id": record_id})
            return cached

        self._log.debug("Record not found in cache, reading from database", extra={"op": op, "record_id": record_id})
        try:
            record = await self._store.get(record_id)
        except StoreError as e:
            raise self._fail(op, record_id, "failed to read record", e) from e

        if record is None:
            self._log.debug("Record not found in database", extra={"op": op, "record_id": record_id})
            return None

        await self._cache_record(op, record)
        return record

    async def create_record(self, record: Record) -> Record:
        """Insert ``record`` and cache the stored result under its new id."""
        op = "RecordService.create_record"
        if record.id:
            raise InvalidRecordError(f"cannot create a record that already has id {record.id}")

        # hashing is CPU bound; keep it off the event loop
        password = await asyncio.to_thread(hash_password, record.password)

        self._log.debug("Creating record", extra={"op": op})
        try:
            created = await self._store.create(name=record.name, email=record.email, password=password)
        except StoreError as e:
            raise self._fail(op, None, "failed to create record", e) from e

        await self._cache_record(op, created)
        return created

    async def update_record(self, record_id: int, patch: RecordPatch) -> Optional[Record]:
        """Apply ``patch``, re-read the row and overwrite the cache entry with it.

        Returns None when there is no row with ``record_id``.
        """
        op = "RecordService.update_record"
        check_id(record_id)
        changes = patch.changes()
        if "password" in changes:
            changes["password"] = await asyncio.to_thread(hash_password, changes["password"])

        self._log.debug("Updating record", extra={"op": op, "record_id": record_id})
        try:
            found = await self._store.update(record_id, changes)
            if not found:
                self._log.debug("Record not found in database", extra={"op": op, "record_id": record_id})
                return None
            # cache what storage computed, not the merge we asked for
            record = await self._store.get(record_id)
        except StoreError as e:
            raise self._fail(op, record_id, "failed to update record", e) from e

        if record is None:
            # deleted between the write and the re-read
            return None

        await self._cache_record(op, record)
        return record

    async def delete_record(self, record_id: int) -> None:
        """Delete the row, then its cache entry. Deleting a missing row is not an error."""
        op = "RecordService.delete_record"
        check_id(record_id)

        self._log.debug("Deleting record", extra={"op": op, "record_id": record_id})
        try:
            await self._store.delete(record_id)
        except StoreError as e:
            # the entry still mirrors a row that still exists
            raise self._fail(op, record_id, "failed to delete record", e) from e

        try:
            await self._cache.delete(cache_key(record_id))
        except CacheError as e:
            raise self._fail(op, record_id, "failed to delete record from cache", e) from e

    async def list_records(self) -> list[Record]:
        """All records, straight from storage. The cache is not consulted."""
        op = "RecordService.list_records"
        self._log.debug("Listing records", extra={"op": op})
        try:
            return await self._store.list()
        except StoreError as e:
            raise self._fail(op, None, "failed to list records", e) from e
