from __future__ import annotations

from typing import Any, Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError

from ..db.engine import DBEngine
from ..db.models import UserRow
from ..db.repository import Repository
from ..exceptions import StoreError
from .models import Record


class RecordStore(Protocol):
    """Durable storage for records; the source of truth."""

    async def get(self, record_id: int) -> Optional[Record]:
        ...

    async def list(self) -> list[Record]:
        ...

    async def create(self, *, name: str, email: str, password: str) -> Record:
        ...

    async def update(self, record_id: int, changes: dict[str, Any]) -> bool:
        ...

    async def delete(self, record_id: int) -> int:
        ...


class SqlRecordStore:
    """RecordStore over the ``users`` table.

    Each call runs in its own transaction; the session is closed on every
    exit path. SQLAlchemy errors are re-raised as ``StoreError``.
    """

    def __init__(self, engine: DBEngine):
        self._engine = engine

    async def get(self, record_id: int) -> Optional[Record]:
        try:
            async with self._engine.session() as session:
                row = await Repository(session, UserRow).get(record_id)
                return Record.model_validate(row) if row is not None else None
        except SQLAlchemyError as e:
            raise StoreError(f"failed to read record: {e}", op="get", record_id=record_id) from e

    async def list(self) -> list[Record]:
        try:
            async with self._engine.session() as session:
                rows = await Repository(session, UserRow).list()
                return [Record.model_validate(row) for row in rows]
        except SQLAlchemyError as e:
            raise StoreError(f"failed to list records: {e}", op="list") from e

    async def create(self, *, name: str, email: str, password: str) -> Record:
        try:
            async with self._engine.transaction() as session:
                row = await Repository(session, UserRow).create(name=name, email=email, password=password)
                record = Record.model_validate(row)
        except SQLAlchemyError as e:
            raise StoreError(f"failed to create record: {e}", op="create") from e
        return record

    async def update(self, record_id: int, changes: dict[str, Any]) -> bool:
        try:
            async with self._engine.transaction() as session:
                row = await Repository(session, UserRow).update(record_id, **changes)
        except SQLAlchemyError as e:
            raise StoreError(f"failed to update record: {e}", op="update", record_id=record_id) from e
        return row is not None

    async def delete(self, record_id: int) -> int:
        try:
            async with self._engine.transaction() as session:
                deleted = await Repository(session, UserRow).delete(record_id)
        except SQLAlchemyError as e:
            raise StoreError(f"failed to delete record: {e}", op="delete", record_id=record_id) from e
        return deleted
