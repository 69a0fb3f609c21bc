"""
Tests for SqlRecordStore against in-memory SQLite.
"""

from __future__ import annotations

import pytest

from record_cache.db.engine import drop_schema
from record_cache.exceptions import StoreError
from record_cache.records.models import Record


pytestmark = pytest.mark.db


class TestSqlRecordStore:
    """CRUD against the users table."""

    @pytest.mark.asyncio
    async def test_create_assigns_id(self, sql_store):
        first = await sql_store.create(name="Ann", email="a@x.com", password="h1")
        second = await sql_store.create(name="Ben", email="b@x.com", password="h2")

        assert first.id > 0
        assert second.id > first.id
        assert first == Record(id=first.id, name="Ann", email="a@x.com", password="h1")

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self, sql_store):
        assert await sql_store.get(1) is None

    @pytest.mark.asyncio
    async def test_update_applies_only_given_fields(self, sql_store):
        created = await sql_store.create(name="Ann", email="a@x.com", password="h1")

        assert await sql_store.update(created.id, {"email": "ann@x.com"}) is True

        reread = await sql_store.get(created.id)
        assert reread.name == "Ann"
        assert reread.email == "ann@x.com"

    @pytest.mark.asyncio
    async def test_update_missing_returns_false(self, sql_store):
        assert await sql_store.update(99, {"name": "x"}) is False

    @pytest.mark.asyncio
    async def test_delete_reports_rowcount(self, sql_store):
        created = await sql_store.create(name="Ann", email="a@x.com", password="h1")

        assert await sql_store.delete(created.id) == 1
        assert await sql_store.delete(created.id) == 0
        assert await sql_store.get(created.id) is None

    @pytest.mark.asyncio
    async def test_list_is_ordered_by_id(self, sql_store, seed_row):
        await seed_row(id=9, name="Cy", email="c@x.com", password="h")
        await seed_row(id=3, name="Ann", email="a@x.com", password="h")

        records = await sql_store.list()

        assert [r.id for r in records] == [3, 9]

    @pytest.mark.asyncio
    async def test_sqlalchemy_errors_become_store_errors(self, db_engine, sql_store):
        await drop_schema(db_engine)

        with pytest.raises(StoreError) as exc_info:
            await sql_store.get(1)
        assert exc_info.value.op == "get"
        assert exc_info.value.record_id == 1

        with pytest.raises(StoreError):
            await sql_store.list()

        with pytest.raises(StoreError):
            await sql_store.create(name="Ann", email="a@x.com", password="h")

    @pytest.mark.asyncio
    async def test_ping(self, db_engine):
        assert await db_engine.ping() is True
