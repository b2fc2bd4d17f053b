"""
tests.test_engine

SQLAlchemy adapter against a real sqlite database (aiosqlite).

Responsibilities:
- Verify explicit BEGIN/COMMIT/ROLLBACK and savepoints take effect on the server.
- Verify row materialisation and wiring from settings.
"""

from __future__ import annotations

import pytest
import pytest_asyncio
from sqlalchemy.exc import OperationalError

from txscope.db.database import TransactionScope
from txscope.db.errors import NoDataError
from txscope.db.query import Query
from txscope.settings import Settings
from txscope.wiring import create_database

COUNT = "SELECT count(*) AS n FROM items"


def _insert(name: str) -> Query:
    return Query(text="INSERT INTO items (name) VALUES (?)", values=(name,))


@pytest_asyncio.fixture
async def handle(tmp_path):
    settings = Settings(env="test", database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    handle = create_database(settings)
    await handle.database.none("CREATE TABLE items (id INTEGER PRIMARY KEY, name TEXT NOT NULL)")
    try:
        yield handle
    finally:
        await handle.dispose()


@pytest.mark.asyncio
async def test_commit_persists_rows(handle) -> None:
    db = handle.database

    async def work(tx):
        assert isinstance(tx, TransactionScope)
        await tx.none(_insert("a"))
        await tx.none(_insert("b"))
        return await tx.one(COUNT)

    assert await db.tx(work) == {"n": 2}
    assert await db.many("SELECT name FROM items ORDER BY id") == [{"name": "a"}, {"name": "b"}]


@pytest.mark.asyncio
async def test_rollback_discards_rows(handle) -> None:
    db = handle.database

    async def work(tx):
        await tx.none(_insert("a"))
        raise ValueError("abort")

    with pytest.raises(ValueError):
        await db.tx(work)

    assert await db.one(COUNT) == {"n": 0}


@pytest.mark.asyncio
async def test_savepoint_rollback_keeps_outer_rows(handle) -> None:
    db = handle.database

    async def inner(sp):
        await sp.none(_insert("inner"))
        raise ValueError("abort inner")

    async def outer(tx):
        await tx.none(_insert("outer"))
        with pytest.raises(ValueError):
            await tx.tx(inner)
        await tx.tx(lambda sp: sp.none(_insert("kept")))

    await db.tx(outer)
    rows = await db.any("SELECT name FROM items ORDER BY id")
    assert [row["name"] for row in rows] == ["outer", "kept"]


@pytest.mark.asyncio
async def test_task_tx_and_array_rows(handle) -> None:
    db = handle.database

    async def work(task):
        await task.tx(lambda tx: tx.none(_insert("x")))
        return await task.one(Query(text="SELECT id, name FROM items", row_mode="array"))

    assert await db.task(work) == (1, "x")
    assert await db.one_or_none("SELECT name FROM items WHERE name = 'missing'") is None
    with pytest.raises(NoDataError):
        await db.many("SELECT name FROM items WHERE name = 'missing'")


@pytest.mark.asyncio
async def test_failed_statement_invalidates_connection_and_pool_recovers(handle) -> None:
    db = handle.database

    with pytest.raises(OperationalError):
        await db.query("SELECT * FROM no_such_table")

    assert await db.one(COUNT) == {"n": 0}
