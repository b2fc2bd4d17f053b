"""
tests.conftest

Fakes for the pool, connection and logger collaborators.

Responsibilities:
- Record every statement text issued on a connection (in order).
- Record every release and the error it carried.
- Capture log records emitted by the executor.
"""

from __future__ import annotations

from typing import Any

import pytest

from txscope.db.database import Database
from txscope.db.pool import DatabasePool
from txscope.db.query import Query, QueryResult

ERROR_TEXT = "error"
ERROR_MESSAGE = "test"


class RecordingLogger:
    def __init__(self) -> None:
        self.records: list[tuple[str, str, dict[str, Any]]] = []

    def debug(self, event: str, **fields: Any) -> None:
        self.records.append(("debug", event, fields))

    def error(self, event: str, **fields: Any) -> None:
        self.records.append(("error", event, fields))

    def last(self, level: str) -> tuple[str, dict[str, Any]]:
        for lvl, event, fields in reversed(self.records):
            if lvl == level:
                return event, fields
        raise AssertionError(f"no {level} record")


class FakeConnection:
    def __init__(self, *, rows: int = 0, fail_on: set[str] | None = None) -> None:
        self.rows = rows
        self.fail_on = {ERROR_TEXT} | (fail_on or set())
        self.history: list[str] = []
        self.releases: list[BaseException | None] = []

    async def query(self, query: Query) -> QueryResult:
        self.history.append(query.text)
        if query.text in self.fail_on:
            raise RuntimeError(ERROR_MESSAGE)
        return QueryResult(rows=[{"value": i} for i in range(self.rows)])

    def release(self, error: BaseException | None = None) -> None:
        self.releases.append(error)


class FakePool:
    def __init__(self, connection: FakeConnection) -> None:
        self.connection = connection
        self.connects = 0

    async def connect(self) -> FakeConnection:
        self.connects += 1
        return self.connection


@pytest.fixture
def logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def make_db(logger: RecordingLogger):
    def factory(*, rows: int = 0, fail_on: set[str] | None = None, **kwargs: Any):
        connection = FakeConnection(rows=rows, fail_on=fail_on)
        pool = FakePool(connection)
        kwargs.setdefault("logger", logger)
        db = Database(pool=DatabasePool(pool=pool), **kwargs)
        return db, connection, pool

    return factory


@pytest.fixture
def fake_query() -> Query:
    return Query(text="select 1", values=(1, 2, 3))
