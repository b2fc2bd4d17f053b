"""
txscope.db.engine

SQLAlchemy async engine adapter for the pool/connection contract.

Responsibilities:
- Create the async engine from settings.
- Check out `AsyncConnection`s in AUTOCOMMIT mode so explicit BEGIN/SAVEPOINT
  statements issued by the orchestrator are the only transaction control.
- Run query units as driver SQL and materialise their rows.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine

from txscope.db.query import Query, QueryResult
from txscope.settings import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    # pool_pre_ping helps detect stale connections in long-lived processes.
    return create_async_engine(
        settings.database_url,
        pool_pre_ping=settings.pool_pre_ping,
    )


class EngineConnection:
    def __init__(self, connection: AsyncConnection) -> None:
        self._connection = connection

    @property
    def raw(self) -> AsyncConnection:
        return self._connection

    async def query(self, query: Query) -> QueryResult:
        # `name` and `types` are node-postgres options with no SQLAlchemy counterpart.
        parameters = tuple(query.values) if query.values is not None else None
        result = await self._connection.exec_driver_sql(query.text, parameters)
        if not result.returns_rows:
            return QueryResult(rows=[], rowcount=result.rowcount)
        if query.row_mode == "array":
            rows: list[Any] = [tuple(row) for row in result]
        else:
            rows = [dict(row._mapping) for row in result]
        return QueryResult(rows=rows, rowcount=len(rows))

    async def release(self, error: BaseException | None = None) -> None:
        if error is not None:
            # Connection state is unknown after a failure; don't hand it to the next caller.
            await self._connection.invalidate(exception=error)
        await self._connection.close()


class EnginePool:
    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    async def connect(self) -> EngineConnection:
        connection = await self._engine.connect()
        await connection.execution_options(isolation_level="AUTOCOMMIT")
        return EngineConnection(connection)


# --- Module Notes -----------------------------------------------------------
# Parameters are passed positionally in the driver's own paramstyle (`?` for sqlite,
# `$1` for asyncpg); query text is never rewritten.
