"""
txscope.db.database

Role state machine: root database, transaction scope, task scope.

Responsibilities:
- Expose the same queryable capability (query + shaping + tx + task) in every role.
- Decide what a nested `tx`/`task` means for each role (no-op, BEGIN, or SAVEPOINT).
- Acquire and release one pooled connection per root-level call; scopes reuse it.
- Carry caller-supplied scope factories through arbitrary nesting depth.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol

from txscope.db.executor import execute_on_connection, execute_with_pool
from txscope.db.pool import DatabasePool, resolve
from txscope.db.query import (
    Connection,
    Continuation,
    Query,
    QueryLogger,
    SupportsRows,
    as_query,
)
from txscope.db.savepoint import create_savepoint_name
from txscope.db.shaping import ResultShapingMixin
from txscope.db.transaction import TransactionStatements, run_transaction
from txscope.observability.logging import get_logger

SavepointNames = Callable[[], str]


class TransactionScopeFactory(Protocol):
    def __call__(
        self,
        *,
        connection: Connection,
        logger: QueryLogger,
        savepoint_names: SavepointNames,
    ) -> TransactionScope: ...


class TaskScopeFactory(Protocol):
    def __call__(
        self,
        *,
        connection: Connection,
        logger: QueryLogger,
        transaction_factory: TransactionScopeFactory,
        savepoint_names: SavepointNames,
    ) -> TaskScope: ...


class _ConnectionScope(ResultShapingMixin):
    # Shared by both scope types: the connection is already held, so query runs directly.

    def __init__(
        self,
        *,
        connection: Connection,
        logger: QueryLogger,
        savepoint_names: SavepointNames,
    ) -> None:
        self._connection = connection
        self._logger = logger
        self._savepoint_names = savepoint_names

    @property
    def connection(self) -> Connection:
        return self._connection

    @property
    def logger(self) -> QueryLogger:
        return self._logger

    async def query(self, query: Query | str) -> SupportsRows:
        return await execute_on_connection(self._connection, as_query(query), logger=self._logger)


class TransactionScope(_ConnectionScope):
    """Inside an open transaction (or savepoint) on a held connection."""

    async def tx(self, continuation: Continuation[Any]) -> Any:
        # Nested transaction: a fresh savepoint on the same connection and the same scope.
        name = self._savepoint_names()
        return await run_transaction(self, TransactionStatements.savepoint(name), continuation)

    async def task(self, continuation: Continuation[Any]) -> Any:
        # Already holding a connection; a task here adds nothing.
        return await resolve(continuation(self))


class TaskScope(_ConnectionScope):
    """Holding a connection across several calls, without a transaction."""

    def __init__(
        self,
        *,
        connection: Connection,
        logger: QueryLogger,
        transaction_factory: TransactionScopeFactory,
        savepoint_names: SavepointNames,
    ) -> None:
        super().__init__(connection=connection, logger=logger, savepoint_names=savepoint_names)
        self._transaction_factory = transaction_factory

    @property
    def transaction_factory(self) -> TransactionScopeFactory:
        return self._transaction_factory

    async def tx(self, continuation: Continuation[Any]) -> Any:
        scope = self._transaction_factory(
            connection=self._connection,
            logger=self._logger,
            savepoint_names=self._savepoint_names,
        )
        return await run_transaction(scope, TransactionStatements.transaction(), continuation)

    async def task(self, continuation: Continuation[Any]) -> Any:
        return await resolve(continuation(self))


class Database(ResultShapingMixin):
    """
    Root-level queryable over a connection pool.

    Every `query`/`tx`/`task` call here acquires one connection and releases it once the
    call (including everything nested under it) completes or fails.

    `transaction_factory`/`task_factory` default to the built-in scope classes; pass
    subclasses (or any callables with the same keyword signature) to add capabilities
    to the scopes handed to continuations.
    """

    def __init__(
        self,
        *,
        pool: DatabasePool,
        logger: QueryLogger | None = None,
        transaction_factory: TransactionScopeFactory = TransactionScope,
        task_factory: TaskScopeFactory = TaskScope,
        savepoint_names: SavepointNames = create_savepoint_name,
    ) -> None:
        self._pool = pool
        self._logger = logger if logger is not None else get_logger("txscope.db")
        self._transaction_factory = transaction_factory
        self._task_factory = task_factory
        self._savepoint_names = savepoint_names

    @property
    def pool(self) -> DatabasePool:
        return self._pool

    @property
    def logger(self) -> QueryLogger:
        return self._logger

    async def query(self, query: Query | str) -> SupportsRows:
        return await execute_with_pool(self._pool, as_query(query), logger=self._logger)

    async def tx(self, continuation: Continuation[Any]) -> Any:
        async def in_transaction(connection: Connection) -> Any:
            scope = self._transaction_factory(
                connection=connection,
                logger=self._logger,
                savepoint_names=self._savepoint_names,
            )
            return await run_transaction(scope, TransactionStatements.transaction(), continuation)

        return await self._pool.use(in_transaction)

    async def task(self, continuation: Continuation[Any]) -> Any:
        async def in_task(connection: Connection) -> Any:
            scope = self._task_factory(
                connection=connection,
                logger=self._logger,
                transaction_factory=self._transaction_factory,
                savepoint_names=self._savepoint_names,
            )
            return await resolve(continuation(scope))

        return await self._pool.use(in_task)


# --- Module Notes -----------------------------------------------------------
# Role table for nested calls:
#   Database:         tx -> acquire + BEGIN/COMMIT     task -> acquire, no statements
#   TransactionScope: tx -> SAVEPOINT/RELEASE on self  task -> continuation(self)
#   TaskScope:        tx -> BEGIN/COMMIT, new scope    task -> continuation(self)
