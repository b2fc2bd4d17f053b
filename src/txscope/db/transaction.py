"""
txscope.db.transaction

Transaction/savepoint orchestrator.

Responsibilities:
- Describe open/close/abort statement triples for transactions and savepoints.
- Run a continuation between an open statement and exactly one close-or-abort.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from txscope.db.pool import resolve
from txscope.db.query import Continuation, Query


class _Queryable(Protocol):
    async def query(self, query: Query | str) -> Any: ...


@dataclass(frozen=True, slots=True)
class TransactionStatements:
    open: Query
    close: Query
    abort: Query

    @classmethod
    def transaction(cls) -> TransactionStatements:
        return cls(
            open=Query(text="BEGIN"),
            close=Query(text="COMMIT"),
            abort=Query(text="ROLLBACK"),
        )

    @classmethod
    def savepoint(cls, name: str) -> TransactionStatements:
        # `name` comes from the savepoint generator and is a valid unquoted identifier.
        return cls(
            open=Query(text=f"SAVEPOINT {name}"),
            close=Query(text=f"RELEASE SAVEPOINT {name}"),
            abort=Query(text=f"ROLLBACK TO SAVEPOINT {name}"),
        )


async def run_transaction(
    scope: _Queryable,
    statements: TransactionStatements,
    continuation: Continuation[Any],
) -> Any:
    """
    Issue `open`, run `continuation(scope)`, then `close` on success or `abort` on failure.

    If the abort statement itself fails, its error propagates and the continuation's
    error is only reachable through `__context__`. Callers that need the original should
    inspect it there.
    """

    await scope.query(statements.open)
    try:
        result = await resolve(continuation(scope))
    except BaseException:
        await scope.query(statements.abort)
        raise
    await scope.query(statements.close)
    return result


# --- Module Notes -----------------------------------------------------------
# A failing `close` (e.g. COMMIT rejected by a deferred constraint) is not followed by
# `abort`; its error propagates as is and the pool wrapper releases with it.
