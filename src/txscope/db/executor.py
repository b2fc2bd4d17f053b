"""
txscope.db.executor

Instrumented query execution.

Responsibilities:
- Time each query with a monotonic clock (client / query / total durations).
- Emit one structured log record per query: `sql_query` (debug) or `sql_error` (error).
- Re-raise driver failures unchanged after logging them.
"""

from __future__ import annotations

import time
from typing import Any

from txscope.db.errors import QueryExecutionError
from txscope.db.pool import DatabasePool
from txscope.db.query import Connection, Query, QueryLogger, SupportsRows

QUERY_EVENT = "sql_query"
ERROR_EVENT = "sql_error"


def now_ms() -> float:
    return time.perf_counter() * 1000.0


def _log_failure(
    logger: QueryLogger, query: Query, duration: dict[str, float], error: BaseException
) -> None:
    logger.error(
        ERROR_EVENT,
        query=query.to_log(),
        duration=duration,
        error=QueryExecutionError.wrap(error),
        exc_info=error,
    )


async def execute_on_connection(
    connection: Connection, query: Query, *, logger: QueryLogger
) -> SupportsRows:
    """Run `query` on an already-held connection; only the query duration is reported."""

    duration = {"query": 0.0}
    started = now_ms()
    try:
        result = await connection.query(query)
    except Exception as err:
        duration["query"] = now_ms() - started
        _log_failure(logger, query, duration, err)
        raise
    duration["query"] = now_ms() - started
    logger.debug(QUERY_EVENT, query=query.to_log(), duration=duration)
    return result


async def execute_with_pool(
    pool: DatabasePool, query: Query, *, logger: QueryLogger
) -> SupportsRows:
    """Acquire a connection, run `query`, release; reports client/query/total durations."""

    duration = {"query": 0.0, "client": 0.0, "total": 0.0}
    total_started = now_ms()

    async def run(connection: Connection) -> Any:
        duration["client"] = now_ms() - total_started
        query_started = now_ms()
        result = await connection.query(query)
        duration["query"] = now_ms() - query_started
        return result

    try:
        result = await pool.use(run)
    except Exception as err:
        duration["total"] = now_ms() - total_started
        _log_failure(logger, query, duration, err)
        raise
    duration["total"] = now_ms() - total_started
    logger.debug(QUERY_EVENT, query=query.to_log(), duration=duration)
    return result


# --- Module Notes -----------------------------------------------------------
# Durations are milliseconds as floats. On failure the record carries whatever was
# measured before the error (e.g. client time but no query time if connect succeeded
# and the query raised).
