"""
txscope.db.pool

Pool acquisition/release wrapper.

Responsibilities:
- Acquire exactly one connection per `use` call.
- Release it exactly once on every exit path, passing the error on failure so the
  underlying pool can discard the connection.
"""

from __future__ import annotations

import inspect
from typing import Any

from txscope.db.query import Continuation, PoolClient


async def resolve(value: Any) -> Any:
    # Continuations may be sync or async; await only when needed.
    if inspect.isawaitable(value):
        return await value
    return value


class DatabasePool:
    def __init__(self, *, pool: PoolClient) -> None:
        self._pool = pool

    @property
    def pool(self) -> PoolClient:
        return self._pool

    async def use(self, continuation: Continuation[Any]) -> Any:
        client = await self._pool.connect()
        try:
            result = await resolve(continuation(client))
        except BaseException as err:
            # Cancellation counts as failure too: the connection state is unknown.
            await resolve(client.release(err))
            raise
        await resolve(client.release())
        return result


# --- Module Notes -----------------------------------------------------------
# No retry/backoff here: sizing, health checks and reconnection belong to the pool.
