"""
txscope.db.query

Query unit, query result and collaborator contracts.

Responsibilities:
- Define the opaque `Query` unit passed through to the driver unchanged.
- Define the minimal result shape (`rows`) the shaping layer relies on.
- Describe the pool, connection and logger collaborators as structural protocols.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Query:
    """
    A statement and its parameters.

    Nothing in this package parses or validates `text`; the connection receives the
    object exactly as the caller built it.
    """

    text: str
    values: Sequence[Any] | None = None
    name: str | None = None
    row_mode: str | None = None
    types: Mapping[str, Any] | None = None

    def to_log(self) -> dict[str, Any]:
        # Unset optional fields are omitted to keep log records compact.
        data: dict[str, Any] = {"text": self.text}
        if self.values is not None:
            data["values"] = list(self.values)
        if self.name is not None:
            data["name"] = self.name
        if self.row_mode is not None:
            data["row_mode"] = self.row_mode
        return data


def as_query(query: Query | str) -> Query:
    if isinstance(query, Query):
        return query
    return Query(text=query)


@dataclass(slots=True)
class QueryResult:
    rows: list[Any] = field(default_factory=list)
    rowcount: int | None = None


class SupportsRows(Protocol):
    rows: Sequence[Any]


class Connection(Protocol):
    async def query(self, query: Query) -> SupportsRows: ...


class PooledConnection(Connection, Protocol):
    # May return an awaitable; DatabasePool awaits it when it does.
    def release(self, error: BaseException | None = None) -> Any: ...


class PoolClient(Protocol):
    async def connect(self) -> PooledConnection: ...


class QueryLogger(Protocol):
    """Anything with structlog-style `debug`/`error` methods."""

    def debug(self, event: str, **fields: Any) -> Any: ...

    def error(self, event: str, **fields: Any) -> Any: ...


# A continuation may be a plain function or a coroutine function.
Continuation = Callable[[Any], Awaitable[T] | T]


# --- Module Notes -----------------------------------------------------------
# The protocols are structural: the SQLAlchemy adapter in `txscope.db.engine` and the
# test fakes satisfy them without inheriting from anything here.
