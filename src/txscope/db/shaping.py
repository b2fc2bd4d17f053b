"""
txscope.db.shaping

Result-cardinality shaping shared by every role.

Responsibilities:
- Implement `any`/`none`/`one`/`one_or_none`/`many` once, on top of `query`.
- Raise cardinality errors purely from the returned row count.
"""

from __future__ import annotations

from typing import Any

from txscope.db.errors import MultipleRowsError, NoDataError, UnexpectedDataError
from txscope.db.query import Query, SupportsRows


class ResultShapingMixin:
    """
    Mixed into the root database and both scope types.

    Subclasses provide `query`; everything here goes through it, so timing and logging
    apply uniformly.
    """

    async def query(self, query: Query | str) -> SupportsRows:
        raise NotImplementedError

    async def any(self, query: Query | str) -> list[Any]:
        result = await self.query(query)
        return list(result.rows)

    # pg-promise name for the same thing.
    many_or_none = any

    async def none(self, query: Query | str) -> None:
        result = await self.query(query)
        if len(result.rows) > 0:
            raise UnexpectedDataError()
        return None

    async def one(self, query: Query | str) -> Any:
        result = await self.query(query)
        if len(result.rows) == 0:
            raise NoDataError()
        if len(result.rows) > 1:
            raise MultipleRowsError()
        return result.rows[0]

    async def one_or_none(self, query: Query | str) -> Any | None:
        result = await self.query(query)
        if len(result.rows) > 1:
            raise MultipleRowsError()
        if len(result.rows) == 1:
            return result.rows[0]
        return None

    async def many(self, query: Query | str) -> list[Any]:
        result = await self.query(query)
        if len(result.rows) == 0:
            raise NoDataError()
        return list(result.rows)
