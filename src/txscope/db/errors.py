"""
txscope.db.errors

Error taxonomy for the query façade.

Responsibilities:
- Cardinality errors raised by the shaping layer from row counts alone.
- A wrapper used to attach execution failures to log records.
"""

from __future__ import annotations


class DatabaseError(Exception):
    pass


class QueryResultError(DatabaseError):
    """Row count did not match the shape the caller asked for."""


class UnexpectedDataError(QueryResultError):
    def __init__(self) -> None:
        super().__init__("No return data was expected.")


class MultipleRowsError(QueryResultError):
    def __init__(self) -> None:
        super().__init__("Multiple rows were not expected.")


class NoDataError(QueryResultError):
    def __init__(self) -> None:
        super().__init__("No data returned from the query.")


class QueryExecutionError(DatabaseError):
    """
    Log-side representation of a driver failure.

    Never raised to callers: the executor logs an instance of this (with the driver
    exception as `__cause__`) and re-raises the driver exception itself.
    """

    @classmethod
    def wrap(cls, error: BaseException) -> QueryExecutionError:
        wrapped = cls(f"{type(error).__name__}: {error}")
        wrapped.__cause__ = error
        return wrapped

    @property
    def original(self) -> BaseException | None:
        return self.__cause__


# --- Module Notes -----------------------------------------------------------
# Messages for the cardinality errors follow pg-promise's QueryResultError wording.
