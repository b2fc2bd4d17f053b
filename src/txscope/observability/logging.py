"""
txscope.observability.logging

Structured logging configuration for processes that host the database façade.

Responsibilities:
- Configure `structlog` for JSON logs suitable for ELK/Splunk/Datadog.
- Render wrapped query failures as plain dicts instead of opaque reprs.
- Provide a small wrapper for obtaining bound loggers.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from txscope.db.errors import QueryExecutionError


def configure_logging(*, service_name: str, level: str) -> None:
    """
    Structured JSON logs; `sql_query`/`sql_error` records carry query and duration fields.
    """

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _add_service_name(service_name),
            render_query_errors,
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def _add_service_name(service_name: str):
    def processor(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service_name)
        return event_dict

    return processor


def render_query_errors(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    error = event_dict.get("error")
    if isinstance(error, QueryExecutionError):
        cause = error.original
        event_dict["error"] = {
            "type": type(cause).__name__ if cause is not None else type(error).__name__,
            "message": str(cause) if cause is not None else str(error),
        }
    return event_dict


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


# --- Module Notes -----------------------------------------------------------
# Callers may bind request ids etc. via `structlog.contextvars`; query records pick
# them up through `merge_contextvars`.
