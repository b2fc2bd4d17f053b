"""
txscope.wiring

Composition root for host processes.

Responsibilities:
- Build engine -> pool adapter -> pool wrapper -> root `Database` from settings.
- Hand back the engine alongside the database so the host can dispose it.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncEngine

from txscope.db.database import (
    Database,
    TaskScope,
    TaskScopeFactory,
    TransactionScope,
    TransactionScopeFactory,
)
from txscope.db.engine import EnginePool, create_engine
from txscope.db.pool import DatabasePool
from txscope.db.query import QueryLogger
from txscope.db.savepoint import SavepointNameGenerator
from txscope.observability.logging import get_logger
from txscope.settings import Settings

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class DatabaseHandle:
    database: Database
    engine: AsyncEngine

    async def dispose(self) -> None:
        # Closes pooled connections; the database must not be used afterwards.
        await self.engine.dispose()
        log.info("database_disposed")


def create_database(
    settings: Settings,
    *,
    logger: QueryLogger | None = None,
    transaction_factory: TransactionScopeFactory = TransactionScope,
    task_factory: TaskScopeFactory = TaskScope,
) -> DatabaseHandle:
    engine = create_engine(settings)
    savepoint_names = SavepointNameGenerator(
        name_bytes=settings.savepoint_name_bytes,
        buffer_bytes=settings.savepoint_buffer_bytes,
    )
    database = Database(
        pool=DatabasePool(pool=EnginePool(engine)),
        logger=logger,
        transaction_factory=transaction_factory,
        task_factory=task_factory,
        savepoint_names=savepoint_names,
    )
    log.info("database_created", env=settings.env, dialect=engine.dialect.name)
    return DatabaseHandle(database=database, engine=engine)


# --- Module Notes -----------------------------------------------------------
# Logging is configured by the host (`txscope.observability.logging.configure_logging`),
# not here, so embedding processes keep control of their own structlog setup.
