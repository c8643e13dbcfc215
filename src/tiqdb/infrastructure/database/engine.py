"""Async database engine setup.

SQLAlchemy Core (not ORM) over the asyncio extension: every store call
suspends on the driver (aiosqlite, asyncpg or aiomysql) instead of blocking.

For SQLite the pysqlite-style driver's own transaction handling is turned
off and SQLAlchemy emits ``BEGIN`` itself, so that SAVEPOINTs used for
unique-constraint recovery behave as on the server backends. Connections
carrying the :data:`WRITE_OPTION` execution option start with
``BEGIN IMMEDIATE``: SQLite writers then queue on ``busy_timeout`` up front
instead of failing when a read lock cannot be upgraded.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

from tiqdb.config.models import DatabaseConfig
from tiqdb.infrastructure.database.schema import metadata

logger = logging.getLogger(__name__)

WRITE_OPTION = "tiq_write"
BUSY_TIMEOUT_MS = 5000


def ensure_data_dir(config: DatabaseConfig) -> None:
    """Create the parent directory of a file-backed SQLite store."""
    if not config.is_sqlite or config.is_memory:
        return
    Path(config.filename).parent.mkdir(parents=True, exist_ok=True)


def create_store_engine(config: DatabaseConfig) -> AsyncEngine:
    """Create the async engine described by *config*."""
    kwargs: dict[str, Any] = {}
    if config.is_memory:
        # One shared connection, otherwise every checkout sees an empty DB.
        kwargs["poolclass"] = StaticPool
        kwargs["connect_args"] = {"check_same_thread": False}

    engine = create_async_engine(config.url(), **kwargs)
    if config.echo:
        # Logged through the configured handlers.
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)
    if config.is_sqlite:
        _install_sqlite_hooks(engine)
    logger.debug("Created %s engine for %s", config.client, engine.url.render_as_string())
    return engine


def _install_sqlite_hooks(engine: AsyncEngine) -> None:
    sync_engine = engine.sync_engine

    @event.listens_for(sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        dbapi_conn.isolation_level = None
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.execute(f"PRAGMA busy_timeout={BUSY_TIMEOUT_MS}")
        cursor.close()

    @event.listens_for(sync_engine, "begin")
    def _do_begin(conn: Any) -> None:
        if conn.get_execution_options().get(WRITE_OPTION):
            conn.exec_driver_sql("BEGIN IMMEDIATE")
        else:
            conn.exec_driver_sql("BEGIN")


async def create_schema(engine: AsyncEngine) -> None:
    """Create both tables if absent. Idempotent."""
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
