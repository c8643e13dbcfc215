"""TagStore — the explicitly owned handle on the relational backend.

Every service receives a TagStore at construction time. The store owns the
async engine and its lifecycle:

- **Schema**: created lazily by the first operation and memoized. Concurrent
  first callers all await the same in-flight initialization.
- **In-flight tracking**: each operation registers a future for its whole
  duration. :meth:`close` stops accepting operations, waits for the set to
  drain, then disposes the engine.
- **Transactions**: :meth:`transaction` yields a connection inside
  ``conn.begin()`` — commit on success, rollback on any exception.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from sqlalchemy.exc import SQLAlchemyError

from tiqdb.config.models import DEFAULT_NAMESPACE, DatabaseConfig
from tiqdb.infrastructure.database.engine import (
    WRITE_OPTION,
    create_schema,
    create_store_engine,
    ensure_data_dir,
)
from tiqdb.infrastructure.errors import SchemaError, StoreClosedError

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

    from tiqdb.config.settings import TiqSettings

logger = logging.getLogger(__name__)


class TagStore:
    """Owns the engine, schema initialization and graceful shutdown.

    Usage::

        async with TagStore(DatabaseConfig(filename="tags.db")) as store:
            await AssociateService(store).associate(["john"], ["hello"])
    """

    def __init__(
        self,
        config: DatabaseConfig | None = None,
        *,
        default_namespace: str = DEFAULT_NAMESPACE,
        search_limit: int | None = None,
    ) -> None:
        self.config = config or DatabaseConfig()
        self.default_namespace = default_namespace
        self.search_limit = search_limit

        self._engine: AsyncEngine = create_store_engine(self.config)

        self._schema_task: asyncio.Task[None] | None = None
        self._inflight: set[asyncio.Future[None]] = set()
        self._close_task: asyncio.Task[None] | None = None

    @classmethod
    def from_settings(cls, settings: TiqSettings) -> TagStore:
        return cls(
            settings.database,
            default_namespace=settings.store.default_namespace,
            search_limit=settings.store.search_limit,
        )

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    @property
    def closing(self) -> bool:
        """True once :meth:`close` has been called."""
        return self._close_task is not None

    @property
    def inflight(self) -> int:
        """Number of operations currently running."""
        return len(self._inflight)

    # ------------------------------------------------------------------
    # Schema
    # ------------------------------------------------------------------

    async def ensure_schema(self) -> None:
        """Create the schema once; later and concurrent callers share the result.

        A failed attempt is forgotten so the next caller tries again.

        Raises:
            SchemaError: If the DDL could not be applied.
        """
        if self._schema_task is None:
            self._schema_task = asyncio.ensure_future(self._create_schema())
        await asyncio.shield(self._schema_task)

    async def _create_schema(self) -> None:
        try:
            ensure_data_dir(self.config)
            await create_schema(self._engine)
        except (OSError, SQLAlchemyError) as exc:
            self._schema_task = None
            msg = f"Could not create schema on {self.config.client}: {exc}"
            raise SchemaError(msg) from exc
        logger.debug("Schema ready on %s", self.config.client)

    # ------------------------------------------------------------------
    # Operation scopes
    # ------------------------------------------------------------------

    @asynccontextmanager
    async def operation(self) -> AsyncIterator[None]:
        """Track one operation from start to finish.

        Raises:
            StoreClosedError: If the store is shutting down or closed.
        """
        if self.closing:
            msg = "TagStore is closed; no new operations are accepted"
            raise StoreClosedError(msg)

        handle: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        self._inflight.add(handle)
        try:
            await self.ensure_schema()
            yield
        finally:
            self._inflight.discard(handle)
            handle.set_result(None)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncConnection]:
        """Yield a connection inside one atomic write transaction."""
        async with self.operation(), self._engine.connect() as conn:
            await conn.execution_options(**{WRITE_OPTION: True})
            async with conn.begin():
                yield conn

    @asynccontextmanager
    async def connect(self) -> AsyncIterator[AsyncConnection]:
        """Yield a connection for read-only work."""
        async with self.operation(), self._engine.connect() as conn:
            yield conn

    # ------------------------------------------------------------------
    # Shutdown
    # ------------------------------------------------------------------

    async def close(self) -> None:
        """Reject new operations, wait for in-flight ones, dispose the engine.

        Idempotent; concurrent callers await the same shutdown.
        """
        if self._close_task is None:
            self._close_task = asyncio.ensure_future(self._drain_and_dispose())
        await asyncio.shield(self._close_task)

    async def _drain_and_dispose(self) -> None:
        pending = set(self._inflight)
        if pending:
            logger.debug("Waiting for %d in-flight operation(s)", len(pending))
            await asyncio.wait(pending)
        await self._engine.dispose()
        logger.debug("TagStore closed")

    async def __aenter__(self) -> TagStore:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
