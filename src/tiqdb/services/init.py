"""InitService — create the schema ahead of the first write."""

from __future__ import annotations

from sqlalchemy import inspect

from tiqdb.services.base import STORE_FAILURES, BaseService
from tiqdb.services.result import ServiceResult
from tiqdb.services.telemetry import traced


class InitService(BaseService):
    """Explicit schema setup for ``tiq init``."""

    @traced
    async def init_store(self) -> ServiceResult:
        """Ensure both tables exist and report what the backend holds."""
        op = "init"
        try:
            async with self._store.connect() as conn:
                tables = await conn.run_sync(
                    lambda sync_conn: inspect(sync_conn).get_table_names()
                )
        except STORE_FAILURES as exc:
            return self._store_failure(op, exc)

        config = self._store.config
        location = config.filename if config.is_sqlite else f"{config.host}/{config.database}"
        return ServiceResult(
            ok=True,
            op=op,
            data={"client": config.client, "location": location, "tables": sorted(tables)},
        )
