"""Label Store — SQL for the ``tags`` table."""

from __future__ import annotations

import logging
from collections.abc import Collection, Mapping, Sequence
from datetime import datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import case, insert, select, update
from sqlalchemy.exc import IntegrityError

from tiqdb.infrastructure.database.schema import tags

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncConnection

logger = logging.getLogger(__name__)


class LabelStore:
    """Create-or-fetch labels scoped by namespace and maintain their counters.

    Bound to one connection; when that connection is inside a transaction,
    every statement here participates in it.
    """

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def fetch_labels(self, texts: Collection[str], namespace: str) -> dict[str, int]:
        """Map each existing text in *namespace* to its label id."""
        if not texts:
            return {}
        stmt = select(tags.c.id, tags.c.text).where(
            tags.c.text.in_(list(texts)),
            tags.c.namespace == namespace,
        )
        result = await self._conn.execute(stmt)
        return {row.text: row.id for row in result}

    async def create_labels(self, texts: Sequence[str], namespace: str, now: datetime) -> int:
        """Insert one row per text, all stamped with *now*.

        A concurrent creator winning the race on ``(text, namespace)`` is not
        an error: the batch falls back to row-by-row inserts and skips the
        rows that already exist. Ids are not returned; callers re-fetch them
        by natural key. Returns the number of rows this call inserted.
        """
        rows = [
            {
                "text": text,
                "namespace": namespace,
                "count": 0,
                "created_at": now,
                "updated_at": now,
            }
            for text in texts
        ]
        if not rows:
            return 0

        try:
            async with self._conn.begin_nested():
                await self._conn.execute(insert(tags), rows)
            return len(rows)
        except IntegrityError:
            logger.debug("Label batch collided in %r, retrying row by row", namespace)

        return await self._insert_each(rows)

    async def _insert_each(self, rows: list[dict[str, Any]]) -> int:
        created = 0
        for row in rows:
            try:
                async with self._conn.begin_nested():
                    await self._conn.execute(insert(tags).values(**row))
                created += 1
            except IntegrityError:
                logger.debug("Label %r already exists in %r", row["text"], row["namespace"])
        return created

    async def increment_counts(self, increments: Mapping[int, int], now: datetime) -> None:
        """Add ``increments[id]`` to each label's ``count`` in one UPDATE."""
        if not increments:
            return
        delta = case(dict(increments), value=tags.c.id, else_=0)
        stmt = (
            update(tags)
            .where(tags.c.id.in_(list(increments)))
            .values(count=tags.c.count + delta, updated_at=now)
        )
        await self._conn.execute(stmt)

    async def texts_for_ids(self, ids: Collection[int]) -> list[str]:
        """Resolve label ids back to text, ordered by id."""
        if not ids:
            return []
        stmt = select(tags.c.text).where(tags.c.id.in_(list(ids))).order_by(tags.c.id)
        result = await self._conn.execute(stmt)
        return list(result.scalars())

    async def search_texts(
        self,
        substring: str,
        namespace: str,
        *,
        limit: int | None = None,
    ) -> list[str]:
        """Case-insensitive substring match on label text, ordered by id.

        ``%`` and ``_`` in *substring* match literally.
        """
        stmt = (
            select(tags.c.text)
            .where(
                tags.c.namespace == namespace,
                tags.c.text.icontains(substring, autoescape=True),
            )
            .order_by(tags.c.id)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self._conn.execute(stmt)
        return list(result.scalars())
