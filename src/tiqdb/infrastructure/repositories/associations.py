"""Association Store — SQL for the ``tags_associations`` table."""

from __future__ import annotations

import logging
from collections.abc import Collection, Sequence
from typing import TYPE_CHECKING

from sqlalchemy import case, insert, or_, select
from sqlalchemy.exc import IntegrityError

from tiqdb.domain.edges import Edge
from tiqdb.infrastructure.database.schema import tags, tags_associations

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncConnection

logger = logging.getLogger(__name__)

_assoc = tags_associations.c


class AssociationStore:
    """Undirected edge lookups and duplicate-suppressing bulk inserts."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def fetch_edges_touching(self, ids: Collection[int]) -> set[Edge]:
        """Every edge with either endpoint in *ids*."""
        if not ids:
            return set()
        id_list = list(ids)
        stmt = select(_assoc.tag_id1, _assoc.tag_id2).where(
            or_(_assoc.tag_id1.in_(id_list), _assoc.tag_id2.in_(id_list))
        )
        result = await self._conn.execute(stmt)
        return {Edge(row.tag_id1, row.tag_id2) for row in result}

    async def insert_edges(self, edges: Sequence[Edge]) -> list[Edge]:
        """Bulk insert *edges*; return the ones this call actually wrote.

        The caller filters out edges that already exist. An edge written by
        a concurrent transaction in the meantime trips the unique constraint;
        the batch then falls back to row-by-row inserts and skips it.

        Raises:
            ValueError: If any edge connects a label to itself.
        """
        loops = [edge for edge in edges if edge.is_loop]
        if loops:
            msg = f"Refusing to insert self-loop edges: {loops!r}"
            raise ValueError(msg)
        if not edges:
            return []

        try:
            async with self._conn.begin_nested():
                await self._conn.execute(
                    insert(tags_associations), [edge.as_row() for edge in edges]
                )
            return list(edges)
        except IntegrityError:
            logger.debug("Edge batch collided, retrying row by row")

        inserted: list[Edge] = []
        for edge in edges:
            try:
                async with self._conn.begin_nested():
                    await self._conn.execute(insert(tags_associations).values(**edge.as_row()))
                inserted.append(edge)
            except IntegrityError:
                logger.debug("Edge %s already exists", edge.endpoints())
        return inserted

    async def neighbor_ids(self, text: str, namespace: str) -> set[int]:
        """Ids of every label sharing an edge with ``(text, namespace)``.

        Direction-agnostic: whichever column holds the label, the other
        column is the neighbor. An unknown label yields an empty set.
        """
        neighbor = case(
            (_assoc.tag_id1 == tags.c.id, _assoc.tag_id2),
            else_=_assoc.tag_id1,
        ).label("neighbor_id")
        stmt = (
            select(neighbor)
            .select_from(
                tags_associations.join(
                    tags, or_(_assoc.tag_id1 == tags.c.id, _assoc.tag_id2 == tags.c.id)
                )
            )
            .where(tags.c.text == text, tags.c.namespace == namespace)
        )
        result = await self._conn.execute(stmt)
        return set(result.scalars())
