"""AssociateService — the association engine.

Connects every tag to every token with exactly one undirected edge, inside a
single transaction:

1. De-duplicate ``tokens + tags`` (first-seen order).
2. Fetch existing labels; insert the missing ones with one timestamp, then
   re-fetch them by ``(text, namespace)`` to learn their ids.
3. Split ids into tags and tokens (a text in both is a tag) and build the
   one-directional cross product ``tags x tokens``.
4. Drop candidates whose unordered pair already exists.
5. Insert the rest and bump each endpoint's ``count`` by the number of new
   edges it gained, in one UPDATE.

Any failure rolls the whole transaction back.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

import structlog

from tiqdb.domain.edges import cross_edges, degree_increments, missing_edges
from tiqdb.domain.labels import partition_ids, unique_texts
from tiqdb.infrastructure.database.schema import TEXT_MAX_LENGTH
from tiqdb.infrastructure.repositories import AssociationStore, LabelStore
from tiqdb.services._helpers import as_text_list, utc_now
from tiqdb.services.base import STORE_FAILURES, BaseService
from tiqdb.services.result import ErrorCode, ServiceResult
from tiqdb.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncConnection

log = structlog.get_logger(__name__)


class AssociateService(BaseService):
    """Creates labels and the edges between them."""

    @traced
    async def associate(
        self,
        tokens: str | Iterable[str],
        tags: str | Iterable[str],
        namespace: str | None = None,
    ) -> ServiceResult:
        """Associate every text in *tags* with every text in *tokens*.

        Either collection empty is a silent no-op: no transaction is opened
        and the schema is not touched.

        Returns:
            ServiceResult with ``labels_created``, ``edges_created`` and
            ``labels_updated`` counts.
        """
        op = "associate"
        ns = self._namespace(namespace)
        token_list = as_text_list(tokens)
        tag_list = as_text_list(tags)

        if not token_list or not tag_list:
            return ServiceResult(ok=True, op=op, data=_stats(ns))

        too_long = [t for t in (*token_list, *tag_list) if len(t) > TEXT_MAX_LENGTH]
        if too_long:
            return ServiceResult.failure(
                op,
                ErrorCode.INVALID_INPUT,
                f"Label text exceeds {TEXT_MAX_LENGTH} characters",
                labels=[t[:40] for t in too_long],
            )

        try:
            async with self._store.transaction() as conn:
                data = await self._associate(conn, token_list, tag_list, ns)
        except STORE_FAILURES as exc:
            return self._store_failure(op, exc)

        log.debug("associate.done", **data)
        return ServiceResult(ok=True, op=op, data=data)

    async def _associate(
        self,
        conn: AsyncConnection,
        tokens: list[str],
        tags: list[str],
        ns: str,
    ) -> dict[str, Any]:
        labels = LabelStore(conn)
        associations = AssociationStore(conn)
        now = utc_now()

        all_texts = unique_texts(tokens, tags)
        with trace_span("resolve_labels") as span:
            known = await labels.fetch_labels(all_texts, ns)
            missing = [text for text in all_texts if text not in known]
            created = 0
            if missing:
                created = await labels.create_labels(missing, ns, now)
                known.update(await labels.fetch_labels(missing, ns))
            if span:
                span.annotate("missing", len(missing))

        ids = {text: known[text] for text in all_texts}
        tag_ids, token_ids = partition_ids(ids, tags)

        with trace_span("link_labels") as span:
            existing = await associations.fetch_edges_touching(tag_ids)
            new_edges = missing_edges(cross_edges(tag_ids, token_ids), existing)
            inserted = await associations.insert_edges(new_edges) if new_edges else []
            increments = degree_increments(inserted)
            await labels.increment_counts(increments, now)
            if span:
                span.annotate("inserted", len(inserted))

        return _stats(
            ns,
            labels_created=created,
            edges_created=len(inserted),
            labels_updated=len(increments),
        )


def _stats(
    namespace: str,
    *,
    labels_created: int = 0,
    edges_created: int = 0,
    labels_updated: int = 0,
) -> dict[str, Any]:
    return {
        "namespace": namespace,
        "labels_created": labels_created,
        "edges_created": edges_created,
        "labels_updated": labels_updated,
    }
