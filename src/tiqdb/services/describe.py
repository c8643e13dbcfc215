"""DescribeService — the neighborhood query engine.

``describe(tokens)`` returns the labels adjacent to *every* query label:
one neighbor-set query per distinct token, then a single intersection over
all of them. Survivors resolve back to text in id order.
"""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from tiqdb.domain.labels import unique_texts
from tiqdb.infrastructure.repositories import AssociationStore, LabelStore
from tiqdb.services._helpers import as_text_list
from tiqdb.services.base import STORE_FAILURES, BaseService
from tiqdb.services.result import ServiceResult
from tiqdb.services.telemetry import trace_span, traced

log = structlog.get_logger(__name__)


class DescribeService(BaseService):
    """Read-only neighborhood intersection."""

    @traced
    async def describe(
        self,
        tokens: str | Iterable[str],
        namespace: str | None = None,
    ) -> ServiceResult:
        """Labels connected to all of *tokens* within *namespace*.

        An empty *tokens* returns an empty result without touching storage.
        An unknown token has no neighbors, so the result is empty too.
        """
        op = "describe"
        ns = self._namespace(namespace)
        queries = unique_texts(as_text_list(tokens))
        if not queries:
            return ServiceResult(ok=True, op=op, data={"namespace": ns, "tags": [], "count": 0})

        try:
            async with self._store.connect() as conn:
                associations = AssociationStore(conn)
                with trace_span("neighborhoods") as span:
                    neighborhoods = [await associations.neighbor_ids(q, ns) for q in queries]
                    if span:
                        span.annotate("sizes", [len(n) for n in neighborhoods])
                common = set.intersection(*neighborhoods)
                texts = await LabelStore(conn).texts_for_ids(common)
        except STORE_FAILURES as exc:
            return self._store_failure(op, exc)

        log.debug("describe.done", namespace=ns, queries=len(queries), matches=len(texts))
        return ServiceResult(
            ok=True,
            op=op,
            data={"namespace": ns, "tags": texts, "count": len(texts)},
        )
