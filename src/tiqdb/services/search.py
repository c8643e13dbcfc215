"""SearchService — case-insensitive substring search over label text."""

from __future__ import annotations

from tiqdb.infrastructure.repositories import LabelStore
from tiqdb.services.base import STORE_FAILURES, BaseService
from tiqdb.services.result import ServiceResult
from tiqdb.services.telemetry import traced


class SearchService(BaseService):
    """Substring lookup within one namespace."""

    @traced
    async def search(
        self,
        text: str,
        namespace: str | None = None,
        *,
        limit: int | None = None,
    ) -> ServiceResult:
        """Labels whose text contains *text*, ignoring case, in id order.

        Empty *text* returns immediately with no results.
        """
        op = "search"
        ns = self._namespace(namespace)
        if not text:
            return ServiceResult(ok=True, op=op, data={"namespace": ns, "tags": [], "count": 0})

        if limit is None:
            limit = self._store.search_limit
        try:
            async with self._store.connect() as conn:
                texts = await LabelStore(conn).search_texts(text, ns, limit=limit)
        except STORE_FAILURES as exc:
            return self._store_failure(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data={"namespace": ns, "tags": texts, "count": len(texts)},
        )
