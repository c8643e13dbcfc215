"""BaseService — abstract foundation for all tiqdb services.

Every service receives a :class:`TagStore` at construction time. Services
own their transaction boundaries via ``self._store.transaction()`` and
read through ``self._store.connect()``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy.exc import SQLAlchemyError

from tiqdb.infrastructure.errors import SchemaError, StoreClosedError
from tiqdb.services.result import ErrorCode, ServiceResult

if TYPE_CHECKING:
    from tiqdb.infrastructure.store import TagStore

logger = logging.getLogger(__name__)

# Failures a service turns into ``ok=False`` results instead of raising.
STORE_FAILURES = (SQLAlchemyError, SchemaError, StoreClosedError)


class BaseService:
    """Abstract base for all service-layer classes.

    Usage::

        class AssociateService(BaseService):
            async def associate(self, tokens, tags) -> ServiceResult:
                async with self._store.transaction() as conn:
                    ...
    """

    def __init__(self, store: TagStore) -> None:
        self._store = store

    def _namespace(self, namespace: str | None) -> str:
        return namespace or self._store.default_namespace

    def _store_failure(self, op: str, exc: Exception) -> ServiceResult:
        """Translate a store-layer exception into a failed ServiceResult."""
        if isinstance(exc, StoreClosedError):
            code = ErrorCode.STORE_CLOSED
        elif isinstance(exc, SchemaError):
            code = ErrorCode.SCHEMA_ERROR
        else:
            code = ErrorCode.STORAGE_ERROR
        logger.warning("%s failed: %s", op, exc, exc_info=logger.isEnabledFor(logging.DEBUG))
        return ServiceResult.failure(op, code, str(exc), exception=type(exc).__name__)
