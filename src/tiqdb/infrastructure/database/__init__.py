"""Async SQL engine and schema via SQLAlchemy Core."""

from tiqdb.infrastructure.database.engine import (
    create_schema,
    create_store_engine,
    ensure_data_dir,
)
from tiqdb.infrastructure.database.schema import metadata, tags, tags_associations

__all__ = [
    "create_schema",
    "create_store_engine",
    "ensure_data_dir",
    "metadata",
    "tags",
    "tags_associations",
]
