"""SQLAlchemy Core table definitions for the tiq store.

Two tables: ``tags`` holds labels scoped by namespace, ``tags_associations``
holds undirected edges between label ids. Column types stay portable across
SQLite, PostgreSQL and MySQL.
"""

from __future__ import annotations

from sqlalchemy import (
    Column,
    DateTime,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    UniqueConstraint,
)
from sqlalchemy.dialects import mysql

from tiqdb.config.models import DEFAULT_NAMESPACE

metadata = MetaData()

TEXT_MAX_LENGTH = 1024


def _label_string(length: int) -> String:
    """VARCHAR compared byte-for-byte on MySQL, whose default collation folds case."""
    return String(length).with_variant(
        mysql.VARCHAR(length, charset="utf8mb4", collation="utf8mb4_bin"), "mysql"
    )


tags = Table(
    "tags",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("text", _label_string(TEXT_MAX_LENGTH), nullable=False),
    Column(
        "namespace",
        _label_string(255),
        nullable=False,
        default=DEFAULT_NAMESPACE,
        server_default=DEFAULT_NAMESPACE,
    ),
    Column("count", Integer, nullable=False, default=0, server_default="0"),
    Column("created_at", DateTime),
    Column("updated_at", DateTime),
    UniqueConstraint("text", "namespace"),
)

# Stored in (tag id, token id) orientation; uniqueness as an unordered pair
# is maintained by the association engine, not by this constraint.
tags_associations = Table(
    "tags_associations",
    metadata,
    Column("tag_id1", Integer, nullable=False),
    Column("tag_id2", Integer, nullable=False),
    UniqueConstraint("tag_id1", "tag_id2"),
)

Index("ix_tags_namespace", tags.c.namespace)
Index("ix_tags_associations_tag_id2", tags_associations.c.tag_id2)
