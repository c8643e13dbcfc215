"""Tests for the table definitions."""

import re

import pytest
from sqlalchemy import insert, select
from sqlalchemy.dialects import mysql, postgresql
from sqlalchemy.exc import IntegrityError
from sqlalchemy.schema import CreateTable

from tiqdb.infrastructure.database.schema import tags, tags_associations
from tiqdb.infrastructure.store import TagStore


class TestTagsTable:
    async def test_defaults(self, store: TagStore) -> None:
        async with store.engine.begin() as conn:
            await conn.execute(insert(tags).values(text="hello"))
            row = (await conn.execute(select(tags))).mappings().one()
        assert row["namespace"] == "public"
        assert row["count"] == 0

    async def test_text_namespace_unique(self, store: TagStore) -> None:
        with pytest.raises(IntegrityError):
            async with store.engine.begin() as conn:
                await conn.execute(insert(tags), [{"text": "a"}, {"text": "a"}])

    async def test_same_text_in_other_namespace_allowed(self, store: TagStore) -> None:
        async with store.engine.begin() as conn:
            await conn.execute(
                insert(tags),
                [{"text": "a", "namespace": "public"}, {"text": "a", "namespace": "private"}],
            )
            rows = (await conn.execute(select(tags.c.id))).all()
        assert len(rows) == 2


class TestAssociationsTable:
    async def test_pair_unique(self, store: TagStore) -> None:
        with pytest.raises(IntegrityError):
            async with store.engine.begin() as conn:
                await conn.execute(
                    insert(tags_associations),
                    [{"tag_id1": 1, "tag_id2": 2}, {"tag_id1": 1, "tag_id2": 2}],
                )


class TestDialectDDL:
    def test_mysql_labels_are_case_sensitive(self) -> None:
        ddl = str(CreateTable(tags).compile(dialect=mysql.dialect()))
        binary = r"CHARACTER SET utf8mb4 COLLATE utf8mb4_bin"
        assert re.search(rf"\btext`? VARCHAR\(1024\) {binary}", ddl)
        assert re.search(rf"\bnamespace`? VARCHAR\(255\) {binary}", ddl)

    def test_postgresql_uses_plain_varchar(self) -> None:
        ddl = str(CreateTable(tags).compile(dialect=postgresql.dialect()))
        assert re.search(r"\btext\"? VARCHAR\(1024\) NOT NULL", ddl)
        assert "COLLATE" not in ddl
