"""Shared pytest fixtures and test helpers for tiqdb tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner
from sqlalchemy import insert, select

from tiqdb.config.models import DatabaseConfig
from tiqdb.infrastructure.database.schema import tags, tags_associations
from tiqdb.infrastructure.store import TagStore


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def db_config(tmp_path: Path) -> DatabaseConfig:
    """SQLite descriptor pointing at a fresh file under tmp_path."""
    return DatabaseConfig(filename=str(tmp_path / "data" / "store.db"))


@pytest.fixture
async def store(db_config: DatabaseConfig) -> AsyncIterator[TagStore]:
    """Open TagStore with the schema already created."""
    s = TagStore(db_config)
    await s.ensure_schema()
    try:
        yield s
    finally:
        await s.close()


@pytest.fixture
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Point XDG_DATA_HOME and CWD at tmp_path so the CLI uses a private store.

    Use via ``@pytest.mark.usefixtures("_isolated_env")`` on command test
    classes.
    """
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg"))
    monkeypatch.delenv("TIQ_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Shared test helpers (raw table access, bypassing the services)
# ---------------------------------------------------------------------------


async def label_rows(store: TagStore) -> list[dict[str, Any]]:
    """All ``tags`` rows in id order."""
    async with store.engine.connect() as conn:
        result = await conn.execute(select(tags).order_by(tags.c.id))
        return [dict(row) for row in result.mappings()]


async def label_texts(store: TagStore) -> list[str]:
    return [row["text"] for row in await label_rows(store)]


async def label_counts(store: TagStore, namespace: str = "public") -> dict[str, int]:
    return {
        row["text"]: row["count"]
        for row in await label_rows(store)
        if row["namespace"] == namespace
    }


async def edge_rows(store: TagStore) -> list[tuple[int, int]]:
    """All ``tags_associations`` rows in insertion order."""
    async with store.engine.connect() as conn:
        query = select(tags_associations.c.tag_id1, tags_associations.c.tag_id2)
        result = await conn.execute(query)
        return [(row.tag_id1, row.tag_id2) for row in result]


async def seed(
    store: TagStore,
    labels: list[tuple[str, str]],
    edges: list[tuple[int, int]],
) -> None:
    """Insert raw ``(text, namespace)`` labels and ``(id1, id2)`` edges."""
    async with store.engine.begin() as conn:
        if labels:
            await conn.execute(insert(tags), [{"text": t, "namespace": ns} for t, ns in labels])
        if edges:
            await conn.execute(
                insert(tags_associations), [{"tag_id1": a, "tag_id2": b} for a, b in edges]
            )
