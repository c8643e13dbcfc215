"""Tests for the Association Store."""

import pytest

from tests.conftest import edge_rows, seed
from tiqdb.domain.edges import Edge
from tiqdb.infrastructure.repositories.associations import AssociationStore
from tiqdb.infrastructure.store import TagStore


class TestFetchEdgesTouching:
    async def test_matches_either_endpoint(self, store: TagStore) -> None:
        await seed(store, [], [(1, 2), (3, 1), (4, 5)])
        async with store.engine.connect() as conn:
            found = await AssociationStore(conn).fetch_edges_touching({1})
        assert found == {Edge(1, 2), Edge(1, 3)}

    async def test_empty_ids(self, store: TagStore) -> None:
        async with store.engine.connect() as conn:
            assert await AssociationStore(conn).fetch_edges_touching([]) == set()


class TestInsertEdges:
    async def test_bulk_insert_keeps_orientation(self, store: TagStore) -> None:
        async with store.engine.begin() as conn:
            inserted = await AssociationStore(conn).insert_edges([Edge(2, 1), Edge(3, 1)])
        assert [e.endpoints() for e in inserted] == [(2, 1), (3, 1)]
        assert await edge_rows(store) == [(2, 1), (3, 1)]

    async def test_rejects_self_loop(self, store: TagStore) -> None:
        async with store.engine.begin() as conn:
            with pytest.raises(ValueError, match="self-loop"):
                await AssociationStore(conn).insert_edges([Edge(1, 2), Edge(4, 4)])
        assert await edge_rows(store) == []

    async def test_duplicate_row_is_skipped(self, store: TagStore) -> None:
        await seed(store, [], [(2, 1)])
        async with store.engine.begin() as conn:
            inserted = await AssociationStore(conn).insert_edges([Edge(2, 1), Edge(3, 1)])
        assert inserted == [Edge(3, 1)]
        assert await edge_rows(store) == [(2, 1), (3, 1)]

    async def test_empty(self, store: TagStore) -> None:
        async with store.engine.begin() as conn:
            assert await AssociationStore(conn).insert_edges([]) == []


class TestNeighborIds:
    async def test_both_directions(self, store: TagStore) -> None:
        await seed(
            store,
            [("peter", "public"), ("what", "public"), ("yes", "public")],
            [(1, 2), (3, 1)],
        )
        async with store.engine.connect() as conn:
            assocs = AssociationStore(conn)
            assert await assocs.neighbor_ids("peter", "public") == {2, 3}
            assert await assocs.neighbor_ids("what", "public") == {1}
            assert await assocs.neighbor_ids("yes", "public") == {1}

    async def test_namespace_scoped(self, store: TagStore) -> None:
        await seed(
            store,
            [("peter", "public"), ("what", "public"), ("peter", "private"), ("nope", "private")],
            [(1, 2), (3, 4)],
        )
        async with store.engine.connect() as conn:
            assocs = AssociationStore(conn)
            assert await assocs.neighbor_ids("peter", "private") == {4}
            assert await assocs.neighbor_ids("nope", "public") == set()

    async def test_unknown_label(self, store: TagStore) -> None:
        async with store.engine.connect() as conn:
            assert await AssociationStore(conn).neighbor_ids("zzz", "public") == set()
