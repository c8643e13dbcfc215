"""Undirected edge value type.

An edge keeps the orientation it was created with (``tag_id1`` is the tag,
``tag_id2`` the token) but compares and hashes by its canonical sorted pair,
so ``Edge(3, 1) == Edge(1, 3)``.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, eq=False)
class Edge:
    """An association between two label ids."""

    tag_id1: int
    tag_id2: int

    @property
    def key(self) -> tuple[int, int]:
        """Canonical (low, high) pair used for equality."""
        if self.tag_id1 <= self.tag_id2:
            return (self.tag_id1, self.tag_id2)
        return (self.tag_id2, self.tag_id1)

    @property
    def is_loop(self) -> bool:
        return self.tag_id1 == self.tag_id2

    def endpoints(self) -> tuple[int, int]:
        return (self.tag_id1, self.tag_id2)

    def as_row(self) -> dict[str, Any]:
        return {"tag_id1": self.tag_id1, "tag_id2": self.tag_id2}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Edge):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)


def cross_edges(tag_ids: Iterable[int], token_ids: Iterable[int]) -> list[Edge]:
    """Build ``tag_ids x token_ids`` in one direction, tag first.

    The reversed direction is never built: edges are undirected.
    """
    tokens = list(token_ids)
    return [Edge(tag_id, token_id) for tag_id in tag_ids for token_id in tokens]


def missing_edges(candidates: Iterable[Edge], existing: set[Edge]) -> list[Edge]:
    """Filter *candidates* down to edges not already in *existing*.

    Order of *candidates* is preserved; duplicates among the candidates
    themselves collapse to their first occurrence.
    """
    seen: set[Edge] = set(existing)
    result: list[Edge] = []
    for edge in candidates:
        if edge in seen:
            continue
        seen.add(edge)
        result.append(edge)
    return result


def degree_increments(edges: Iterable[Edge]) -> dict[int, int]:
    """Count how many of *edges* touch each label id."""
    increments: dict[int, int] = {}
    for edge in edges:
        for label_id in edge.endpoints():
            increments[label_id] = increments.get(label_id, 0) + 1
    return increments
