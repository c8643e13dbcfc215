"""Shared service-layer helper functions."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime


def utc_now() -> datetime:
    """Current UTC time as a naive datetime (portable ``DateTime`` columns)."""
    return datetime.now(UTC).replace(tzinfo=None)


def as_text_list(values: str | Iterable[str]) -> list[str]:
    """Normalize a single label or an iterable of labels to a list.

    Examples:
        >>> as_text_list("john")
        ['john']
        >>> as_text_list(("a", "b"))
        ['a', 'b']
    """
    if isinstance(values, str):
        return [values]
    return list(values)
