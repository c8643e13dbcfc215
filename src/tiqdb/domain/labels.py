"""Label collection helpers — ordering and role classification."""

from __future__ import annotations

from collections.abc import Iterable, Mapping


def unique_texts(*collections: Iterable[str]) -> list[str]:
    """Concatenate *collections* and drop repeats, keeping first-seen order.

    Examples:
        >>> unique_texts(["john"], ["hello", "john", "yes"])
        ['john', 'hello', 'yes']
    """
    return list(dict.fromkeys(text for collection in collections for text in collection))


def partition_ids(
    labels: Mapping[str, int],
    tags: Iterable[str],
) -> tuple[list[int], list[int]]:
    """Split label ids into ``(tag_ids, token_ids)``.

    A text present in *tags* is a tag even if it was also passed as a token,
    so the two lists never share an id.
    """
    tag_set = set(tags)
    tag_ids: list[int] = []
    token_ids: list[int] = []
    for text, label_id in labels.items():
        if text in tag_set:
            tag_ids.append(label_id)
        else:
            token_ids.append(label_id)
    return tag_ids, token_ids
