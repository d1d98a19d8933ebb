"""Order-preserving removal of dropped batch slots."""

from __future__ import annotations

from typing import List, MutableSequence, TypeVar

T = TypeVar("T")


def shift(items: MutableSequence[T], drop_indexes: List[int]) -> MutableSequence[T]:
    """Remove ``drop_indexes`` from ``items`` in place and return ``items``.

    Indexes are collected in ascending order during the scan, so reversing
    them is enough to remove from the highest slot down without invalidating
    the lower ones. Indexes past the current end and repeated indexes are
    ignored.
    """

    previous = None
    for drop_index in reversed(drop_indexes):
        if drop_index == previous:
            continue
        previous = drop_index
        if drop_index < 0 or drop_index >= len(items):
            continue
        # Shift everything after the slot one position left, then shrink.
        del items[drop_index]
    return items
