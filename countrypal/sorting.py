"""
Ordering
========

Stable merge sort used to order the visible events by start date. Events that
share a start time must keep their catalog order, so the merge always takes
from the left run on ties.
"""

from __future__ import annotations
from typing import Callable, List, Sequence, TypeVar

T = TypeVar("T")


def merge_sort(items: Sequence[T], key: Callable[[T], object]) -> List[T]:
    """Return a new list ordered ascending by `key`; never touches `items`."""
    if len(items) <= 1:
        return list(items)
    mid = len(items) // 2
    return _merge(merge_sort(items[:mid], key), merge_sort(items[mid:], key), key)


def _merge(left: List[T], right: List[T], key: Callable[[T], object]) -> List[T]:
    out: List[T] = []
    i = j = 0
    while i < len(left) and j < len(right):
        # <= keeps equal keys in input order
        if key(left[i]) <= key(right[j]):
            out.append(left[i]); i += 1
        else:
            out.append(right[j]); j += 1
    out.extend(left[i:])
    out.extend(right[j:])
    return out
