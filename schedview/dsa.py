"""
Sorting helper
==============

Every ordering in the viewer must be *stable*: events that compare equal keep
the order they had in the sheet. Python's `sorted` is stable too, but the
store spells the algorithm out so the guarantee is visible where it matters.
"""

from __future__ import annotations
from typing import Callable, List, Sequence, TypeVar

T = TypeVar("T")

def merge_sort(arr: Sequence[T], key: Callable[[T], object] = lambda x: x) -> List[T]:
    """Stable ascending merge sort, returns a new list."""
    if len(arr) <= 1:
        return list(arr)
    mid = len(arr) // 2
    left = merge_sort(arr[:mid], key=key)
    right = merge_sort(arr[mid:], key=key)
    return _merge(left, right, key)

def _merge(left: List[T], right: List[T], key: Callable[[T], object]) -> List[T]:
    out: List[T] = []
    i = j = 0
    while i < len(left) and j < len(right):
        # `<=` keeps the left element first on ties (stability)
        if key(left[i]) <= key(right[j]):
            out.append(left[i]); i += 1
        else:
            out.append(right[j]); j += 1
    out.extend(left[i:])
    out.extend(right[j:])
    return out
