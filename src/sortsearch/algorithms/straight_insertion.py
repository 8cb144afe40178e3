"""
Straight insertion sort, in place and stable.

The sequence is split into a sorted prefix sequence[:i] and an unprocessed
suffix. Each step lifts sequence[i], shifts every prefix element strictly
greater than it one slot to the right, and drops it into the vacated slot.

Properties:
- Stable: the shift condition is strictly "greater than", so equal elements
  never cross.
- In place: only the lifted element is held aside.
- O(n^2) comparisons and shifts in the worst and average case; an already
  sorted input costs exactly n - 1 comparisons and no writes.
- Empty and single-element inputs cost nothing.

Public API (stable):
    sort(sequence, *, key=None, compare=None) -> None
"""

from __future__ import annotations

from typing import Callable, MutableSequence, Optional, TypeVar, overload

from sortsearch.ordering import Comparator, OrderedT, SupportsLessThan, make_comparator

__all__ = ["sort"]

T = TypeVar("T")


@overload
def sort(sequence: MutableSequence[OrderedT], *, key: None = ..., compare: None = ...) -> None: ...


@overload
def sort(
    sequence: MutableSequence[T], *, key: Callable[[T], SupportsLessThan], compare: None = ...
) -> None: ...


@overload
def sort(sequence: MutableSequence[T], *, key: None = ..., compare: Comparator) -> None: ...


def sort(
    sequence: MutableSequence[T],
    *,
    key: Optional[Callable[[T], SupportsLessThan]] = None,
    compare: Optional[Comparator] = None,
) -> None:
    """
    Sort `sequence` ascending in place.

    Parameters
    ----------
    sequence : MutableSequence[T]
        Any finite mutable sequence of totally ordered elements.
    key, compare : callable, optional
        Ordering; see `sortsearch.ordering.make_comparator`.

    Returns
    -------
    None
        The caller's sequence holds the result.
    """
    cmp = make_comparator(key, compare)
    for i in range(1, len(sequence)):
        item = sequence[i]
        j = i
        try:
            while j > 0 and cmp(sequence[j - 1], item) > 0:
                sequence[j] = sequence[j - 1]
                j -= 1
        finally:
            # Also runs when the comparator raises, so the sequence stays a
            # permutation of its input.
            if j != i:
                sequence[j] = item
