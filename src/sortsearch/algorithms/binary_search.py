"""
Binary search over a sequence sorted in ascending order.

The candidate range is the half-open interval [lo, hi), initially [0, n).
Each step probes the midpoint, compares it once against the target and
discards the half that cannot hold it. The loop ends when the probe matches
(found) or the range is empty (absent), so at most floor(log2(n)) + 1
comparisons are made.

Public API (stable):
    search(sequence, target, *, key=None, compare=None) -> int | None
    contains(sequence, target, *, key=None, compare=None) -> bool

Conventions:
- `search` returns the index of *an* element equal to `target`, or None.
  With duplicates, which matching index is returned depends only on the input.
- The input must already be sorted ascending under the same ordering. Unsorted
  input is a caller error: the result is then unspecified and is not detected.
- The input is never mutated.
"""

from __future__ import annotations

from typing import Callable, Optional, Sequence, TypeVar, overload

from sortsearch.ordering import Comparator, OrderedT, SupportsLessThan, make_comparator

__all__ = ["search", "contains"]

T = TypeVar("T")


@overload
def search(
    sequence: Sequence[OrderedT], target: OrderedT, *, key: None = ..., compare: None = ...
) -> Optional[int]: ...


@overload
def search(
    sequence: Sequence[T], target: T, *, key: Callable[[T], SupportsLessThan], compare: None = ...
) -> Optional[int]: ...


@overload
def search(
    sequence: Sequence[T], target: T, *, key: None = ..., compare: Comparator
) -> Optional[int]: ...


def search(
    sequence: Sequence[T],
    target: T,
    *,
    key: Optional[Callable[[T], SupportsLessThan]] = None,
    compare: Optional[Comparator] = None,
) -> Optional[int]:
    """
    Return the index of an element equal to `target`, or None if absent.

    Parameters
    ----------
    sequence : Sequence[T]
        Sorted ascending under the ordering given by `key` / `compare`.
    target : T
        Value to look for. With `key`, the key is applied to the target too.
    key, compare : callable, optional
        Ordering; see `sortsearch.ordering.make_comparator`.

    Returns
    -------
    int | None
    """
    cmp = make_comparator(key, compare)
    lo, hi = 0, len(sequence)
    while lo < hi:
        mid = (lo + hi) // 2
        order = cmp(sequence[mid], target)
        if order == 0:
            return mid
        if order < 0:
            lo = mid + 1
        else:
            hi = mid
    return None


def contains(
    sequence: Sequence[T],
    target: T,
    *,
    key: Optional[Callable[[T], SupportsLessThan]] = None,
    compare: Optional[Comparator] = None,
) -> bool:
    """Return True iff `target` occurs in the sorted `sequence`."""
    return search(sequence, target, key=key, compare=compare) is not None
