"""
Oracles for sorting and searching correctness.

We use the standard library as ground truth:
- `sorted()` for sorting: correct total order, deterministic, and stable, so
  a stable kernel must match it exactly even on tagged records.
- `bisect.bisect_left()` for membership in a sorted sequence.

Public API (stable):
    oracle_sort(a, key=None) -> list
    equals_oracle(a, out, key=None) -> bool
    oracle_contains(sorted_a, x) -> bool

Conventions:
- The oracles never mutate their input; `oracle_sort` returns a **new** list.
"""

from __future__ import annotations

import bisect
from typing import Any, Callable, List, Optional, Sequence

ORACLE_NAME: str = "python_sorted_timsort"

__all__ = ["ORACLE_NAME", "oracle_sort", "equals_oracle", "oracle_contains"]


def oracle_sort(a: Sequence[Any], key: Optional[Callable[[Any], Any]] = None) -> List[Any]:
    """
    Return the ground-truth sorted output for `a`.

    Parameters
    ----------
    a : Sequence
        Input sequence. Not mutated.
    key : callable, optional
        Same meaning as for the sort kernel.

    Returns
    -------
    list
        A new list with the same elements as `a`, stably sorted ascending.
    """
    return sorted(a, key=key)


def equals_oracle(
    a: Sequence[Any], out: Sequence[Any], key: Optional[Callable[[Any], Any]] = None
) -> bool:
    """True iff `out` is exactly equal to `oracle_sort(a, key)`."""
    return list(out) == oracle_sort(a, key=key)


def oracle_contains(sorted_a: Sequence[Any], x: Any) -> bool:
    """True iff `x` occurs in the ascending sequence `sorted_a`."""
    i = bisect.bisect_left(sorted_a, x)
    return i < len(sorted_a) and sorted_a[i] == x
