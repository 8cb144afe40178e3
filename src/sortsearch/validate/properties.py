"""
Property helpers for validating search and sort results.

These functions provide lightweight checks you can use in tests and inside
the benchmark runner for sanity validation.

Public API (stable):
    is_nondecreasing(xs, key=None) -> bool
    first_nondecreasing_violation_index(xs, key=None) -> int | None
    is_permutation(a, b) -> bool
    permutation_counter_diff(a, b) -> dict
    assert_no_mutation(before, after) -> None
    is_stable(tagged_out, key=None) -> bool
    assert_search_result(sorted_a, target, result, key=None) -> None

Notes
-----
- Stability cannot be inferred from values alone when equal keys are
  indistinguishable. `is_stable` expects records built by
  `sortsearch.datasets.make_tagged`, i.e. (key, original_position) pairs.
- Ordering-aware helpers take the same `key=` argument as the kernels.
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Callable, Dict, Hashable, Optional, Sequence, Tuple

__all__ = [
    "is_nondecreasing",
    "first_nondecreasing_violation_index",
    "is_permutation",
    "permutation_counter_diff",
    "assert_no_mutation",
    "is_stable",
    "assert_search_result",
]


def _identity(x: Any) -> Any:
    return x


def is_nondecreasing(xs: Sequence[Any], key: Optional[Callable[[Any], Any]] = None) -> bool:
    """Return True iff no adjacent pair has xs[i] > xs[i+1]."""
    return first_nondecreasing_violation_index(xs, key=key) is None


def first_nondecreasing_violation_index(
    xs: Sequence[Any], key: Optional[Callable[[Any], Any]] = None
) -> Optional[int]:
    """
    Return the first index i where xs[i] > xs[i+1], or None if nondecreasing.

    Useful for precise error messages:
        i = first_nondecreasing_violation_index(out)
        assert i is None, f"not nondecreasing at i={i}: {out[i]} > {out[i+1]}"
    """
    k = key or _identity
    for i in range(len(xs) - 1):
        if k(xs[i + 1]) < k(xs[i]):
            return i
    return None


def is_permutation(a: Sequence[Hashable], b: Sequence[Hashable]) -> bool:
    """Return True iff `a` and `b` contain exactly the same multiset of values."""
    if len(a) != len(b):
        return False
    return Counter(a) == Counter(b)


def permutation_counter_diff(a: Sequence[Hashable], b: Sequence[Hashable]) -> Dict[Hashable, int]:
    """
    Return a dict of value -> count difference (count_a - count_b).

    Empty dict means `a` and `b` have identical multiplicities.
    """
    ca = Counter(a)
    cb = Counter(b)
    diff: Dict[Hashable, int] = {}
    for k in set(ca) | set(cb):
        d = ca[k] - cb[k]
        if d != 0:
            diff[k] = d
    return diff


def assert_no_mutation(before: Sequence[Any], after: Sequence[Any]) -> None:
    """
    Assert that two sequences are element-wise equal, used to ensure a
    read-only kernel (search) did not touch its input.

    Raises AssertionError with a concise message if they differ.
    """
    if len(before) != len(after):
        raise AssertionError(
            f"Input mutated: length changed from {len(before)} to {len(after)}"
        )
    for i, (x, y) in enumerate(zip(before, after)):
        if x != y:
            raise AssertionError(f"Input mutated at index {i}: before={x}, after={y}")


def is_stable(
    tagged_out: Sequence[Tuple[Any, int]], key: Optional[Callable[[Any], Any]] = None
) -> bool:
    """
    Return True iff equal keys in `tagged_out` keep their original order.

    `tagged_out` is a sorted list of (key, original_position) records. `key`
    maps the record's key to the value actually compared (identity by default).
    """
    k = key or _identity
    for (ka, ta), (kb, tb) in zip(tagged_out, tagged_out[1:]):
        same = not (k(ka) < k(kb)) and not (k(kb) < k(ka))
        if same and ta > tb:
            return False
    return True


def assert_search_result(
    sorted_a: Sequence[Any],
    target: Any,
    result: Optional[int],
    key: Optional[Callable[[Any], Any]] = None,
) -> None:
    """
    Assert that `result` is a correct answer of search(sorted_a, target).

    - If some element equals `target`, `result` must be an index of one.
    - Otherwise `result` must be None.
    """
    k = key or _identity
    kt = k(target)
    present = any(not (k(x) < kt) and not (kt < k(x)) for x in sorted_a)
    if not present:
        if result is not None:
            raise AssertionError(f"Expected absence for {target!r}, got index {result}")
        return
    if result is None:
        raise AssertionError(f"Expected an index for {target!r}, got None")
    if not (0 <= result < len(sorted_a)):
        raise AssertionError(f"Index {result} out of range [0, {len(sorted_a)})")
    found = k(sorted_a[result])
    if found < kt or kt < found:
        raise AssertionError(
            f"sorted_a[{result}] = {sorted_a[result]!r} does not equal target {target!r}"
        )
