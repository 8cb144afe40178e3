"""
Ordering contract shared by the search and sort kernels.

Both kernels are generic over an element type `T` carrying a total order.
Callers supply that order in one of three ways:

- intrinsically: elements support `<` (see `SupportsLessThan`);
- a `key` function, whose results are compared with `<`;
- a three-way `compare(a, b)` function returning negative / zero / positive.

`make_comparator` resolves these into a single three-way `Comparator`, which is
the only thing the kernels ever call.

Public API (stable):
    SupportsLessThan
    OrderedT   (TypeVar bound to SupportsLessThan)
    Comparator
    natural_compare(a, b) -> int
    make_comparator(key=None, compare=None) -> Comparator
    CountingComparator
"""

from __future__ import annotations

from typing import Any, Callable, Generic, Optional, Protocol, TypeVar

__all__ = [
    "SupportsLessThan",
    "OrderedT",
    "Comparator",
    "natural_compare",
    "make_comparator",
    "CountingComparator",
]

T = TypeVar("T")


class SupportsLessThan(Protocol):
    def __lt__(self, other: Any, /) -> bool: ...


# Element type for the natural order (no key= or compare=)
OrderedT = TypeVar("OrderedT", bound=SupportsLessThan)


Comparator = Callable[[T, T], int]


def natural_compare(a: SupportsLessThan, b: SupportsLessThan) -> int:
    """
    Three-way comparison using only `<`.

    Returns -1 if a < b, 1 if b < a, and 0 otherwise. Only `__lt__` is
    required, matching what `sorted()` and `bisect` need.
    """
    if a < b:
        return -1
    if b < a:
        return 1
    return 0


def make_comparator(
    key: Optional[Callable[[Any], SupportsLessThan]] = None,
    compare: Optional[Comparator] = None,
) -> Comparator:
    """
    Resolve the caller's ordering into one three-way comparator.

    Parameters
    ----------
    key : callable, optional
        Maps an element to the value it is ordered by.
    compare : callable, optional
        Three-way comparator over elements.

    Returns
    -------
    Comparator
        `compare` itself, a key-based comparator, or `natural_compare`.

    Raises
    ------
    ValueError
        If both `key` and `compare` are given.
    """
    if key is not None and compare is not None:
        raise ValueError("pass either key= or compare=, not both")
    if compare is not None:
        return compare
    if key is not None:
        return lambda a, b: natural_compare(key(a), key(b))
    return natural_compare


class CountingComparator(Generic[T]):
    """Comparator wrapper that counts how many times it is called."""

    def __init__(self, compare: Optional[Comparator] = None) -> None:
        self._compare = compare if compare is not None else natural_compare
        self.calls = 0

    def __call__(self, a: T, b: T) -> int:
        self.calls += 1
        return self._compare(a, b)

    def reset(self) -> None:
        self.calls = 0
