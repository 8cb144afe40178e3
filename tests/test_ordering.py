"""
Tests for the ordering contract shared by the kernels.

What we check:
- natural_compare needs only `<` and is typed through SupportsLessThan
- make_comparator resolves key= / compare= and rejects both at once
- CountingComparator counts calls and resets
- Kernels accept any element type with `<`, key functions and cmp-style functions
- Comparator exceptions propagate and leave the sequence a permutation
"""

from __future__ import annotations

import functools
import typing

import pytest

from sortsearch import search, sort
from sortsearch.ordering import (
    CountingComparator,
    OrderedT,
    SupportsLessThan,
    make_comparator,
    natural_compare,
)


class OnlyLessThan:
    """Element type that supports nothing but `<`."""

    def __init__(self, v):
        self.v = v

    def __lt__(self, other):
        return self.v < other.v


@pytest.mark.parametrize("a,b,expected", [(1, 2, -1), (2, 1, 1), (3, 3, 0), ("a", "b", -1)])
def test_natural_compare(a, b, expected) -> None:
    assert natural_compare(a, b) == expected


def test_natural_compare_needs_only_lt() -> None:
    assert natural_compare(OnlyLessThan(1), OnlyLessThan(1)) == 0
    assert natural_compare(OnlyLessThan(0), OnlyLessThan(1)) == -1


def test_make_comparator_defaults_to_natural_order() -> None:
    assert make_comparator() is natural_compare


def test_make_comparator_with_key() -> None:
    cmp = make_comparator(key=len)
    assert cmp("aaa", "b") == 1
    assert cmp("ab", "cd") == 0


def test_make_comparator_passes_compare_through() -> None:
    def rev(a, b):
        return b - a

    assert make_comparator(compare=rev) is rev


def test_make_comparator_rejects_key_and_compare() -> None:
    with pytest.raises(ValueError):
        make_comparator(key=abs, compare=natural_compare)


def test_kernels_reject_key_and_compare() -> None:
    with pytest.raises(ValueError):
        sort([2, 1], key=abs, compare=natural_compare)
    with pytest.raises(ValueError):
        search([1, 2], 1, key=abs, compare=natural_compare)


def test_counting_comparator_counts_and_resets() -> None:
    counter = CountingComparator(natural_compare)
    counter(1, 2)
    counter(2, 1)
    assert counter.calls == 2
    counter.reset()
    assert counter.calls == 0


def test_kernels_accept_elements_with_only_lt() -> None:
    seq = [OnlyLessThan(v) for v in [3, 1, 2]]
    sort(seq)
    assert [e.v for e in seq] == [1, 2, 3]
    assert search(seq, OnlyLessThan(2)) == 1


def test_cmp_style_functions_work_as_compare() -> None:
    # functools-style cmp functions share the three-way contract
    def by_abs(a, b):
        return (abs(a) > abs(b)) - (abs(a) < abs(b))

    seq = [-3, 2, -1]
    sort(seq, compare=by_abs)
    assert seq == [-1, 2, -3]
    assert seq == sorted([-3, 2, -1], key=functools.cmp_to_key(by_abs))


def test_comparator_errors_propagate_and_keep_a_permutation() -> None:
    calls = {"n": 0}

    def flaky(a, b):
        calls["n"] += 1
        if calls["n"] == 3:
            raise RuntimeError("boom")
        return natural_compare(a, b)

    seq = [4, 3, 2, 1]
    with pytest.raises(RuntimeError, match="boom"):
        sort(seq, compare=flaky)
    assert seq == [3, 2, 4, 1]
    assert sorted(seq) == [1, 2, 3, 4]


def test_natural_order_is_typed_through_the_protocol() -> None:
    hints = typing.get_type_hints(natural_compare)
    assert hints["a"] is SupportsLessThan
    assert hints["b"] is SupportsLessThan
    assert OrderedT.__bound__ is SupportsLessThan


@pytest.mark.skipif(not hasattr(typing, "get_overloads"), reason="typing.get_overloads needs Python 3.11")
@pytest.mark.parametrize("fn", [search, sort])
def test_kernels_declare_natural_order_overload(fn) -> None:
    overloads = typing.get_overloads(fn)
    assert len(overloads) == 3
    natural = typing.get_type_hints(overloads[0])
    assert natural["sequence"].__args__[0] is OrderedT
