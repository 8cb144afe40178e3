"""
Comparison-count tests: the observable complexity of both kernels.

- search: at most floor(log2(n)) + 1 comparisons, zero on empty input
- sort:   zero comparisons on empty/single input, exactly n - 1 on sorted
          input, n(n-1)/2 on strictly reversed input
"""

from __future__ import annotations

import math

import pytest
from hypothesis import given, settings, strategies as st

from sortsearch import search, sort
from sortsearch.ordering import CountingComparator


def _log_bound(n: int) -> int:
    return int(math.floor(math.log2(n))) + 1 if n > 0 else 0


class _WriteCountingList(list):
    """list that counts item assignments."""

    def __init__(self, *args):
        super().__init__(*args)
        self.writes = 0

    def __setitem__(self, index, value):
        self.writes += 1
        super().__setitem__(index, value)


def test_search_empty_makes_no_comparisons() -> None:
    counter = CountingComparator()
    assert search([], 1, compare=counter) is None
    assert counter.calls == 0


@pytest.mark.parametrize("n", [1, 2, 3, 7, 8, 100, 1000, 4096])
def test_search_is_logarithmic(n: int) -> None:
    s = list(range(0, 2 * n, 2))
    counter = CountingComparator()
    for x in range(-1, 2 * n + 1):
        counter.reset()
        search(s, x, compare=counter)
        assert counter.calls <= _log_bound(n), f"x={x}: {counter.calls} comparisons"


@settings(deadline=None, max_examples=60)
@given(st.lists(st.integers(min_value=-500, max_value=500), max_size=500), st.integers(-600, 600))
def test_property_search_comparison_bound(a, x) -> None:
    s = sorted(a)
    counter = CountingComparator()
    search(s, x, compare=counter)
    assert counter.calls <= _log_bound(len(s))


@pytest.mark.parametrize("a", [[], [42]])
def test_sort_trivial_inputs_do_no_work(a) -> None:
    seq = _WriteCountingList(a)
    counter = CountingComparator()
    sort(seq, compare=counter)
    assert counter.calls == 0
    assert seq.writes == 0
    assert list(seq) == a


@pytest.mark.parametrize("n", [2, 5, 50, 500])
def test_sort_sorted_input_is_linear(n: int) -> None:
    seq = _WriteCountingList(range(n))
    counter = CountingComparator()
    sort(seq, compare=counter)
    assert counter.calls == n - 1
    assert seq.writes == 0


def test_sort_equal_keys_are_a_best_case() -> None:
    seq = _WriteCountingList([3] * 10)
    counter = CountingComparator()
    sort(seq, compare=counter)
    assert counter.calls == 9
    assert seq.writes == 0


@pytest.mark.parametrize("n", [2, 5, 50])
def test_sort_reversed_input_is_quadratic(n: int) -> None:
    seq = list(range(n - 1, -1, -1))
    counter = CountingComparator()
    sort(seq, compare=counter)
    assert seq == list(range(n))
    assert counter.calls == n * (n - 1) // 2
