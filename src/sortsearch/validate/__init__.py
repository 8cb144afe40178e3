"""
Validation utilities public API.

Re-exports:
    - Oracle:
        ORACLE_NAME
        oracle_sort
        equals_oracle
        oracle_contains

    - Property checks:
        is_nondecreasing
        first_nondecreasing_violation_index
        is_permutation
        permutation_counter_diff
        assert_no_mutation
        is_stable
        assert_search_result
"""

from .oracle import ORACLE_NAME, equals_oracle, oracle_contains, oracle_sort
from .properties import (
    assert_no_mutation,
    assert_search_result,
    first_nondecreasing_violation_index,
    is_nondecreasing,
    is_permutation,
    is_stable,
    permutation_counter_diff,
)

__all__ = [
    "ORACLE_NAME",
    "oracle_sort",
    "equals_oracle",
    "oracle_contains",
    "is_nondecreasing",
    "first_nondecreasing_violation_index",
    "is_permutation",
    "permutation_counter_diff",
    "assert_no_mutation",
    "is_stable",
    "assert_search_result",
]
