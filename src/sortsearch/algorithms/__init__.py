"""
Algorithm kernels.

Each module is importable by name from the benchmark runner:
    - binary_search       exposes `search`
    - straight_insertion  exposes `sort`
"""

from .binary_search import contains, search
from .straight_insertion import sort

__all__ = ["search", "contains", "sort"]
