"""
sortsearch: reference implementations of binary search and straight
insertion sort, with dataset generators, validation helpers and a
benchmark harness around them.

Re-exports:
    search, contains   (sortsearch.algorithms.binary_search)
    sort               (sortsearch.algorithms.straight_insertion)
"""

from .algorithms.binary_search import contains, search
from .algorithms.straight_insertion import sort

__all__ = ["search", "contains", "sort"]

__version__ = "0.1.0"
