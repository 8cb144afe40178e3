"""
Datasets package public API.

Re-export the generators so callers can write:
    from sortsearch.datasets import make_dataset, make_tagged, SUPPORTED_DISTS
"""

from .generators import SUPPORTED_DISTS, make_dataset, make_search_targets, make_tagged

__all__ = ["make_dataset", "make_tagged", "make_search_targets", "SUPPORTED_DISTS"]
