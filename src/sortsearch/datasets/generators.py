"""
Dataset generators for the search and sort kernels.

Currently implemented:
- dist == "random":
    Integer arrays drawn uniformly from an inclusive range.

- dist == "sorted":
    Deterministic ascending order [0, 1, ..., n-1]. This is the best case of
    straight insertion (n - 1 comparisons, no shifts).

- dist == "nearly_sorted":
    Start from [0, 1, ..., n-1] then perform ceil(swap_frac * n) random index
    swaps using the provided RNG.

- dist == "few_uniques":
    Choose up to k distinct integer values (uniform over an inclusive range),
    then fill the array by sampling indices in [0, k) uniformly. Useful for
    stability checks, since equal keys are frequent.

- dist == "reversed":
    Deterministic reversed order [n-1, n-2, ..., 0]. This is the worst case
    of straight insertion.

Public API (stable):
    make_dataset(n: int, spec: dict, rng: numpy.random.Generator) -> list[int]
    make_tagged(keys: Sequence) -> list[tuple]
    make_search_targets(sorted_values, count, rng) -> tuple[list[int], list[int]]

Conventions:
- Integer ranges given in params["range"] are **inclusive** on both ends.
- Returns plain Python lists (kernels stay NumPy-agnostic).
- The caller supplies the RNG (for reproducibility across runs where applicable).
"""

from __future__ import annotations

from typing import Any, Dict, List, Sequence, Tuple

import numpy as np

SUPPORTED_DISTS = {
    "random",
    "sorted",
    "nearly_sorted",
    "few_uniques",
    "reversed",
}
__all__ = ["SUPPORTED_DISTS", "make_dataset", "make_tagged", "make_search_targets"]


def make_dataset(n: int, spec: Dict[str, Any], rng: np.random.Generator) -> List[int]:
    """
    Generate an integer dataset according to `spec`, using the provided RNG.

    Parameters
    ----------
    n : int
        Number of elements to generate. Must be >= 0.
    spec : dict
        Distribution specification, e.g.

            {"dist": "random", "params": {"range": [0, 1000]}}
            {"dist": "nearly_sorted", "params": {"swap_frac": 0.05}}
            {"dist": "few_uniques", "params": {"k": 4, "range": [0, 9]}}
            {"dist": "sorted"}
            {"dist": "reversed"}

    rng : numpy.random.Generator
        Random number generator owned by the caller (seeded upstream).
        Unused by the deterministic "sorted" and "reversed" distributions.

    Returns
    -------
    list[int]
        A list of length `n`.

    Raises
    ------
    ValueError
        If inputs are invalid or if the distribution is unsupported.
    """
    _validate_n(n)

    if not isinstance(spec, dict):
        raise ValueError("spec must be a dict")

    dist = spec.get("dist", None)
    if dist not in SUPPORTED_DISTS:
        raise ValueError(
            f"Unsupported dataset dist: {dist!r}. Supported: {sorted(SUPPORTED_DISTS)}"
        )

    params = spec.get("params") or {}
    if not isinstance(params, dict):
        raise ValueError("spec.params must be a dict if provided")

    if dist == "random":
        lo, hi = _parse_inclusive_range(params, required=True)
        if n == 0:
            return []
        # Generator.integers is half-open; +1 makes the upper bound inclusive.
        arr = rng.integers(lo, hi + 1, size=n, dtype=np.int64)
        return arr.tolist()

    if dist == "sorted":
        return list(range(n))

    if dist == "nearly_sorted":
        swap_frac = _parse_swap_frac(params)
        arr = list(range(n))
        num_swaps = int(np.ceil(swap_frac * n))
        if num_swaps <= 0:
            return arr
        idxs = rng.integers(0, n, size=2 * num_swaps)
        for k in range(num_swaps):
            i = int(idxs[2 * k])
            j = int(idxs[2 * k + 1])
            # i == j is a no-op swap
            arr[i], arr[j] = arr[j], arr[i]
        return arr

    if dist == "few_uniques":
        k = _parse_k(params)
        lo, hi = _parse_inclusive_range(params, required=False, default=(0, 4294967295))
        if n == 0:
            return []
        actual_k = int(min(k, n, hi - lo + 1))
        # Sample without replacement from the span using the caller's RNG.
        if hi - lo + 1 <= 4 * actual_k:
            values = rng.permutation(np.arange(lo, hi + 1, dtype=np.int64))[:actual_k]
            chosen = [int(v) for v in values]
        else:
            chosen = []
            seen = set()
            while len(chosen) < actual_k:
                need = actual_k - len(chosen)
                for v in map(int, rng.integers(lo, hi + 1, size=need * 2)):
                    if v not in seen:
                        seen.add(v)
                        chosen.append(v)
                        if len(chosen) == actual_k:
                            break
        idxs = rng.integers(0, actual_k, size=n)
        return [chosen[int(t)] for t in idxs]

    if dist == "reversed":
        return list(range(n - 1, -1, -1))

    raise ValueError(f"Unhandled dataset dist: {dist!r}")


def make_tagged(keys: Sequence[Any]) -> List[Tuple[Any, int]]:
    """
    Pair every key with its original position: [(key, 0), (key, 1), ...].

    Sorting the result by `key=lambda p: p[0]` and checking that tags of equal
    keys stay increasing is how stability is observed.
    """
    return [(k, i) for i, k in enumerate(keys)]


def make_search_targets(
    sorted_values: Sequence[int], count: int, rng: np.random.Generator
) -> Tuple[List[int], List[int]]:
    """
    Draw search targets for an ascending integer sequence.

    Returns
    -------
    (present, absent) : tuple[list[int], list[int]]
        `present` holds `count` values drawn from `sorted_values` (empty if the
        sequence is empty). `absent` holds values that do not occur, always
        including one below the minimum and one above the maximum when the
        sequence is non-empty.
    """
    _validate_n(count)
    if len(sorted_values) == 0:
        return [], [int(v) for v in rng.integers(-1000, 1000, size=count)]

    idxs = rng.integers(0, len(sorted_values), size=count)
    present = [int(sorted_values[int(i)]) for i in idxs]

    lo, hi = int(sorted_values[0]), int(sorted_values[-1])
    members = set(int(v) for v in sorted_values)
    absent = [lo - 1, hi + 1]
    # Gaps inside [lo, hi], if any
    gaps = [v for v in range(lo, hi + 1) if v not in members] if hi - lo < 100_000 else []
    if gaps:
        picks = rng.integers(0, len(gaps), size=count)
        absent.extend(gaps[int(p)] for p in picks)
    return present, absent


# ------------------------- helpers ------------------------- #


def _validate_n(n: int) -> None:
    if not isinstance(n, (int, np.integer)) or isinstance(n, bool):
        raise ValueError("n must be an int")
    if n < 0:
        raise ValueError("n must be nonnegative")


def _parse_inclusive_range(
    params: Dict[str, Any],
    *,
    required: bool,
    default: Tuple[int, int] = (0, 0),
) -> Tuple[int, int]:
    """
    Parse params["range"] == [min_int, max_int] (both inclusive).

    If absent, raise when `required`, else return `default`.
    """
    if "range" not in params:
        if required:
            raise ValueError("params.range must be provided as [min, max] (inclusive)")
        return default

    spec = params["range"]
    if not isinstance(spec, (list, tuple)) or len(spec) != 2:
        raise ValueError("params.range must be a 2-element list/tuple [min, max]")
    lo_raw, hi_raw = spec
    if not _is_int_like(lo_raw) or not _is_int_like(hi_raw):
        raise ValueError("params.range values must be integers")
    lo, hi = int(lo_raw), int(hi_raw)
    if lo > hi:
        raise ValueError(f"params.range invalid: min > max ({lo} > {hi})")
    return lo, hi


def _parse_swap_frac(params: Dict[str, Any]) -> float:
    """Parse swap_frac in [0.0, 1.0] for nearly_sorted (default 0.05)."""
    val = params.get("swap_frac", 0.05)
    try:
        x = float(val)
    except (TypeError, ValueError) as e:
        raise ValueError(
            f"nearly_sorted.params.swap_frac must be a float in [0.0, 1.0]; got {val!r}"
        ) from e
    if not (0.0 <= x <= 1.0):
        raise ValueError(
            f"nearly_sorted.params.swap_frac must be in [0.0, 1.0]; got {x}"
        )
    return x


def _parse_k(params: Dict[str, Any]) -> int:
    if "k" not in params:
        raise ValueError("few_uniques.params.k must be provided (int >= 1)")
    k = params["k"]
    if not isinstance(k, int) or isinstance(k, bool) or k < 1:
        raise ValueError(f"few_uniques.params.k must be an integer >= 1; got {k!r}")
    return k


def _is_int_like(x: Any) -> bool:
    # Accept Python ints and NumPy integer types
    return isinstance(x, (int, np.integer)) and not isinstance(x, bool)
