"""
Timing harness for the search and sort kernels.

We measure exactly one kernel call per sample, using a monotonic
high-resolution clock. All non-essential work (copying, GC, warmup, comparison
counting) happens outside the timed block to keep measurements clean.

Kernel call shapes:
    kind == "sort":   fn(a_copy)           # mutates a fresh copy each sample
    kind == "search": fn(a, target)        # read-only, no copy needed

Public API (stable):
    time_call(...) -> dict

Returned dict schema:
    {
        "algo": str,
        "kind": "sort" | "search",
        "repeats": int,
        "samples_ns": list[int],            # elapsed ns for each successful sample
        "comparisons": int | None,          # comparator calls for one untimed run
        "status": "ok" | "timeout" | "error",
        "error": str | None,                # populated if status == "error"
        "timed_out_on_repeat": int | None,  # 0-based repeat index if timeout occurred
    }
"""

from __future__ import annotations

import gc
import logging
import time
from typing import Any, Callable, Dict, List

from sortsearch.ordering import CountingComparator

__all__ = ["KINDS", "time_call"]

logger = logging.getLogger(__name__)

KINDS = ("sort", "search")


def _invoke(kind: str, fn: Callable[..., Any], a: List[Any], target: Any, **kwargs: Any) -> Any:
    if kind == "sort":
        # Sort works in place; give it its own copy.
        return fn(list(a), **kwargs)
    return fn(a, target, **kwargs)


def time_call(
    *,
    algo_name: str,
    kind: str,
    fn: Callable[..., Any],
    a: List[Any],
    target: Any = None,
    repeats: int,
    warmup: bool,
    disable_gc: bool,
    timeout_seconds: float,
    count_comparisons: bool = True,
) -> Dict[str, Any]:
    """
    Time repeated calls of one kernel on one input.

    Parameters
    ----------
    algo_name : str
        Logical name of the algorithm (for logs/records).
    kind : {"sort", "search"}
        Selects the call shape; see module docstring.
    fn : callable
        The kernel (`sort` or `search`).
    a : list
        Input. For "search" it must already be sorted ascending.
    target : Any
        Search target; ignored for "sort".
    repeats : int
        Number of timed samples to collect.
    warmup : bool
        If True, make one untimed call before timing.
    disable_gc : bool
        If True, collect and disable Python GC during the timed loop; restore afterward.
    timeout_seconds : float
        Per-sample timeout threshold. A slower sample marks status="timeout"
        and stops further sampling.
    count_comparisons : bool
        If True, run once more untimed with a `CountingComparator` and record
        the number of comparisons.

    Returns
    -------
    dict
        See module docstring for exact schema.
    """
    if kind not in KINDS:
        raise ValueError(f"kind must be one of {KINDS}; got {kind!r}")
    if repeats < 0:
        raise ValueError("repeats must be nonnegative")
    if timeout_seconds <= 0:
        raise ValueError("timeout_seconds must be positive")

    result: Dict[str, Any] = {
        "algo": algo_name,
        "kind": kind,
        "repeats": repeats,
        "samples_ns": [],
        "comparisons": None,
        "status": "ok",
        "error": None,
        "timed_out_on_repeat": None,
    }

    # ---- Warmup and comparison count (outside GC disable & timed block) ----
    try:
        if warmup and repeats > 0:
            _invoke(kind, fn, a, target)
        if count_comparisons:
            counter = CountingComparator()
            _invoke(kind, fn, a, target, compare=counter)
            result["comparisons"] = counter.calls
    except Exception as e:
        logger.warning("%s: untimed run failed: %r", algo_name, e)
        result["status"] = "error"
        result["error"] = f"untimed run failed: {e!r}"
        return result

    # ---- GC control ----
    prev_gc_enabled = gc.isenabled()
    try:
        if disable_gc:
            gc.collect()
            gc.disable()

        # ---- Timed loop ----
        threshold_ns = int(timeout_seconds * 1e9)
        for r in range(repeats):
            try:
                # Prepare input OUTSIDE the timed block
                if kind == "sort":
                    arg = list(a)
                    t0 = time.perf_counter_ns()
                    fn(arg)
                    t1 = time.perf_counter_ns()
                else:
                    t0 = time.perf_counter_ns()
                    fn(a, target)
                    t1 = time.perf_counter_ns()
            except Exception as e:
                logger.warning("%s: run failed at repeat %d: %r", algo_name, r, e)
                result["status"] = "error"
                result["error"] = f"run failed at repeat {r}: {e!r}"
                break

            elapsed = t1 - t0
            result["samples_ns"].append(int(elapsed))

            if elapsed > threshold_ns:
                logger.info("%s: sample %d exceeded %.3fs", algo_name, r, timeout_seconds)
                result["status"] = "timeout"
                result["timed_out_on_repeat"] = r
                break
    finally:
        # Restore GC only if we turned it off; respect the caller's global state.
        if disable_gc and prev_gc_enabled:
            gc.enable()

    return result
