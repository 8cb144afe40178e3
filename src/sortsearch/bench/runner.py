"""
Experiment runner: orchestrates a full benchmarking sweep from a YAML config.

Usage (from repo root):
    python -m sortsearch.bench.runner experiments/configs/01_insertion_vs_search.yaml
    sortsearch-bench experiments/configs/01_insertion_vs_search.yaml

Outputs in a new run directory:
    - config_resolved.yaml    # the config we actually used
    - meta.json               # environment info (python, numpy, cpu/ram, git commit)
    - results.jsonl           # one JSON line per successful timing sample
    - summary.csv             # median + IQR time and comparisons per (algo, n)
    - (console) rich/tqdm summaries

Design notes:
- For each size n, we generate ONE dataset and give the same input to every
  algorithm. Search algorithms get the ascending-sorted copy plus one seeded
  target (present by default, or absent with `config: {target: absent}`).
- Each algorithm output is checked once against the oracle before timing; a
  failed check is recorded as an "error" status like a failed timing run.
- On timeout/error for an algorithm at size n, we skip larger sizes for that algo.
"""

from __future__ import annotations

import argparse
import datetime as _dt
import importlib
import json
import logging
import os
import platform
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd
import psutil
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from tqdm import tqdm

from sortsearch.bench.measure import time_call
from sortsearch.datasets import make_dataset, make_search_targets
from sortsearch.validate import assert_search_result, equals_oracle, oracle_sort

logger = logging.getLogger(__name__)

_console = Console()

REQUIRED_KEYS = [
    "experiment_name",
    "output_dir",
    "seed",
    "repeats",
    "warmup",
    "disable_gc",
    "timeout_seconds",
    "dataset",
    "sizes",
    "algorithms",
]

SUMMARY_COLUMNS = [
    "algo", "kind", "n", "samples_ok", "median_ns", "iqr_ns", "min_ns", "max_ns", "comparisons",
]


# ------------------------- data structures ------------------------- #

@dataclass(frozen=True)
class AlgoSpec:
    name: str
    kind: str
    fn: Callable[..., Any]
    config: Dict[str, Any]


# ------------------------- helpers: IO & meta ------------------------- #

def _load_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)
    if not isinstance(cfg, dict):
        raise ValueError(f"Config must be a YAML mapping: {path}")
    return cfg


def _write_yaml(obj: Dict[str, Any], path: Path) -> None:
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(obj, f, sort_keys=False)


def _append_jsonl(obj: Dict[str, Any], path: Path) -> None:
    with path.open("a", encoding="utf-8") as f:
        f.write(json.dumps(obj, separators=(",", ":"), ensure_ascii=False))
        f.write("\n")


def _timestamp() -> str:
    return _dt.datetime.now().strftime("%Y%m%d_%H%M%S")


def _ensure_run_dir(base_dir: Path, experiment_name: str) -> Path:
    base_dir.mkdir(parents=True, exist_ok=True)
    run_dir = base_dir / f"{_timestamp()}_{experiment_name}"
    # Two runs in the same second get a numeric suffix.
    suffix = 1
    while run_dir.exists():
        run_dir = base_dir / f"{_timestamp()}_{experiment_name}_{suffix}"
        suffix += 1
    run_dir.mkdir(parents=False, exist_ok=False)
    return run_dir


def _git_commit_short() -> Optional[str]:
    try:
        out = subprocess.check_output(["git", "rev-parse", "--short", "HEAD"], stderr=subprocess.DEVNULL)
    except (OSError, subprocess.CalledProcessError):
        return None
    return out.decode("utf-8").strip()


def _gather_meta() -> Dict[str, Any]:
    return {
        "python": platform.python_version(),
        "numpy": np.__version__,
        "pandas": pd.__version__,
        "psutil": psutil.__version__,
        "git_commit": _git_commit_short(),
        "machine": {
            "cpu": platform.processor() or platform.machine(),
            "cores_logical": psutil.cpu_count(logical=True),
            "cores_physical": psutil.cpu_count(logical=False),
            "ram_gb": round(psutil.virtual_memory().total / (1024**3), 2),
            "platform": platform.platform(),
        },
        "start_time": _dt.datetime.now().isoformat(timespec="seconds"),
        "pid": os.getpid(),
        "cwd": str(Path.cwd()),
    }


def _resolve_algorithms(cfg_algos: List[Dict[str, Any]]) -> List[AlgoSpec]:
    specs: List[AlgoSpec] = []
    seen = set()
    for entry in cfg_algos:
        name = entry.get("name", None)
        if not name or not isinstance(name, str):
            raise ValueError("Each algorithm must have a string 'name' field")
        if name in seen:
            raise ValueError(f"Duplicate algorithm name in config: {name}")
        seen.add(name)

        try:
            mod = importlib.import_module(f"sortsearch.algorithms.{name}")
        except ImportError as e:
            raise ImportError(f"Could not import algorithm module 'sortsearch.algorithms.{name}': {e!r}") from e

        if hasattr(mod, "sort"):
            kind, fn = "sort", getattr(mod, "sort")
        elif hasattr(mod, "search"):
            kind, fn = "search", getattr(mod, "search")
        else:
            raise AttributeError(f"Algorithm module '{name}' must define `sort(seq)` or `search(seq, target)`")

        config = entry.get("config", {})
        if config is None:
            config = {}
        elif not isinstance(config, dict):
            raise ValueError(f"Algorithm '{name}': 'config' must be a dict if provided")
        if config.get("target", "present") not in ("present", "absent"):
            raise ValueError(f"Algorithm '{name}': config.target must be 'present' or 'absent'")

        specs.append(AlgoSpec(name=name, kind=kind, fn=fn, config=config))
    return specs


def _prepare_input(
    a_spec: AlgoSpec, base_a: List[int], sorted_a: List[int], rng: np.random.Generator
) -> Tuple[List[int], Any]:
    """Return (input, target) for one algorithm at one size."""
    if a_spec.kind == "sort":
        return base_a, None
    present, absent = make_search_targets(sorted_a, 1, rng)
    # `absent` always holds at least the two out-of-range values
    pool = absent if a_spec.config.get("target", "present") == "absent" or not present else present
    return sorted_a, pool[int(rng.integers(len(pool)))]


def _sanity_check(a_spec: AlgoSpec, a: List[int], target: Any) -> None:
    """Run the kernel once and compare against the oracle; raises AssertionError."""
    if a_spec.kind == "sort":
        out = list(a)
        a_spec.fn(out)
        if not equals_oracle(a, out):
            raise AssertionError(f"{a_spec.name}: output does not match oracle")
    else:
        assert_search_result(a, target, a_spec.fn(a, target))


def _iqr(s: pd.Series) -> float:
    return s.quantile(0.75) - s.quantile(0.25)


def _aggregate_summary(jsonl_path: Path) -> pd.DataFrame:
    if not jsonl_path.exists():
        return pd.DataFrame(columns=SUMMARY_COLUMNS)
    df = pd.read_json(jsonl_path, lines=True)
    if "time_ns" not in df.columns:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)
    # Status lines carry no time_ns
    df = df[df["time_ns"].notna()]
    if df.empty:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)

    out = (
        df.groupby(["algo", "kind", "n"], as_index=False)
        .agg(
            samples_ok=("time_ns", "count"),
            median_ns=("time_ns", "median"),
            iqr_ns=("time_ns", _iqr),
            min_ns=("time_ns", "min"),
            max_ns=("time_ns", "max"),
            comparisons=("comparisons", "max"),
        )
    )
    int_cols = ["n", "samples_ok", "median_ns", "iqr_ns", "min_ns", "max_ns", "comparisons"]
    out[int_cols] = out[int_cols].astype("int64")
    return out[SUMMARY_COLUMNS].sort_values(["algo", "n"], ignore_index=True)


def _print_rich_summary(summary: pd.DataFrame, sizes: List[int]) -> None:
    table = Table(title="Benchmark Summary (median ± IQR in µs, comparisons)")
    table.add_column("Algorithm", style="bold")
    picks: List[int] = []
    if sizes:
        picks = [sizes[0], sizes[len(sizes) // 2], sizes[-1]]
        # Keep order, drop repeats for short size lists
        picks = list(dict.fromkeys(picks))
        for npick in picks:
            table.add_column(f"n={npick}", justify="right")

    def _format_cell(median_ns: int, iqr_ns: int, comparisons: int) -> str:
        return f"{median_ns / 1e3:.1f} ± {iqr_ns / 1e3:.1f}  ({comparisons} cmp)"

    for algo in summary["algo"].unique():
        row = [f"[bold]{algo}[/]"]
        for npick in picks:
            s = summary[(summary["algo"] == algo) & (summary["n"] == npick)]
            if s.empty:
                row.append("—")
            else:
                row.append(
                    _format_cell(
                        int(s["median_ns"].values[0]),
                        int(s["iqr_ns"].values[0]),
                        int(s["comparisons"].values[0]),
                    )
                )
        table.add_row(*row)
    _console.print()
    _console.print(table)
    _console.print()


# ------------------------- core runner ------------------------- #

def run_experiment(config_path: Path) -> Path:
    cfg = _load_yaml(config_path)

    missing = [k for k in REQUIRED_KEYS if k not in cfg]
    if missing:
        raise ValueError(f"Missing required config keys: {missing}")

    experiment_name: str = str(cfg["experiment_name"])
    output_dir = Path(cfg["output_dir"])
    sizes: List[int] = [int(n) for n in cfg["sizes"]]
    repeats: int = int(cfg["repeats"])
    warmup: bool = bool(cfg["warmup"])
    disable_gc: bool = bool(cfg["disable_gc"])
    timeout_seconds: float = float(cfg["timeout_seconds"])
    dataset_spec: Dict[str, Any] = dict(cfg["dataset"])
    algos_cfg: List[Dict[str, Any]] = list(cfg["algorithms"])

    if not sizes or any(n < 0 for n in sizes):
        raise ValueError("Config 'sizes' must be a non-empty list of nonnegative integers")

    # Resolve algorithms before creating any output
    algos: List[AlgoSpec] = _resolve_algorithms(algos_cfg)

    run_dir = _ensure_run_dir(output_dir, experiment_name)
    results_path = run_dir / "results.jsonl"
    summary_path = run_dir / "summary.csv"
    meta_path = run_dir / "meta.json"
    cfg_resolved_path = run_dir / "config_resolved.yaml"

    _write_yaml(cfg, cfg_resolved_path)
    with meta_path.open("w", encoding="utf-8") as f:
        json.dump(_gather_meta(), f, indent=2)

    rng = np.random.default_rng(int(cfg["seed"]))

    # Per-algorithm skip flags (set on timeout/error)
    per_algo_skip = {a.name: False for a in algos}

    _console.print(f"[bold green]Run directory:[/bold green] {run_dir}")
    _console.print(f"[bold]Experiment:[/bold] {experiment_name}")
    _console.print(f"[bold]Algorithms:[/bold] {', '.join(a.name for a in algos)}")
    _console.print()

    for n in tqdm(sizes, desc="Sizes", unit="n"):
        base_a = make_dataset(int(n), dataset_spec, rng)
        sorted_a = oracle_sort(base_a)

        for a_spec in algos:
            if per_algo_skip[a_spec.name]:
                continue

            a, target = _prepare_input(a_spec, base_a, sorted_a, rng)
            try:
                _sanity_check(a_spec, a, target)
            except Exception as e:
                res = {
                    "samples_ns": [],
                    "comparisons": None,
                    "status": "error",
                    "error": f"sanity check failed: {e!r}",
                    "timed_out_on_repeat": None,
                }
            else:
                res = time_call(
                    algo_name=a_spec.name,
                    kind=a_spec.kind,
                    fn=a_spec.fn,
                    a=a,
                    target=target,
                    repeats=repeats,
                    warmup=warmup,
                    disable_gc=disable_gc,
                    timeout_seconds=timeout_seconds,
                )
            logger.debug("%s n=%d status=%s comparisons=%s", a_spec.name, n, res["status"], res["comparisons"])

            for trial_idx, t_ns in enumerate(res["samples_ns"]):
                _append_jsonl(
                    {
                        "algo": a_spec.name,
                        "kind": a_spec.kind,
                        "n": int(n),
                        "dataset": dataset_spec,
                        "trial": int(trial_idx),
                        "time_ns": int(t_ns),
                        "comparisons": res["comparisons"],
                        "config": a_spec.config,
                    },
                    results_path,
                )

            status = res["status"]
            if status in ("timeout", "error"):
                per_algo_skip[a_spec.name] = True
                logger.warning("%s: %s at n=%d; skipping larger sizes", a_spec.name, status, n)
                _append_jsonl(
                    {
                        "algo": a_spec.name,
                        "kind": a_spec.kind,
                        "n": int(n),
                        "status": status,
                        "timed_out_on_repeat": res["timed_out_on_repeat"],
                        "error": res["error"],
                        "config": a_spec.config,
                    },
                    results_path,
                )

    summary_df = _aggregate_summary(results_path)
    summary_df.to_csv(summary_path, index=False)

    _print_rich_summary(summary_df, sizes)

    _console.print("[bold green]Done.[/bold green] Wrote:")
    for path in (results_path, summary_path, meta_path, cfg_resolved_path):
        _console.print(f" - {path}")

    return run_dir


# ------------------------- CLI ------------------------- #

def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Benchmark the search and sort kernels from a YAML config.")
    p.add_argument("config", type=str, help="Path to YAML experiment config")
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING)",
    )
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(message)s",
        handlers=[RichHandler(console=_console, show_path=False)],
    )
    config_path = Path(args.config).resolve()
    if not config_path.exists():
        raise SystemExit(f"Config file not found: {config_path}")
    try:
        run_experiment(config_path)
    except Exception as e:
        _console.print(f"[bold red]Runner failed:[/bold red] {e!r}")
        raise


if __name__ == "__main__":
    main()
