"""
Benchmark harness.

Modules:
    measure  - time_call: timing + comparison counting for one kernel/input
    runner   - run_experiment / CLI: YAML-driven sweeps over input sizes
"""
