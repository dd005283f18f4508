from __future__ import annotations
import math, os, statistics
from typing import Dict, Any, List, Optional, Sequence
from dataclasses import asdict
import csv
from .tsp import TSPInstance
from .montecarlo import MCConfig, MonteCarloSearch


def run_repeated_trials(instance: TSPInstance, cfg: MCConfig, n_runs: int = 10, base_seed: int = 42):
    """Run independent searches seeded ``base_seed + r`` and summarize their best lengths.

    ``hit_rate`` is the share of runs that reached the shortest length seen
    across all runs.
    """
    D = instance.distance_matrix()
    lengths = []
    times = []
    best_tours = []
    for r in range(n_runs):
        cfg_r = MCConfig(**{**asdict(cfg), "seed": base_seed + r, "mode": 0})
        res = MonteCarloSearch(D, cfg_r).run()
        lengths.append(res.best_length)
        times.append(res.elapsed_sec)
        best_tours.append(res.best_tour)
    found = [L for L in lengths if math.isfinite(L)]
    best = min(found) if found else math.inf
    stats = {
        "mean_length": statistics.mean(found) if found else math.inf,
        "std_length": statistics.stdev(found) if len(found) > 1 else 0.0,
        "min_length": best,
        "max_length": max(found) if found else math.inf,
        "median_length": statistics.median(found) if found else math.inf,
        "mean_time": statistics.mean(times) if times else 0.0,
        "hit_rate": sum(1 for L in found if math.isclose(L, best)) / n_runs if n_runs else 0.0,
        "n_trials": cfg.n_trials,
        "n_runs": n_runs,
    }
    return stats, list(zip(lengths, times, best_tours))


def run_trial_count_sweep(instance: TSPInstance, trial_counts: Sequence[int],
                          base_cfg: Optional[MCConfig] = None, n_runs: int = 5, base_seed: int = 100,
                          csv_path: Optional[str] = None) -> List[Dict[str, Any]]:
    base_cfg = base_cfg or MCConfig()
    rows = []
    for n_trials in trial_counts:
        cfg = MCConfig(**{**asdict(base_cfg), "n_trials": n_trials})
        stats, _ = run_repeated_trials(instance, cfg, n_runs=n_runs, base_seed=base_seed)
        row = {"instance": instance.name, "n_cities": instance.n_cities(), **stats}
        rows.append(row)
        if csv_path is not None:
            write_header = not os.path.exists(csv_path)
            with open(csv_path, "a", newline="") as f:
                w = csv.DictWriter(f, fieldnames=row.keys())
                if write_header:
                    w.writeheader()
                w.writerow(row)
    return rows
