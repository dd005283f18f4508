# run_experiments.py
import os, json, argparse, logging
import numpy as np
import pandas as pd
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from mctsp import TSPInstance, MCConfig, MonteCarloSearch
from mctsp.experiments import run_repeated_trials, run_trial_count_sweep

OUTDIR = os.path.dirname(os.path.abspath(__file__))
logger = logging.getLogger("run_experiments")


def ensure(path: str) -> str:
    d = os.path.dirname(path)
    if d:
        os.makedirs(d, exist_ok=True)
    return path


def plot_scatter(details_by_trials, save_path):
    plt.figure()
    labels = list(details_by_trials.keys())
    for i, n_trials in enumerate(labels, start=1):
        lengths = [L for (L, t, tour) in details_by_trials[n_trials] if np.isfinite(L)]
        x = np.random.normal(loc=i, scale=0.03, size=len(lengths))
        plt.plot(x, lengths, "o")
    plt.xticks(range(1, len(labels) + 1), [str(n) for n in labels])
    plt.xlabel("Trials per run")
    plt.ylabel("Best tour length")
    plt.title("Best lengths across runs")
    ensure(save_path)
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close()


def plot_convergence(inst, cfg, save_path):
    solver = MonteCarloSearch(inst.distance_matrix(), cfg)
    _ = solver.run()
    plt.figure()
    plt.plot(solver.history_best_lengths)
    plt.xscale("log")
    plt.xlabel("Trial")
    plt.ylabel("Best-so-far tour length")
    plt.title(f"Monte Carlo convergence ({inst.name})")
    ensure(save_path)
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close()


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--n", type=int, default=10, help="number of random cities")
    ap.add_argument("--file", default=None, help="cities coordinates file (overrides --n)")
    ap.add_argument("--square", type=float, default=100.0)
    ap.add_argument("--runs", type=int, default=5)
    ap.add_argument("--trials", type=int, nargs="+", default=[100, 1000, 10000])
    ap.add_argument("--seed", type=int, default=123, help="seed of the random instance")
    ap.add_argument("--outdir", default=OUTDIR)
    args = ap.parse_args()
    logging.basicConfig(level=logging.INFO)

    if args.file is not None:
        inst = TSPInstance.from_file(args.file)
    else:
        inst = TSPInstance.random_euclidean(n=args.n, seed=args.seed, square_size=args.square, name=f"demo{args.n}")

    # repeated trials per trial count
    records = []
    details_by_trials = {}
    for n_trials in args.trials:
        stats, details = run_repeated_trials(inst, MCConfig(n_trials=n_trials), n_runs=args.runs)
        print(n_trials, json.dumps(stats, indent=2))
        records.append(stats)
        details_by_trials[n_trials] = details

    # summary CSV + scatter plot
    df_summary = pd.DataFrame.from_records(records)
    summary_csv = ensure(os.path.join(args.outdir, "results_summary.csv"))
    df_summary.to_csv(summary_csv, index=False)
    plot_scatter(details_by_trials, os.path.join(args.outdir, "results_distribution.png"))

    plot_convergence(inst, MCConfig(n_trials=max(args.trials), seed=args.seed, record_history=True),
                     os.path.join(args.outdir, "convergence.png"))

    # finer sweep over trial counts
    counts = sorted({int(c) for c in np.logspace(1, np.log10(max(args.trials)), num=8)})
    rows = run_trial_count_sweep(inst, counts, n_runs=3, base_seed=500,
                                 csv_path=os.path.join(args.outdir, "trial_sweep.csv"))
    logger.info("trial-count sweep evaluated: %d", len(rows))


if __name__ == "__main__":
    main()
