import os, argparse
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import imageio

from mctsp import TSPInstance, MCConfig, MonteCarloSearch


def tour_to_xy(coords, tour):
    xs = [coords[i][0] for i in tour]
    ys = [coords[i][1] for i in tour]
    return xs, ys


def visualize(inst, cfg, outdir):
    """Render one frame per incumbent improvement and collect them in a GIF."""
    os.makedirs(outdir, exist_ok=True)
    solver = MonteCarloSearch(inst.distance_matrix(), cfg)
    res = solver.run()
    if not res.found:
        print("No paths simulated, nothing to draw.")
        return None

    coords = inst.coords
    cx = [c[0] for c in coords]
    cy = [c[1] for c in coords]
    frames = []
    for k, (trial, tour, L) in enumerate(solver.improvements):
        xs, ys = tour_to_xy(coords, tour)

        plt.figure(figsize=(5, 5))
        plt.plot(cx, cy, "o")
        plt.plot(xs, ys, "-")
        plt.title(f"Monte Carlo best-so-far\ntrial={trial + 1}  length={L:.2f}")
        plt.axis("equal")
        plt.tight_layout()
        frame_path = os.path.join(outdir, f"frame_{k:03d}.png")
        plt.savefig(frame_path, dpi=120, bbox_inches="tight")
        plt.close()
        frames.append(frame_path)

    gif_path = os.path.join(outdir, "montecarlo_convergence.gif")
    with imageio.get_writer(gif_path, mode="I", duration=0.6) as writer:
        for fp in frames:
            writer.append_data(imageio.v2.imread(fp))

    print("Saved:", gif_path)
    return gif_path


def main():
    p = argparse.ArgumentParser()
    p.add_argument("--n", type=int, default=12, help="number of cities")
    p.add_argument("--file", default=None, help="cities coordinates file (overrides --n)")
    p.add_argument("--trials", type=int, default=5000)
    p.add_argument("--square", type=float, default=100.0)
    p.add_argument("--seed", type=int, default=321)
    p.add_argument("--outdir", default="viz")
    args = p.parse_args()

    if args.file is not None:
        inst = TSPInstance.from_file(args.file)
    else:
        inst = TSPInstance.random_euclidean(n=args.n, seed=args.seed, square_size=args.square, name=f"viz{args.n}")
    cfg = MCConfig(n_trials=args.trials, seed=args.seed, record_history=True)
    visualize(inst, cfg, args.outdir)


if __name__ == "__main__":
    main()
