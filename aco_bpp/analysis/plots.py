from pathlib import Path
from typing import Mapping, Optional

import matplotlib
matplotlib.use('Agg')  # Use non-interactive backend
import matplotlib.pyplot as plt
import numpy as np


def plot_convergence(result: Mapping, outpath: Path, title: Optional[str] = None) -> Path:
    """Save global-best and iteration-best fitness curves of one solve() result."""
    best = np.asarray(result["convergence"], dtype=float)
    iter_best = np.asarray(result["iteration_best"], dtype=float)
    x = np.arange(1, len(best) + 1)

    fig, ax = plt.subplots()
    ax.plot(x, iter_best, linewidth=0.8, alpha=0.5, label="Iteration best")
    ax.plot(x, best, linewidth=2.0, label="Best so far")
    ax.set_xlabel("Iteration")
    ax.set_ylabel("Fitness (heaviest - lightest bin)")
    if len(best) and np.all(best[np.isfinite(best)] > 0):
        ax.set_yscale("log")
    ax.set_title(title or f"{result.get('problem_name', 'ACO')} convergence")
    ax.legend()

    outpath = Path(outpath)
    outpath.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(outpath, bbox_inches="tight", dpi=150)
    plt.close(fig)
    return outpath


def boxplot_trials(trials, outpath: Path) -> Path:
    """Boxplot of the best fitness per problem across trials (a run_trials DataFrame)."""
    order = sorted(trials["problem"].unique())
    data = [trials.loc[trials["problem"] == p, "best_fitness"].values for p in order]

    fig, ax = plt.subplots()
    ax.boxplot(data, showfliers=False)
    ax.set_xticks(range(1, len(order) + 1))
    ax.set_xticklabels(order)
    ax.set_ylabel("Best fitness")
    ax.set_title("ACO best fitness across trials")

    outpath = Path(outpath)
    outpath.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(outpath, bbox_inches="tight")
    plt.close(fig)
    return outpath
