"""Trial runner: repeat independent ACO runs on BPP1 / BPP2 and report each.

Every trial builds a fresh construction graph, runs the solver and prints the
start/finish time, elapsed seconds and best ant fitness. Results come back as
a pandas DataFrame with one row per trial.
"""

from __future__ import annotations

import datetime as dt
import math
from pathlib import Path
from typing import Dict, Optional

import pandas as pd

from aco_bpp.algorithm.aco import ACO_BinBalancing
from aco_bpp.algorithm.constants import N_ITEMS, N_TRIALS, PRESETS
from aco_bpp.algorithm.exceptions import InvalidEvaporationRateError, InvalidNumAntsError, InvalidProblemError
from aco_bpp.analysis.plots import plot_convergence
from aco_bpp.data.problems import make_problem
from aco_bpp.logging import RunLogger


def validate_arguments(problem_type: int, n_ants: int, evaporation: float):
    """Reject invalid console parameters before any graph is built."""
    if problem_type not in (1, 2):
        raise InvalidProblemError("Problem Type must be 1 or 2")
    if n_ants < 1:
        raise InvalidNumAntsError("Number of Ants must be greater than 0")
    if not math.isfinite(evaporation) or evaporation < 0:
        raise InvalidEvaporationRateError("Evaporation Rate must be greater than or equal to 0")


def run_trials(problem_type: int,
               n_ants: int,
               evaporation: float,
               n_trials: int = N_TRIALS,
               preset: str = 'FAST',
               n_iterations: Optional[int] = None,
               n_items: int = N_ITEMS,
               seed: Optional[int] = None,
               log_dir: Optional[Path] = None,
               plot_dir: Optional[Path] = None,
               verbose: bool = True) -> pd.DataFrame:
    """Run `n_trials` independent trials and return one row per trial.

    `preset` only supplies the iteration count (unless `n_iterations` is
    given); ants and evaporation always come from the arguments. With a
    `seed`, trial t uses `seed + t`.
    """
    validate_arguments(problem_type, n_ants, evaporation)
    if n_trials < 1:
        raise ValueError(f"n_trials must be >= 1, got {n_trials}")
    preset_name = preset.upper()
    if preset_name not in PRESETS:
        raise ValueError(f"Unknown preset '{preset}'. Choose from: {', '.join(sorted(PRESETS))}.")
    iterations = n_iterations if n_iterations is not None else PRESETS[preset_name]['n_iterations']

    problem = make_problem(problem_type, n_items=n_items)
    rows = []

    for trial in range(n_trials):
        if verbose:
            print(f"Problem Type: {problem_type}")
            print(f"Number of Ants: {n_ants}")
            print(f"Evaporation Rate: {evaporation}")

        trial_seed = None if seed is None else seed + trial
        aco = ACO_BinBalancing(
            n_ants=n_ants,
            n_iterations=iterations,
            evaporation=evaporation,
            seed=trial_seed,
        )

        logger = None
        if log_dir is not None:
            logger = RunLogger(
                base_dir=log_dir,
                filename=f"{problem.name}_trial{trial + 1}_aco_log.csv",
                metadata={'runner': 'run_trials', 'trial': trial + 1},
            )

        started = dt.datetime.now()
        if verbose:
            print(f"Started computation at: {started.ctime()}")

        result = aco.solve(problem, logger=logger, logger_metadata={"preset": preset_name}, verbose=verbose)

        finished = dt.datetime.now()
        if verbose:
            print(f"Finished computation at: {finished.ctime()}")
            print(f"Elapsed Time: {(finished - started).total_seconds()}")
            print(f"Best Ant Fitness: {result['best_fitness']}")

        if logger is not None and len(logger):
            logger.flush()
        if plot_dir is not None:
            plot_convergence(result, Path(plot_dir) / f"{problem.name}_trial{trial + 1}_convergence.png")

        rows.append({
            'trial': trial + 1,
            'problem': problem.name,
            'problem_type': problem_type,
            'n_ants': n_ants,
            'evaporation': evaporation,
            'n_iterations': iterations,
            'seed': trial_seed,
            'best_fitness': result['best_fitness'],
            'lower_bound': result['lower_bound'],
            'gap': result['gap'],
            'evaluations': result['evaluations'],
            'iterations_run': result['iterations_run'],
            'runtime': result['runtime'],
        })

    if verbose:
        print("ACO Trial Complete")

    return pd.DataFrame(rows)


def summarize_trials(trials: pd.DataFrame) -> Dict[str, float]:
    """Mean / std / min / max of the best fitness over trials."""
    best = trials['best_fitness'].astype(float)
    return {
        'trials': int(best.size),
        'mean': float(best.mean()),
        'std': float(best.std(ddof=0)),
        'min': float(best.min()),
        'max': float(best.max()),
    }
