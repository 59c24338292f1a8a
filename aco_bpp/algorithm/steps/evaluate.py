"""Evaluation phase: iteration best and global best tracking."""

from typing import List

from ..components.ant import AntResult


def evaluate_phase(aco, results: List[AntResult]) -> float:
    """Update the solver's global best from this iteration's ants.

    Returns the best (lowest) fitness of the iteration, or inf when no ant
    produced a result.
    """
    iteration_best = float('inf')
    for result in results:
        if result.fitness < iteration_best:
            iteration_best = result.fitness
        if result.fitness < aco.best_fitness:
            aco.best_fitness = result.fitness
            aco.best_path = list(result.path)
            aco.best_bin_loads = result.bin_loads.copy()
    return iteration_best
