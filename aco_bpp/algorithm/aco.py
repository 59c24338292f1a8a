"""Ant Colony Optimization (ACO) solver for balanced bin packing.

This module orchestrates the full ACO loop:
- builds the layered construction graph with random initial pheromone
- lets every ant generate a path and report its fitness (construct phase)
- tracks iteration and global best fitness (evaluate phase)
- reinforces every ant path, then evaporates once (update phase)
- prints progress and optionally logs every iteration to CSV

The main entry point is the ACO_BinBalancing class.
"""

import math
import time
from typing import Any, Dict, List, Optional

import numpy as np

from aco_bpp.algorithm import steps as steps
from aco_bpp.algorithm.components.builder import build_graph
from aco_bpp.algorithm.components.graph import ConstructionGraph
from aco_bpp.algorithm.constants import FAST
from aco_bpp.algorithm.exceptions import InvalidEvaporationRateError, InvalidNumAntsError
from aco_bpp.data.problems import BinBalancingProblem
from aco_bpp.logging import RunLogger


class ACO_BinBalancing:
    """Ant Colony Optimization minimising heaviest-minus-lightest bin weight."""

    def __init__(self,
                 n_ants: int = FAST['n_ants'],
                 n_iterations: int = FAST['n_iterations'],
                 evaporation: float = FAST['evaporation'],
                 seed: Optional[int] = None,
                 stop_at_zero: bool = True,
                 skip_failed_ants: bool = False,
                 log_every: int = 100):
        if isinstance(n_ants, bool) or int(n_ants) != n_ants or n_ants < 1:
            raise InvalidNumAntsError(f"number of ants must be an integer >= 1, got {n_ants!r}")
        if n_iterations < 0:
            raise ValueError(f"n_iterations must be >= 0, got {n_iterations}")
        evaporation = float(evaporation)
        if not math.isfinite(evaporation) or evaporation < 0:
            raise InvalidEvaporationRateError(f"evaporation rate must be >= 0, got {evaporation}")

        self.n_ants = int(n_ants)
        self.n_iterations = int(n_iterations)
        # retention factor: every pheromone is multiplied by it once per iteration
        self.evaporation = evaporation
        self.seed = seed
        # a perfectly balanced assignment cannot be improved on
        self.stop_at_zero = stop_at_zero
        self.skip_failed_ants = skip_failed_ants
        # Logging frequency. If >0, print progress every log_every iterations.
        self.log_every = log_every

        self._reset_stats()

    def _reset_stats(self):
        self.best_fitness = float('inf')
        self.best_path: Optional[List[int]] = None
        self.best_bin_loads: Optional[np.ndarray] = None
        self.convergence_history: List[float] = []
        self.iteration_best_history: List[float] = []
        self.failed_ants = 0

    def build_graph(self, problem: BinBalancingProblem, rng: np.random.Generator) -> ConstructionGraph:
        return build_graph(problem.n_items, problem.n_bins, problem.problem_type, rng=rng)

    def solve(self,
              problem: BinBalancingProblem,
              logger: Optional[RunLogger] = None,
              logger_metadata: Optional[Dict[str, Any]] = None,
              verbose: bool = False,
              debug: bool = False) -> Dict:

        start_time = time.time()
        self._reset_stats()

        if logger is not None:
            metadata = {
                "problem_name": problem.name,
                "problem_type": problem.problem_type,
                "n_items": problem.n_items,
                "n_bins": problem.n_bins,
                "n_ants": self.n_ants,
                "n_iterations": self.n_iterations,
                "evaporation": self.evaporation,
                "seed": self.seed,
            }
            if logger_metadata:
                metadata.update(logger_metadata)
            logger.update_metadata(**metadata)

        rng = steps.initialize_phase(self)
        graph = self.build_graph(problem, rng)

        evaluations = 0
        iterations_run = 0
        for iteration in range(self.n_iterations):
            # 1) Construction
            results = steps.construct_phase(self, graph, iteration, debug=debug)
            evaluations += len(results)

            # 2) Evaluate
            iteration_best = steps.evaluate_phase(self, results)

            # 3) Reinforce all paths, then evaporate once
            steps.update_phase(self, graph, results, self.evaporation)

            self.convergence_history.append(self.best_fitness)
            self.iteration_best_history.append(iteration_best)
            iterations_run = iteration + 1

            if logger is not None:
                fitnesses = [r.fitness for r in results]
                logger.log_iteration(
                    iteration=iteration + 1,
                    best_fitness=self.best_fitness,
                    iteration_best_fitness=iteration_best,
                    iteration_mean_fitness=float(np.mean(fitnesses)) if fitnesses else float('nan'),
                    pheromone_min=graph.pheromone.min(),
                    pheromone_max=graph.pheromone.max(),
                    pheromone_mean=graph.pheromone.mean(),
                    runtime_ms=(time.time() - start_time) * 1000,
                )

            if verbose and self.log_every > 0 and (iteration + 1) % self.log_every == 0:
                print(f"Iter {iteration + 1}/{self.n_iterations}: Best={self.best_fitness}, IterBest={iteration_best}")
                print(f"Pheromone min/max/mean: {graph.pheromone.min():.4f}/{graph.pheromone.max():.4f}/{graph.pheromone.mean():.4f}")

            if self.stop_at_zero and self.best_fitness == 0:
                if verbose:
                    print(f"Iter {iteration + 1}: perfectly balanced bins found, stopping early")
                break

        runtime = time.time() - start_time
        best = self.best_fitness if math.isfinite(self.best_fitness) else None
        lower_bound = problem.lower_bound

        return {
            "problem_name": problem.name,
            "problem_type": problem.problem_type,
            "n_items": problem.n_items,
            "n_bins": problem.n_bins,
            "best_fitness": best,
            "lower_bound": lower_bound,
            "gap": (best - lower_bound) if best is not None else None,
            "best_path": self.best_path,
            "best_bin_loads": self.best_bin_loads,
            "evaluations": evaluations,
            "failed_ants": self.failed_ants,
            "iterations_run": iterations_run,
            "runtime": runtime,
            "convergence": self.convergence_history,
            "iteration_best": self.iteration_best_history,
            # final pheromone for external inspection
            "pheromone": graph.pheromone.snapshot(),
        }
