"""Ant component: one walk through the construction graph.

An ant generates a path and reads the fitness off the same graph right away,
so the bin accumulators never leak between ants. Give each ant its own
`graph.fork()` if ants should not share bin state at all.
"""

from dataclasses import dataclass, field
from typing import List

import numpy as np

from .graph import ConstructionGraph


@dataclass(frozen=True)
class AntResult:
    path: List[int]
    fitness: int
    bin_loads: np.ndarray = field(repr=False)


class Ant:
    """An ant that builds one bin assignment on a construction graph."""

    def __init__(self, graph: ConstructionGraph):
        self.graph = graph

    def construct_solution(self) -> AntResult:
        path = self.graph.generate_path()
        fitness = self.graph.get_fitness()
        return AntResult(path=path, fitness=fitness, bin_loads=self.graph.bin_loads)
