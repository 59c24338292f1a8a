"""Update phase: reinforce every ant path of the iteration, then evaporate once.

The order is fixed: all deposits of the iteration first, a single evaporation
pass afterwards. Only paths collected in this iteration deposit.
"""

from typing import List

from ..components.ant import AntResult


def update_phase(aco, graph, results: List[AntResult], rate: float):
    for result in results:
        graph.update_pheromone(result.path, result.fitness)
    graph.evaporate_pheromone(rate)
