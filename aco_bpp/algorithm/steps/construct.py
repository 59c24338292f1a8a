"""Construction phase: every ant walks the graph once.

Ants run one after another on the same graph; each reads its fitness straight
after its own walk. No pheromone is written here, so every ant of an
iteration sees the same pheromone table.
"""

from typing import List

from ..components.ant import Ant, AntResult
from ..exceptions import GraphError


def construct_phase(aco, graph, iteration: int, debug: bool = False) -> List[AntResult]:
    """Construct one solution per ant.

    A `GraphError` from a single ant is re-raised unless
    `aco.skip_failed_ants` is set, in which case it is reported and the
    remaining ants still run.
    """
    results = []
    for i in range(aco.n_ants):
        try:
            result = Ant(graph).construct_solution()
        except GraphError as exc:
            if not getattr(aco, 'skip_failed_ants', False):
                raise
            aco.failed_ants += 1
            print(f"[WARN] Iter {iteration + 1} - ant {i} failed: {exc}")
            continue
        results.append(result)

        if debug and i == 0:
            print(f"[DEBUG] Iter {iteration + 1} - sample ant fitness={result.fitness}, loads={result.bin_loads.tolist()}")

    return results
