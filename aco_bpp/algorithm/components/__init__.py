from .ant import Ant, AntResult
from .builder import Edge, EdgeSet, build_edges, build_graph, build_problem_graph, item_weights, weight_rule
from .graph import ConstructionGraph
from .pheromone import PheromoneTable
from .selection import roulette_select

__all__ = [
    'Ant',
    'AntResult',
    'ConstructionGraph',
    'Edge',
    'EdgeSet',
    'PheromoneTable',
    'build_edges',
    'build_graph',
    'build_problem_graph',
    'item_weights',
    'roulette_select',
    'weight_rule',
]
