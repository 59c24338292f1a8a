"""Construction graph builder for the balanced bin packing ACO.

The graph is layered: a root node 0, one layer of `n_bins` nodes per item and
a single sink. Node `k * n_bins + b` stands for "item k sits in bin b" (k is
0-based, b is 1-based); the sink is `n_items * n_bins + 1`.

Edges are produced as parallel NumPy arrays grouped by source node (ascending)
and, within one source, by ascending destination:
- root -> every layer-0 node, random pheromone, bin = destination's bin
- layer k -> every layer k+1 node, random pheromone, bin = source's bin
- last layer -> sink, pheromone fixed at FINAL_EDGE_PHEROMONE, bin = source's bin
"""

from dataclasses import dataclass
from typing import Callable, Iterator, NamedTuple, Optional

import numpy as np

from ..constants import (
    FINAL_EDGE_PHEROMONE,
    INITIAL_PHEROMONE_HIGH,
    INITIAL_PHEROMONE_LOW,
    PROBLEM_BINS,
)
from ..exceptions import GraphConstructionError, InvalidProblemError


class Edge(NamedTuple):
    source: int
    destination: int
    pheromone: float
    bin: int


@dataclass
class EdgeSet:
    """Edge arrays of a construction graph plus its node count."""

    source: np.ndarray
    destination: np.ndarray
    pheromone: np.ndarray
    bin: np.ndarray
    n_nodes: int

    def __len__(self) -> int:
        return int(self.source.size)

    def __iter__(self) -> Iterator[Edge]:
        for s, d, p, b in zip(self.source.tolist(), self.destination.tolist(),
                              self.pheromone.tolist(), self.bin.tolist()):
            yield Edge(s, d, p, b)


def weight_rule(problem_type: int) -> Callable[[int], int]:
    """Return the weight of item `i` (0-based) for a problem type."""
    if problem_type == 1:
        return lambda i: i + 1
    if problem_type == 2:
        return lambda i: (i + 1) ** 2
    raise InvalidProblemError(f"problem type must be 1 or 2, got {problem_type!r}")


def item_weights(n_items: int, problem_type: int) -> np.ndarray:
    """Weights of items 0..n_items-1: i+1 (type 1) or (i+1)**2 (type 2)."""
    if n_items <= 0:
        raise GraphConstructionError(f"n_items must be >= 1, got {n_items}")
    base = np.arange(1, n_items + 1, dtype=np.int64)
    if problem_type == 1:
        return base
    if problem_type == 2:
        return base ** 2
    raise InvalidProblemError(f"problem type must be 1 or 2, got {problem_type!r}")


def _random_pheromone(rng: np.random.Generator, size: int) -> np.ndarray:
    span = INITIAL_PHEROMONE_HIGH - INITIAL_PHEROMONE_LOW
    return INITIAL_PHEROMONE_LOW + rng.random(size) * span


def build_edges(n_items: int, n_bins: int, rng: Optional[np.random.Generator] = None) -> EdgeSet:
    """Build the full edge set for `n_items` items spread over `n_bins` bins."""
    if isinstance(n_items, bool) or int(n_items) != n_items or n_items <= 0:
        raise GraphConstructionError(f"n_items must be an integer >= 1, got {n_items!r}")
    if isinstance(n_bins, bool) or int(n_bins) != n_bins or n_bins <= 0:
        raise GraphConstructionError(f"n_bins must be an integer >= 1, got {n_bins!r}")
    n_items, n_bins = int(n_items), int(n_bins)
    if rng is None:
        rng = np.random.default_rng()

    sink = n_items * n_bins + 1
    bin_ids = np.arange(1, n_bins + 1, dtype=np.int64)

    # root -> layer 0
    root_src = np.zeros(n_bins, dtype=np.int64)
    root_dst = bin_ids.copy()
    root_bin = bin_ids.copy()
    root_tau = _random_pheromone(rng, n_bins)

    # layer k -> layer k+1 for k in [0, n_items - 2]
    n_inner_nodes = (n_items - 1) * n_bins
    inner_nodes = np.arange(1, n_inner_nodes + 1, dtype=np.int64)
    inner_src = np.repeat(inner_nodes, n_bins)
    next_layer = (inner_src - 1) // n_bins + 1
    inner_dst = next_layer * n_bins + np.tile(bin_ids, n_inner_nodes)
    inner_bin = (inner_src - 1) % n_bins + 1
    inner_tau = _random_pheromone(rng, inner_src.size)

    # last layer -> sink
    final_src = np.arange(n_inner_nodes + 1, n_inner_nodes + n_bins + 1, dtype=np.int64)
    final_dst = np.full(n_bins, sink, dtype=np.int64)
    final_bin = bin_ids.copy()
    final_tau = np.full(n_bins, FINAL_EDGE_PHEROMONE, dtype=float)

    return EdgeSet(
        source=np.concatenate([root_src, inner_src, final_src]),
        destination=np.concatenate([root_dst, inner_dst, final_dst]),
        pheromone=np.concatenate([root_tau, inner_tau, final_tau]),
        bin=np.concatenate([root_bin, inner_bin, final_bin]),
        n_nodes=sink + 1,
    )


def build_graph(n_items: int,
                n_bins: int,
                problem_type: int,
                seed: Optional[int] = None,
                rng: Optional[np.random.Generator] = None):
    """Build a ready-to-walk ConstructionGraph.

    `rng` (or a generator seeded with `seed`) draws the initial pheromone and
    is then owned by the graph for path generation.
    """
    from .graph import ConstructionGraph

    # validates n_items and problem_type; build_edges validates n_bins
    weights = item_weights(n_items, problem_type)
    if rng is None:
        rng = np.random.default_rng(seed)
    edges = build_edges(n_items, n_bins, rng)
    return ConstructionGraph(edges, n_bins, weights, rng=rng, problem_type=problem_type)


def build_problem_graph(problem_type: int, n_items: int, seed: Optional[int] = None,
                        rng: Optional[np.random.Generator] = None):
    """Build the graph for BPP1/BPP2 using the standard bin count of the type."""
    if problem_type not in PROBLEM_BINS:
        raise InvalidProblemError(f"problem type must be 1 or 2, got {problem_type!r}")
    return build_graph(n_items, PROBLEM_BINS[problem_type], problem_type, seed=seed, rng=rng)
