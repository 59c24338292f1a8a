"""Construction graph: adjacency arena, bin accumulators and path generation.

Edges live in one arena (parallel NumPy arrays); the outgoing edges of node n
are the contiguous slice `offsets[n]:offsets[n+1]`. The graph owns:
- the adjacency arrays (destination, bin per edge)
- the PheromoneTable (one value per edge)
- the per-bin running weight accumulators, reset on every path
- the random generator that drives edge selection

A path is the list of visited nodes without the root: the first element is a
layer-0 node and the last is the sink. An ant calls `generate_path` and then
`get_fitness` on the same instance before anything else touches the bins.
"""

import copy
from typing import List, Optional, Sequence, Tuple

import numpy as np

from ..constants import DEPOSIT_Q
from ..exceptions import GraphConstructionError, GraphError, InvalidPathError
from .builder import EdgeSet
from .pheromone import PheromoneTable
from .selection import roulette_select


class ConstructionGraph:
    """Layered item x bin construction graph with pheromone-guided traversal."""

    ROOT = 0

    def __init__(self,
                 edges: EdgeSet,
                 n_bins: int,
                 weights: Sequence[int],
                 rng: Optional[np.random.Generator] = None,
                 problem_type: Optional[int] = None):
        if n_bins <= 0:
            raise GraphConstructionError(f"n_bins must be >= 1, got {n_bins}")
        weights = np.asarray(weights, dtype=np.int64)
        if weights.ndim != 1 or weights.size == 0:
            raise GraphConstructionError("at least one item weight is required")

        n_items = int(weights.size)
        n_nodes = n_items * int(n_bins) + 2
        if edges.n_nodes != n_nodes:
            raise GraphConstructionError(
                f"edge set describes {edges.n_nodes} nodes, expected {n_nodes} "
                f"for {n_items} items and {n_bins} bins"
            )
        src = np.asarray(edges.source, dtype=np.int64)
        if src.size and (src.min() < 0 or src.max() >= n_nodes):
            raise GraphConstructionError("edge source outside the node range")
        dst = np.asarray(edges.destination, dtype=np.int64)
        if dst.size and (dst.min() < 0 or dst.max() >= n_nodes):
            raise GraphConstructionError("edge destination outside the node range")
        if np.any(dst == self.ROOT):
            raise GraphConstructionError("no edge may lead back to the root")
        bins = np.asarray(edges.bin, dtype=np.int64)
        if bins.size and (bins.min() < 1 or bins.max() > n_bins):
            raise GraphConstructionError(f"edge bin outside [1, {n_bins}]")

        # group edges by source, keeping the given order inside each group
        order = np.argsort(src, kind='stable')
        self._destinations = dst[order]
        self._edge_bins = bins[order]
        self._pheromone = PheromoneTable(np.asarray(edges.pheromone, dtype=float)[order])
        counts = np.bincount(src, minlength=n_nodes)
        self._offsets = np.concatenate([[0], np.cumsum(counts)]).astype(np.int64)

        self._n_items = n_items
        self._n_bins = int(n_bins)
        self._n_nodes = n_nodes
        self._weights = weights
        self._problem_type = problem_type
        self._bins = np.zeros(self._n_bins, dtype=np.int64)
        self._rng = rng if rng is not None else np.random.default_rng()

    # ------------------------------------------------------------------
    @property
    def n_items(self) -> int:
        return self._n_items

    @property
    def n_bins(self) -> int:
        return self._n_bins

    @property
    def n_nodes(self) -> int:
        return self._n_nodes

    @property
    def n_edges(self) -> int:
        return len(self._pheromone)

    @property
    def sink(self) -> int:
        return self._n_nodes - 1

    @property
    def problem_type(self) -> Optional[int]:
        return self._problem_type

    @property
    def weights(self) -> np.ndarray:
        return self._weights.copy()

    @property
    def bin_loads(self) -> np.ndarray:
        """Copy of the bin accumulators; index 0 is bin 1."""
        return self._bins.copy()

    @property
    def pheromone(self) -> PheromoneTable:
        return self._pheromone

    # ------------------------------------------------------------------
    def _edge_range(self, node: int) -> Tuple[int, int]:
        if node < 0 or node >= self._n_nodes:
            raise InvalidPathError(f"node {node} is not in the graph (0..{self._n_nodes - 1})")
        return int(self._offsets[node]), int(self._offsets[node + 1])

    def out_degree(self, node: int) -> int:
        lo, hi = self._edge_range(node)
        return hi - lo

    def edges_from(self, node: int) -> List[Tuple[int, float, int]]:
        """Outgoing edges of `node` as (destination, pheromone, bin) triples."""
        lo, hi = self._edge_range(node)
        return list(zip(self._destinations[lo:hi].tolist(),
                        self._pheromone[lo:hi].tolist(),
                        self._edge_bins[lo:hi].tolist()))

    def _edge_index(self, source: int, destination: int) -> np.ndarray:
        lo, hi = self._edge_range(source)
        hits = np.flatnonzero(self._destinations[lo:hi] == destination)
        if hits.size == 0:
            raise InvalidPathError(f"no edge {source} -> {destination}")
        return hits + lo

    def edge_pheromone(self, source: int, destination: int) -> float:
        """Pheromone on the edge source -> destination."""
        return float(self._pheromone[int(self._edge_index(source, destination)[0])])

    def edge_bin(self, source: int, destination: int) -> int:
        return int(self._edge_bins[self._edge_index(source, destination)[0]])

    def fork(self, rng: Optional[np.random.Generator] = None) -> 'ConstructionGraph':
        """Return a view over the same adjacency and pheromone with private bins.

        Pheromone is shared, so a fork sees every update made through any
        view. Only bin accumulators and the random generator are private.
        """
        twin = copy.copy(self)
        twin._bins = np.zeros(self._n_bins, dtype=np.int64)
        if rng is None:
            rng = np.random.default_rng(self._rng.integers(np.iinfo(np.int64).max))
        twin._rng = rng
        return twin

    # ------------------------------------------------------------------
    def reset(self):
        """Empty all bins."""
        self._bins.fill(0)

    def add_to_bin(self, bin_id: int, weight: int):
        self._bins[bin_id - 1] += weight

    def generate_path(self) -> List[int]:
        """Walk from the root to the sink, placing one item per layer.

        Leaving the layer-k node places item k (weight `weights[k]`) into the
        `bin` of the chosen edge, which is that node's own bin. The root edge
        only picks the first node, so n_items weights are placed over
        n_items + 1 edges. Returns the visited nodes without the root,
        ending with the sink.
        """
        self.reset()
        sink = self._n_nodes - 1
        offsets = self._offsets
        path: List[int] = []
        current = self.ROOT
        item = 0

        while current != sink:
            lo = int(offsets[current])
            hi = int(offsets[current + 1])
            if hi == lo:
                raise GraphError(f"node {current} has no outgoing edges")
            if hi - lo == 1:
                idx = 0
            else:
                idx = roulette_select(self._pheromone.segment(lo, hi), self._rng)
            edge = lo + idx

            if current != self.ROOT:
                if item >= self._n_items:
                    raise GraphError(f"path from the root crosses more than {self._n_items} item layers")
                self._bins[self._edge_bins[edge] - 1] += self._weights[item]
                path.append(current)
                item += 1
            current = int(self._destinations[edge])

        if item != self._n_items:
            raise GraphError(f"path reached the sink after {item} of {self._n_items} items")
        path.append(sink)
        return path

    def get_fitness(self) -> int:
        """Heaviest bin minus lightest bin for the last generated path."""
        return int(self._bins.max() - self._bins.min())

    def path_assignment(self, path: Sequence[int]) -> np.ndarray:
        """Bin id (1-based) of every item along `path`."""
        nodes = [int(n) for n in path]
        if nodes and nodes[0] == self.ROOT:
            nodes = nodes[1:]
        return np.asarray([self.edge_bin(source, target) for source, target in zip(nodes, nodes[1:])],
                          dtype=np.int64)

    def update_pheromone(self, path: Sequence[int], fitness: int):
        """Reinforce each edge between consecutive path nodes by DEPOSIT_Q / fitness.

        A fitness of 0 (perfectly balanced bins) deposits DEPOSIT_Q, the same
        as fitness 1. Every step is checked before any pheromone is written.
        """
        if fitness < 0:
            raise ValueError(f"fitness must be >= 0, got {fitness}")
        amount = DEPOSIT_Q / max(fitness, 1)

        sink = self._n_nodes - 1
        nodes = [int(n) for n in path]
        edge_indices = []
        for source, target in zip(nodes, nodes[1:]):
            if source == sink:
                break
            edge_indices.append(self._edge_index(source, target))
        if edge_indices:
            self._pheromone.deposit(np.concatenate(edge_indices), amount)

    def evaporate_pheromone(self, rate: float):
        """Multiply the pheromone of every edge by `rate`."""
        self._pheromone.evaporate(rate)

    def __repr__(self):
        return (f"ConstructionGraph(n_items={self._n_items}, n_bins={self._n_bins}, "
                f"n_nodes={self._n_nodes}, n_edges={self.n_edges})")
