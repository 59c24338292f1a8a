"""Edge pheromone table for the layered construction graph.

One float64 entry per edge, indexed by the edge's position in the graph's
edge arena. Core operations:
- evaporate: uniform multiplicative decay of every edge (no floor)
- deposit: add a fixed amount to a set of edges
- snapshot: read-only copy for consistent reads while ants are constructing
"""

import numpy as np
from typing import Iterable, Union

from ..exceptions import InvalidEvaporationRateError


class PheromoneTable:
    """
    Pheromone τ(e) for every edge e of the construction graph. Values are
    only written by `evaporate` and `deposit`; everything else reads.
    """

    def __init__(self, initial: np.ndarray):
        values = np.array(initial, dtype=float)
        if values.ndim != 1:
            raise ValueError("pheromone table must be one-dimensional")
        if np.any(values < 0) or not np.all(np.isfinite(values)):
            raise ValueError("initial pheromone values must be finite and non-negative")
        self._values = values

    def __len__(self) -> int:
        return int(self._values.size)

    def __getitem__(self, key):
        # copy so slices never alias the live table
        return np.array(self._values[key], copy=True)

    def segment(self, start: int, stop: int) -> np.ndarray:
        """Return the live values of edges [start, stop) for read-only use."""
        return self._values[start:stop]

    def evaporate(self, rate: float):
        """Multiply every pheromone value by `rate`."""
        rate = float(rate)
        if not np.isfinite(rate) or rate < 0:
            raise InvalidEvaporationRateError(f"evaporation rate must be a finite value >= 0, got {rate}")
        self._values *= rate

    def deposit(self, edge_indices: Union[Iterable[int], np.ndarray], amount: float):
        """Add `amount` to every listed edge (repeated indices add repeatedly)."""
        amount = float(amount)
        if not np.isfinite(amount) or amount < 0:
            raise ValueError(f"deposit amount must be a finite value >= 0, got {amount}")
        idx = np.asarray(list(edge_indices) if not isinstance(edge_indices, np.ndarray) else edge_indices, dtype=np.int64)
        if idx.size == 0:
            return
        np.add.at(self._values, idx, amount)

    def snapshot(self) -> np.ndarray:
        """Return a read-only copy of the whole table."""
        snap = self._values.copy()
        snap.setflags(write=False)
        return snap

    def min(self) -> float:
        return float(np.min(self._values))

    def max(self) -> float:
        return float(np.max(self._values))

    def mean(self) -> float:
        return float(np.mean(self._values))
