"""Initialization phase helpers for ACO.

Handles RNG seeding for reproducibility and returns the generator that builds
the graph's initial pheromone and drives every ant of the run.
"""
from typing import Optional
import random

import numpy as np


def initialize_phase(aco, seed: Optional[int] = None) -> np.random.Generator:
    """Perform per-run initialization.

    - If a `seed` argument is given or `aco` has attribute `seed`, seed
      Python's and NumPy's global RNGs with it.
    - Return a fresh `np.random.Generator` (seeded the same way when a seed
      is set).
    """
    s = seed if seed is not None else getattr(aco, 'seed', None)
    if s is not None:
        random.seed(int(s))
        np.random.seed(int(s))
    return np.random.default_rng(None if s is None else int(s))
