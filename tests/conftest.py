import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from aco_bpp.algorithm.components.builder import build_graph


@pytest.fixture
def rng():
    return np.random.default_rng(12345)


@pytest.fixture
def small_graph():
    """3 items (weights 1, 2, 3) over 2 bins: nodes 0..7, sink 7."""
    return build_graph(3, 2, 1, seed=7)
