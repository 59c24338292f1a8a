"""Roulette-wheel selection over an ordered sequence of non-negative weights."""

import numpy as np
from typing import Sequence, Union

from ..exceptions import DegenerateSelectionError


def roulette_select(weights: Union[Sequence[float], np.ndarray], rng: np.random.Generator) -> int:
    """Pick an index with probability proportional to its weight.

    Builds the cumulative sum of ``weights`` in order, draws ``r`` uniformly
    in ``[0, total)`` and returns the first index whose cumulative sum is
    ``>= r`` (lower-bound search).

    If every weight is zero the draw falls back to a uniform choice over all
    indices. Empty, negative or non-finite weights raise
    ``DegenerateSelectionError``.
    """
    w = np.asarray(weights, dtype=float)
    if w.ndim != 1 or w.size == 0:
        raise DegenerateSelectionError("cannot select from an empty weight vector")

    cumulative = np.cumsum(w)
    total = float(cumulative[-1])
    if not np.isfinite(total) or np.any(w < 0):
        raise DegenerateSelectionError(f"weights must be finite and non-negative (total={total})")

    if total <= 0.0:
        return int(rng.integers(w.size))

    r = rng.random() * total
    idx = int(np.searchsorted(cumulative, r, side='left'))
    # r < total, so idx is in range; the clamp only guards float round-off
    return min(idx, w.size - 1)
