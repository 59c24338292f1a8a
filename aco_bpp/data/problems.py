from typing import Dict

from ..algorithm.components.builder import item_weights
from ..algorithm.constants import N_ITEMS, PROBLEM_BINS, PROBLEM_NAMES
from ..algorithm.exceptions import GraphConstructionError, InvalidProblemError


class BinBalancingProblem:
    """A fixed item sequence to spread over a fixed number of bins."""

    def __init__(self, name: str, n_items: int, n_bins: int, problem_type: int):
        if problem_type not in PROBLEM_BINS:
            raise InvalidProblemError(f"problem type must be 1 or 2, got {problem_type!r}")
        if n_bins <= 0:
            raise GraphConstructionError(f"n_bins must be >= 1, got {n_bins}")
        self.name = name
        self.problem_type = problem_type
        self.n_items = n_items
        self.n_bins = n_bins
        self.weights = item_weights(n_items, problem_type)

    @property
    def total_weight(self) -> int:
        return int(self.weights.sum())

    @property
    def lower_bound(self) -> int:
        """Best fitness any assignment could reach: 0 only if the total splits evenly."""
        return 0 if self.total_weight % self.n_bins == 0 else 1

    def __repr__(self):
        return f"BinBalancingProblem(name={self.name}, n_items={self.n_items}, n_bins={self.n_bins}, problem_type={self.problem_type})"


def make_problem(problem_type: int, n_items: int = N_ITEMS) -> BinBalancingProblem:
    """
    Build BPP1 or BPP2.

    - 1: BPP1, 10 bins, item i weighs i+1
    - 2: BPP2, 50 bins, item i weighs (i+1)^2
    """
    if problem_type not in PROBLEM_BINS:
        raise InvalidProblemError(f"problem type must be 1 or 2, got {problem_type!r}")
    return BinBalancingProblem(
        name=PROBLEM_NAMES[problem_type],
        n_items=n_items,
        n_bins=PROBLEM_BINS[problem_type],
        problem_type=problem_type,
    )


def all_problems(n_items: int = N_ITEMS) -> Dict[str, BinBalancingProblem]:
    """Both standard problems keyed by name."""
    problems = {}
    for problem_type in sorted(PROBLEM_BINS):
        problem = make_problem(problem_type, n_items)
        problems[problem.name] = problem
    return problems
