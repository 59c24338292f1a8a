"""Exceptions raised by the construction graph, the solver and the runner."""


class BinPackingError(Exception):
    """Base class for every error raised by this package."""


class InvalidProblemError(BinPackingError, ValueError):
    """Problem type is not 1 (BPP1) or 2 (BPP2)."""


class InvalidNumAntsError(BinPackingError, ValueError):
    """Number of ants is smaller than 1."""


class InvalidEvaporationRateError(BinPackingError, ValueError):
    """Evaporation rate is negative or not a finite number."""


class GraphConstructionError(BinPackingError, ValueError):
    """Graph parameters (item count, bin count) are inconsistent."""


class GraphError(BinPackingError, RuntimeError):
    """Traversal of a built graph could not continue."""


class InvalidPathError(GraphError):
    """A path contains a step that is not an edge of the graph."""


class DegenerateSelectionError(GraphError):
    """Weighted choice over an empty, negative or non-finite weight vector."""
