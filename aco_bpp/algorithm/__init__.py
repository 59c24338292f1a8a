"""ACO building blocks: construction graph, phases and solver."""
