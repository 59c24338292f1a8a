"""Presets and constants for the ACO bin balancing solver."""


# ============= Problem Settings =============
# Every instance packs the same 500 items; the problem type picks the bin
# count and the weight rule (1 -> i+1, 2 -> (i+1)**2).
N_ITEMS = 500
PROBLEM_BINS = {
    1: 10,
    2: 50,
}
PROBLEM_NAMES = {
    1: 'BPP1',
    2: 'BPP2',
}

# Independent trials per console run.
N_TRIALS = 5


# ============= Pheromone Settings =============
# INITIAL_PHEROMONE_LOW / HIGH: root and interior edges start uniformly random
#        in [low, high).
# FINAL_EDGE_PHEROMONE: the forced edge from every last-layer node to the sink.
# DEPOSIT_Q: an ant with fitness f adds DEPOSIT_Q / f to every edge on its path.
INITIAL_PHEROMONE_LOW = 0.0
INITIAL_PHEROMONE_HIGH = 1.0
FINAL_EDGE_PHEROMONE = 1.0
DEPOSIT_Q = 100.0


# ============= Presets =============
# `evaporation` is the retention factor multiplied into every pheromone once
# per iteration (0.9 keeps 90%).

# Quick smoke test: a handful of ants and iterations.
QUICK_TEST = {
    'n_ants': 10,
    'n_iterations': 50,
    'evaporation': 0.9,
}

# Default preset: moderate run length.
FAST = {
    'n_ants': 10,
    'n_iterations': 500,
    'evaporation': 0.9,
}

# Larger colony with slower evaporation.
BALANCED = {
    'n_ants': 50,
    'n_iterations': 1000,
    'evaporation': 0.6,
}

# The full run length of the console driver: 10,000 iterations per trial.
ORIGINAL = {
    'n_ants': 10,
    'n_iterations': 10000,
    'evaporation': 0.9,
}


# Preset lookup helper for convenience in runners / scripts.
PRESETS = {
    'QUICK_TEST': QUICK_TEST,
    'FAST': FAST,
    'BALANCED': BALANCED,
    'ORIGINAL': ORIGINAL,
}
