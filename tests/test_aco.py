import numpy as np
import pytest

from aco_bpp.algorithm.aco import ACO_BinBalancing
from aco_bpp.algorithm.components.ant import Ant, AntResult
from aco_bpp.algorithm.exceptions import GraphError, InvalidEvaporationRateError, InvalidNumAntsError
from aco_bpp.algorithm.steps import construct_phase, evaluate_phase, initialize_phase, update_phase
from aco_bpp.data.problems import BinBalancingProblem
from aco_bpp.logging import RunLogger


@pytest.fixture
def tiny_problem():
    return BinBalancingProblem("tiny", n_items=12, n_bins=3, problem_type=1)


def test_solve_reports_consistent_result(tiny_problem):
    aco = ACO_BinBalancing(n_ants=4, n_iterations=20, evaporation=0.9, seed=1, stop_at_zero=False)
    result = aco.solve(tiny_problem)

    assert result["iterations_run"] == 20
    assert result["evaluations"] == 80
    assert len(result["convergence"]) == 20
    assert len(result["iteration_best"]) == 20
    assert result["best_fitness"] == min(result["iteration_best"])
    assert all(a >= b for a, b in zip(result["convergence"], result["convergence"][1:]))

    loads = result["best_bin_loads"]
    assert int(loads.sum()) == tiny_problem.total_weight
    assert result["best_fitness"] == int(loads.max() - loads.min())
    assert len(result["best_path"]) == tiny_problem.n_items + 1
    assert result["gap"] == result["best_fitness"] - result["lower_bound"]

    pheromone = result["pheromone"]
    assert np.all(pheromone >= 0)
    assert not pheromone.flags.writeable


def test_same_seed_same_run(tiny_problem):
    a = ACO_BinBalancing(n_ants=3, n_iterations=10, seed=42, stop_at_zero=False).solve(tiny_problem)
    b = ACO_BinBalancing(n_ants=3, n_iterations=10, seed=42, stop_at_zero=False).solve(tiny_problem)
    assert a["convergence"] == b["convergence"]
    assert a["best_path"] == b["best_path"]


def test_stops_once_bins_are_balanced():
    problem = BinBalancingProblem("pair", n_items=3, n_bins=2, problem_type=1)
    result = ACO_BinBalancing(n_ants=10, n_iterations=50, seed=3).solve(problem)
    assert result["best_fitness"] == 0
    assert result["iterations_run"] < 50
    assert result["convergence"][-1] == 0


def test_zero_iterations(tiny_problem):
    result = ACO_BinBalancing(n_ants=2, n_iterations=0, seed=0).solve(tiny_problem)
    assert result["best_fitness"] is None
    assert result["gap"] is None
    assert result["evaluations"] == 0


@pytest.mark.parametrize("n_ants", [0, -3, 1.5])
def test_rejects_bad_ant_count(n_ants):
    with pytest.raises(InvalidNumAntsError):
        ACO_BinBalancing(n_ants=n_ants)


@pytest.mark.parametrize("rate", [-0.1, float("nan"), float("inf")])
def test_rejects_bad_evaporation(rate):
    with pytest.raises(InvalidEvaporationRateError):
        ACO_BinBalancing(evaporation=rate)


def test_logger_gets_one_row_per_iteration(tiny_problem, tmp_path):
    logger = RunLogger(base_dir=tmp_path, filename="run.csv")
    ACO_BinBalancing(n_ants=2, n_iterations=5, seed=0, stop_at_zero=False).solve(
        tiny_problem, logger=logger, logger_metadata={"preset": "TEST"})
    assert len(logger) == 5

    frame = logger.to_frame()
    assert frame["iteration"].tolist() == [1, 2, 3, 4, 5]
    assert set(frame["problem_name"]) == {"tiny"}
    assert set(frame["preset"]) == {"TEST"}

    path = logger.flush()
    header = path.read_text().splitlines()[0].split(",")
    assert "best_fitness" in header
    assert "pheromone_mean" in header


class RecordingGraph:
    """Graph double recording the order of pheromone operations."""

    def __init__(self):
        self.calls = []

    def update_pheromone(self, path, fitness):
        self.calls.append(("update", tuple(path), fitness))

    def evaporate_pheromone(self, rate):
        self.calls.append(("evaporate", rate))


def test_update_phase_reinforces_all_then_evaporates_once():
    graph = RecordingGraph()
    results = [
        AntResult(path=[1, 3, 5], fitness=4, bin_loads=np.zeros(2)),
        AntResult(path=[2, 4, 5], fitness=8, bin_loads=np.zeros(2)),
    ]
    update_phase(None, graph, results, 0.7)
    assert graph.calls == [
        ("update", (1, 3, 5), 4),
        ("update", (2, 4, 5), 8),
        ("evaporate", 0.7),
    ]


def test_evaluate_phase_tracks_best():
    class Holder:
        best_fitness = float("inf")
        best_path = None
        best_bin_loads = None

    holder = Holder()
    results = [
        AntResult(path=[1, 9], fitness=7, bin_loads=np.array([7, 0])),
        AntResult(path=[2, 9], fitness=3, bin_loads=np.array([5, 2])),
    ]
    assert evaluate_phase(holder, results) == 3
    assert holder.best_fitness == 3
    assert holder.best_path == [2, 9]
    assert evaluate_phase(holder, [AntResult(path=[1, 9], fitness=5, bin_loads=np.array([5, 0]))]) == 5
    assert holder.best_fitness == 3
    assert evaluate_phase(holder, []) == float("inf")


class BrokenGraph:
    def generate_path(self):
        raise GraphError("dead end")


class ColonyStub:
    n_ants = 3
    failed_ants = 0
    skip_failed_ants = False


def test_failing_ant_propagates_by_default():
    with pytest.raises(GraphError):
        construct_phase(ColonyStub(), BrokenGraph(), iteration=0)


def test_failing_ants_can_be_skipped(capsys):
    colony = ColonyStub()
    colony.skip_failed_ants = True
    assert construct_phase(colony, BrokenGraph(), iteration=0) == []
    assert colony.failed_ants == 3
    assert "ant 0 failed" in capsys.readouterr().out


def test_ant_reads_fitness_of_its_own_walk(small_graph):
    result = Ant(small_graph).construct_solution()
    assert len(result.path) == 4
    assert result.fitness == int(result.bin_loads.max() - result.bin_loads.min())
    assert int(result.bin_loads.sum()) == 6


def test_initialize_phase_is_reproducible():
    class Seeded:
        seed = 5

    first = initialize_phase(Seeded()).random(3)
    second = initialize_phase(Seeded()).random(3)
    np.testing.assert_array_equal(first, second)
