import pytest

import quick_test
from aco_bpp.algorithm.exceptions import InvalidEvaporationRateError, InvalidNumAntsError, InvalidProblemError
from aco_bpp.runner import run_trials, summarize_trials, validate_arguments


def test_run_trials_returns_one_row_per_trial(tmp_path):
    trials = run_trials(1, 3, 0.9, n_trials=2, n_iterations=3, n_items=10, seed=5,
                        log_dir=tmp_path, verbose=False)
    assert len(trials) == 2
    assert trials["trial"].tolist() == [1, 2]
    assert trials["seed"].tolist() == [5, 6]
    assert set(trials["problem"]) == {"BPP1"}
    assert (trials["best_fitness"] >= 0).all()
    assert (tmp_path / "BPP1_trial1_aco_log.csv").exists()
    assert (tmp_path / "BPP1_trial2_aco_log.csv").exists()


def test_run_trials_prints_like_the_console_driver(capsys):
    run_trials(2, 2, 0.5, n_trials=1, n_iterations=2, n_items=6, seed=1)
    out = capsys.readouterr().out
    assert "Problem Type: 2" in out
    assert "Number of Ants: 2" in out
    assert "Started computation at:" in out
    assert "Elapsed Time:" in out
    assert "Best Ant Fitness:" in out
    assert "ACO Trial Complete" in out


def test_run_trials_writes_plots(tmp_path):
    run_trials(1, 2, 0.9, n_trials=1, n_iterations=4, n_items=8, seed=2,
               plot_dir=tmp_path, verbose=False)
    assert (tmp_path / "BPP1_trial1_convergence.png").stat().st_size > 0


def test_preset_supplies_iterations():
    trials = run_trials(1, 1, 0.9, n_trials=1, preset="quick_test", n_items=4, seed=0, verbose=False)
    assert trials["n_iterations"].tolist() == [50]


def test_unknown_preset():
    with pytest.raises(ValueError):
        run_trials(1, 1, 0.9, preset="nope", verbose=False)


def test_validate_arguments():
    validate_arguments(1, 1, 0.0)
    with pytest.raises(InvalidProblemError):
        validate_arguments(3, 10, 0.9)
    with pytest.raises(InvalidNumAntsError):
        validate_arguments(1, 0, 0.9)
    with pytest.raises(InvalidEvaporationRateError):
        validate_arguments(1, 10, -0.5)


def test_summarize_trials():
    trials = run_trials(1, 2, 0.9, n_trials=3, n_iterations=2, n_items=6, seed=4, verbose=False)
    summary = summarize_trials(trials)
    assert summary["trials"] == 3
    assert summary["min"] <= summary["mean"] <= summary["max"]
    assert summary["std"] >= 0


def test_cli_runs_and_reports(capsys):
    code = quick_test.main(["1", "2", "0.9", "--trials", "1", "--iterations", "2",
                            "--items", "6", "--seed", "3", "--quiet", "--baseline"])
    assert code == 0
    out = capsys.readouterr().out
    assert "ACO summary" in out
    assert "LPT baseline" in out


@pytest.mark.parametrize("argv", [["3", "10", "0.9"], ["1", "0", "0.9"], ["1", "10", "-1"]])
def test_cli_rejects_invalid_arguments(argv, capsys):
    with pytest.raises(SystemExit) as excinfo:
        quick_test.main(argv + ["--quiet"])
    assert excinfo.value.code == -1
    assert "Error:" in capsys.readouterr().err


def test_cli_rejects_non_numeric_arguments():
    with pytest.raises(SystemExit) as excinfo:
        quick_test.main(["one", "10", "0.9"])
    assert excinfo.value.code == 2


def test_cli_writes_boxplot(tmp_path):
    code = quick_test.main(["2", "2", "0.8", "--trials", "2", "--iterations", "2", "--items", "5",
                            "--seed", "0", "--quiet", "--plot-dir", str(tmp_path)])
    assert code == 0
    assert (tmp_path / "best_fitness_boxplot.png").exists()
    assert (tmp_path / "BPP2_trial2_convergence.png").exists()
