import csv

import pytest

from aco_bpp.logging import RunLogger


def test_flush_writes_metadata_and_metrics(tmp_path):
    logger = RunLogger(base_dir=tmp_path / "logs", filename="trial.csv", metadata={"runner": "test"})
    logger.log_iteration(iteration=1, best_fitness=12)
    logger.update_metadata(trial=2)
    logger.log_iteration(iteration=2, best_fitness=10)

    path = logger.flush()
    assert path == tmp_path / "logs" / "trial.csv"
    with path.open() as handle:
        rows = list(csv.DictReader(handle))

    assert [row["best_fitness"] for row in rows] == ["12", "10"]
    assert rows[0]["runner"] == "test"
    assert rows[0]["trial"] == ""
    assert rows[1]["trial"] == "2"
    assert rows[0]["timestamp"].endswith("Z")


def test_field_order_is_respected(tmp_path):
    logger = RunLogger(base_dir=tmp_path, filename="ordered.csv", field_order=["iteration", "best_fitness"])
    logger.log_iteration(iteration=1, best_fitness=3, ignored="x")
    header = logger.flush().read_text().splitlines()[0]
    assert header == "iteration,best_fitness"


def test_default_filename(tmp_path):
    logger = RunLogger(base_dir=tmp_path)
    logger.log_iteration(iteration=1)
    assert logger.flush().name.startswith("aco_run_")


def test_flush_without_records(tmp_path):
    with pytest.raises(RuntimeError):
        RunLogger(base_dir=tmp_path).flush()
