from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from config import ExperimentConfig
from core.energy import compute_energy
from core.errors import DataUnavailable, InvalidTableSize
from core.state import BASELINE_STATE, State
from runners.experiment import run_experiment, run_suite
from utils.codes_io import CodeSource


def test_tuned_is_never_worse_than_baseline(sequential_codes: np.ndarray, rng: np.random.Generator) -> None:
    config = ExperimentConfig(name="t", table_size=128, iteration_budget=150, verbose=False)

    result = run_experiment(sequential_codes, config, rng)

    assert result.baseline_state == BASELINE_STATE
    assert result.baseline_energy == compute_energy(sequential_codes, BASELINE_STATE, 128)
    assert result.tuned_energy <= result.baseline_energy
    assert result.num_codes == 1000
    assert result.anneal.iterations <= 150


def test_custom_seed_state(sequential_codes: np.ndarray, rng: np.random.Generator) -> None:
    config = ExperimentConfig(
        table_size=1024, iteration_budget=100, verbose=False, initial_state=State(20, 0, 1, 31)
    )

    result = run_experiment(sequential_codes, config, rng)

    assert result.anneal.initial_state == State(20, 0, 1, 31)
    assert result.anneal.initial_energy == 999.0
    assert result.tuned_energy <= 999.0


def test_verbose_experiment_prints_comparison(sequential_codes: np.ndarray, rng: np.random.Generator, capsys) -> None:
    config = ExperimentConfig(name="loud", table_size=64, iteration_budget=20)

    run_experiment(sequential_codes, config, rng)

    out = capsys.readouterr().out
    assert "Experiment 'loud'" in out
    assert "Baseline" in out
    assert "Tuned" in out
    assert "max chain" in out


def test_quiet_experiment_prints_nothing(sequential_codes: np.ndarray, rng: np.random.Generator, capsys) -> None:
    run_experiment(sequential_codes, ExperimentConfig(table_size=64, iteration_budget=20, verbose=False), rng)

    assert capsys.readouterr().out == ""


def test_invalid_table_size_fails_before_running(sequential_codes: np.ndarray, rng: np.random.Generator) -> None:
    with pytest.raises(InvalidTableSize):
        run_experiment(sequential_codes, ExperimentConfig(table_size=100, verbose=False), rng)


def test_empty_codes_finish_at_target(rng: np.random.Generator) -> None:
    result = run_experiment([], ExperimentConfig(table_size=16, verbose=False), rng)

    assert result.tuned_energy == 0.0
    assert result.anneal.termination == 'target'


def test_suite_runs_configs_in_order(words_file: Path, rng: np.random.Generator) -> None:
    configs = [
        ExperimentConfig(name="one", table_size=16, iteration_budget=30, verbose=False),
        ExperimentConfig(name="two", table_size=32, iteration_budget=30, verbose=False, use_bad_hash=True),
    ]

    results = run_suite(CodeSource(words_path=str(words_file)), configs, rng=rng, progress_bar=False)

    assert [r.name for r in results] == ["one", "two"]
    assert [r.hash_name for r in results] == ["primary", "bad"]
    assert results[0].num_codes == results[1].num_codes > 0


def test_suite_validates_every_config_first(words_file: Path) -> None:
    configs = [
        ExperimentConfig(table_size=16, verbose=False),
        ExperimentConfig(table_size=24, verbose=False),
    ]

    with pytest.raises(InvalidTableSize):
        run_suite(CodeSource(words_path=str(words_file)), configs, np.random.default_rng(0), progress_bar=False)


def test_suite_checks_hash_availability_before_running(tmp_path: Path, capsys) -> None:
    codes_path = tmp_path / "hashed"
    codes_path.write_text("1\n2\n3\n", encoding="utf-8")
    configs = [
        ExperimentConfig(name="first", table_size=16, iteration_budget=5),
        ExperimentConfig(name="second", table_size=16, iteration_budget=5, use_bad_hash=True),
    ]

    with pytest.raises(DataUnavailable) as excinfo:
        run_suite(CodeSource(codes_path=str(codes_path)), configs, np.random.default_rng(0), progress_bar=False)

    assert "second" in str(excinfo.value)
    assert "Experiment" not in capsys.readouterr().out


def test_suite_is_reproducible_with_a_seed(words_file: Path) -> None:
    configs = [ExperimentConfig(table_size=32, iteration_budget=50, verbose=False)]
    runs = [
        run_suite(CodeSource(words_path=str(words_file)), configs, np.random.default_rng(7), progress_bar=False)
        for _ in range(2)
    ]

    assert runs[0][0].tuned_state == runs[1][0].tuned_state
    assert runs[0][0].anneal.best_energy_history == runs[1][0].anneal.best_energy_history


def test_result_to_dict(sequential_codes: np.ndarray, rng: np.random.Generator) -> None:
    result = run_experiment(sequential_codes, ExperimentConfig(table_size=64, iteration_budget=5, verbose=False), rng)

    d = result.to_dict()
    assert d['tuned_state'] == result.tuned_state.to_dict()
    assert d['anneal']['iterations'] == result.anneal.iterations
