"""
Experiment Runner - Tune the mixer for one or more table sizes.

One generic operation, run_experiment, covers every preset: it evaluates the
baseline shifts, anneals from the configured seed, and reports the two side
by side. run_suite strings several presets together, hashing the word list
once per string hash.
"""

import numpy as np
from dataclasses import dataclass
from typing import Dict, List
from tqdm import tqdm

from config import ExperimentConfig
from core.energy import make_energy_function
from core.errors import DataUnavailable
from core.hashing import as_code_array
from core.state import BASELINE_STATE, State
from optimizers.annealing import AnnealResult, SimulatedAnnealer
from utils.codes_io import CodeSource
from utils.report import print_comparison


# =============================================================================
# DATA STRUCTURES
# =============================================================================

@dataclass
class ExperimentResult:
    """Tuned vs. baseline for one code set and table size."""
    name: str
    table_size: int
    num_codes: int
    hash_name: str
    tuned_state: State
    tuned_energy: float
    baseline_state: State
    baseline_energy: float
    anneal: AnnealResult

    @property
    def improved(self) -> bool:
        return self.tuned_energy < self.baseline_energy

    def to_dict(self) -> Dict:
        return {
            'name': self.name,
            'table_size': self.table_size,
            'num_codes': self.num_codes,
            'hash_name': self.hash_name,
            'tuned_state': self.tuned_state.to_dict(),
            'tuned_energy': self.tuned_energy,
            'baseline_state': self.baseline_state.to_dict(),
            'baseline_energy': self.baseline_energy,
            'anneal': self.anneal.to_dict(),
        }


# =============================================================================
# SINGLE EXPERIMENT
# =============================================================================

def run_experiment(
    codes,
    config: ExperimentConfig,
    rng: np.random.Generator,
    baseline_state: State = BASELINE_STATE
) -> ExperimentResult:
    """
    Anneal the safety_hash shifts for one table size.

    Args:
        codes: Unsigned 32-bit codes (from the primary or bad string hash)
        config: Table size, energy target, iteration budget, verbosity
        rng: Random source shared across the process
        baseline_state: Comparator shifts

    Returns:
        ExperimentResult
    """
    config.validate()
    codes = as_code_array(codes)
    energy_fn = make_energy_function(codes, config.table_size)

    if config.verbose:
        print(f"\n🎯 Experiment '{config.name}'")
        print(f"   Codes: {len(codes):,} ({config.hash_name} hash)")
        print(f"   Buckets: {config.table_size:,}")
        print(f"   kmax={config.iteration_budget:,} emax={config.energy_target:g}")
        print(f"   Seed state: {config.seed_state}")

    baseline_energy = energy_fn(baseline_state)

    annealer = SimulatedAnnealer(config.anneal_config())
    anneal = annealer.optimize(config.seed_state, energy_fn, rng, verbose=config.verbose)

    result = ExperimentResult(
        name=config.name,
        table_size=config.table_size,
        num_codes=len(codes),
        hash_name=config.hash_name,
        tuned_state=anneal.best_state,
        tuned_energy=anneal.best_energy,
        baseline_state=baseline_state,
        baseline_energy=baseline_energy,
        anneal=anneal,
    )

    if config.verbose:
        print_comparison(result, codes=codes)

    return result


# =============================================================================
# SUITE
# =============================================================================

def run_suite(
    source: CodeSource,
    configs: List[ExperimentConfig],
    rng: np.random.Generator,
    progress_bar: bool = True
) -> List[ExperimentResult]:
    """
    Run several experiments in order.

    Args:
        source: Supplies codes for the primary and bad hashes
        configs: One config per experiment
        rng: Random source shared by every experiment
        progress_bar: Show a tqdm bar over experiments

    Returns:
        One ExperimentResult per config, in order

    Raises:
        DataUnavailable: If the source cannot supply a config's hash; checked
            before the first experiment runs
    """
    for config in configs:
        config.validate()
        if not source.supports(config.hash_name):
            raise DataUnavailable(
                f"'{config.name}' needs the raw word list for the '{config.hash_name}' hash; "
                f"'{source.codes_path}' only holds primary-hash codes"
            )

    results = []
    pbar = tqdm(configs, desc="Experiments", disable=not progress_bar)
    for config in pbar:
        pbar.set_postfix(mode=config.name)
        codes = source.codes(config.hash_name)
        results.append(run_experiment(codes, config, rng))

    return results
