"""
Simulated Annealing - Search the shift-parameter space for a better mixer.

The loop is the textbook one:

    s <- s0; e <- E(s)
    best <- s; ebest <- e
    k <- 0
    while k < kmax and e > emax:
        T <- temperature(k, kmax)
        snew <- neighbor(s); enew <- E(snew)
        if P(e, enew, T) > random(): s <- snew; e <- enew
        if enew < ebest: best <- snew; ebest <- enew
        k <- k + 1
    return best

Schedule: T(k) = 100 / (k / kmax). T(0) is infinite, so the first move is
always taken, and T falls toward 100 as k approaches kmax.

Acceptance (Metropolis): P = 1 if enew < e, exp(-(enew - e) / T) otherwise.

Best tracking is decoupled from acceptance: a neighbor that beats the best
is recorded even if the coin flip leaves the working state where it was.
"""

import numpy as np
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional
import math
import time

from core.energy import make_energy_function
from core.errors import EnergyEvaluationError
from core.state import BASELINE_STATE, State, neighbor


# =============================================================================
# CONFIGURATION
# =============================================================================

@dataclass
class AnnealConfig:
    """Configuration for one annealing run."""

    # === Stopping ===
    max_iterations: int = 1000      # kmax
    energy_target: float = 0.0      # emax: stop once the working energy is <= this

    # === Schedule ===
    temperature_scale: float = 100.0  # numerator of T(k) = scale / (k / kmax)

    # === Progress reporting ===
    report_interval: int = 100

    def validate(self):
        if self.max_iterations < 1:
            raise ValueError(f"max_iterations must be >= 1, got {self.max_iterations}")
        if self.temperature_scale <= 0:
            raise ValueError(f"temperature_scale must be positive, got {self.temperature_scale}")
        if self.report_interval < 1:
            raise ValueError(f"report_interval must be >= 1, got {self.report_interval}")


# =============================================================================
# SCHEDULE
# =============================================================================

def temperature(k: int, kmax: int, scale: float = 100.0) -> float:
    """
    Temperature at iteration k of kmax.

    k == 0 is returned as +inf explicitly (the formula divides by zero there),
    which makes every first move acceptable.
    """
    if k <= 0:
        return math.inf
    return scale / (k / kmax)


def acceptance_probability(energy: float, new_energy: float, temp: float) -> float:
    """Metropolis criterion: 1 for a strict improvement, exp(-dE/T) otherwise."""
    if temp <= 0:
        raise ValueError(f"Temperature must be positive, got {temp}")
    if new_energy < energy:
        return 1.0
    return math.exp(-(new_energy - energy) / temp)


# =============================================================================
# RESULT
# =============================================================================

@dataclass
class AnnealResult:
    """Outcome of one annealing run."""
    best_state: State
    best_energy: float
    initial_state: State
    initial_energy: float
    iterations: int
    termination: str                     # 'budget' or 'target'
    best_energy_history: List[float] = field(default_factory=list)
    stats: Dict[str, float] = field(default_factory=dict)

    @property
    def improvement(self) -> float:
        return self.initial_energy - self.best_energy

    def to_dict(self) -> Dict:
        return {
            'best_state': self.best_state.to_dict(),
            'best_energy': self.best_energy,
            'initial_state': self.initial_state.to_dict(),
            'initial_energy': self.initial_energy,
            'iterations': self.iterations,
            'termination': self.termination,
            'stats': dict(self.stats),
        }


# =============================================================================
# ANNEALER
# =============================================================================

class SimulatedAnnealer:
    """
    Simulated annealing over the four safety_hash shift amounts.

    Example:
        annealer = SimulatedAnnealer(AnnealConfig(max_iterations=500))
        energy_fn = make_energy_function(codes, table_size=1024)
        result = annealer.optimize(BASELINE_STATE, energy_fn, np.random.default_rng(0))
    """

    def __init__(self, config: AnnealConfig = None):
        self.config = config or AnnealConfig()

        self.best_state = None
        self.best_energy = float('inf')

        self.stats = {
            'evaluations': 0,
            'accepted_moves': 0,
            'rejected_moves': 0,
            'uphill_accepted': 0,
            'improvements': 0,
            'final_temp': 0.0,
            'elapsed_seconds': 0.0,
        }

    def optimize(
        self,
        initial_state: State,
        energy_fn: Callable[[State], float],
        rng: np.random.Generator,
        verbose: bool = False,
        progress_callback: Optional[Callable] = None
    ) -> AnnealResult:
        """
        Run the annealing loop from initial_state.

        Args:
            initial_state: Seed of the search
            energy_fn: State -> non-negative energy
            rng: Random source for neighbor moves and acceptance draws
            verbose: Print progress
            progress_callback: Called with (k, current_energy, best_energy)

        Returns:
            AnnealResult holding the best state seen, never the working state
        """
        cfg = self.config
        cfg.validate()
        kmax = cfg.max_iterations

        self.stats = {key: 0 for key in self.stats}
        self.stats['final_temp'] = math.inf

        # Initializing
        current_state = initial_state
        current_energy = self._evaluate(energy_fn, current_state)
        initial_energy = current_energy

        best_state = current_state
        best_energy = current_energy
        history = [best_energy]

        start_time = time.time()
        k = 0

        # Iterating
        while k < kmax and current_energy > cfg.energy_target:
            temp = temperature(k, kmax, cfg.temperature_scale)

            candidate = neighbor(current_state, rng)
            candidate_energy = self._evaluate(energy_fn, candidate)

            if acceptance_probability(current_energy, candidate_energy, temp) > rng.random():
                if candidate_energy > current_energy:
                    self.stats['uphill_accepted'] += 1
                current_state = candidate
                current_energy = candidate_energy
                self.stats['accepted_moves'] += 1
            else:
                self.stats['rejected_moves'] += 1

            if candidate_energy < best_energy:
                best_state = candidate
                best_energy = candidate_energy
                self.stats['improvements'] += 1

            k += 1
            history.append(best_energy)
            self.stats['final_temp'] = temp

            if verbose and k % cfg.report_interval == 0:
                elapsed = time.time() - start_time
                rate = k / elapsed if elapsed > 0 else float('inf')
                print(f"  Iter {k:>8,} | best={best_energy:,.0f} {best_state} | "
                      f"curr={current_energy:,.0f} | T={temp:.2f} | {rate:.0f} iter/s")

            if progress_callback:
                progress_callback(k, current_energy, best_energy)

        # Terminated
        elapsed = time.time() - start_time
        termination = 'target' if current_energy <= cfg.energy_target else 'budget'

        self.best_state = best_state
        self.best_energy = best_energy
        self.stats['elapsed_seconds'] = elapsed

        result = AnnealResult(
            best_state=best_state,
            best_energy=best_energy,
            initial_state=initial_state,
            initial_energy=initial_energy,
            iterations=k,
            termination=termination,
            best_energy_history=history,
            stats=dict(self.stats),
        )

        if verbose:
            print(f"\n  ✅ Annealing Complete! ({termination})")
            print(f"     Best State:  {best_state}")
            print(f"     Best Energy: {best_energy:,.0f} (started at {initial_energy:,.0f}, "
                  f"{result.improvement:,.0f} fewer collisions)")
            print(f"     Iterations:  {k:,} in {elapsed:.2f}s")
            print(f"     Accepted:    {self.stats['accepted_moves']:,} "
                  f"({self.stats['uphill_accepted']:,} uphill)")

        return result

    def _evaluate(self, energy_fn: Callable[[State], float], state: State) -> float:
        energy = float(energy_fn(state))
        self.stats['evaluations'] += 1

        if math.isnan(energy) or energy < 0:
            raise EnergyEvaluationError(
                f"Energy function returned {energy} for state {state}; "
                f"the code source is probably unreadable"
            )
        return energy


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def anneal_hash_parameters(
    codes,
    table_size: int,
    rng: np.random.Generator,
    config: AnnealConfig = None,
    initial_state: State = BASELINE_STATE,
    verbose: bool = False
) -> AnnealResult:
    """
    Tune safety_hash shifts for one code set and table size.

    Args:
        codes: Unsigned 32-bit codes, held in memory for the whole run
        table_size: Power-of-two bucket count
        rng: Random source, created once per process by the caller
        config: Annealing settings (defaults to AnnealConfig())
        initial_state: Seed of the search
        verbose: Print progress

    Returns:
        AnnealResult
    """
    energy_fn = make_energy_function(codes, table_size)
    annealer = SimulatedAnnealer(config)
    return annealer.optimize(initial_state, energy_fn, rng, verbose=verbose)
