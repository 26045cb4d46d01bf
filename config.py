"""
Goodness - Global Configuration
Run modes, table-size presets and experiment settings in one place.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, List, Optional

from core.errors import InvalidTableSize
from core.hashing import is_power_of_two
from core.state import BASELINE_STATE, State
from optimizers.annealing import AnnealConfig

# Project paths
DEFAULT_WORDS_FILE = "words"
DEFAULT_CODES_FILE = "hashed"

# Table sizes
SMALL_TABLE_SIZE = 1 << 10      # 1,024
MEDIUM_TABLE_SIZE = 1 << 16     # 65,536
LARGE_TABLE_SIZE = 1 << 20      # 1,048,576


@dataclass
class ExperimentConfig:
    """One annealing experiment: table size, stopping rule and verbosity."""
    name: str = "custom"
    table_size: int = MEDIUM_TABLE_SIZE
    energy_target: float = 0.0
    iteration_budget: int = 1000
    verbose: bool = True
    use_bad_hash: bool = False
    initial_state: Optional[State] = None   # None = start from BASELINE_STATE
    report_interval: int = 100

    @property
    def hash_name(self) -> str:
        return 'bad' if self.use_bad_hash else 'primary'

    @property
    def seed_state(self) -> State:
        return self.initial_state if self.initial_state is not None else BASELINE_STATE

    def validate(self):
        """Reject unusable settings before any work starts."""
        if not is_power_of_two(self.table_size):
            raise InvalidTableSize(self.table_size)
        if self.iteration_budget < 1:
            raise ValueError(f"iteration_budget must be >= 1, got {self.iteration_budget}")

    def anneal_config(self) -> AnnealConfig:
        return AnnealConfig(
            max_iterations=self.iteration_budget,
            energy_target=self.energy_target,
            report_interval=self.report_interval,
        )


class RunMode(Enum):
    """Closed set of commands the CLI accepts."""
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    BAD_HASH = "bad-hash"
    QUIET = "quiet"
    ALL = "all"

    @classmethod
    def parse(cls, text: str) -> 'RunMode':
        """Map a command word to a mode. Raises ValueError for unknown words."""
        key = text.strip().lower().replace('_', '-')
        for mode in cls:
            if mode.value == key:
                return mode
        raise ValueError(f"Unknown command: '{text}'")


MODE_PRESETS: Dict[RunMode, ExperimentConfig] = {
    RunMode.SMALL: ExperimentConfig(
        name="small",
        table_size=SMALL_TABLE_SIZE,
        iteration_budget=500,
    ),
    RunMode.MEDIUM: ExperimentConfig(
        name="medium",
        table_size=MEDIUM_TABLE_SIZE,
        iteration_budget=1000,
    ),
    RunMode.LARGE: ExperimentConfig(
        name="large",
        table_size=LARGE_TABLE_SIZE,
        iteration_budget=1000,
    ),
    RunMode.BAD_HASH: ExperimentConfig(
        name="bad-hash",
        table_size=LARGE_TABLE_SIZE,
        iteration_budget=1000,
        use_bad_hash=True,
    ),
    RunMode.QUIET: ExperimentConfig(
        name="quiet",
        table_size=MEDIUM_TABLE_SIZE,
        iteration_budget=1000,
        verbose=False,
    ),
}

# What "all" expands to
ALL_MODES: List[RunMode] = [RunMode.SMALL, RunMode.MEDIUM, RunMode.LARGE, RunMode.BAD_HASH]


def get_config_for_mode(mode: RunMode, iteration_budget: Optional[int] = None) -> ExperimentConfig:
    """Fresh copy of a mode's preset, optionally with a different kmax."""
    if mode is RunMode.ALL:
        raise ValueError("'all' expands to several modes; use expand_modes()")

    config = replace(MODE_PRESETS[mode])
    if iteration_budget is not None:
        config.iteration_budget = iteration_budget
    return config


def expand_modes(modes: List[RunMode]) -> List[RunMode]:
    """Replace ALL with its member modes, keeping order."""
    expanded = []
    for mode in modes:
        if mode is RunMode.ALL:
            expanded.extend(ALL_MODES)
        else:
            expanded.append(mode)
    return expanded
