"""
Core module - Hash primitives, shift-parameter state and collision energy.
"""

from .errors import (
    GoodnessError,
    DataUnavailable,
    InvalidTableSize,
    EnergyEvaluationError,
)

from .hashing import (
    primary_hash,
    bad_hash,
    safety_hash,
    index_for,
    hash_words,
    bucket_indices,
    to_bit_string,
)

from .state import (
    State,
    BASELINE_STATE,
    neighbor,
    random_state,
)

from .energy import (
    compute_energy,
    make_energy_function,
    collision_stats,
    bucket_occupancy,
)

__all__ = [
    'GoodnessError',
    'DataUnavailable',
    'InvalidTableSize',
    'EnergyEvaluationError',
    'primary_hash',
    'bad_hash',
    'safety_hash',
    'index_for',
    'hash_words',
    'bucket_indices',
    'to_bit_string',
    'State',
    'BASELINE_STATE',
    'neighbor',
    'random_state',
    'compute_energy',
    'make_energy_function',
    'collision_stats',
    'bucket_occupancy',
]
