"""
Collision Energy - How badly a State's safety_hash clusters a set of codes.

Every code is mixed with safety_hash under the State's shifts and dropped into
a bucket with index_for. The energy is the total number of excess collisions:

    E = sum over buckets of max(0, occupancy - 1)
      = number of codes - number of distinct occupied buckets

The bucket table is rebuilt from scratch on each call since every State
defines a different hash. Lower is better; 0 means no two codes share a bucket.
"""

import numpy as np
from dataclasses import dataclass
from typing import Callable

from core.hashing import as_code_array, bucket_indices, validate_table_size, _bucket_indices_kernel
from core.state import State


# =============================================================================
# ENERGY
# =============================================================================

def _excess_collisions(indices: np.ndarray) -> float:
    if len(indices) == 0:
        return 0.0
    return float(len(indices) - len(np.unique(indices)))


def compute_energy(codes, state: State, table_size: int) -> float:
    """
    Total excess collisions of codes under state at table_size.

    Args:
        codes: Sequence of unsigned 32-bit codes (not modified)
        state: Shift amounts for safety_hash
        table_size: Power-of-two bucket count

    Returns:
        Non-negative float; 0.0 for an empty sequence
    """
    indices = bucket_indices(codes, *state.as_tuple(), table_size)
    return _excess_collisions(indices)


def make_energy_function(codes, table_size: int) -> Callable[[State], float]:
    """
    Bind codes and table size once, returning State -> energy.

    The codes are converted to a contiguous array up front and reused by
    every evaluation in a run.
    """
    mask = validate_table_size(table_size) - 1
    arr = np.ascontiguousarray(as_code_array(codes))

    def energy(state: State) -> float:
        a, b, c, d = state.as_tuple()
        return _excess_collisions(_bucket_indices_kernel(arr, a, b, c, d, mask))

    energy.table_size = mask + 1
    energy.num_codes = len(arr)
    return energy


# =============================================================================
# OCCUPANCY STATISTICS
# =============================================================================

@dataclass
class CollisionStats:
    """Summary of one bucketing of a code set."""
    num_codes: int
    table_size: int
    occupied_buckets: int
    excess_collisions: int
    max_occupancy: int

    @property
    def mean_excess_per_bucket(self) -> float:
        """Excess collisions per occupied bucket. Informational, not an energy."""
        if self.occupied_buckets == 0:
            return 0.0
        return self.excess_collisions / self.occupied_buckets

    @property
    def load_factor(self) -> float:
        return self.num_codes / self.table_size

    def to_dict(self) -> dict:
        return {
            'num_codes': self.num_codes,
            'table_size': self.table_size,
            'occupied_buckets': self.occupied_buckets,
            'excess_collisions': self.excess_collisions,
            'max_occupancy': self.max_occupancy,
            'mean_excess_per_bucket': self.mean_excess_per_bucket,
            'load_factor': self.load_factor,
        }


def bucket_occupancy(codes, state: State, table_size: int) -> np.ndarray:
    """Number of codes landing in each bucket (length table_size)."""
    table_size = validate_table_size(table_size)
    indices = bucket_indices(codes, *state.as_tuple(), table_size)
    return np.bincount(indices, minlength=table_size)


def collision_stats(codes, state: State, table_size: int) -> CollisionStats:
    occupancy = bucket_occupancy(codes, state, table_size)
    num_codes = int(occupancy.sum())
    occupied = int(np.count_nonzero(occupancy))

    return CollisionStats(
        num_codes=num_codes,
        table_size=len(occupancy),
        occupied_buckets=occupied,
        excess_collisions=num_codes - occupied,
        max_occupancy=int(occupancy.max()) if num_codes else 0,
    )
