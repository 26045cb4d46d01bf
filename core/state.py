"""
Shift-parameter state and the random neighbor move used by the annealer.

A State is the four right-shift amounts (a, b, c, d) of safety_hash. Each one
is a 5-bit amount for a 32-bit word, so every field lives in [0, 31]. Moves
clamp at the edges; they never wrap around.
"""

import numpy as np
from dataclasses import dataclass
from typing import Tuple


STATE_MIN = 0
STATE_MAX = 31
MAX_STEP = 6
FIELDS = ('a', 'b', 'c', 'd')


def clamp(value: int, low: int = STATE_MIN, high: int = STATE_MAX) -> int:
    return int(min(max(value, low), high))


@dataclass(frozen=True)
class State:
    """Four shift amounts for safety_hash."""
    a: int
    b: int
    c: int
    d: int

    def __post_init__(self):
        for name in FIELDS:
            value = getattr(self, name)
            if not STATE_MIN <= value <= STATE_MAX:
                raise ValueError(
                    f"State.{name}={value} outside [{STATE_MIN}, {STATE_MAX}]"
                )

    @classmethod
    def clamped(cls, a: int, b: int, c: int, d: int) -> 'State':
        """Build a State, pulling every field into range."""
        return cls(clamp(a), clamp(b), clamp(c), clamp(d))

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return (self.a, self.b, self.c, self.d)

    def to_dict(self) -> dict:
        return {name: getattr(self, name) for name in FIELDS}

    @classmethod
    def from_dict(cls, d: dict) -> 'State':
        return cls(*(int(d[name]) for name in FIELDS))

    def __str__(self) -> str:
        return f"({self.a}, {self.b}, {self.c}, {self.d})"


# Supplemental-hash shifts of the classic Java HashMap: the comparator.
BASELINE_STATE = State(20, 12, 7, 4)


def neighbor(state: State, rng: np.random.Generator) -> State:
    """
    Random neighbor of a state.

    Picks one of the four fields, a step size in [1, MAX_STEP] and a
    direction, all uniformly, then clamps. The input state is untouched.
    """
    name = FIELDS[int(rng.integers(len(FIELDS)))]
    step = int(rng.integers(1, MAX_STEP + 1))
    if rng.random() < 0.5:
        step = -step

    values = state.to_dict()
    values[name] += step
    return State.clamped(**values)


def random_state(rng: np.random.Generator) -> State:
    """Uniformly random state, for seeding runs away from the baseline."""
    values = rng.integers(STATE_MIN, STATE_MAX + 1, size=len(FIELDS))
    return State(*(int(v) for v in values))
