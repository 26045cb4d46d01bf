from __future__ import annotations

import numpy as np
import pytest

from core.state import BASELINE_STATE, MAX_STEP, STATE_MAX, STATE_MIN, State, neighbor, random_state


def test_state_rejects_out_of_range_fields() -> None:
    with pytest.raises(ValueError):
        State(32, 0, 0, 0)
    with pytest.raises(ValueError):
        State(0, 0, -1, 0)


def test_clamped_pulls_fields_into_range() -> None:
    assert State.clamped(-5, 40, 3, 31) == State(0, 31, 3, 31)


def test_baseline_is_the_classic_hashmap_mixer() -> None:
    assert BASELINE_STATE.as_tuple() == (20, 12, 7, 4)


def test_neighbor_stays_in_bounds(rng: np.random.Generator) -> None:
    state = State(0, 31, 0, 31)
    for _ in range(2000):
        state = neighbor(state, rng)
        assert all(STATE_MIN <= v <= STATE_MAX for v in state.as_tuple())


def test_neighbor_changes_one_field_by_a_bounded_step(rng: np.random.Generator) -> None:
    start = State(15, 15, 15, 15)
    for _ in range(500):
        moved = neighbor(start, rng)
        diffs = [abs(x - y) for x, y in zip(moved.as_tuple(), start.as_tuple())]
        assert sum(1 for d in diffs if d) == 1
        assert 1 <= max(diffs) <= MAX_STEP


def test_neighbor_clamps_instead_of_wrapping(rng: np.random.Generator) -> None:
    top = State(31, 31, 31, 31)
    for _ in range(500):
        assert min(neighbor(top, rng).as_tuple()) >= 31 - MAX_STEP


def test_neighbor_returns_a_new_state(rng: np.random.Generator) -> None:
    start = State(10, 10, 10, 10)
    moved = neighbor(start, rng)

    assert start == State(10, 10, 10, 10)
    assert moved is not start


def test_neighbor_is_reproducible_with_a_seed() -> None:
    a = [neighbor(BASELINE_STATE, np.random.default_rng(7)) for _ in range(3)]
    assert a[0] == a[1] == a[2]


def test_random_state_is_in_bounds(rng: np.random.Generator) -> None:
    for _ in range(200):
        state = random_state(rng)
        assert all(STATE_MIN <= v <= STATE_MAX for v in state.as_tuple())


def test_state_dict_round_trip() -> None:
    assert State.from_dict(BASELINE_STATE.to_dict()) == BASELINE_STATE
