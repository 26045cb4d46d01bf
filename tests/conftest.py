from __future__ import annotations

import os
import sys
from pathlib import Path

import numpy as np
import pytest

os.environ.setdefault("MPLBACKEND", "Agg")

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

WORDS = """
the quick brown fox jumps over the lazy dog
pack my box with five dozen liquor jugs
listen silent enlist tinsel inlets
hash table bucket collision avalanche mixer
"""


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(12345)


@pytest.fixture
def sequential_codes() -> np.ndarray:
    return np.arange(1, 1001, dtype=np.int64)


@pytest.fixture
def words_file(tmp_path: Path) -> Path:
    path = tmp_path / "words"
    path.write_text(WORDS, encoding="utf-8")
    return path
