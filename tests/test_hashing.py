from __future__ import annotations

import numpy as np
import pytest

from core.errors import InvalidTableSize
from core.hashing import (
    WORD_MASK,
    as_code_array,
    bad_hash,
    bucket_indices,
    hash_words,
    index_for,
    is_power_of_two,
    mix_codes,
    primary_hash,
    safety_hash,
    to_bit_string,
)


def _polynomial_reference(word: str) -> int:
    n = len(word)
    return sum(ord(ch) * 31 ** (n - 1 - i) for i, ch in enumerate(word)) % 2**32


def test_primary_hash_of_empty_string_is_zero() -> None:
    assert primary_hash("") == 0


def test_primary_hash_matches_java_string_hash() -> None:
    assert primary_hash("a") == 97
    assert primary_hash("ab") == 31 * 97 + 98
    assert primary_hash("hello") == 99162322


def test_primary_hash_wraps_to_unsigned_32_bits() -> None:
    word = "supercalifragilisticexpialidocious"
    h = primary_hash(word)

    assert 0 <= h <= WORD_MASK
    assert h == _polynomial_reference(word)


def test_primary_hash_is_deterministic() -> None:
    assert primary_hash("avalanche") == primary_hash("avalanche")


def test_bad_hash_is_a_byte_sum_and_collides_on_anagrams() -> None:
    assert bad_hash("abc") == 97 + 98 + 99
    assert bad_hash("listen") == bad_hash("silent")
    assert primary_hash("listen") != primary_hash("silent")


def test_safety_hash_matches_the_mixing_formula() -> None:
    code = 0xDEADBEEF
    h = code ^ (code >> 20) ^ (code >> 12)
    expected = h ^ (h >> 7) ^ (h >> 4)

    assert safety_hash(code, 20, 12, 7, 4) == expected


def test_safety_hash_treats_oversized_shifts_as_zero() -> None:
    code = 0x12345678

    assert safety_hash(code, 32, 40, 32, 99) == code


def test_safety_hash_does_not_mutate_and_is_repeatable() -> None:
    args = (0xCAFEBABE, 5, 10, 2, 23)

    assert safety_hash(*args) == safety_hash(*args)
    assert args == (0xCAFEBABE, 5, 10, 2, 23)


def test_numba_kernel_agrees_with_scalar_safety_hash() -> None:
    codes = [0, 1, 97, 99162322, 0x7FFFFFFF, 0xFFFFFFFF]
    shifts = (20, 12, 7, 4)

    mixed = mix_codes(codes, *shifts)

    assert mixed.tolist() == [safety_hash(c, *shifts) for c in codes]


def test_index_for_masks_low_bits() -> None:
    assert index_for(0x12345, 256) == 0x45
    assert index_for(0xFFFFFFFF, 1) == 0


@pytest.mark.parametrize("table_size", [0, 3, 1000, -4, True, 2.0])
def test_index_for_rejects_non_power_of_two(table_size) -> None:
    with pytest.raises(InvalidTableSize):
        index_for(5, table_size)


def test_is_power_of_two() -> None:
    assert all(is_power_of_two(1 << k) for k in range(32))
    assert not is_power_of_two(6)


def test_bucket_indices_stay_inside_the_table() -> None:
    codes = np.random.default_rng(0).integers(0, 2**32, size=5000)

    indices = bucket_indices(codes, 20, 12, 7, 4, 1024)

    assert len(indices) == len(codes)
    assert indices.min() >= 0
    assert indices.max() < 1024


def test_hash_words_keeps_word_order() -> None:
    words = ["b", "a", "", "ab"]

    codes = hash_words(words)

    assert codes.dtype == np.int64
    assert codes.tolist() == [98, 97, 0, 3105]


def test_as_code_array_reads_negatives_as_unsigned() -> None:
    assert as_code_array([-1, 5]).tolist() == [0xFFFFFFFF, 5]


def test_to_bit_string_is_32_characters_msb_first() -> None:
    assert to_bit_string(5) == "0" * 29 + "101"
    assert to_bit_string(0xFFFFFFFF) == "1" * 32
    assert len(to_bit_string(0)) == 32
