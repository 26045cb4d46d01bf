"""
Hash Primitives - String hashes, the avalanche "safety" hash and bucket indexing.

Three layers, applied in order:
1. primary_hash  - Java-style polynomial string hash (h = 31*h + c) on 32 bits
2. safety_hash   - bit-mixing step parameterized by four right-shift amounts
3. index_for     - reduce a mixed hash to a bucket by masking the low bits

bad_hash (h = h + c) is a deliberately weak control: a byte sum keeps almost
all of its entropy in the low ~12 bits and clusters heavily.

The per-code work done inside the annealing loop goes through Numba kernels;
the scalar Python versions below are the reference implementations.
"""

import numpy as np
from numba import njit
from typing import Callable, Dict, Iterable

from core.errors import InvalidTableSize


# =============================================================================
# CONSTANTS
# =============================================================================

WORD_BITS = 32
WORD_MASK = (1 << WORD_BITS) - 1
PRIMARY_MULTIPLIER = 31


# =============================================================================
# STRING HASHES
# =============================================================================

def primary_hash(word: str) -> int:
    """
    Polynomial rolling hash of a word, like Java's String.hashCode().

        s[0]*31^(n-1) + s[1]*31^(n-2) + ... + s[n-1]   (mod 2^32)

    The empty string hashes to 0. The result is always unsigned.
    """
    h = 0
    for ch in word:
        h = (PRIMARY_MULTIPLIER * h + ord(ch)) & WORD_MASK
    return h


def bad_hash(word: str) -> int:
    """Sum of character codes (mod 2^32). Control variant only."""
    h = 0
    for ch in word:
        h = (h + ord(ch)) & WORD_MASK
    return h


HASH_FUNCTIONS: Dict[str, Callable[[str], int]] = {
    'primary': primary_hash,
    'bad': bad_hash,
}


def hash_words(words: Iterable[str], hash_fn: Callable[[str], int] = primary_hash) -> np.ndarray:
    """Hash every word in order, returning an int64 array of unsigned 32-bit codes."""
    return np.fromiter((hash_fn(w) for w in words), dtype=np.int64)


def as_code_array(codes) -> np.ndarray:
    """Coerce any integer sequence to an int64 array of unsigned 32-bit codes."""
    arr = np.asarray(codes, dtype=np.int64).reshape(-1)
    return arr & WORD_MASK


# =============================================================================
# SAFETY (AVALANCHE) HASH
# =============================================================================

def _shift_right(value: int, amount: int) -> int:
    # Shifting a 32-bit word by its width or more leaves nothing.
    if amount < 0 or amount >= WORD_BITS:
        return 0
    return value >> amount


def safety_hash(code: int, a: int, b: int, c: int, d: int) -> int:
    """
    Avalanche step over an unsigned 32-bit code.

        h = code ^ (code >> a) ^ (code >> b)
        return h ^ (h >> c) ^ (h >> d)

    With the classic (20, 12, 7, 4) shifts, codes that differ only by constant
    multiples at each bit position get a bounded number of collisions.
    """
    code &= WORD_MASK
    h = code ^ _shift_right(code, a) ^ _shift_right(code, b)
    return h ^ _shift_right(h, c) ^ _shift_right(h, d)


# =============================================================================
# BUCKET INDEXING
# =============================================================================

def is_power_of_two(n) -> bool:
    """True for 1, 2, 4, 8, ... (ints only)."""
    return isinstance(n, (int, np.integer)) and not isinstance(n, bool) and n > 0 and (n & (n - 1)) == 0


def validate_table_size(table_size) -> int:
    """Return table_size as int, or raise InvalidTableSize."""
    if not is_power_of_two(table_size):
        raise InvalidTableSize(table_size)
    return int(table_size)


def index_for(h: int, table_size: int) -> int:
    """Bucket index of a hash: h & (table_size - 1)."""
    table_size = validate_table_size(table_size)
    return h & (table_size - 1)


# =============================================================================
# NUMBA KERNELS
# =============================================================================

@njit(cache=True)
def _shift_right_kernel(value, amount):
    if amount < 0 or amount >= WORD_BITS:
        return 0
    return value >> amount


@njit(cache=True)
def _safety_hash_kernel(code, a, b, c, d):
    h = code ^ _shift_right_kernel(code, a) ^ _shift_right_kernel(code, b)
    return h ^ _shift_right_kernel(h, c) ^ _shift_right_kernel(h, d)


@njit(cache=True)
def _bucket_indices_kernel(codes, a, b, c, d, mask):
    n = len(codes)
    out = np.empty(n, dtype=np.int64)
    for i in range(n):
        out[i] = _safety_hash_kernel(codes[i], a, b, c, d) & mask
    return out


@njit(cache=True)
def _mix_all_kernel(codes, a, b, c, d):
    n = len(codes)
    out = np.empty(n, dtype=np.int64)
    for i in range(n):
        out[i] = _safety_hash_kernel(codes[i], a, b, c, d)
    return out


def mix_codes(codes, a: int, b: int, c: int, d: int) -> np.ndarray:
    """Apply safety_hash to every code."""
    return _mix_all_kernel(as_code_array(codes), int(a), int(b), int(c), int(d))


def bucket_indices(codes, a: int, b: int, c: int, d: int, table_size: int) -> np.ndarray:
    """Bucket index of every code after mixing with the given shifts."""
    table_size = validate_table_size(table_size)
    return _bucket_indices_kernel(
        as_code_array(codes), int(a), int(b), int(c), int(d), table_size - 1
    )


# =============================================================================
# DEBUGGING
# =============================================================================

def to_bit_string(value: int) -> str:
    """32-character 0/1 rendering of an unsigned 32-bit value, MSB first."""
    return format(value & WORD_MASK, f'0{WORD_BITS}b')


# =============================================================================
# WARMUP
# =============================================================================

def warmup(verbose: bool = True):
    """Warm up JIT compilation by calling all kernels once."""
    codes = np.arange(16, dtype=np.int64)

    _ = _safety_hash_kernel(np.int64(12345), 20, 12, 7, 4)
    _ = _bucket_indices_kernel(codes, 20, 12, 7, 4, 15)
    _ = _mix_all_kernel(codes, 20, 12, 7, 4)

    if verbose:
        print("JIT warmup complete for hashing module")


if __name__ == "__main__":
    warmup()

    for word in ["", "a", "hash", "avalanche"]:
        code = primary_hash(word)
        print(f"{word!r:>12} -> {code:>10} {to_bit_string(code)}")
