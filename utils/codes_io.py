"""
Code Source - Word lists in, unsigned 32-bit codes out.

Reads a whitespace-separated word list, hashes it with one of the string
hashes, and optionally imports/exports the intermediate codes file:

    one decimal integer per line, in original word order

The annealer never touches files: codes are loaded once and passed around
as an in-memory array.
"""

import numpy as np
from typing import Callable, Dict, Iterator, Optional
import os

from core.errors import DataUnavailable
from core.hashing import HASH_FUNCTIONS, as_code_array, hash_words, primary_hash


def read_words(path: str) -> Iterator[str]:
    """
    Yield whitespace-separated tokens from a text file.

    Raises:
        DataUnavailable: If the file cannot be opened or decoded
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            for line in f:
                yield from line.split()
    except (OSError, UnicodeDecodeError) as e:
        raise DataUnavailable(f"Cannot read word list '{path}': {e}") from e


def hash_word_file(path: str, hash_fn: Callable[[str], int] = primary_hash) -> np.ndarray:
    """Hash every word in a file, in order."""
    return hash_words(read_words(path), hash_fn)


def write_codes(codes, path: str) -> str:
    """
    Write codes to the intermediate file format.

    Args:
        codes: Integer sequence
        path: Output file path

    Returns:
        The path written
    """
    arr = as_code_array(codes)
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    try:
        with open(path, 'w', encoding='utf-8') as f:
            for code in arr:
                f.write(f"{int(code)}\n")
    except OSError as e:
        raise DataUnavailable(f"Cannot write codes file '{path}': {e}") from e

    return path


def read_codes(path: str) -> np.ndarray:
    """
    Read an intermediate codes file.

    Blank lines are skipped; any other non-integer record is an error.

    Raises:
        DataUnavailable: If the file is missing, unreadable or malformed
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            lines = f.readlines()
    except (OSError, UnicodeDecodeError) as e:
        raise DataUnavailable(f"Cannot read codes file '{path}': {e}") from e

    codes = []
    for line_no, line in enumerate(lines, start=1):
        for token in line.split():
            try:
                codes.append(int(token))
            except ValueError:
                raise DataUnavailable(f"Bad record {token!r} at {path}:{line_no}") from None

    return as_code_array(codes)


class CodeSource:
    """
    Lazily produces codes for each hash function, hashing the word list once.

    With codes_path set, the pre-hashed file stands in for the primary hash;
    the bad hash then has no words to work from.
    """

    def __init__(self, words_path: Optional[str] = None, codes_path: Optional[str] = None):
        if words_path is None and codes_path is None:
            raise ValueError("CodeSource needs a words_path or a codes_path")

        self.words_path = words_path
        self.codes_path = codes_path
        self._cache: Dict[str, np.ndarray] = {}

    def supports(self, hash_name: str) -> bool:
        """Whether codes for hash_name can be produced without touching the disk yet."""
        if hash_name not in HASH_FUNCTIONS:
            return False
        return self.codes_path is None or hash_name == 'primary'

    def codes(self, hash_name: str = 'primary') -> np.ndarray:
        if hash_name not in HASH_FUNCTIONS:
            raise ValueError(f"Unknown hash: {hash_name}")

        if hash_name not in self._cache:
            self._cache[hash_name] = self._load(hash_name)
        return self._cache[hash_name]

    def _load(self, hash_name: str) -> np.ndarray:
        if self.codes_path is not None:
            if hash_name != 'primary':
                raise DataUnavailable(
                    f"'{hash_name}' hash needs the raw word list; "
                    f"'{self.codes_path}' only holds primary-hash codes"
                )
            return read_codes(self.codes_path)

        return hash_word_file(self.words_path, HASH_FUNCTIONS[hash_name])
