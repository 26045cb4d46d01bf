"""
Error types raised by the hashing, energy and annealing layers.
"""


class GoodnessError(Exception):
    """Base class for every error this project raises on purpose."""


class DataUnavailable(GoodnessError, OSError):
    """The word list or the intermediate codes file could not be read."""


class InvalidTableSize(GoodnessError, ValueError):
    """Table size is not a positive power of two."""

    def __init__(self, table_size):
        self.table_size = table_size
        super().__init__(f"Table size must be a positive power of two, got {table_size!r}")


class EnergyEvaluationError(GoodnessError, RuntimeError):
    """An energy function returned a value that cannot be an energy (negative or NaN)."""
