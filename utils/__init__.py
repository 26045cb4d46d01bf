"""
Utilities module - Code I/O, reporting and visualization.
"""

from .codes_io import CodeSource, read_words, hash_word_file, read_codes, write_codes
from .report import print_comparison, print_suite_summary, print_learned, print_usage
from .visualization import plot_occupancy_histogram, plot_energy_history, plot_experiment

__all__ = [
    'CodeSource',
    'read_words',
    'hash_word_file',
    'read_codes',
    'write_codes',
    'print_comparison',
    'print_suite_summary',
    'print_learned',
    'print_usage',
    'plot_occupancy_histogram',
    'plot_energy_history',
    'plot_experiment',
]
