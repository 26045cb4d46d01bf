"""
Runners module - Experiment orchestration.
"""

from .experiment import ExperimentResult, run_experiment, run_suite

__all__ = [
    'ExperimentResult',
    'run_experiment',
    'run_suite',
]
