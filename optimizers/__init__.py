"""
Optimizers module - Simulated annealing over the mixer's shift amounts.
"""

from .annealing import (
    AnnealConfig,
    AnnealResult,
    SimulatedAnnealer,
    acceptance_probability,
    anneal_hash_parameters,
    temperature,
)

__all__ = [
    'AnnealConfig',
    'AnnealResult',
    'SimulatedAnnealer',
    'acceptance_probability',
    'anneal_hash_parameters',
    'temperature',
]
