"""
Visualization - Bucket occupancy and annealing progress plots.

Provides tools for seeing how a set of shifts spreads codes over the table.
"""

import numpy as np
import matplotlib.pyplot as plt
from typing import Dict, Optional

from core.energy import bucket_occupancy
from core.state import State


def plot_occupancy_histogram(
    codes,
    states: Dict[str, State],
    table_size: int,
    ax=None,
    max_occupancy: int = 12
):
    """
    Histogram of bucket occupancies for one or more states.

    A perfect mixer at load factor L approaches a Poisson(L) shape; heavy
    right tails mean clustering.

    Args:
        codes: Unsigned 32-bit codes
        states: Label -> State
        table_size: Power-of-two bucket count
        ax: Matplotlib axes (creates new if None)
        max_occupancy: Occupancies above this are pooled into the last bar

    Returns:
        ax: Matplotlib axes
    """
    if ax is None:
        fig, ax = plt.subplots(1, 1, figsize=(10, 6))

    bins = np.arange(max_occupancy + 2)
    width = 0.8 / max(len(states), 1)

    for i, (label, state) in enumerate(states.items()):
        occupancy = np.minimum(bucket_occupancy(codes, state, table_size), max_occupancy)
        counts = np.bincount(occupancy, minlength=max_occupancy + 1)
        ax.bar(bins[:-1] + i * width, counts, width=width, label=f"{label} {state}")

    ax.set_yscale('log')
    ax.set_xlabel('codes per bucket')
    ax.set_ylabel('buckets')
    ax.set_title(f'Bucket occupancy ({table_size:,} buckets)')
    ax.grid(True, alpha=0.3)
    ax.legend()

    return ax


def plot_energy_history(anneal, ax=None, baseline_energy: Optional[float] = None):
    """
    Best energy against iteration for one annealing run.

    Args:
        anneal: AnnealResult
        ax: Matplotlib axes
        baseline_energy: Draw a reference line at this energy

    Returns:
        ax: Matplotlib axes
    """
    if ax is None:
        fig, ax = plt.subplots(1, 1, figsize=(10, 6))

    history = anneal.best_energy_history
    ax.plot(range(len(history)), history, color='darkgreen', linewidth=2, label='best')

    if baseline_energy is not None:
        ax.axhline(baseline_energy, color='red', linestyle='--', alpha=0.7, label='baseline')

    ax.set_xlabel('iteration k')
    ax.set_ylabel('excess collisions')
    ax.set_title('Annealing progress')
    ax.grid(True, alpha=0.3)
    ax.legend()

    return ax


def plot_experiment(result, codes, save_path: Optional[str] = None, show: bool = False):
    """
    Occupancy histogram and energy history side by side.

    Args:
        result: ExperimentResult
        codes: Codes the experiment ran on
        save_path: Path to save figure (None = don't save)
        show: Display the figure interactively
    """
    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(16, 6))

    plot_occupancy_histogram(
        codes,
        {'baseline': result.baseline_state, 'tuned': result.tuned_state},
        result.table_size,
        ax=ax1,
    )
    plot_energy_history(result.anneal, ax=ax2, baseline_energy=result.baseline_energy)

    fig.suptitle(f"{result.name}: {result.num_codes:,} codes")
    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        print(f"Saved figure to {save_path}")

    if show:
        plt.show()
    else:
        plt.close(fig)

    return fig
