# palette_opt/genetic/selection.py
from __future__ import annotations

"""
Parent selection for the palette genetic search.

Rank roulette: finite individuals are sorted by fitness descending and get
weight N - rank (rank 0 is best, N is the population size). Non-finite
individuals get weight 0. With fewer than two finite individuals the pair is
drawn uniformly at random instead.
"""

import math
from typing import List, Sequence, Tuple

import numpy as np

from palette_opt.core_types import Individual
from palette_opt.utils import warn


def rank_weights(fitnesses: Sequence[float]) -> np.ndarray:
    """Selection weight per index: N - rank for finite entries, 0 otherwise."""
    n = len(fitnesses)
    weights = np.zeros(n, dtype=np.float64)
    finite_idx = [i for i, f in enumerate(fitnesses) if math.isfinite(f)]
    # stable sort keeps the earlier index ahead on ties
    ordered = sorted(finite_idx, key=lambda i: -fitnesses[i])
    for rank, idx in enumerate(ordered):
        weights[idx] = float(n - rank)
    return weights


def _roulette_pick(weights: np.ndarray, rng: np.random.Generator) -> int:
    total = float(weights.sum())
    pick = rng.random() * total
    cumulative = np.cumsum(weights)
    idx = int(np.searchsorted(cumulative, pick, side="left"))
    # skip zero-weight slots a pick of exactly 0.0 can land on
    while idx < len(weights) - 1 and weights[idx] <= 0.0:
        idx += 1
    return min(idx, len(weights) - 1)


def select_parent_indices(
    population: Sequence[Individual], rng: np.random.Generator
) -> Tuple[int, int]:
    """
    Two distinct parent indices.

    Raises:
      ValueError if the population holds fewer than 2 individuals.
    """
    size = len(population)
    if size < 2:
        raise ValueError("population must hold at least 2 individuals for selection")

    fitnesses: List[float] = [ind.fitness for ind in population]
    finite_count = sum(1 for f in fitnesses if math.isfinite(f))
    if finite_count < 2:
        warn(
            f"selection: only {finite_count} individual(s) with finite fitness; "
            "choosing parents uniformly"
        )
        first, second = rng.choice(size, size=2, replace=False)
        return int(first), int(second)

    weights = rank_weights(fitnesses)
    first = _roulette_pick(weights, rng)
    second = _roulette_pick(weights, rng)
    if second == first:
        second = (first + 1) % size
    return first, second


def select_parents(
    population: Sequence[Individual], rng: np.random.Generator
) -> Tuple[Individual, Individual]:
    """Two distinct parents chosen by rank roulette."""
    i, j = select_parent_indices(population, rng)
    return population[i], population[j]


__all__ = ["rank_weights", "select_parent_indices", "select_parents"]
