# palette_opt/genetic/single_colour.py
from __future__ import annotations

"""
Evolve one colour towards a target.

Fitness is max(0, 100 * (1 - dE2000 / 100)), so 100 is an exact match.
Fitness-proportional roulette picks two distinct parents, each child takes
every RGB channel from either parent with equal chance, then each channel
jitters by up to +/- mutation_amount with probability mutation_rate. The best
individual survives each generation unchanged.
"""

from typing import List, Optional, Tuple

import numpy as np

from palette_opt.colour_convert import colour_distance, make_colour
from palette_opt.constants import (
    SC_CONVERGED_FITNESS,
    SC_GENERATIONS,
    SC_MAX_DELTA_E,
    SC_MUTATION_AMOUNT,
    SC_MUTATION_RATE,
    SC_POPULATION_SIZE,
)
from palette_opt.core_types import Colour
from palette_opt.utils import debug_log, resolve_rng


def match_fitness(candidate: Colour, target: Colour) -> float:
    """0..100 closeness score; 100 for an exact perceptual match."""
    diff = colour_distance(candidate, target)
    return max(0.0, 100.0 * (1.0 - diff / SC_MAX_DELTA_E))


def _pick(weights: np.ndarray, rng: np.random.Generator) -> int:
    total = float(weights.sum())
    if total <= 0.0:
        return int(rng.integers(len(weights)))
    return int(rng.choice(len(weights), p=weights / total))


def _pick_pair(weights: np.ndarray, rng: np.random.Generator) -> Tuple[int, int]:
    """Two distinct indices; uniform second pick when under two weights are positive."""
    i = _pick(weights, rng)
    if np.count_nonzero(weights) < 2:
        return i, (i + 1 + int(rng.integers(len(weights) - 1))) % len(weights)
    j = _pick(weights, rng)
    while j == i:
        j = _pick(weights, rng)
    return i, j


def _breed(a: Colour, b: Colour, rng: np.random.Generator) -> List[int]:
    return [a.rgb[ch] if rng.random() < 0.5 else b.rgb[ch] for ch in range(3)]


def _mutate(rgb: List[int], rate: float, amount: int, rng: np.random.Generator) -> List[int]:
    out = list(rgb)
    for ch in range(3):
        if rng.random() < rate:
            out[ch] += int(rng.integers(-amount, amount + 1))
    return out


def evolve_single_colour(
    target: Colour,
    population_size: int = SC_POPULATION_SIZE,
    generations: int = SC_GENERATIONS,
    mutation_rate: float = SC_MUTATION_RATE,
    mutation_amount: int = SC_MUTATION_AMOUNT,
    *,
    rng: Optional[np.random.Generator] = None,
    seed: Optional[int] = None,
    debug: bool = False,
) -> Colour:
    """
    Best colour found after evolving a random population towards `target`.

    Stops early once the best individual scores above SC_CONVERGED_FITNESS.

    Raises:
      ValueError for population_size < 2, negative generations, or a
      mutation_rate outside 0..1.
    """
    if population_size < 2:
        raise ValueError("population_size must be >= 2")
    if generations < 0:
        raise ValueError("generations must be >= 0")
    if not 0.0 <= mutation_rate <= 1.0:
        raise ValueError(f"mutation_rate must be within 0..1, got {mutation_rate}")
    gen = resolve_rng(rng, seed)
    amount = abs(int(mutation_amount))

    population: List[Tuple[Colour, float]] = []
    for _ in range(population_size):
        colour = make_colour(gen.integers(0, 256, size=3))
        population.append((colour, match_fitness(colour, target)))

    for generation in range(generations):
        population.sort(key=lambda item: item[1], reverse=True)
        weights = np.array([f for _, f in population], dtype=np.float64)
        next_population = [population[0]]

        while len(next_population) < population_size:
            i, j = _pick_pair(weights, gen)
            child_rgb = _mutate(
                _breed(population[i][0], population[j][0], gen),
                mutation_rate,
                amount,
                gen,
            )
            child = make_colour(child_rgb)
            next_population.append((child, match_fitness(child, target)))

        population = next_population
        if population[0][1] > SC_CONVERGED_FITNESS:
            if debug:
                debug_log(f"[single] converged at gen={generation}")
            break

    best_colour, best_fitness = max(population, key=lambda item: item[1])
    if debug:
        debug_log(f"[single] best={best_colour.hex} fitness={best_fitness:.3f}")
    return best_colour


__all__ = ["evolve_single_colour", "match_fitness"]
