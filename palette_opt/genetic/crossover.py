# palette_opt/genetic/crossover.py
from __future__ import annotations

"""
Crossover operators over fixed-length palettes.

Every operator takes two parent palettes of equal length and returns two
offspring of that length whose genes (colours) all come from the parents.
Colours are immutable, so genes are shared rather than copied.

Operators:
  one-point : swap the tails after a cut in [1, n-1]
  two-point : swap the middle [p1, p2) with 1 <= p1 < p2 <= n-1
  block     : swap an inclusive range [start, end], start <= end
  uniform   : swap each position independently with probability 1/2
  shuffle   : permute an inclusive range of each parent independently
"""

from typing import Callable, Dict, List, Sequence, Tuple

import numpy as np

from palette_opt.core_types import Colour, CrossoverOperation, Palette

Offspring = Tuple[Palette, Palette]
CrossoverHandler = Callable[[Sequence[Colour], Sequence[Colour], np.random.Generator], Offspring]


def _rand_int(rng: np.random.Generator, lo: int, hi: int) -> int:
    """Inclusive integer in [lo, hi]."""
    return int(rng.integers(lo, hi + 1))


def one_point_crossover(
    a: Sequence[Colour], b: Sequence[Colour], rng: np.random.Generator
) -> Offspring:
    n = len(a)
    if n < 2:
        return tuple(a), tuple(b)
    point = _rand_int(rng, 1, n - 1)
    return (
        tuple(a[:point]) + tuple(b[point:]),
        tuple(b[:point]) + tuple(a[point:]),
    )


def two_point_crossover(
    a: Sequence[Colour], b: Sequence[Colour], rng: np.random.Generator
) -> Offspring:
    n = len(a)
    if n < 3:
        return tuple(a), tuple(b)
    p1 = _rand_int(rng, 1, n - 2)
    p2 = _rand_int(rng, p1 + 1, n - 1)
    return (
        tuple(a[:p1]) + tuple(b[p1:p2]) + tuple(a[p2:]),
        tuple(b[:p1]) + tuple(a[p1:p2]) + tuple(b[p2:]),
    )


def block_crossover(
    a: Sequence[Colour], b: Sequence[Colour], rng: np.random.Generator
) -> Offspring:
    n = len(a)
    if n < 1:
        return tuple(a), tuple(b)
    start = _rand_int(rng, 0, n - 1)
    end = _rand_int(rng, start, n - 1)
    child_a: List[Colour] = list(a)
    child_b: List[Colour] = list(b)
    child_a[start : end + 1] = b[start : end + 1]
    child_b[start : end + 1] = a[start : end + 1]
    return tuple(child_a), tuple(child_b)


def uniform_crossover(
    a: Sequence[Colour], b: Sequence[Colour], rng: np.random.Generator
) -> Offspring:
    child_a: List[Colour] = list(a)
    child_b: List[Colour] = list(b)
    for i in range(len(a)):
        if rng.random() < 0.5:
            child_a[i], child_b[i] = child_b[i], child_a[i]
    return tuple(child_a), tuple(child_b)


def _shuffled_section(
    parent: Sequence[Colour], p1: int, p2: int, rng: np.random.Generator
) -> Palette:
    section = list(parent[p1 : p2 + 1])
    order = rng.permutation(len(section))
    return tuple(parent[:p1]) + tuple(section[i] for i in order) + tuple(parent[p2 + 1 :])


def shuffle_crossover(
    a: Sequence[Colour], b: Sequence[Colour], rng: np.random.Generator
) -> Offspring:
    """Each offspring is its own parent with one section reordered; nothing is exchanged."""
    n = len(a)
    if n < 3:
        return tuple(a), tuple(b)
    p1 = _rand_int(rng, 0, n - 2)
    p2 = _rand_int(rng, p1 + 1, n - 1)
    return _shuffled_section(a, p1, p2, rng), _shuffled_section(b, p1, p2, rng)


CROSSOVER_HANDLERS: Dict[CrossoverOperation, CrossoverHandler] = {
    CrossoverOperation.ONE_POINT: one_point_crossover,
    CrossoverOperation.TWO_POINT: two_point_crossover,
    CrossoverOperation.BLOCK: block_crossover,
    CrossoverOperation.UNIFORM: uniform_crossover,
    CrossoverOperation.SHUFFLE: shuffle_crossover,
}


def crossover(
    a: Sequence[Colour],
    b: Sequence[Colour],
    operation: CrossoverOperation,
    rng: np.random.Generator,
) -> Offspring:
    """
    Apply `operation` to two parents of equal length.

    Raises:
      ValueError for parents of different lengths or an unknown operation.
    """
    if len(a) != len(b):
        raise ValueError(f"parents differ in length: {len(a)} vs {len(b)}")
    op = CrossoverOperation.parse(operation)
    return CROSSOVER_HANDLERS[op](a, b, rng)


__all__ = [
    "CROSSOVER_HANDLERS",
    "crossover",
    "one_point_crossover",
    "two_point_crossover",
    "block_crossover",
    "uniform_crossover",
    "shuffle_crossover",
]
