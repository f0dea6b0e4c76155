# palette_opt/genetic/mutation.py
from __future__ import annotations

"""
Per-gene palette mutation.

Each colour mutates with probability mutation_probability / 100. A mutating
colour takes one of two forms:
  - small jitter (GA_SMALL_MUTATION_SHARE of the time): every RGB channel gets
    its own mutation roll and, when it hits, shifts by a uniform integer in
    [-amount, amount]
  - reset: one random channel is replaced by a uniform value in 0..255
Mutated colours are rebuilt through make_colour so derived fields stay in sync.
"""

from typing import List, Sequence

import numpy as np

from palette_opt.colour_convert import make_colour
from palette_opt.constants import GA_SMALL_MUTATION_SHARE
from palette_opt.core_types import Colour, Palette


def _roll(rng: np.random.Generator, probability_percent: float) -> bool:
    return rng.random() * 100.0 < probability_percent


def mutate_colour(
    colour: Colour,
    mutation_probability: float,
    mutation_amount: int,
    rng: np.random.Generator,
) -> Colour:
    """Mutated copy of one gene; callers decide whether the gene mutates at all."""
    rgb: List[int] = list(colour.rgb)
    amount = abs(int(mutation_amount))
    if rng.random() < GA_SMALL_MUTATION_SHARE:
        for ch in range(3):
            if _roll(rng, mutation_probability):
                rgb[ch] += int(rng.integers(-amount, amount + 1))
    else:
        ch = int(rng.integers(3))
        rgb[ch] = int(rng.integers(0, 256))
    if tuple(rgb) == colour.rgb:
        return colour
    return make_colour(rgb, alpha=colour.alpha)


def mutate_palette(
    palette: Sequence[Colour],
    mutation_probability: float,
    mutation_amount: int,
    rng: np.random.Generator,
) -> Palette:
    """New palette with each gene mutated with probability mutation_probability / 100."""
    out: List[Colour] = []
    for colour in palette:
        if _roll(rng, mutation_probability):
            out.append(mutate_colour(colour, mutation_probability, mutation_amount, rng))
        else:
            out.append(colour)
    return tuple(out)


__all__ = ["mutate_colour", "mutate_palette"]
