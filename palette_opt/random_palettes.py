# palette_opt/random_palettes.py
from __future__ import annotations

"""
Random starting points for the optimisers.

Exports:
  random_colour(rng) -> Colour
  random_palette(rng, size=PALETTE_SIZE) -> Palette
  random_population(size, rng) -> list[Palette]
"""

from typing import List

import numpy as np

from .colour_convert import make_colour
from .core_types import PALETTE_SIZE, Colour, Palette


def random_colour(rng: np.random.Generator) -> Colour:
    """Uniform RGB colour."""
    return make_colour(rng.integers(0, 256, size=3))


def random_palette(rng: np.random.Generator, size: int = PALETTE_SIZE) -> Palette:
    """`size` independent random colours."""
    if size < 0:
        raise ValueError("size must be >= 0")
    return tuple(random_colour(rng) for _ in range(size))


def random_population(size: int, rng: np.random.Generator) -> List[Palette]:
    """`size` random 5-colour palettes for the genetic search."""
    if size < 0:
        raise ValueError("size must be >= 0")
    return [random_palette(rng) for _ in range(size)]


__all__ = ["random_colour", "random_palette", "random_population"]
