# tests/conftest.py
from __future__ import annotations

from typing import Callable, List, Sequence

import numpy as np
import pytest

from palette_opt.colour_convert import make_colour
from palette_opt.core_types import Colour, Palette


def colours(*rgbs: Sequence[int]) -> Palette:
    return tuple(make_colour(rgb) for rgb in rgbs)


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def primary() -> Colour:
    return make_colour((37, 99, 235))


@pytest.fixture
def palette() -> Palette:
    # accent, background, surface, button_text, main_text
    return colours(
        (234, 88, 12),
        (30, 41, 59),
        (241, 245, 249),
        (255, 255, 255),
        (15, 23, 42),
    )


@pytest.fixture
def other_palette() -> Palette:
    return colours(
        (16, 185, 129),
        (120, 53, 15),
        (254, 243, 199),
        (0, 0, 0),
        (68, 64, 60),
    )


@pytest.fixture
def population(palette: Palette, other_palette: Palette, rng: np.random.Generator) -> List[Palette]:
    from palette_opt.random_palettes import random_population

    return [palette, other_palette] + random_population(4, rng)


def channel_sum(primary: Colour, palette: Palette) -> float:
    """Cheap maximised fitness: brighter is better."""
    return float(sum(sum(c.rgb) for c in palette))


def distance_to(target: Palette) -> Callable[[Colour, Palette], float]:
    """Maximised fitness peaking exactly at `target`."""

    def score(primary: Colour, palette: Palette) -> float:
        return -float(
            sum(
                abs(x - y)
                for a, b in zip(palette, target)
                for x, y in zip(a.rgb, b.rgb)
            )
        )

    return score
