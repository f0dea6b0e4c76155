import math

import pytest

from palette_opt.colour_convert import make_colour
from palette_opt.constants import BG_LUMINANCE_PENALTY, W_BG_QUALITY, W_MIN_DELTA_E
from palette_opt.fitness import (
    evaluate_palette_solution,
    fitness_terms,
    harmony_reward,
    min_pairwise_delta_e,
)

from conftest import colours

WHITE = make_colour((255, 255, 255))
BLACK = make_colour((0, 0, 0))
GREY = make_colour((128, 128, 128))


def test_fitness_is_deterministic(primary, palette):
    first = evaluate_palette_solution(primary, palette)
    second = evaluate_palette_solution(primary, palette)
    assert math.isfinite(first)
    assert first == second


def test_fitness_is_sum_of_terms(primary, palette):
    terms = fitness_terms(primary, palette)
    assert terms is not None
    assert evaluate_palette_solution(primary, palette) == pytest.approx(terms.total)


def test_bright_grey_background_is_penalised():
    palette = (BLACK, WHITE, GREY, BLACK, WHITE)
    terms = fitness_terms(WHITE, palette)
    assert terms is not None
    assert terms.background_penalized
    assert terms.background_luminance > 0.9
    # out-of-range luminance plus the grey penalty
    assert terms.background == pytest.approx(-W_BG_QUALITY * (BG_LUMINANCE_PENALTY + 1))


def test_mid_luminance_chromatic_background_is_rewarded(primary):
    palette = colours(
        (234, 88, 12),
        (37, 99, 160),
        (241, 245, 249),
        (255, 255, 255),
        (15, 23, 42),
    )
    terms = fitness_terms(primary, palette)
    assert terms is not None
    assert not terms.background_penalized
    assert terms.background == pytest.approx(W_BG_QUALITY)


@pytest.mark.parametrize("size", [0, 4, 6])
def test_wrong_length_scores_negative_infinity(primary, palette, size):
    bad = (palette * 2)[:size]
    assert evaluate_palette_solution(primary, bad) == float("-inf")
    assert fitness_terms(primary, bad) is None


def test_non_colour_entry_scores_negative_infinity(primary, palette):
    bad = palette[:4] + ("#ffffff",)
    assert evaluate_palette_solution(primary, bad) == float("-inf")


@pytest.mark.parametrize(
    "ratio, reward",
    [(1.0, -2.0), (1.49, -2.0), (1.5, 1.0), (2.9, 1.0), (3.0, 2.0), (6.9, 2.0), (7.0, 1.0), (9.9, 1.0), (10.0, 0.0), (21.0, 0.0)],
)
def test_harmony_reward_is_non_monotonic(ratio, reward):
    assert harmony_reward(ratio) == reward


def test_separation_penalises_duplicate_colours(primary, palette):
    duplicated = (palette[0], palette[0]) + palette[2:]
    terms = fitness_terms(primary, duplicated)
    assert terms is not None
    assert terms.min_delta_e == pytest.approx(0.0, abs=1e-6)
    assert terms.separation == pytest.approx(-W_MIN_DELTA_E * 10.0, abs=1e-4)


def test_min_pairwise_delta_e(palette):
    assert min_pairwise_delta_e(palette) > 0.0
    assert min_pairwise_delta_e(palette[:1]) == math.inf
