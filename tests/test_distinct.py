import math

import numpy as np
import pytest

from palette_opt.colour_convert import colour_distance, make_colour
from palette_opt.colour_names import parse_colour
from palette_opt.config import DistinctColoursConfig
from palette_opt.core_types import Deficiency
from palette_opt.local import distinct_colours_cost, optimize_distinct_colours
from palette_opt.local.distinct import pairwise_distances

RED_GREEN = [make_colour((255, 0, 0)), make_colour((0, 255, 0))]
BLUE_YELLOW = [make_colour((0, 0, 255)), make_colour((255, 255, 0))]

# only the spacing terms, no pull towards or away from reference colours
BARE = dict(
    target_colours=(),
    avoid_colours=(),
    energy_weight=0.0,
    range_weight=0.0,
    contrast_weight=0.0,
)


def _quick(**overrides):
    settings = dict(initial_temperature=10.0, cooling_rate=0.9, max_sweeps=5)
    settings.update(overrides)
    return DistinctColoursConfig(**settings)


def test_pairwise_distances_cover_every_pair():
    colours = RED_GREEN + BLUE_YELLOW
    normal = pairwise_distances(colours)
    assert len(normal) == 6
    assert normal[0] == pytest.approx(colour_distance(*RED_GREEN))
    assert len(pairwise_distances(colours, Deficiency.DEUTERANOMALY)) == 6


def test_cost_prefers_colours_distinct_under_deuteranomaly():
    with_deutan = DistinctColoursConfig(deficiency_weights={"deuteranomaly": 0.5})
    without = DistinctColoursConfig(deficiency_weights={})

    def deutan_penalty(colours):
        return distinct_colours_cost(colours, with_deutan) - distinct_colours_cost(
            colours, without
        )

    assert deutan_penalty(RED_GREEN) > deutan_penalty(BLUE_YELLOW) + 5.0


def test_deutan_only_cost_ranks_red_green_worse():
    cfg = DistinctColoursConfig(deficiency_weights={"deuteranomaly": 1.0}, **BARE)
    assert distinct_colours_cost(RED_GREEN, cfg) > distinct_colours_cost(BLUE_YELLOW, cfg)


def test_contrast_and_avoid_terms():
    cfg = DistinctColoursConfig(deficiency_weights={}, **dict(BARE, contrast_weight=1.0))
    dark = [make_colour((10, 10, 10)), make_colour((40, 0, 60))]
    light = [make_colour((250, 250, 240)), make_colour((230, 255, 230))]
    # white background: light colours have low contrast, so they cost more
    assert distinct_colours_cost(light, cfg) > distinct_colours_cost(dark, cfg)

    avoid = DistinctColoursConfig(
        deficiency_weights={}, **dict(BARE, avoid_colours=("#000000",), avoid_weight=1.0)
    )
    assert distinct_colours_cost(dark, avoid) > distinct_colours_cost(light, avoid)


def test_optimizer_returns_lowest_cost_seen():
    cfg = _quick()
    result = optimize_distinct_colours(4, cfg, seed=11)
    assert len(result.colours) == 4
    assert result.iterations == 5
    assert len(result.cost_history) == 6
    assert result.cost <= result.start_cost
    assert result.cost <= min(result.cost_history)
    assert result.cost == pytest.approx(distinct_colours_cost(result.colours, cfg))


def test_optimizer_separates_red_and_green_for_deutan_vision():
    cfg = DistinctColoursConfig(
        provided_colours=("#ff0000", "#00ff00"),
        deficiency_weights={"deuteranomaly": 1.0},
        initial_temperature=1e-3,
        min_temperature=1e-9,
        cooling_rate=0.9,
        max_sweeps=40,
        **BARE,
    )
    result = optimize_distinct_colours(2, cfg, seed=3)
    assert result.cost < result.start_cost
    before = pairwise_distances(RED_GREEN, Deficiency.DEUTERANOMALY)[0]
    after = pairwise_distances(result.colours, Deficiency.DEUTERANOMALY)[0]
    assert after > before


def test_fixed_colours_never_move():
    cfg = _quick(provided_colours=("#4269d0", "#efb118", "#ff725c"), fixed_colours=2)
    result = optimize_distinct_colours(4, cfg, seed=2)
    assert [c.hex for c in result.colours[:2]] == ["#4269d0", "#efb118"]


def test_all_fixed_runs_no_sweeps():
    cfg = _quick(provided_colours=("#4269d0", "#efb118"), fixed_colours=2)
    result = optimize_distinct_colours(2, cfg, seed=0)
    assert result.iterations == 0
    assert list(result.colours) == [parse_colour("#4269d0"), parse_colour("#efb118")]


def test_cooling_ends_the_run():
    cfg = DistinctColoursConfig(initial_temperature=1.0, cooling_rate=0.5, min_temperature=0.1)
    result = optimize_distinct_colours(3, cfg, seed=4)
    # T = 1, 0.5, 0.25, 0.125 are above 0.1
    assert result.iterations == 4


def test_optimizer_is_reproducible():
    a = optimize_distinct_colours(3, _quick(), seed=9)
    b = optimize_distinct_colours(3, _quick(), rng=np.random.default_rng(9))
    assert a == b


def test_stop_hook_cancels_before_first_sweep():
    result = optimize_distinct_colours(3, _quick(), seed=1, should_stop=lambda: True)
    assert result.iterations == 0
    assert math.isfinite(result.cost)


def test_invalid_arguments_raise():
    with pytest.raises(ValueError):
        optimize_distinct_colours(1, _quick())
    with pytest.raises(ValueError):
        optimize_distinct_colours(2, _quick(provided_colours=("#000", "#fff", "#888")))
    with pytest.raises(ValueError):
        _quick(provided_colours=("#000",), fixed_colours=2).validate()
    with pytest.raises(ValueError):
        _quick(deficiency_weights={"colourblind": 1.0}).validate()
    with pytest.raises(ValueError):
        distinct_colours_cost(RED_GREEN[:1])
