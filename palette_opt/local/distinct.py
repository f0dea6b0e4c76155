# palette_opt/local/distinct.py
from __future__ import annotations

"""
Annealing for a set of N mutually distinct colours.

Unlike the 5-role palette searches this one minimises a cost. Terms:
  energy    : 100 - mean pairwise CIEDE2000 (normal vision)
  range     : max - min pairwise CIEDE2000, so gaps stay even
  target    : mean distance from each colour to its nearest target colour
  avoid     : 100 - smallest distance from any colour to any avoid colour
  contrast  : 100 * (1 - min WCAG contrast against the background / 21)
  per CVD   : 100 - mean pairwise distance after simulate_rgb

Each sweep nudges every free colour once (one channel, +/- nudge in 0..1
units) and applies Metropolis acceptance at the sweep temperature. T is
multiplied by cooling_rate after each sweep. The lowest-cost set seen is
returned.
"""

import math
import time
from itertools import combinations
from typing import List, Optional, Sequence

import numpy as np

from palette_opt.colour_convert import (
    colour_distance,
    contrast_ratio,
    delta_e2000_pair,
    make_colour,
    rgb_to_lab,
)
from palette_opt.colour_names import parse_colour
from palette_opt.config import DistinctColoursConfig
from palette_opt.constants import DC_COUNT, DEBUG_EVERY, MAX_CONTRAST_RATIO
from palette_opt.core_types import Colour, Deficiency, DistinctColoursResult, StopCheck
from palette_opt.cvd import simulate_rgb
from palette_opt.local.anneal import acceptance_probability
from palette_opt.random_palettes import random_colour
from palette_opt.utils import (
    debug_log,
    format_seconds_compact,
    print_config_line,
    resolve_rng,
)


def pairwise_distances(
    colours: Sequence[Colour], deficiency: Optional[Deficiency] = None
) -> List[float]:
    """CIEDE2000 for every unordered pair, optionally after CVD simulation."""
    if deficiency is None:
        labs = [c.lab for c in colours]
    else:
        rgb = np.array([c.rgb for c in colours], dtype=np.uint8).reshape(-1, 3)
        labs = list(rgb_to_lab(simulate_rgb(rgb, deficiency)))
    return [delta_e2000_pair(labs[i], labs[j]) for i, j in combinations(range(len(labs)), 2)]


def _nearest(colour: Colour, others: Sequence[Colour]) -> float:
    return min(colour_distance(colour, o) for o in others)


class _CostModel:
    """Config colours parsed once; called with a candidate set."""

    def __init__(self, cfg: DistinctColoursConfig) -> None:
        self.cfg = cfg
        self.targets = [parse_colour(c) for c in cfg.target_colours]
        self.avoid = [parse_colour(c) for c in cfg.avoid_colours]
        self.background = parse_colour(cfg.background)
        self.deficiencies = [
            (Deficiency.parse(name), float(weight))
            for name, weight in cfg.deficiency_weights.items()
            if weight
        ]

    def __call__(self, colours: Sequence[Colour]) -> float:
        cfg = self.cfg
        normal = pairwise_distances(colours)
        energy = 100.0 - float(np.mean(normal))
        spread = max(normal) - min(normal)
        target = (
            float(np.mean([_nearest(c, self.targets) for c in colours]))
            if self.targets
            else 0.0
        )
        avoid = 100.0 - min(_nearest(c, self.avoid) for c in colours) if self.avoid else 0.0
        min_contrast = min(
            [MAX_CONTRAST_RATIO] + [contrast_ratio(c, self.background) for c in colours]
        )
        contrast = 100.0 - (min_contrast / MAX_CONTRAST_RATIO) * 100.0

        total = (
            cfg.energy_weight * energy
            + cfg.range_weight * spread
            + cfg.target_weight * target
            + cfg.avoid_weight * avoid
            + cfg.contrast_weight * contrast
        )
        for deficiency, weight in self.deficiencies:
            simulated = pairwise_distances(colours, deficiency)
            total += weight * (100.0 - float(np.mean(simulated)))
        return total


def distinct_colours_cost(
    colours: Sequence[Colour], config: Optional[DistinctColoursConfig] = None
) -> float:
    """
    Cost of a colour set, lower is better.

    Raises:
      ValueError for fewer than 2 colours or an unparseable config colour.
    """
    if len(colours) < 2:
        raise ValueError("a distinct colour set needs at least 2 colours")
    cfg = (config if config is not None else DistinctColoursConfig()).validate()
    return _CostModel(cfg)(colours)


def _nudge(colour: Colour, amount: float, rng: np.random.Generator) -> Colour:
    """One random channel moved by up to +/- amount (0..1 units), clamped."""
    channel = int(rng.integers(3))
    rgb = list(colour.rgb)
    value = rgb[channel] / 255.0 + rng.random() * 2.0 * amount - amount
    rgb[channel] = min(1.0, max(0.0, value)) * 255.0
    return make_colour(rgb, alpha=colour.alpha)


def optimize_distinct_colours(
    n: int = DC_COUNT,
    config: Optional[DistinctColoursConfig] = None,
    *,
    rng: Optional[np.random.Generator] = None,
    seed: Optional[int] = None,
    should_stop: Optional[StopCheck] = None,
) -> DistinctColoursResult:
    """
    Anneal a set of `n` colours towards the lowest cost.

    The start is config.provided_colours followed by random colours up to n.
    The first config.fixed_colours entries are never changed.

    Returns:
      DistinctColoursResult. cost_history holds the current cost before the
      first sweep and after each sweep; iterations counts sweeps.

    Raises:
      ValueError for n < 2, more provided colours than n, or an invalid config.
    """
    cfg = (config if config is not None else DistinctColoursConfig()).validate()
    if n < 2:
        raise ValueError(f"n must be >= 2, got {n}")
    if len(cfg.provided_colours) > n:
        raise ValueError(
            f"{len(cfg.provided_colours)} provided colours do not fit a set of {n}"
        )
    gen = resolve_rng(rng, seed)
    cost = _CostModel(cfg)

    colours: List[Colour] = [parse_colour(c) for c in cfg.provided_colours]
    while len(colours) < n:
        colours.append(random_colour(gen))

    current_cost = cost(colours)
    start_cost = current_cost
    best = tuple(colours)
    best_cost = current_cost
    history: List[float] = [current_cost]
    temperature = cfg.initial_temperature
    sweeps = 0

    if cfg.debug:
        print_config_line(
            "distinct",
            [
                ("Colours", n),
                ("Fixed", cfg.fixed_colours),
                ("T0", cfg.initial_temperature),
                ("Tmin", cfg.min_temperature),
                ("Cooling", cfg.cooling_rate),
                ("Start", start_cost),
            ],
            debug=True,
        )
    t0 = time.perf_counter()

    free = range(cfg.fixed_colours, n)
    while temperature > cfg.min_temperature and len(free) > 0:
        if cfg.max_sweeps is not None and sweeps >= cfg.max_sweeps:
            break
        if should_stop is not None and should_stop():
            if cfg.debug:
                debug_log(f"[distinct] cancelled at sweep={sweeps}")
            break

        for i in free:
            candidate = list(colours)
            candidate[i] = _nudge(colours[i], cfg.nudge, gen)
            candidate_cost = cost(candidate)
            if not math.isfinite(candidate_cost):
                continue
            delta = candidate_cost - current_cost
            if gen.random() < acceptance_probability(-delta, temperature):
                colours = candidate
                current_cost = candidate_cost
                if current_cost < best_cost:
                    best = tuple(colours)
                    best_cost = current_cost

        history.append(current_cost)
        temperature *= cfg.cooling_rate
        sweeps += 1

        if cfg.debug and sweeps % DEBUG_EVERY == 0:
            debug_log(
                f"[distinct] sweep={sweeps} T={temperature:.4f} "
                f"current={current_cost:.3f} best={best_cost:.3f}"
            )

    if cfg.debug:
        debug_log(
            f"[distinct] done sweeps={sweeps} cost {start_cost:.3f} -> {best_cost:.3f} "
            f"in {format_seconds_compact(time.perf_counter() - t0)}"
        )

    return DistinctColoursResult(
        colours=best,
        cost=best_cost,
        start_cost=start_cost,
        iterations=sweeps,
        cost_history=history,
    )


__all__ = ["optimize_distinct_colours", "distinct_colours_cost", "pairwise_distances"]
