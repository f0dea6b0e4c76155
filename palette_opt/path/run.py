# palette_opt/path/run.py
from __future__ import annotations

"""
Order a set of colours so consecutive perceptual steps are as even as possible.

Randomised iterative improvement: start from the distinct colours with the
first one fixed and the rest shuffled, then for a fixed number of iterations
swap two non-first positions and keep the swap only when path fitness strictly
drops. Lower fitness is better; +inf is the degenerate sentinel.
"""

import math
import time
from typing import List, Optional, Sequence

import numpy as np

from palette_opt.config import PathConfig
from palette_opt.constants import DEBUG_EVERY, PATH_ITERATIONS
from palette_opt.core_types import PathResult
from palette_opt.path.graph import build_colour_graph, path_fitness, unique_colours
from palette_opt.utils import (
    debug_log,
    format_seconds_compact,
    print_config_line,
    resolve_rng,
    warn,
)


def initial_path(colours: Sequence[str], rng: np.random.Generator) -> List[str]:
    """First colour fixed, the rest in random order."""
    if len(colours) < 2:
        return list(colours)
    rest = list(colours[1:])
    order = rng.permutation(len(rest))
    return [colours[0]] + [rest[i] for i in order]


def swap_mutation(path: Sequence[str], rng: np.random.Generator) -> List[str]:
    """Copy of path with two distinct non-first positions swapped; needs 3+ entries."""
    out = list(path)
    if len(out) < 3:
        return out
    i, j = rng.choice(np.arange(1, len(out)), size=2, replace=False)
    out[i], out[j] = out[j], out[i]
    return out


def find_optimal_colour_path(
    colours: Sequence[str],
    iterations: int = PATH_ITERATIONS,
    *,
    rng: Optional[np.random.Generator] = None,
    seed: Optional[int] = None,
    debug: bool = False,
    config: Optional[PathConfig] = None,
) -> PathResult:
    """
    Find an ordering of `colours` with even perceptual step sizes.

    Args:
      colours    : colour strings (hex, rgb(), or CSS names); duplicates are dropped
      iterations : swap attempts; there is no early stop
      rng / seed : random source; pass one or neither
      debug      : print config and periodic progress
      config     : overrides the keyword settings above when given

    Returns:
      PathResult. The path is a permutation of the distinct input colours with
      the first one unchanged. Fewer than 2 distinct colours returns the input
      unchanged with fitness +inf.

    Raises:
      ValueError for fewer than 2 input colours or an unparseable colour string.
    """
    cfg = (
        config if config is not None else PathConfig(iterations=iterations, debug=debug)
    ).validate()
    if colours is None or len(colours) < 2:
        raise ValueError("colour path optimisation needs at least 2 colours")
    inputs = [str(c) for c in colours]

    keys = unique_colours(inputs)
    if len(keys) < 2:
        warn(f"path: only {len(keys)} distinct colour(s); returning input order")
        return PathResult(path=inputs, fitness=math.inf)

    graph = build_colour_graph(keys)
    gen = resolve_rng(rng, seed)

    best = initial_path(keys, gen)
    best_fitness = path_fitness(best, graph)
    if not math.isfinite(best_fitness):
        warn("path: initial ordering has no finite fitness; returning it unscored")
        return PathResult(path=best, fitness=math.inf)

    if cfg.debug:
        print_config_line(
            "path",
            [("Colours", len(keys)), ("Iterations", cfg.iterations), ("Start", best_fitness)],
            debug=True,
        )

    t0 = time.perf_counter()
    improvements = 0
    for it in range(cfg.iterations):
        candidate = swap_mutation(best, gen)
        score = path_fitness(candidate, graph)
        if math.isfinite(score) and score < best_fitness:
            best = candidate
            best_fitness = score
            improvements += 1
        if cfg.debug and (it + 1) % (DEBUG_EVERY * 10) == 0:
            debug_log(f"[path] it={it + 1} fitness={best_fitness:.4f}")

    if cfg.debug:
        debug_log(
            f"[path] done improvements={improvements} fitness={best_fitness:.4f} "
            f"in {format_seconds_compact(time.perf_counter() - t0)}"
        )
    return PathResult(path=best, fitness=best_fitness)


__all__ = ["find_optimal_colour_path", "initial_path", "swap_mutation"]
