# palette_opt/local/hill_climb.py
from __future__ import annotations

"""
Steepest-ascent hill climbing over RGB channel moves.

Each iteration scores every neighbour of the current palette and moves to the
single best one only when it is strictly better. Ties keep the current palette.
The run ends after `patience` consecutive iterations without improvement, after
`max_iterations`, or when should_stop() returns True.
"""

import math
import time
from typing import List, Optional, Sequence, Tuple

from palette_opt.config import HillClimbingConfig
from palette_opt.constants import (
    DEBUG_EVERY,
    HC_MAX_ITERATIONS,
    HC_NEIGHBOUR_STEP,
    HC_PATIENCE,
)
from palette_opt.core_types import (
    Colour,
    FitnessFunction,
    OptimizationResult,
    Palette,
    StopCheck,
    ensure_palette,
)
from palette_opt.fitness import evaluate_palette_solution
from palette_opt.moves import apply_move, neighbour_moves
from palette_opt.utils import (
    debug_log,
    format_seconds_compact,
    print_config_line,
    warn,
)


def _best_neighbour(
    primary: Colour,
    current: Palette,
    current_fitness: float,
    step: int,
    fitness: FitnessFunction,
) -> Tuple[Optional[Palette], float]:
    """Best strictly-improving neighbour, or (None, current_fitness)."""
    best_palette: Optional[Palette] = None
    best_fitness = current_fitness
    for move in neighbour_moves(current, step):
        candidate = apply_move(current, move)
        score = fitness(primary, candidate)
        if math.isfinite(score) and score > best_fitness:
            best_palette = candidate
            best_fitness = score
    return best_palette, best_fitness


def hill_climbing_optimization(
    primary: Colour,
    initial: Sequence[Colour],
    max_iterations: int = HC_MAX_ITERATIONS,
    patience: int = HC_PATIENCE,
    neighbour_step: int = HC_NEIGHBOUR_STEP,
    *,
    fitness: FitnessFunction = evaluate_palette_solution,
    debug: bool = False,
    should_stop: Optional[StopCheck] = None,
    config: Optional[HillClimbingConfig] = None,
) -> OptimizationResult:
    """
    Climb from `initial` to a local optimum of `fitness` (maximised).

    Args:
      primary        : reference colour passed to the fitness function
      initial        : 5-colour starting palette
      max_iterations : hard cap on iterations
      patience       : consecutive non-improving iterations before stopping
      neighbour_step : +/- channel change used to build neighbours
      fitness        : scoring function, higher is better, -inf rejects
      debug          : print config and periodic progress
      should_stop    : optional cancellation hook checked once per iteration
      config         : overrides the keyword settings above when given

    Returns:
      OptimizationResult. fitness_history starts with the initial score and
      gains one entry per iteration; it never decreases.

    Raises:
      ValueError for a palette that is not exactly 5 colours.
    """
    cfg = (
        config
        if config is not None
        else HillClimbingConfig(
            max_iterations=max_iterations,
            patience=patience,
            neighbour_step=neighbour_step,
            debug=debug,
        )
    ).validate()
    start = ensure_palette(initial, what="initial palette")

    current: Palette = start
    current_fitness = fitness(primary, current)
    if not math.isfinite(current_fitness):
        warn("hill climbing: initial palette has invalid fitness; aborting")
        return OptimizationResult(
            best_solution=start,
            best_fitness=float("-inf"),
            iterations=0,
            fitness_history=[float("-inf")],
        )

    if cfg.debug:
        print_config_line(
            "hill",
            [
                ("Iterations", cfg.max_iterations),
                ("Patience", cfg.patience),
                ("Step", cfg.neighbour_step),
                ("Start", current_fitness),
            ],
            debug=True,
        )

    t0 = time.perf_counter()
    history: List[float] = [current_fitness]
    stale = 0
    iterations = 0

    while iterations < cfg.max_iterations:
        if should_stop is not None and should_stop():
            if cfg.debug:
                debug_log(f"[hill] cancelled at it={iterations}")
            break
        iterations += 1

        candidate, candidate_fitness = _best_neighbour(
            primary, current, current_fitness, cfg.neighbour_step, fitness
        )
        if candidate is not None:
            current = candidate
            current_fitness = candidate_fitness
            stale = 0
        else:
            stale += 1
        history.append(current_fitness)

        if cfg.debug and iterations % DEBUG_EVERY == 0:
            debug_log(
                f"[hill] it={iterations} fitness={current_fitness:.3f} stale={stale}"
            )
        if stale >= cfg.patience:
            break

    if cfg.debug:
        debug_log(
            f"[hill] done it={iterations} fitness={current_fitness:.3f} "
            f"in {format_seconds_compact(time.perf_counter() - t0)}"
        )

    return OptimizationResult(
        best_solution=current,
        best_fitness=current_fitness,
        iterations=iterations,
        fitness_history=history,
    )


__all__ = ["hill_climbing_optimization"]
