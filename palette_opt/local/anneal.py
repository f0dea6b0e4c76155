# palette_opt/local/anneal.py
from __future__ import annotations

"""
Simulated annealing over RGB channel moves.

One random neighbour per iteration. Better neighbours are always taken; worse
ones are taken with probability exp(delta_fitness / T) (Metropolis, fitness is
maximised so delta <= 0 gives p <= 1). T is multiplied by cooling_rate every
iteration whether or not the move was taken. The best palette ever visited is
returned, not the final one.
"""

import math
import time
from typing import List, Optional, Sequence

import numpy as np

from palette_opt.config import AnnealingConfig
from palette_opt.constants import (
    DEBUG_EVERY,
    SA_COOLING_RATE,
    SA_INITIAL_TEMPERATURE,
    SA_MAX_ITERATIONS,
    SA_MIN_TEMPERATURE,
    SA_NEIGHBOUR_STEP,
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
from palette_opt.moves import apply_move, random_move
from palette_opt.utils import (
    debug_log,
    format_seconds_compact,
    print_config_line,
    resolve_rng,
    warn,
)


def acceptance_probability(delta_fitness: float, temperature: float) -> float:
    """Metropolis acceptance for a maximised fitness; 1.0 for improvements."""
    if delta_fitness > 0.0:
        return 1.0
    if temperature <= 0.0:
        return 0.0
    return math.exp(delta_fitness / temperature)


def simulated_annealing_optimization(
    primary: Colour,
    initial: Sequence[Colour],
    max_iterations: int = SA_MAX_ITERATIONS,
    initial_temperature: float = SA_INITIAL_TEMPERATURE,
    cooling_rate: float = SA_COOLING_RATE,
    min_temperature: float = SA_MIN_TEMPERATURE,
    neighbour_step: int = SA_NEIGHBOUR_STEP,
    *,
    rng: Optional[np.random.Generator] = None,
    seed: Optional[int] = None,
    fitness: FitnessFunction = evaluate_palette_solution,
    debug: bool = False,
    should_stop: Optional[StopCheck] = None,
    config: Optional[AnnealingConfig] = None,
) -> OptimizationResult:
    """
    Anneal from `initial` and return the best palette visited.

    Args:
      primary             : reference colour passed to the fitness function
      initial             : 5-colour starting palette
      max_iterations      : hard cap on iterations
      initial_temperature : starting T
      cooling_rate        : T multiplier per iteration, in (0, 1)
      min_temperature     : run continues only while T > min_temperature
      neighbour_step      : +/- channel change used to build neighbours
      rng / seed          : random source; pass one or neither
      fitness             : scoring function, higher is better, -inf rejects
      debug               : print config and periodic progress
      should_stop         : optional cancellation hook checked once per iteration
      config              : overrides the keyword settings above when given

    Returns:
      OptimizationResult with temperature_history. fitness_history records the
      current (not best) score: the initial one, then one entry per iteration.

    Raises:
      ValueError for a palette that is not exactly 5 colours.
    """
    cfg = (
        config
        if config is not None
        else AnnealingConfig(
            max_iterations=max_iterations,
            initial_temperature=initial_temperature,
            cooling_rate=cooling_rate,
            min_temperature=min_temperature,
            neighbour_step=neighbour_step,
            debug=debug,
        )
    ).validate()
    start = ensure_palette(initial, what="initial palette")
    gen = resolve_rng(rng, seed)

    current: Palette = start
    current_fitness = fitness(primary, current)
    if not math.isfinite(current_fitness):
        warn("annealing: initial palette has invalid fitness; aborting")
        return OptimizationResult(
            best_solution=start,
            best_fitness=float("-inf"),
            iterations=0,
            fitness_history=[float("-inf")],
            temperature_history=[cfg.initial_temperature],
        )

    if cfg.debug:
        print_config_line(
            "anneal",
            [
                ("Iterations", cfg.max_iterations),
                ("T0", cfg.initial_temperature),
                ("Tmin", cfg.min_temperature),
                ("Cooling", cfg.cooling_rate),
                ("Step", cfg.neighbour_step),
                ("Start", current_fitness),
            ],
            debug=True,
        )

    t0 = time.perf_counter()
    best: Palette = current
    best_fitness = current_fitness
    temperature = cfg.initial_temperature
    history: List[float] = [current_fitness]
    temperatures: List[float] = [temperature]
    iterations = 0
    accepted = 0

    while iterations < cfg.max_iterations and temperature > cfg.min_temperature:
        if should_stop is not None and should_stop():
            if cfg.debug:
                debug_log(f"[anneal] cancelled at it={iterations}")
            break

        move = random_move(current, cfg.neighbour_step, gen)
        if move is None:
            if cfg.debug:
                debug_log("[anneal] no neighbour moves left")
            break
        iterations += 1

        candidate = apply_move(current, move)
        candidate_fitness = fitness(primary, candidate)

        if math.isfinite(candidate_fitness):
            delta = candidate_fitness - current_fitness
            if delta > 0.0 or gen.random() < acceptance_probability(delta, temperature):
                current = candidate
                current_fitness = candidate_fitness
                accepted += 1
                if current_fitness > best_fitness:
                    best = current
                    best_fitness = current_fitness

        history.append(current_fitness)
        temperatures.append(temperature)
        temperature *= cfg.cooling_rate

        if cfg.debug and iterations % DEBUG_EVERY == 0:
            debug_log(
                f"[anneal] it={iterations} T={temperature:.4f} "
                f"current={current_fitness:.3f} best={best_fitness:.3f}"
            )

    if cfg.debug:
        debug_log(
            f"[anneal] done it={iterations} accepted={accepted} best={best_fitness:.3f} "
            f"in {format_seconds_compact(time.perf_counter() - t0)}"
        )

    return OptimizationResult(
        best_solution=best,
        best_fitness=best_fitness,
        iterations=iterations,
        fitness_history=history,
        temperature_history=temperatures,
    )


__all__ = ["simulated_annealing_optimization", "acceptance_probability"]
