# palette_opt/genetic/run.py
from __future__ import annotations

"""
Population search over 5-colour palettes.

Generation loop:
  1. record the population fitness vector
  2. update the best-ever individual (never regresses)
  3. stop when the mean finite fitness reaches threshold_fitness, or the best
     reaches threshold_fitness * GA_THRESHOLD_BEST_FACTOR
  4. copy the top elitism_count finite individuals unchanged
  5. fill the rest with offspring: rank roulette parents, crossover with
     probability crossover_probability / 100, per-gene mutation
  6. evaluate offspring (optionally on a thread pool) and replace the population

Non-finite scores (NaN, +/-inf) are stored as -inf and never selected while
two or more finite individuals exist.
"""

import math
import time
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from palette_opt.config import GeneticConfig
from palette_opt.constants import (
    DEBUG_EVERY,
    GA_CROSSOVER_OPERATION,
    GA_CROSSOVER_PROBABILITY,
    GA_ELITISM_COUNT,
    GA_MAX_ITERATIONS,
    GA_MUTATION_AMOUNT,
    GA_MUTATION_PROBABILITY,
    GA_THRESHOLD_BEST_FACTOR,
    GA_THRESHOLD_FITNESS,
)
from palette_opt.core_types import (
    Colour,
    CrossoverOperation,
    FitnessFunction,
    GeneticResult,
    Individual,
    Palette,
    StopCheck,
    ensure_palette,
)
from palette_opt.fitness import evaluate_palette_solution
from palette_opt.genetic.crossover import crossover
from palette_opt.genetic.mutation import mutate_palette
from palette_opt.genetic.selection import select_parents
from palette_opt.utils import (
    debug_log,
    format_seconds_compact,
    mean_finite,
    print_config_line,
    resolve_rng,
)

_NEG_INF = float("-inf")


def _score(primary: Colour, palette: Palette, fitness: FitnessFunction) -> float:
    value = float(fitness(primary, palette))
    return value if math.isfinite(value) else _NEG_INF


def evaluate_palettes(
    primary: Colour,
    palettes: Sequence[Palette],
    fitness: FitnessFunction = evaluate_palette_solution,
    workers: int = 1,
    pool: Optional[Executor] = None,
) -> List[float]:
    """
    Fitness for each palette, in input order.

    Args:
      workers: thread count; <= 1 or fewer than 2 palettes runs inline
      pool   : executor to submit to; a temporary one is created when omitted
    """
    if len(palettes) < 2 or (pool is None and workers <= 1):
        return [_score(primary, p, fitness) for p in palettes]
    if pool is None:
        with ThreadPoolExecutor(max_workers=workers) as owned:
            return evaluate_palettes(primary, palettes, fitness, pool=owned)
    futures = [pool.submit(_score, primary, p, fitness) for p in palettes]
    return [f.result() for f in futures]


def _fitness_key(ind: Individual) -> float:
    return ind.fitness if math.isfinite(ind.fitness) else _NEG_INF


def _elites(population: Sequence[Individual], count: int) -> List[Individual]:
    """Top `count` finite individuals, best first."""
    if count <= 0:
        return []
    ranked = sorted(population, key=_fitness_key, reverse=True)
    return [ind for ind in ranked[:count] if math.isfinite(ind.fitness)]


def _breed(
    parents: Tuple[Individual, Individual],
    cfg: GeneticConfig,
    rng: np.random.Generator,
) -> Tuple[Palette, Palette]:
    a, b = parents[0].palette, parents[1].palette
    if rng.random() * 100.0 < cfg.crossover_probability:
        a, b = crossover(a, b, cfg.crossover_operation, rng)
    return (
        mutate_palette(a, cfg.mutation_probability, cfg.mutation_amount, rng),
        mutate_palette(b, cfg.mutation_probability, cfg.mutation_amount, rng),
    )


def _update_best(best: Individual, population: Sequence[Individual]) -> Individual:
    for ind in population:
        if math.isfinite(ind.fitness) and ind.fitness > best.fitness:
            best = ind
    return best


def genetic_crossover_optimization(
    primary: Colour,
    initial_population: Sequence[Sequence[Colour]],
    max_iterations: int = GA_MAX_ITERATIONS,
    crossover_probability: float = GA_CROSSOVER_PROBABILITY,
    mutation_probability: float = GA_MUTATION_PROBABILITY,
    mutation_amount: int = GA_MUTATION_AMOUNT,
    threshold_fitness: float = GA_THRESHOLD_FITNESS,
    crossover_operation: Union[str, CrossoverOperation] = GA_CROSSOVER_OPERATION,
    elitism_count: int = GA_ELITISM_COUNT,
    *,
    rng: Optional[np.random.Generator] = None,
    seed: Optional[int] = None,
    fitness: FitnessFunction = evaluate_palette_solution,
    workers: int = 1,
    debug: bool = False,
    should_stop: Optional[StopCheck] = None,
    config: Optional[GeneticConfig] = None,
) -> GeneticResult:
    """
    Evolve a population of palettes and return the best-ever individual.

    Args:
      primary               : reference colour passed to the fitness function
      initial_population    : 2+ palettes of exactly 5 colours; size stays fixed
      max_iterations        : generation cap
      crossover_probability : percent chance a selected pair is recombined
      mutation_probability  : percent chance per gene (and per channel for jitter)
      mutation_amount       : max +/- channel jitter
      threshold_fitness     : early-stop target for the mean fitness
      crossover_operation   : one-point | two-point | block | uniform | shuffle
      elitism_count         : finite individuals copied unchanged each generation
      rng / seed            : random source; pass one or neither
      fitness               : scoring function, higher is better
      workers               : threads for offspring evaluation
      debug                 : print config and periodic progress
      should_stop           : optional cancellation hook checked once per generation
      config                : overrides the keyword settings above when given

    Returns:
      GeneticResult. fitness_history holds one fitness row per generation
      examined; iterations is the index of the generation that stopped the run
      (max_iterations when the cap is hit).

    Raises:
      ValueError for a population under 2, a palette that is not exactly
      5 colours, or an unknown crossover operation.
    """
    cfg = (
        config
        if config is not None
        else GeneticConfig(
            max_iterations=max_iterations,
            crossover_probability=crossover_probability,
            mutation_probability=mutation_probability,
            mutation_amount=mutation_amount,
            threshold_fitness=threshold_fitness,
            crossover_operation=crossover_operation,
            elitism_count=elitism_count,
            workers=workers,
            debug=debug,
        )
    ).validate()

    if initial_population is None or len(initial_population) < 2:
        raise ValueError("initial population must hold at least 2 palettes")
    palettes = [
        ensure_palette(p, what=f"initial_population[{i}]")
        for i, p in enumerate(initial_population)
    ]
    size = len(palettes)
    gen = resolve_rng(rng, seed)

    pool = ThreadPoolExecutor(max_workers=cfg.workers) if cfg.workers > 1 else None
    try:
        scores = evaluate_palettes(primary, palettes, fitness, pool=pool)
        population: List[Individual] = [
            Individual(palette=p, fitness=f) for p, f in zip(palettes, scores)
        ]
        best = _update_best(
            Individual(palette=population[0].palette, fitness=_NEG_INF), population
        )

        if cfg.debug:
            print_config_line(
                "genetic",
                [
                    ("Population", size),
                    ("Generations", cfg.max_iterations),
                    (
                        "Crossover",
                        f"{cfg.crossover_operation.value}@{cfg.crossover_probability:g}%",
                    ),
                    ("Mutation", f"{cfg.mutation_probability:g}%/{cfg.mutation_amount}"),
                    ("Threshold", cfg.threshold_fitness),
                    ("Elites", cfg.elitism_count),
                    ("Workers", cfg.workers),
                ],
                debug=True,
            )

        t0 = time.perf_counter()
        history: List[List[float]] = []
        iteration = 0

        while iteration < cfg.max_iterations:
            if should_stop is not None and should_stop():
                if cfg.debug:
                    debug_log(f"[genetic] cancelled at gen={iteration}")
                break

            current = [ind.fitness for ind in population]
            history.append(current)
            best = _update_best(best, population)

            mean = mean_finite(current)
            if cfg.debug and iteration % DEBUG_EVERY == 0:
                debug_log(
                    f"[genetic] gen={iteration} mean={mean:.3f} best={best.fitness:.3f}"
                )
            if math.isfinite(mean) and mean >= cfg.threshold_fitness:
                break
            if (
                math.isfinite(best.fitness)
                and best.fitness >= cfg.threshold_fitness * GA_THRESHOLD_BEST_FACTOR
            ):
                break

            next_population: List[Individual] = _elites(
                population, min(cfg.elitism_count, size)
            )
            offspring: List[Palette] = []
            while len(next_population) + len(offspring) < size:
                child_a, child_b = _breed(select_parents(population, gen), cfg, gen)
                offspring.append(child_a)
                if len(next_population) + len(offspring) < size:
                    offspring.append(child_b)

            child_scores = evaluate_palettes(primary, offspring, fitness, pool=pool)
            next_population.extend(
                Individual(palette=p, fitness=f) for p, f in zip(offspring, child_scores)
            )
            population = next_population
            iteration += 1
    finally:
        if pool is not None:
            pool.shutdown()

    best = _update_best(best, population)

    if cfg.debug:
        debug_log(
            f"[genetic] done gen={iteration} best={best.fitness:.3f} "
            f"in {format_seconds_compact(time.perf_counter() - t0)}"
        )

    return GeneticResult(
        population=[ind.palette for ind in population],
        best_palette=best.palette,
        best_fitness=best.fitness,
        iterations=iteration,
        fitness_history=history,
    )


__all__ = ["genetic_crossover_optimization", "evaluate_palettes"]
