# palette_opt/genetic/__init__.py
"""
Population search API.

Provides:
  genetic_crossover_optimization(primary, initial_population, max_iterations=1000,
                                 crossover_probability=70, mutation_probability=10,
                                 mutation_amount=20, threshold_fitness=90,
                                 crossover_operation="uniform", elitism_count=1, *,
                                 rng, seed, fitness, workers, debug, should_stop,
                                 config) -> GeneticResult
    Evolve palettes with rank roulette selection, crossover, per-gene mutation
    and elitism.

    Args:
      initial_population : 2+ palettes of exactly 5 colours
      crossover_operation: one-point | two-point | block | uniform | shuffle
      workers            : threads used to score offspring (1 = inline)

    Returns:
      GeneticResult(population, best_palette, best_fitness, iterations,
                    fitness_history) with one fitness row per generation.

  evolve_single_colour(target, population_size=50, generations=500,
                       mutation_rate=0.08, mutation_amount=20, *, rng, seed,
                       debug) -> Colour
    Small GA that moves a random population towards one target colour.

  crossover(a, b, operation, rng) -> (Palette, Palette)
  mutate_palette(palette, mutation_probability, mutation_amount, rng) -> Palette
  select_parents(population, rng) -> (Individual, Individual)
"""

from .crossover import CROSSOVER_HANDLERS, crossover
from .mutation import mutate_palette
from .run import evaluate_palettes, genetic_crossover_optimization
from .selection import select_parents
from .single_colour import evolve_single_colour

__all__ = [
    "genetic_crossover_optimization",
    "evaluate_palettes",
    "evolve_single_colour",
    "crossover",
    "CROSSOVER_HANDLERS",
    "mutate_palette",
    "select_parents",
]
