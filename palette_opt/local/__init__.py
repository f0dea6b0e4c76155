# palette_opt/local/__init__.py
"""
Single-solution search API.

Provides:
  hill_climbing_optimization(primary, initial, max_iterations=1000, patience=50,
                             neighbour_step=10, *, fitness, debug, should_stop,
                             config) -> OptimizationResult
    Steepest-ascent climb; moves only to the single best strictly-better neighbour.

  simulated_annealing_optimization(primary, initial, max_iterations=5000,
                                   initial_temperature=100.0, cooling_rate=0.995,
                                   min_temperature=0.1, neighbour_step=15, *, rng,
                                   seed, fitness, debug, should_stop, config)
                                   -> OptimizationResult
    Random-neighbour Metropolis search; returns the best palette visited and a
    temperature_history alongside fitness_history.

    Notes:
      - Both maximise fitness and treat -inf as reject.
      - A palette that is not exactly 5 colours raises ValueError.
      - A non-finite starting fitness returns the start with -inf and 0 iterations.

  optimize_distinct_colours(n=5, config=None, *, rng, seed, should_stop)
                            -> DistinctColoursResult
    Anneals N colours to stay far apart under normal and simulated CVD vision,
    near target colours, away from avoid colours, and legible on a background.
    Minimises cost; returns the lowest-cost set seen.

  distinct_colours_cost(colours, config=None) -> float
"""

from .anneal import simulated_annealing_optimization
from .distinct import distinct_colours_cost, optimize_distinct_colours
from .hill_climb import hill_climbing_optimization

__all__ = [
    "hill_climbing_optimization",
    "simulated_annealing_optimization",
    "optimize_distinct_colours",
    "distinct_colours_cost",
]
