# palette_opt/__init__.py
"""
palette_opt package.

Purpose:
  Search for 5-colour UI palettes that score well against a primary colour,
  and order arbitrary colour sets into even perceptual steps. See
  optimize_palette.py for the CLI.

Public API:
  evaluate_palette_solution        : palette fitness (higher is better, -inf rejects).
  hill_climbing_optimization       : steepest-ascent local search.
  simulated_annealing_optimization : Metropolis local search with cooling.
  genetic_crossover_optimization   : population search with five crossover operators.
  evolve_single_colour             : small GA towards one target colour.
  find_optimal_colour_path         : colour ordering (lower fitness is better).
  optimize_distinct_colours        : CVD-aware annealing for N distinct colours (lower cost is better).
  simulate                         : colour vision deficiency simulation.
  make_colour / parse_colour       : build Colour values from channels or text.
  colour_convert                   : colour space transforms and distances.
  core_types                       : Colour, Palette, result dataclasses.
  config                           : per-optimiser settings dataclasses.
  utils                            : shared helpers (RNG, swatches, logging).

Quick start:
  from palette_opt import parse_colour, random_palette, hill_climbing_optimization
  from palette_opt.utils import make_rng
"""

__version__ = "0.1.0"

# Re-export namespaces for convenience.
from . import colour_convert
from . import core_types
from . import config
from . import utils
from . import local
from . import genetic
from . import path
from . import cvd

from .colour_convert import make_colour  # noqa: E402,F401
from .colour_names import parse_colour  # noqa: E402,F401
from .config import (  # noqa: E402,F401
    AnnealingConfig,
    DistinctColoursConfig,
    GeneticConfig,
    HillClimbingConfig,
    PathConfig,
)
from .core_types import (  # noqa: E402,F401
    Colour,
    CrossoverOperation,
    Deficiency,
    DistinctColoursResult,
    GeneticResult,
    OptimizationResult,
    PathResult,
)
from .fitness import evaluate_palette_solution, fitness_terms  # noqa: E402,F401
from .genetic import evolve_single_colour, genetic_crossover_optimization  # noqa: E402,F401
from .cvd import simulate  # noqa: E402,F401
from .local import (  # noqa: E402,F401
    hill_climbing_optimization,
    optimize_distinct_colours,
    simulated_annealing_optimization,
)
from .path import find_optimal_colour_path  # noqa: E402,F401
from .random_palettes import random_colour, random_palette, random_population  # noqa: E402,F401

__all__ = [
    "__version__",
    "colour_convert",
    "core_types",
    "config",
    "utils",
    "local",
    "genetic",
    "path",
    "cvd",
    "make_colour",
    "parse_colour",
    "Colour",
    "CrossoverOperation",
    "OptimizationResult",
    "GeneticResult",
    "PathResult",
    "Deficiency",
    "DistinctColoursResult",
    "HillClimbingConfig",
    "AnnealingConfig",
    "GeneticConfig",
    "PathConfig",
    "DistinctColoursConfig",
    "evaluate_palette_solution",
    "fitness_terms",
    "hill_climbing_optimization",
    "simulated_annealing_optimization",
    "genetic_crossover_optimization",
    "evolve_single_colour",
    "find_optimal_colour_path",
    "optimize_distinct_colours",
    "simulate",
    "random_colour",
    "random_palette",
    "random_population",
]
