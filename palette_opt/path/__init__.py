# palette_opt/path/__init__.py
"""
Colour sequence API.

Provides:
  find_optimal_colour_path(colours, iterations=10000, *, rng, seed, debug,
                           config) -> PathResult
    Reorder colour strings so consecutive CIEDE2000 steps are as even as
    possible.

    Args:
      colours    : list[str] of hex, rgb() or CSS names; duplicates are dropped
      iterations : swap attempts, no early stop

    Returns:
      PathResult(path, fitness). Lower fitness is better, unlike the palette
      optimisers. +inf means fewer than 2 distinct colours or no usable edges.

  build_colour_graph(colours) -> ColourGraph
  path_fitness(path, graph) -> float
"""

from .graph import build_colour_graph, path_fitness, unique_colours
from .run import find_optimal_colour_path

__all__ = [
    "find_optimal_colour_path",
    "build_colour_graph",
    "path_fitness",
    "unique_colours",
]
