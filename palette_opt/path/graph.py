# palette_opt/path/graph.py
from __future__ import annotations

"""
Complete colour graph and path scoring.

Nodes are the colour strings exactly as given (first occurrence wins on
duplicates); edge weights are CIEDE2000 distances. Path fitness is the
coefficient of variation of consecutive step distances plus
PATH_CONTRAST_PENALTY_WEIGHT / mean, so lower is better and +inf marks a path
that cannot be scored.

Exports:
  unique_colours(colours) -> list[str]
  build_colour_graph(colours) -> ColourGraph
  path_fitness(path, graph) -> float
"""

import math
from typing import Dict, List, Optional, Sequence

import numpy as np

from palette_opt.colour_convert import colour_distance
from palette_opt.colour_names import parse_colour
from palette_opt.constants import PATH_CONTRAST_PENALTY_WEIGHT
from palette_opt.core_types import Colour, ColourEdge, ColourGraph


def unique_colours(colours: Sequence[str]) -> List[str]:
    """Distinct colour strings in first-occurrence order."""
    return list(dict.fromkeys(colours))


def build_colour_graph(colours: Sequence[str]) -> ColourGraph:
    """
    Complete graph over the distinct colour strings.

    A single distinct colour yields one node with no edges; an empty input
    yields an empty graph.

    Raises:
      ValueError when a colour string cannot be parsed.
    """
    keys = unique_colours(colours)
    parsed: Dict[str, Colour] = {key: parse_colour(key) for key in keys}
    graph: ColourGraph = {key: [] for key in keys}
    for i, src in enumerate(keys):
        for dst in keys[i + 1 :]:
            distance = colour_distance(parsed[src], parsed[dst])
            graph[src].append(ColourEdge(colour=dst, distance=distance))
            graph[dst].append(ColourEdge(colour=src, distance=distance))
    return graph


def _edge_distance(graph: ColourGraph, src: str, dst: str) -> Optional[float]:
    for edge in graph.get(src, ()):
        if edge.colour == dst:
            return edge.distance
    return None


def path_fitness(path: Sequence[str], graph: ColourGraph) -> float:
    """
    Coefficient of variation of step distances plus an inverse-mean penalty.

    Returns 0.0 for paths shorter than 2 and +inf for a missing or non-finite
    edge or a zero mean step.
    """
    if len(path) < 2:
        return 0.0
    steps: List[float] = []
    for src, dst in zip(path[:-1], path[1:]):
        distance = _edge_distance(graph, src, dst)
        if distance is None or not math.isfinite(distance):
            return math.inf
        steps.append(distance)

    values = np.asarray(steps, dtype=np.float64)
    mean = float(values.mean())
    if mean == 0.0:
        return math.inf
    std = float(values.std())
    return std / mean + PATH_CONTRAST_PENALTY_WEIGHT / mean


__all__ = ["unique_colours", "build_colour_graph", "path_fitness"]
