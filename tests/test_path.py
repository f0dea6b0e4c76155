import math

import numpy as np
import pytest

from palette_opt.core_types import ColourEdge
from palette_opt.path import (
    build_colour_graph,
    find_optimal_colour_path,
    path_fitness,
    unique_colours,
)
from palette_opt.path.run import initial_path, swap_mutation

RAINBOW = ["#ff0000", "#00ff00", "#0000ff", "#ffff00", "#ff00ff", "#00ffff"]


def test_unique_colours_keeps_first_occurrence_order():
    assert unique_colours(["b", "a", "b", "c", "a"]) == ["b", "a", "c"]


def test_graph_is_complete_and_symmetric():
    graph = build_colour_graph(["#000", "#fff", "red", "#000"])
    assert set(graph) == {"#000", "#fff", "red"}
    for key, edges in graph.items():
        assert sorted(e.colour for e in edges) == sorted(k for k in graph if k != key)
    black_white = next(e for e in graph["#000"] if e.colour == "#fff")
    white_black = next(e for e in graph["#fff"] if e.colour == "#000")
    assert black_white.distance == pytest.approx(white_black.distance)
    assert black_white.distance > 50.0


def test_graph_single_node_and_bad_colour():
    assert build_colour_graph(["#abc", "#abc"]) == {"#abc": []}
    with pytest.raises(ValueError):
        build_colour_graph(["#000", "nope"])


def test_path_fitness_edge_cases():
    graph = {
        "a": [ColourEdge("b", 10.0), ColourEdge("c", 20.0)],
        "b": [ColourEdge("a", 10.0), ColourEdge("c", 10.0)],
        "c": [ColourEdge("a", 20.0), ColourEdge("b", 10.0)],
    }
    assert path_fitness(["a"], graph) == 0.0
    assert path_fitness([], graph) == 0.0
    # equal steps: no variation, only the inverse-mean term
    assert path_fitness(["a", "b", "c"], graph) == pytest.approx(0.1 / 10.0)
    # steps 20, 10: std 5, mean 15
    assert path_fitness(["a", "c", "b"], graph) == pytest.approx(5.0 / 15.0 + 0.1 / 15.0)
    assert path_fitness(["a", "z"], graph) == math.inf
    zero = {"a": [ColourEdge("b", 0.0)], "b": [ColourEdge("a", 0.0)]}
    assert path_fitness(["a", "b"], zero) == math.inf


def test_path_is_permutation_with_first_colour_fixed():
    colours = RAINBOW + ["#ff0000", "#00ff00"]
    result = find_optimal_colour_path(colours, iterations=300, seed=5)
    assert result.path[0] == "#ff0000"
    assert sorted(result.path) == sorted(set(colours))
    assert len(result.path) == len(RAINBOW)
    assert math.isfinite(result.fitness)
    assert result.fitness == pytest.approx(
        path_fitness(result.path, build_colour_graph(RAINBOW))
    )


def test_path_search_never_worsens_the_start():
    rng = np.random.default_rng(42)
    graph = build_colour_graph(RAINBOW)
    start = path_fitness(initial_path(RAINBOW, rng), graph)
    result = find_optimal_colour_path(RAINBOW, iterations=500, seed=42)
    assert result.fitness <= start


def test_path_is_reproducible_with_seed():
    a = find_optimal_colour_path(RAINBOW, iterations=100, seed=3)
    b = find_optimal_colour_path(RAINBOW, iterations=100, rng=np.random.default_rng(3))
    assert a == b


def test_duplicate_only_input_returns_input_with_sentinel():
    result = find_optimal_colour_path(["#fff", "#fff"])
    assert result.path == ["#fff", "#fff"]
    assert result.fitness == math.inf


def test_two_colours_keep_their_order():
    result = find_optimal_colour_path(["navy", "#ffcc00"], iterations=10, seed=0)
    assert result.path == ["navy", "#ffcc00"]
    assert math.isfinite(result.fitness)


@pytest.mark.parametrize("colours", [[], ["#fff"]])
def test_fewer_than_two_colours_is_an_error(colours):
    with pytest.raises(ValueError):
        find_optimal_colour_path(colours)


def test_swap_mutation_leaves_first_position_alone():
    rng = np.random.default_rng(1)
    path = ["a", "b", "c", "d"]
    for _ in range(30):
        mutated = swap_mutation(path, rng)
        assert mutated[0] == "a"
        assert sorted(mutated) == path
        assert sum(x != y for x, y in zip(mutated, path)) == 2
    assert swap_mutation(["a", "b"], rng) == ["a", "b"]
