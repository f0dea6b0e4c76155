import math

import numpy as np
import pytest

from palette_opt.config import AnnealingConfig, HillClimbingConfig
from palette_opt.local import hill_climbing_optimization, simulated_annealing_optimization
from palette_opt.local.anneal import acceptance_probability

from conftest import channel_sum, distance_to


def _never_valid(primary, palette):
    return float("-inf")


# Hill climbing


def test_hill_climbing_history_never_decreases(primary, palette):
    result = hill_climbing_optimization(primary, palette, max_iterations=4)
    history = result.fitness_history
    assert len(history) == result.iterations + 1
    assert all(b >= a for a, b in zip(history, history[1:]))
    assert result.best_fitness == history[-1]
    assert len(result.best_solution) == 5


def test_hill_climbing_climbs_a_toy_landscape(primary, palette):
    result = hill_climbing_optimization(
        primary, palette, max_iterations=20, fitness=channel_sum
    )
    assert result.best_fitness > channel_sum(primary, palette)
    assert result.iterations == 20


def test_hill_climbing_stops_at_strict_local_optimum(primary, palette):
    result = hill_climbing_optimization(
        primary, palette, patience=7, fitness=distance_to(palette)
    )
    assert result.iterations == 7
    assert result.best_solution == palette
    assert result.best_fitness == 0.0
    assert result.fitness_history == [0.0] * 8


def test_hill_climbing_invalid_start_returns_initial(primary, palette):
    result = hill_climbing_optimization(primary, palette, fitness=_never_valid)
    assert result.best_solution == palette
    assert result.best_fitness == float("-inf")
    assert result.iterations == 0
    assert result.fitness_history == [float("-inf")]


@pytest.mark.parametrize("size", [4, 6])
def test_hill_climbing_rejects_wrong_length(primary, palette, size):
    bad = (palette * 2)[:size]
    with pytest.raises(ValueError):
        hill_climbing_optimization(primary, bad)


def test_hill_climbing_honours_stop_hook(primary, palette):
    calls = []

    def stop():
        calls.append(1)
        return len(calls) > 3

    result = hill_climbing_optimization(
        primary, palette, max_iterations=100, fitness=channel_sum, should_stop=stop
    )
    assert result.iterations == 3


def test_hill_climbing_config_overrides_keywords(primary, palette):
    cfg = HillClimbingConfig(max_iterations=2, patience=50)
    result = hill_climbing_optimization(
        primary, palette, max_iterations=500, fitness=channel_sum, config=cfg
    )
    assert result.iterations == 2


# Simulated annealing


def test_acceptance_probability():
    assert acceptance_probability(1.0, 10.0) == 1.0
    assert acceptance_probability(0.0, 10.0) == pytest.approx(1.0)
    assert acceptance_probability(-10.0, 10.0) == pytest.approx(math.exp(-1.0))
    assert acceptance_probability(-1.0, 0.0) == 0.0


def test_annealing_best_dominates_history(primary, palette):
    result = simulated_annealing_optimization(
        primary, palette, max_iterations=300, fitness=channel_sum, seed=3
    )
    assert result.iterations == 300
    assert all(result.best_fitness >= f for f in result.fitness_history)
    assert result.best_fitness == pytest.approx(channel_sum(primary, result.best_solution))
    assert len(result.temperature_history) == len(result.fitness_history)


def test_annealing_accepts_worse_moves_when_hot(primary, palette):
    result = simulated_annealing_optimization(
        primary,
        palette,
        max_iterations=60,
        initial_temperature=1e6,
        cooling_rate=0.99,
        min_temperature=1.0,
        fitness=channel_sum,
        seed=7,
    )
    history = result.fitness_history
    assert any(b < a for a, b in zip(history, history[1:]))
    assert result.best_fitness == max(history)


def test_annealing_real_fitness_takes_a_downhill_step(primary, palette):
    result = simulated_annealing_optimization(
        primary, palette, max_iterations=200, initial_temperature=1e4, seed=1
    )
    history = result.fitness_history
    assert any(b < a for a, b in zip(history, history[1:]))
    assert all(result.best_fitness >= f for f in history)


def test_annealing_temperature_decays_geometrically(primary, palette):
    result = simulated_annealing_optimization(
        primary,
        palette,
        max_iterations=10,
        initial_temperature=50.0,
        cooling_rate=0.5,
        min_temperature=0.01,
        fitness=channel_sum,
        seed=0,
    )
    temps = result.temperature_history
    assert temps[0] == 50.0
    assert temps[1] == 50.0
    assert temps[2] == pytest.approx(25.0)
    assert all(b <= a for a, b in zip(temps, temps[1:]))


def test_annealing_stops_when_cold(primary, palette):
    result = simulated_annealing_optimization(
        primary,
        palette,
        max_iterations=10_000,
        initial_temperature=1.0,
        cooling_rate=0.5,
        min_temperature=0.1,
        fitness=channel_sum,
        seed=0,
    )
    # 1.0, 0.5, 0.25, 0.125 are above 0.1
    assert result.iterations == 4


def test_annealing_min_above_initial_runs_zero_iterations(primary, palette):
    result = simulated_annealing_optimization(
        primary, palette, initial_temperature=1.0, min_temperature=5.0, seed=1
    )
    assert result.iterations == 0
    assert result.best_solution == palette
    assert result.fitness_history == [result.best_fitness]


def test_annealing_is_reproducible_with_seed(primary, palette):
    a = simulated_annealing_optimization(
        primary, palette, max_iterations=50, fitness=channel_sum, seed=11
    )
    b = simulated_annealing_optimization(
        primary, palette, max_iterations=50, rng=np.random.default_rng(11), fitness=channel_sum
    )
    assert a.best_solution == b.best_solution
    assert a.fitness_history == b.fitness_history


def test_annealing_real_fitness_short_run(primary, palette):
    result = simulated_annealing_optimization(primary, palette, max_iterations=40, seed=5)
    assert len(result.best_solution) == 5
    assert all(result.best_fitness >= f for f in result.fitness_history)


def test_annealing_invalid_start_returns_initial(primary, palette):
    result = simulated_annealing_optimization(primary, palette, fitness=_never_valid, seed=0)
    assert result.best_solution == palette
    assert result.best_fitness == float("-inf")
    assert result.iterations == 0


def test_annealing_skips_invalid_neighbours(primary, palette):
    start = channel_sum(primary, palette)

    def only_start(p, candidate):
        return start if candidate == palette else float("nan")

    result = simulated_annealing_optimization(
        primary, palette, max_iterations=25, fitness=only_start, seed=2
    )
    assert result.iterations == 25
    assert result.best_solution == palette
    assert result.fitness_history == [start] * 26


def test_annealing_rejects_wrong_length_and_bad_config(primary, palette):
    with pytest.raises(ValueError):
        simulated_annealing_optimization(primary, palette[:4])
    with pytest.raises(ValueError):
        simulated_annealing_optimization(primary, palette, cooling_rate=1.5)
    with pytest.raises(ValueError):
        simulated_annealing_optimization(
            primary, palette, rng=np.random.default_rng(0), seed=0
        )
    with pytest.raises(ValueError):
        simulated_annealing_optimization(
            primary, palette, config=AnnealingConfig(initial_temperature=0.0)
        )
