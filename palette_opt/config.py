# palette_opt/config.py
from __future__ import annotations

"""
Per-optimizer settings.

Each search has one frozen dataclass with named, defaulted fields. validate()
raises ValueError on out-of-range values and returns self so configs can be
built and checked in one expression.

Exports:
  HillClimbingConfig
  AnnealingConfig
  GeneticConfig
  PathConfig
  DistinctColoursConfig
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple, Union

from .constants import (
    DC_AVOID_COLOURS,
    DC_AVOID_WEIGHT,
    DC_BACKGROUND,
    DC_CONTRAST_WEIGHT,
    DC_COOLING_RATE,
    DC_DEFICIENCY_WEIGHTS,
    DC_ENERGY_WEIGHT,
    DC_INITIAL_TEMPERATURE,
    DC_MIN_TEMPERATURE,
    DC_NUDGE,
    DC_RANGE_WEIGHT,
    DC_TARGET_COLOURS,
    DC_TARGET_WEIGHT,
    GA_CROSSOVER_OPERATION,
    GA_CROSSOVER_PROBABILITY,
    GA_ELITISM_COUNT,
    GA_MAX_ITERATIONS,
    GA_MUTATION_AMOUNT,
    GA_MUTATION_PROBABILITY,
    GA_THRESHOLD_FITNESS,
    HC_MAX_ITERATIONS,
    HC_NEIGHBOUR_STEP,
    HC_PATIENCE,
    PATH_ITERATIONS,
    SA_COOLING_RATE,
    SA_INITIAL_TEMPERATURE,
    SA_MAX_ITERATIONS,
    SA_MIN_TEMPERATURE,
    SA_NEIGHBOUR_STEP,
)
from .core_types import CrossoverOperation, Deficiency


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise ValueError(message)


def _percent(name: str, value: float) -> None:
    _require(0.0 <= float(value) <= 100.0, f"{name} must be within 0..100, got {value}")


@dataclass(frozen=True)
class HillClimbingConfig:
    max_iterations: int = HC_MAX_ITERATIONS
    patience: int = HC_PATIENCE
    neighbour_step: int = HC_NEIGHBOUR_STEP
    debug: bool = False

    def validate(self) -> "HillClimbingConfig":
        _require(self.max_iterations >= 0, "max_iterations must be >= 0")
        _require(self.patience >= 1, "patience must be >= 1")
        _require(self.neighbour_step >= 1, "neighbour_step must be >= 1")
        return self


@dataclass(frozen=True)
class AnnealingConfig:
    max_iterations: int = SA_MAX_ITERATIONS
    initial_temperature: float = SA_INITIAL_TEMPERATURE
    cooling_rate: float = SA_COOLING_RATE
    min_temperature: float = SA_MIN_TEMPERATURE
    neighbour_step: int = SA_NEIGHBOUR_STEP
    debug: bool = False

    def validate(self) -> "AnnealingConfig":
        _require(self.max_iterations >= 0, "max_iterations must be >= 0")
        _require(self.initial_temperature > 0.0, "initial_temperature must be > 0")
        _require(self.min_temperature > 0.0, "min_temperature must be > 0")
        _require(
            0.0 < self.cooling_rate < 1.0,
            f"cooling_rate must be within (0, 1), got {self.cooling_rate}",
        )
        _require(self.neighbour_step >= 1, "neighbour_step must be >= 1")
        return self


@dataclass(frozen=True)
class GeneticConfig:
    """
    Probabilities are percentages (0..100). mutation_probability applies per gene
    (per palette colour). workers > 1 evaluates offspring on a thread pool.
    """

    max_iterations: int = GA_MAX_ITERATIONS
    crossover_probability: float = GA_CROSSOVER_PROBABILITY
    mutation_probability: float = GA_MUTATION_PROBABILITY
    mutation_amount: int = GA_MUTATION_AMOUNT
    threshold_fitness: float = GA_THRESHOLD_FITNESS
    crossover_operation: Union[str, CrossoverOperation] = field(
        default=GA_CROSSOVER_OPERATION
    )
    elitism_count: int = GA_ELITISM_COUNT
    workers: int = 1
    debug: bool = False

    def __post_init__(self) -> None:
        # frozen: normalise the operator through object.__setattr__
        object.__setattr__(
            self,
            "crossover_operation",
            CrossoverOperation.parse(self.crossover_operation),
        )

    def validate(self) -> "GeneticConfig":
        _require(self.max_iterations >= 0, "max_iterations must be >= 0")
        _percent("crossover_probability", self.crossover_probability)
        _percent("mutation_probability", self.mutation_probability)
        _require(self.mutation_amount >= 0, "mutation_amount must be >= 0")
        _require(self.elitism_count >= 0, "elitism_count must be >= 0")
        _require(self.workers >= 1, "workers must be >= 1")
        return self


@dataclass(frozen=True)
class PathConfig:
    iterations: int = PATH_ITERATIONS
    debug: bool = False

    def validate(self) -> "PathConfig":
        _require(self.iterations >= 0, "iterations must be >= 0")
        return self


@dataclass(frozen=True)
class DistinctColoursConfig:
    """
    Settings for the distinct colour set search.

    Colours are strings accepted by parse_colour. provided_colours seed the
    start (the first fixed_colours of them never change); target_colours pull
    the set towards a style; avoid_colours push it away. deficiency_weights
    maps a Deficiency name to the weight of its simulated distance term.
    max_sweeps caps the cooling steps; None runs until min_temperature.
    """

    target_colours: Tuple[str, ...] = DC_TARGET_COLOURS
    avoid_colours: Tuple[str, ...] = DC_AVOID_COLOURS
    provided_colours: Tuple[str, ...] = ()
    fixed_colours: int = 0
    background: str = DC_BACKGROUND
    initial_temperature: float = DC_INITIAL_TEMPERATURE
    cooling_rate: float = DC_COOLING_RATE
    min_temperature: float = DC_MIN_TEMPERATURE
    nudge: float = DC_NUDGE
    max_sweeps: Optional[int] = None
    energy_weight: float = DC_ENERGY_WEIGHT
    range_weight: float = DC_RANGE_WEIGHT
    target_weight: float = DC_TARGET_WEIGHT
    avoid_weight: float = DC_AVOID_WEIGHT
    contrast_weight: float = DC_CONTRAST_WEIGHT
    deficiency_weights: Dict[str, float] = field(
        default_factory=lambda: dict(DC_DEFICIENCY_WEIGHTS)
    )
    debug: bool = False

    def validate(self) -> "DistinctColoursConfig":
        _require(self.fixed_colours >= 0, "fixed_colours must be >= 0")
        _require(
            self.fixed_colours <= len(self.provided_colours),
            "fixed_colours cannot exceed the number of provided colours",
        )
        _require(self.initial_temperature > 0.0, "initial_temperature must be > 0")
        _require(self.min_temperature > 0.0, "min_temperature must be > 0")
        _require(
            0.0 < self.cooling_rate < 1.0,
            f"cooling_rate must be within (0, 1), got {self.cooling_rate}",
        )
        _require(0.0 < self.nudge <= 1.0, "nudge must be within (0, 1]")
        _require(
            self.max_sweeps is None or self.max_sweeps >= 0, "max_sweeps must be >= 0"
        )
        for name in self.deficiency_weights:
            Deficiency.parse(name)
        return self


__all__ = [
    "HillClimbingConfig",
    "AnnealingConfig",
    "GeneticConfig",
    "PathConfig",
    "DistinctColoursConfig",
]
