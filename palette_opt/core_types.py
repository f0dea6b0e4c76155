# palette_opt/core_types.py
from __future__ import annotations

"""
Core type aliases, small value objects, and lightweight helpers.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Literal, Optional, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

# Basic aliases

RGBTuple = Tuple[int, int, int]
HexStr = str
Triplet = Tuple[float, float, float]

Lab = NDArray[np.float32]  # (..., 3) CIE Lab
Lch = NDArray[np.float32]  # (..., 3) CIE LCh
OkLab = NDArray[np.float32]  # (..., 3) OkLab

Channel = Literal["r", "g", "b"]
CHANNELS: Tuple[Channel, Channel, Channel] = ("r", "g", "b")
CHANNEL_INDEX: Dict[str, int] = {"r": 0, "g": 1, "b": 2}

PALETTE_SIZE = 5
PALETTE_ROLES: Tuple[str, ...] = (
    "accent",
    "background",
    "surface",
    "button_text",
    "main_text",
)

# Value objects


class CrossoverOperation(str, Enum):
    """Crossover operators for the genetic search. Values are the CLI spellings."""

    ONE_POINT = "one-point"
    TWO_POINT = "two-point"
    BLOCK = "block"
    UNIFORM = "uniform"
    SHUFFLE = "shuffle"

    @classmethod
    def parse(cls, value: Union[str, "CrossoverOperation"]) -> "CrossoverOperation":
        """Coerce a string; raises ValueError for unknown operators."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower().replace("_", "-"))
        except ValueError:
            known = ", ".join(op.value for op in cls)
            raise ValueError(
                f"unknown crossover operation {value!r} (expected one of: {known})"
            ) from None


class Deficiency(str, Enum):
    """Simulated colour vision types. -opia is full strength, -omaly partial."""

    PROTANOPIA = "protanopia"
    PROTANOMALY = "protanomaly"
    DEUTERANOPIA = "deuteranopia"
    DEUTERANOMALY = "deuteranomaly"
    TRITANOPIA = "tritanopia"
    TRITANOMALY = "tritanomaly"
    ACHROMATOPSIA = "achromatopsia"
    ACHROMATOMALY = "achromatomaly"

    @classmethod
    def parse(cls, value: Union[str, "Deficiency"]) -> "Deficiency":
        """Coerce a string; raises ValueError for unknown types."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            known = ", ".join(d.value for d in cls)
            raise ValueError(
                f"unknown deficiency {value!r} (expected one of: {known})"
            ) from None

    @property
    def default_severity(self) -> float:
        return 0.6 if self.value.endswith("maly") else 1.0


@dataclass(frozen=True)
class Colour:
    """
    Immutable colour with precomputed HSL, Lab, LCh, OkLab and WCAG luminance.

    Equality and hashing use rgb + alpha only. Build with
    colour_convert.make_colour() so every derived field stays in sync.
    """

    rgb: RGBTuple
    alpha: float = 1.0
    hsl: Triplet = field(default=(0.0, 0.0, 0.0), compare=False, repr=False)
    lab: Triplet = field(default=(0.0, 0.0, 0.0), compare=False, repr=False)
    lch: Triplet = field(default=(0.0, 0.0, 0.0), compare=False, repr=False)
    oklab: Triplet = field(default=(0.0, 0.0, 0.0), compare=False, repr=False)
    luminance: float = field(default=0.0, compare=False, repr=False)

    @property
    def hex(self) -> HexStr:
        return rgb_to_hex(self.rgb)

    def is_finite(self) -> bool:
        """False when any channel or derived value is NaN/inf."""
        values = (*self.rgb, self.alpha, *self.lab, *self.oklab, self.luminance)
        return all(math.isfinite(float(v)) for v in values)


Palette = Tuple[Colour, ...]
PaletteLike = Sequence[Colour]


@dataclass(frozen=True)
class Move:
    """One candidate perturbation: add delta to a single channel of one colour."""

    palette_index: int
    channel: Channel
    delta: int


@dataclass(frozen=True)
class Individual:
    """Genetic-search member. Fitness belongs to this exact palette."""

    palette: Palette
    fitness: float


@dataclass(frozen=True)
class OptimizationResult:
    """Outcome of a single-solution search (hill climbing, annealing)."""

    best_solution: Palette
    best_fitness: float
    iterations: int
    fitness_history: List[float]
    temperature_history: Optional[List[float]] = None


@dataclass(frozen=True)
class GeneticResult:
    """Outcome of a population search. fitness_history has one row per generation."""

    population: List[Palette]
    best_palette: Palette
    best_fitness: float
    iterations: int
    fitness_history: List[List[float]]


@dataclass(frozen=True)
class DistinctColoursResult:
    """Outcome of a distinct colour set search. cost is minimised."""

    colours: Tuple[Colour, ...]
    cost: float
    start_cost: float
    iterations: int
    cost_history: List[float]


@dataclass(frozen=True)
class ColourEdge:
    """Edge of the complete colour graph; distance is CIEDE2000."""

    colour: str
    distance: float


ColourGraph = Dict[str, List[ColourEdge]]


@dataclass(frozen=True)
class PathResult:
    """Ordered colour keys and their path fitness (lower is better)."""

    path: List[str]
    fitness: float


# Small helpers


def clamp_value(value: float, lo: float, hi: float) -> float:
    """Clamp value to [lo, hi]."""
    return lo if value < lo else hi if value > hi else value


def clamp_channel(value: Union[int, float]) -> int:
    """Round and clamp a channel value to the 0..255 integer range."""
    return int(clamp_value(int(round(float(value))), 0, 255))


def rgb_to_hex(rgb: RGBTuple) -> HexStr:
    """RGB tuple to lowercase hex string '#rrggbb'."""
    return f"#{rgb[0]:02x}{rgb[1]:02x}{rgb[2]:02x}"


def hex_to_rgb(hex_str: str) -> RGBTuple:
    """Parse '#rgb' or '#rrggbb' (case-insensitive) into an RGB tuple."""
    s = hex_str.strip().lower()
    if not s.startswith("#"):
        raise ValueError("hex must start with '#'")
    if len(s) == 4:
        r, g, b = s[1], s[2], s[3]
        s = f"#{r}{r}{g}{g}{b}{b}"
    if len(s) != 7:
        raise ValueError("hex must be '#rrggbb' or '#rgb'")
    try:
        return (int(s[1:3], 16), int(s[3:5], 16), int(s[5:7], 16))
    except ValueError:
        raise ValueError(f"invalid hex digits in {hex_str!r}") from None


def ensure_palette(palette: PaletteLike, *, what: str = "palette") -> Palette:
    """
    Validate a palette and return it as a tuple.

    Raises ValueError for a length other than PALETTE_SIZE or non-Colour entries.
    Never pads or truncates.
    """
    if palette is None:
        raise ValueError(f"{what} is required")
    items = tuple(palette)
    if len(items) != PALETTE_SIZE:
        raise ValueError(
            f"{what} must hold exactly {PALETTE_SIZE} colours, got {len(items)}"
        )
    for i, c in enumerate(items):
        if not isinstance(c, Colour):
            raise ValueError(f"{what}[{i}] is not a Colour: {c!r}")
    return items


# Callable signatures

FitnessFunction = Callable[[Colour, Palette], float]
StopCheck = Callable[[], bool]


__all__ = [
    # aliases / types
    "RGBTuple",
    "HexStr",
    "Triplet",
    "Lab",
    "Lch",
    "OkLab",
    "Channel",
    "CHANNELS",
    "CHANNEL_INDEX",
    "PALETTE_SIZE",
    "PALETTE_ROLES",
    "Palette",
    "PaletteLike",
    "ColourGraph",
    # value objects
    "CrossoverOperation",
    "Deficiency",
    "Colour",
    "Move",
    "Individual",
    "OptimizationResult",
    "GeneticResult",
    "DistinctColoursResult",
    "ColourEdge",
    "PathResult",
    # helpers
    "clamp_value",
    "clamp_channel",
    "rgb_to_hex",
    "hex_to_rgb",
    "ensure_palette",
    # callable signatures
    "FitnessFunction",
    "StopCheck",
]
