# palette_opt/utils.py
from __future__ import annotations

"""
Shared utilities for palette_opt.

Includes random-source handling, small stats helpers over fitness vectors,
swatch image output, time formatting, and tidy logging.
"""

import math
from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np
from PIL import Image

from .core_types import Colour, PALETTE_ROLES


# Random source

RngLike = Union[None, int, np.random.Generator]


def make_rng(seed_or_rng: RngLike = None) -> np.random.Generator:
    """
    Return a numpy Generator.
    Passes an existing Generator through untouched; ints seed a new one;
    None draws fresh OS entropy.
    """
    if isinstance(seed_or_rng, np.random.Generator):
        return seed_or_rng
    return np.random.default_rng(seed_or_rng)


def resolve_rng(rng: Optional[np.random.Generator], seed: Optional[int]) -> np.random.Generator:
    """Pick the explicit generator when given, else seed a new one."""
    if rng is not None and seed is not None:
        raise ValueError("pass either rng or seed, not both")
    return make_rng(rng if rng is not None else seed)


#  Time formatting


def format_seconds_compact(seconds: float) -> str:
    """Human-friendly seconds: '<ms>ms', '<s>s', or 'Mm Ss'."""
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f}ms"
    if seconds < 60.0:
        return f"{seconds:.3f}s"
    minutes = int(seconds // 60)
    return f"{minutes}m {seconds - 60 * minutes:.1f}s"


# Fitness vector helpers


def finite_values(values: Iterable[float]) -> List[float]:
    """Drop NaN and +/-inf entries."""
    return [float(v) for v in values if math.isfinite(v)]


def mean_finite(values: Iterable[float]) -> float:
    """Mean over finite entries; -inf when there are none."""
    vals = finite_values(values)
    if not vals:
        return float("-inf")
    return float(np.mean(np.asarray(vals, dtype=np.float64)))


# Swatch output


def palette_swatch_array(
    palettes: Sequence[Sequence[Colour]], cell: int = 48
) -> np.ndarray:
    """
    Render palettes as a uint8 [rows*cell, cols*cell, 3] grid, one palette per row.
    Short rows are padded with white.
    """
    if not palettes:
        return np.zeros((0, 0, 3), dtype=np.uint8)
    cols = max(len(p) for p in palettes)
    out = np.full((len(palettes) * cell, cols * cell, 3), 255, dtype=np.uint8)
    for row, palette in enumerate(palettes):
        for col, colour in enumerate(palette):
            out[row * cell : (row + 1) * cell, col * cell : (col + 1) * cell] = (
                colour.rgb
            )
    return out


def save_palette_swatch(
    path: Path, palettes: Sequence[Sequence[Colour]], cell: int = 48
) -> None:
    """Save palettes as a PNG swatch grid."""
    Image.fromarray(palette_swatch_array(palettes, cell=cell)).save(path)


#  CLI / progress logging


def enable_line_buffered_stdout() -> None:
    """
    Enable line-buffered stdout when supported.
    Helps live progress printing in terminals that expose .reconfigure().
    """
    import sys

    reconfig = getattr(sys.stdout, "reconfigure", None)
    if callable(reconfig):
        try:
            reconfig(line_buffering=True, write_through=True)
        except (OSError, ValueError):
            pass


# Pretty logging


def format_bool_on_off(value: Any) -> str:
    """Pretty boolean: 'on'/'off' for bools; str(value) otherwise."""
    if isinstance(value, bool):
        return "on" if value else "off"
    return str(value)


def format_number_compact(value: Any) -> str:
    """Pretty number: 1_234 style for ints; compact for floats; passthrough otherwise."""
    if isinstance(value, int):
        return f"{value:,}"
    if isinstance(value, float):
        if not math.isfinite(value):
            return str(value)
        text = f"{value:.3f}".rstrip("0").rstrip(".")
        return text
    return str(value)


def key_value_pairs_to_string(
    pairs: Iterable[Tuple[str, Any]], sep: str = "  ", eq: str = ": "
) -> str:
    """
    Format (name, value) pairs as 'Name: value' blocks separated by sep.
    Uses format_bool_on_off / format_number_compact for readability.
    """
    out: List[str] = []
    for name, value in pairs:
        display = (
            format_bool_on_off(value)
            if isinstance(value, bool)
            else format_number_compact(value)
        )
        out.append(f"{name}{eq}{display}")
    return sep.join(out)


def print_config_line(
    section: str, pairs: Iterable[Tuple[str, Any]], debug: bool
) -> None:
    """
    Emit a single human-readable config line, e.g.:
      [anneal] Iterations: 5,000  T0: 100  Cooling: 0.995  Step: 15
    Routes to debug() when debug=True, else to log().
    """
    line = f"[{section}] {key_value_pairs_to_string(pairs)}"
    (debug_log if debug else log)(line)


def format_palette_roles(palette: Sequence[Colour]) -> str:
    """'accent=#rrggbb  background=#rrggbb  ...' for a 5-colour palette."""
    parts = []
    for i, colour in enumerate(palette):
        role = PALETTE_ROLES[i] if i < len(PALETTE_ROLES) else f"#{i}"
        parts.append(f"{role}={colour.hex}")
    return "  ".join(parts)


def print_banner(title: str) -> None:
    """Section banner."""
    print(f"\n=== {title} ===", flush=True)


def log(message: str) -> None:
    """Plain log line."""
    print(message, flush=True)


def debug_log(message: str) -> None:
    """Debug log line."""
    print(f"[debug] {message}", flush=True)


def warn(message: str) -> None:
    """Warning log line."""
    print(f"[warn] {message}", flush=True)


def error(message: str) -> None:
    """Error log line to stderr."""
    import sys

    print(f"[error] {message}", file=sys.stderr, flush=True)


__all__ = [
    # random source
    "RngLike",
    "make_rng",
    "resolve_rng",
    # formatting
    "format_seconds_compact",
    "format_bool_on_off",
    "format_number_compact",
    "format_palette_roles",
    # fitness vectors
    "finite_values",
    "mean_finite",
    # swatch output
    "palette_swatch_array",
    "save_palette_swatch",
    # logging / progress
    "enable_line_buffered_stdout",
    "key_value_pairs_to_string",
    "print_config_line",
    "print_banner",
    "log",
    "debug_log",
    "warn",
    "error",
]
