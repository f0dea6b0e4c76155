# palette_opt/cvd.py
from __future__ import annotations

"""
Colour vision deficiency simulation.

Dichromacy and anomalous trichromacy use the Brettel/Vienot/Mollon two-plane
model in linear RGB: the side of the separation plane picks one of two 3x3
projections, and severity blends the projection with the original linear
colour. Monochromacy maps to Rec.601 luma and blends in sRGB.

Exports:
  simulate_rgb(rgb, deficiency, severity=None) -> uint8 array[...,3]
  simulate(colour, deficiency, severity=None)  -> Colour
"""

from typing import Dict, Optional, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from .colour_convert import make_colour, rgb_to_linear
from .core_types import Colour, Deficiency

# (projection above the plane, projection below, plane normal)
_BRETTEL: Dict[str, Tuple[NDArray[np.float64], NDArray[np.float64], NDArray[np.float64]]] = {
    "protan": (
        np.array(
            [
                [0.14510, 1.20165, -0.34675],
                [0.10447, 0.85316, 0.04237],
                [0.00429, -0.00603, 1.00174],
            ]
        ),
        np.array(
            [
                [0.14115, 1.16782, -0.30897],
                [0.10495, 0.85730, 0.03776],
                [0.00431, -0.00586, 1.00155],
            ]
        ),
        np.array([0.00048, 0.00416, -0.00464]),
    ),
    "deutan": (
        np.array(
            [
                [0.36198, 0.86755, -0.22953],
                [0.26099, 0.64512, 0.09389],
                [-0.01975, 0.02686, 0.99289],
            ]
        ),
        np.array(
            [
                [0.37009, 0.88540, -0.25549],
                [0.25767, 0.63782, 0.10451],
                [-0.01950, 0.02741, 0.99209],
            ]
        ),
        np.array([-0.00293, -0.00645, 0.00938]),
    ),
    "tritan": (
        np.array(
            [
                [1.01354, 0.14268, -0.15622],
                [-0.01181, 0.87561, 0.13619],
                [0.07707, 0.81208, 0.11085],
            ]
        ),
        np.array(
            [
                [0.93337, 0.19999, -0.13336],
                [0.05809, 0.82565, 0.11626],
                [-0.37923, 1.13825, 0.24098],
            ]
        ),
        np.array([0.03960, -0.02831, -0.01129]),
    ),
}

_FAMILY = {
    Deficiency.PROTANOPIA: "protan",
    Deficiency.PROTANOMALY: "protan",
    Deficiency.DEUTERANOPIA: "deutan",
    Deficiency.DEUTERANOMALY: "deutan",
    Deficiency.TRITANOPIA: "tritan",
    Deficiency.TRITANOMALY: "tritan",
}

_LUMA = np.array([0.299, 0.587, 0.114])


def _round_half_up(x: np.ndarray) -> np.ndarray:
    return np.floor(x + 0.5)


def _linear_to_srgb255(linear: np.ndarray) -> np.ndarray:
    """Linear 0..1 to sRGB 0..255 (rounded). Out-of-gamut values clip."""
    with np.errstate(invalid="ignore"):
        encoded = np.where(
            linear < 0.0031308,
            linear * 12.92 * 255.0,
            255.0 * (1.055 * np.power(np.maximum(linear, 0.0), 1.0 / 2.4) - 0.055),
        )
    encoded = np.where(linear <= 0.0, 0.0, encoded)
    encoded = np.where(linear >= 1.0, 255.0, encoded)
    return np.clip(_round_half_up(encoded), 0.0, 255.0)


def _brettel(rgb255: np.ndarray, family: str, severity: float) -> np.ndarray:
    above, below, normal = _BRETTEL[family]
    linear = rgb_to_linear(rgb255 / 255.0).astype(np.float64)
    side = linear @ normal
    projected = np.where(
        (side >= 0.0)[..., None], linear @ above.T, linear @ below.T
    )
    blended = projected * severity + linear * (1.0 - severity)
    return _linear_to_srgb255(blended)


def _monochrome(rgb255: np.ndarray, severity: float) -> np.ndarray:
    grey = _round_half_up(rgb255 @ _LUMA)[..., None]
    out = grey * severity + rgb255 * (1.0 - severity)
    return np.clip(_round_half_up(out), 0.0, 255.0)


def simulate_rgb(
    rgb: Union[np.ndarray, Tuple[int, int, int]],
    deficiency: Union[str, Deficiency],
    severity: Optional[float] = None,
) -> NDArray[np.uint8]:
    """
    Simulate how sRGB colours appear under a colour vision deficiency.

    Args:
      rgb        : array[...,3] of 0..255 channels
      deficiency : Deficiency or its name
      severity   : 0..1; defaults to 1.0 for -opia/-opsia and 0.6 for -omaly

    Returns:
      uint8 array with the input shape.

    Raises:
      ValueError for an unknown deficiency, a severity outside 0..1, or input
      whose last axis is not 3.
    """
    kind = Deficiency.parse(deficiency)
    sev = kind.default_severity if severity is None else float(severity)
    if not 0.0 <= sev <= 1.0:
        raise ValueError(f"severity must be within 0..1, got {severity}")
    arr = np.clip(np.asarray(rgb, dtype=np.float64), 0.0, 255.0)
    if arr.shape[-1:] != (3,):
        raise ValueError(f"expected (..., 3) channels, got shape {arr.shape}")

    if kind in _FAMILY:
        out = _brettel(arr, _FAMILY[kind], sev)
    else:
        out = _monochrome(arr, sev)
    return out.astype(np.uint8)


def simulate(
    colour: Colour,
    deficiency: Union[str, Deficiency],
    severity: Optional[float] = None,
) -> Colour:
    """Simulated appearance of one colour; alpha is preserved."""
    r, g, b = simulate_rgb(np.array(colour.rgb), deficiency, severity).tolist()
    return make_colour((r, g, b), alpha=colour.alpha)


__all__ = ["simulate_rgb", "simulate"]
