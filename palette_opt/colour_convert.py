# palette_opt/colour_convert.py
from __future__ import annotations

"""
Colour conversions and metrics (sRGB, D65).

Exports:
  rgb_to_linear(srgb)
  rgb_to_lab(rgb)
  lab_to_lch(lab)
  rgb_to_oklab(rgb)
  rgb_to_hsl(rgb)
  relative_luminance(rgb)
  make_colour(rgb, alpha=1.0)
  contrast_ratio(colour_a, colour_b)
  delta_e2000_pair(lab1, lab2)
  colour_distance(colour_a, colour_b)
  oklab_distance(colour_a, colour_b)
"""

import math
from typing import Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from .core_types import Colour, Lab, Lch, OkLab, Triplet, clamp_channel, clamp_value


# sRGB to linear


def rgb_to_linear(srgb: np.ndarray) -> np.ndarray:
    """
    Convert sRGB (non-linear 0..1) to linear RGB (0..1). Vectorised.
    Args:
      srgb: array[...,3] in 0..1 (float)
    Returns:
      float32 array[...,3]
    """
    srgb_f = np.asarray(srgb).astype(np.float32, copy=False)
    with np.errstate(invalid="ignore"):
        linear = np.where(
            srgb_f <= 0.04045, srgb_f / 12.92, ((srgb_f + 0.055) / 1.055) ** 2.4
        )
    return linear.astype(np.float32, copy=False)


def _as_unit_rgb(rgb: np.ndarray) -> np.ndarray:
    """Integer input is 0..255 and is scaled; float input is taken as 0..1."""
    arr = np.asarray(rgb)
    rgb_f = arr.astype(np.float32, copy=False)
    if np.issubdtype(arr.dtype, np.integer):
        rgb_f = rgb_f / 255.0
    return rgb_f


# sRGB to Lab (D65)


def rgb_to_lab(rgb: np.ndarray) -> Lab:
    """
    sRGB to CIE Lab (D65).
    Accepts uint8 [0..255] or float [0..1]. Preserves shape (...,3). Returns float32.
    """
    rgb_f = _as_unit_rgb(rgb)

    r_lin = rgb_to_linear(rgb_f[..., 0])
    g_lin = rgb_to_linear(rgb_f[..., 1])
    b_lin = rgb_to_linear(rgb_f[..., 2])

    # Linear RGB -> XYZ (D65)
    X = 0.4124564 * r_lin + 0.3575761 * g_lin + 0.1804375 * b_lin
    Y = 0.2126729 * r_lin + 0.7151522 * g_lin + 0.0721750 * b_lin
    Z = 0.0193339 * r_lin + 0.1191920 * g_lin + 0.9503041 * b_lin

    # Reference white (D65)
    Xn, Yn, Zn = 0.95047, 1.00000, 1.08883
    x, y, z = X / Xn, Y / Yn, Z / Zn
    e, k = 216.0 / 24389.0, 24389.0 / 27.0

    def f(t: np.ndarray) -> np.ndarray:
        with np.errstate(invalid="ignore"):
            return np.where(t > e, np.cbrt(t), (k * t + 16.0) / 116.0).astype(
                np.float32, copy=False
            )

    fx, fy, fz = f(x), f(y), f(z)
    L = 116.0 * fy - 16.0
    a = 500.0 * (fx - fy)
    b = 200.0 * (fy - fz)

    out = np.empty(rgb_f.shape, dtype=np.float32)
    out[..., 0] = L
    out[..., 1] = a
    out[..., 2] = b
    return out


# Lab to LCh


def lab_to_lch(lab: Lab) -> Lch:
    """
    Lab[...,3] to LCh[...,3] (degrees in [0,360)).
    Returns float32 with shape preserved.
    """
    lab = np.asarray(lab, dtype=np.float32)
    orig_shape = lab.shape
    flat = lab.reshape(-1, 3)
    L = flat[:, 0]
    a = flat[:, 1]
    b = flat[:, 2]
    C = np.hypot(a, b)
    h = (np.degrees(np.arctan2(b, a)) + 360.0) % 360.0
    lch = np.stack([L, C, h], axis=1).astype(np.float32, copy=False)
    return lch.reshape(orig_shape)


# sRGB to OkLab


def rgb_to_oklab(rgb: np.ndarray) -> OkLab:
    """
    sRGB to OkLab (Ottosson 2020).
    Accepts uint8 [0..255] or float [0..1]. Preserves shape (...,3). Returns float32.
    """
    rgb_f = _as_unit_rgb(rgb)
    r = rgb_to_linear(rgb_f[..., 0])
    g = rgb_to_linear(rgb_f[..., 1])
    b = rgb_to_linear(rgb_f[..., 2])

    l_ = np.cbrt(0.4122214708 * r + 0.5363325363 * g + 0.0514459929 * b)
    m_ = np.cbrt(0.2119034982 * r + 0.6806995451 * g + 0.1073969566 * b)
    s_ = np.cbrt(0.0883024619 * r + 0.2817188376 * g + 0.6299787005 * b)

    out = np.empty(rgb_f.shape, dtype=np.float32)
    out[..., 0] = 0.2104542553 * l_ + 0.7936177850 * m_ - 0.0040720468 * s_
    out[..., 1] = 1.9779984951 * l_ - 2.4285922050 * m_ + 0.4505937099 * s_
    out[..., 2] = 0.0259040371 * l_ + 0.7827717662 * m_ - 0.8086757660 * s_
    return out


# sRGB to HSL


def rgb_to_hsl(rgb: np.ndarray) -> NDArray[np.float32]:
    """
    sRGB to HSL. Hue in degrees [0,360), saturation and lightness in percent.
    Greys report hue 0.
    """
    rgb_f = _as_unit_rgb(rgb)
    r, g, b = rgb_f[..., 0], rgb_f[..., 1], rgb_f[..., 2]
    c_max = np.maximum.reduce([r, g, b])
    c_min = np.minimum.reduce([r, g, b])
    delta = c_max - c_min
    light = 0.5 * (c_max + c_min)

    with np.errstate(divide="ignore", invalid="ignore"):
        sat = np.where(
            delta == 0.0, 0.0, delta / (1.0 - np.abs(2.0 * light - 1.0))
        )
        hue_r = ((g - b) / delta) % 6.0
        hue_g = (b - r) / delta + 2.0
        hue_b = (r - g) / delta + 4.0
    hue = np.where(c_max == r, hue_r, np.where(c_max == g, hue_g, hue_b))
    hue = np.where(delta == 0.0, 0.0, hue * 60.0) % 360.0

    out = np.empty(rgb_f.shape, dtype=np.float32)
    out[..., 0] = hue
    out[..., 1] = np.clip(sat, 0.0, 1.0) * 100.0
    out[..., 2] = light * 100.0
    return out


# WCAG luminance / contrast


def relative_luminance(rgb: np.ndarray) -> np.ndarray:
    """WCAG relative luminance (0..1) for sRGB input [...,3]."""
    rgb_f = _as_unit_rgb(rgb)
    lin = rgb_to_linear(rgb_f)
    return (0.2126 * lin[..., 0] + 0.7152 * lin[..., 1] + 0.0722 * lin[..., 2]).astype(
        np.float32, copy=False
    )


def contrast_ratio(colour_a: Colour, colour_b: Colour) -> float:
    """WCAG contrast ratio in [1, 21]. Order of arguments does not matter."""
    lum_a = colour_a.luminance
    lum_b = colour_b.luminance
    brighter = max(lum_a, lum_b)
    darker = min(lum_a, lum_b)
    return (brighter + 0.05) / (darker + 0.05)


# Colour builder


def _triplet(row: np.ndarray) -> Triplet:
    return (float(row[0]), float(row[1]), float(row[2]))


def make_colour(
    rgb: Union[Sequence[float], NDArray[np.generic]], alpha: float = 1.0
) -> Colour:
    """
    Build a Colour from 0..255 channels, clamping each into range and computing
    every derived representation in one pass.

    Raises ValueError for a malformed or non-finite channel.
    """
    values = [float(v) for v in rgb]
    if len(values) != 3:
        raise ValueError(f"expected 3 channels, got {len(values)}")
    if not all(math.isfinite(v) for v in values) or not math.isfinite(float(alpha)):
        raise ValueError(f"non-finite colour channel in {values!r} (alpha={alpha!r})")

    rgb_t: Tuple[int, int, int] = (
        clamp_channel(values[0]),
        clamp_channel(values[1]),
        clamp_channel(values[2]),
    )
    unit = np.array(rgb_t, dtype=np.float32) / 255.0
    lab = rgb_to_lab(unit)
    return Colour(
        rgb=rgb_t,
        alpha=float(clamp_value(float(alpha), 0.0, 1.0)),
        hsl=_triplet(rgb_to_hsl(unit)),
        lab=_triplet(lab),
        lch=_triplet(lab_to_lch(lab)),
        oklab=_triplet(rgb_to_oklab(unit)),
        luminance=float(relative_luminance(unit)),
    )


# CIEDE2000


def delta_e2000_pair(
    lab1: Sequence[float] | NDArray[np.floating],
    lab2: Sequence[float] | NDArray[np.floating],
) -> float:
    """
    CIEDE2000 distance between two Lab colours.
    Scalar reference implementation.
    """
    L1, a1, b1 = float(lab1[0]), float(lab1[1]), float(lab1[2])
    L2, a2, b2 = float(lab2[0]), float(lab2[1]), float(lab2[2])

    C1 = math.hypot(a1, b1)
    C2 = math.hypot(a2, b2)
    C_bar = 0.5 * (C1 + C2)
    G = 0.5 * (1.0 - math.sqrt((C_bar**7) / (C_bar**7 + 25.0**7)))

    a1p = (1.0 + G) * a1
    a2p = (1.0 + G) * a2
    C1p = math.hypot(a1p, b1)
    C2p = math.hypot(a2p, b2)

    def _hue(a_val: float, b_val: float) -> float:
        if a_val == 0.0 and b_val == 0.0:
            return 0.0
        ang = math.degrees(math.atan2(b_val, a_val))
        return ang + 360.0 if ang < 0.0 else ang

    h1p = _hue(a1p, b1)
    h2p = _hue(a2p, b2)

    dLp = L2 - L1
    dCp = C2p - C1p

    dhp = h2p - h1p
    if C1p * C2p == 0.0:
        dhp = 0.0
    elif dhp > 180.0:
        dhp -= 360.0
    elif dhp < -180.0:
        dhp += 360.0

    dHp = 2.0 * math.sqrt(C1p * C2p) * math.sin(math.radians(dhp / 2.0))

    L_bar = 0.5 * (L1 + L2)
    C_bar_p = 0.5 * (C1p + C2p)

    if C1p * C2p == 0.0:
        h_bar_p = h1p + h2p
    else:
        h_sum = h1p + h2p
        h_diff = abs(h1p - h2p)
        if h_diff <= 180.0:
            h_bar_p = 0.5 * h_sum
        elif h_sum < 360.0:
            h_bar_p = 0.5 * (h_sum + 360.0)
        else:
            h_bar_p = 0.5 * (h_sum - 360.0)

    T = (
        1.0
        - 0.17 * math.cos(math.radians(h_bar_p - 30.0))
        + 0.24 * math.cos(math.radians(2.0 * h_bar_p))
        + 0.32 * math.cos(math.radians(3.0 * h_bar_p + 6.0))
        - 0.20 * math.cos(math.radians(4.0 * h_bar_p - 63.0))
    )

    d_theta = 30.0 * math.exp(-(((h_bar_p - 275.0) / 25.0) ** 2.0))
    R_c = 2.0 * math.sqrt((C_bar_p**7) / (C_bar_p**7 + 25.0**7))

    S_l = 1.0 + (0.015 * ((L_bar - 50.0) ** 2.0)) / math.sqrt(
        20.0 + ((L_bar - 50.0) ** 2.0)
    )
    S_c = 1.0 + 0.045 * C_bar_p
    S_h = 1.0 + 0.015 * C_bar_p * T
    R_t = -math.sin(math.radians(2.0 * d_theta)) * R_c

    kL = kC = kH = 1.0
    dE = math.sqrt(
        max(
            0.0,
            (dLp / (kL * S_l)) ** 2
            + (dCp / (kC * S_c)) ** 2
            + (dHp / (kH * S_h)) ** 2
            + R_t * (dCp / (kC * S_c)) * (dHp / (kH * S_h)),
        )
    )
    return float(dE)


def colour_distance(colour_a: Colour, colour_b: Colour) -> float:
    """Perceptual distance between two colours (CIEDE2000 on their Lab rows)."""
    return delta_e2000_pair(colour_a.lab, colour_b.lab)


def oklab_distance(colour_a: Colour, colour_b: Colour) -> float:
    """Euclidean distance in OkLab."""
    la, aa, ba = colour_a.oklab
    lb, ab, bb = colour_b.oklab
    return math.sqrt((la - lb) ** 2 + (aa - ab) ** 2 + (ba - bb) ** 2)


__all__ = [
    "rgb_to_linear",
    "rgb_to_lab",
    "lab_to_lch",
    "rgb_to_oklab",
    "rgb_to_hsl",
    "relative_luminance",
    "contrast_ratio",
    "make_colour",
    "delta_e2000_pair",
    "colour_distance",
    "oklab_distance",
]
