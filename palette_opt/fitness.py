# palette_opt/fitness.py
from __future__ import annotations

"""
Palette fitness (higher is better).

The palette is read by role: [accent, background, surface, button_text, main_text].
Every term is computed independently and summed with the weights in constants.py.

Exports:
  FitnessTerms
  harmony_reward(ratio) -> float
  min_pairwise_delta_e(palette) -> float
  fitness_terms(primary, palette) -> FitnessTerms | None
  evaluate_palette_solution(primary, palette) -> float   (-inf when invalid)
"""

import itertools
import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .colour_convert import colour_distance, contrast_ratio
from .constants import (
    BG_GREY_CHROMA_MAX,
    BG_LUMINANCE_MAX,
    BG_LUMINANCE_MIN,
    BG_LUMINANCE_PENALTY,
    BG_SURFACE_CONTRAST_CAP,
    HARMONY_ABOVE,
    HARMONY_BANDS,
    MAIN_TEXT_MULTIPLIER,
    SEPARATION_BONUS,
    TARGET_MIN_DELTA_E,
    TEXT_CONTRAST_CAP,
    UI_CONTRAST_CAP,
    W_BG_QUALITY,
    W_HARMONY_CONTRAST,
    W_MIN_DELTA_E,
    W_TEXT_CONTRAST,
    W_UI_CONTRAST,
)
from .core_types import PALETTE_SIZE, Colour
from .utils import warn


@dataclass(frozen=True)
class FitnessTerms:
    """Weighted contribution of each criterion plus the raw values behind them."""

    text_contrast: float
    ui_contrast: float
    harmony: float
    background: float
    separation: float
    background_luminance: float
    background_chroma: float
    background_penalized: bool
    min_delta_e: float

    @property
    def total(self) -> float:
        return (
            self.text_contrast
            + self.ui_contrast
            + self.harmony
            + self.background
            + self.separation
        )


def harmony_reward(ratio: float) -> float:
    """
    Non-monotonic reward for contrast between primary, accent and background.
    Too low reads as the same colour, too high reads as jarring.
    """
    for upper, reward in HARMONY_BANDS:
        if ratio < upper:
            return reward
    return HARMONY_ABOVE


def min_pairwise_delta_e(palette: Sequence[Colour]) -> float:
    """Smallest CIEDE2000 distance among all unique colour pairs (inf if < 2)."""
    best = math.inf
    for a, b in itertools.combinations(palette, 2):
        best = min(best, colour_distance(a, b))
    return best


def _text_term(
    primary: Colour,
    accent: Colour,
    surface: Colour,
    button_text: Colour,
    main_text: Colour,
) -> float:
    cap = TEXT_CONTRAST_CAP
    buttons = min(contrast_ratio(button_text, primary), cap) + min(
        contrast_ratio(button_text, accent), cap
    )
    main = MAIN_TEXT_MULTIPLIER * min(contrast_ratio(main_text, surface), cap)
    return W_TEXT_CONTRAST * (buttons + main)


def _ui_term(
    primary: Colour, accent: Colour, background: Colour, surface: Colour
) -> float:
    elements = min(contrast_ratio(primary, surface), UI_CONTRAST_CAP) + min(
        contrast_ratio(accent, surface), UI_CONTRAST_CAP
    )
    separation = min(contrast_ratio(background, surface), BG_SURFACE_CONTRAST_CAP)
    return W_UI_CONTRAST * (elements + separation)


def _harmony_term(primary: Colour, accent: Colour, background: Colour) -> float:
    return W_HARMONY_CONTRAST * (
        harmony_reward(contrast_ratio(primary, accent))
        + harmony_reward(contrast_ratio(primary, background))
        + harmony_reward(contrast_ratio(accent, background))
    )


def _background_term(background: Colour) -> Tuple[float, float, float, bool]:
    lum = background.luminance
    chroma = background.lch[1]
    r, g, b = background.rgb

    score = 0.0
    penalized = lum < BG_LUMINANCE_MIN or lum > BG_LUMINANCE_MAX
    if penalized:
        score -= W_BG_QUALITY * BG_LUMINANCE_PENALTY
    if (r == g == b) or chroma < BG_GREY_CHROMA_MAX:
        score -= W_BG_QUALITY
    else:
        score += W_BG_QUALITY
    return score, lum, chroma, penalized


def _separation_term(min_de: float) -> float:
    if min_de < TARGET_MIN_DELTA_E:
        return -W_MIN_DELTA_E * (TARGET_MIN_DELTA_E - min_de)
    return W_MIN_DELTA_E * SEPARATION_BONUS


def _is_usable(primary: object, palette: Optional[Sequence[object]]) -> bool:
    if palette is None or len(palette) != PALETTE_SIZE:
        warn(
            f"fitness needs a palette of {PALETTE_SIZE} colours, "
            f"received {0 if palette is None else len(palette)}"
        )
        return False
    if not isinstance(primary, Colour) or not primary.is_finite():
        warn("fitness received an invalid primary colour")
        return False
    if any(not isinstance(c, Colour) or not c.is_finite() for c in palette):
        warn("fitness received an invalid colour in the palette")
        return False
    return True


def fitness_terms(
    primary: Colour, palette: Sequence[Colour]
) -> Optional[FitnessTerms]:
    """Per-criterion breakdown, or None when the palette is structurally invalid."""
    if not _is_usable(primary, palette):
        return None
    accent, background, surface, button_text, main_text = palette

    bg_score, bg_lum, bg_chroma, bg_penalized = _background_term(background)
    min_de = min_pairwise_delta_e(palette)
    return FitnessTerms(
        text_contrast=_text_term(primary, accent, surface, button_text, main_text),
        ui_contrast=_ui_term(primary, accent, background, surface),
        harmony=_harmony_term(primary, accent, background),
        background=bg_score,
        separation=_separation_term(min_de),
        background_luminance=bg_lum,
        background_chroma=bg_chroma,
        background_penalized=bg_penalized,
        min_delta_e=min_de,
    )


def evaluate_palette_solution(primary: Colour, palette: Sequence[Colour]) -> float:
    """
    Score a 5-colour palette against a primary reference colour.

    Returns -inf (never raises) for a wrong length, a malformed colour, or a
    non-finite total. Callers must treat -inf as "reject, never select".
    """
    terms = fitness_terms(primary, palette)
    if terms is None:
        return float("-inf")
    total = terms.total
    if not math.isfinite(total):
        return float("-inf")
    return float(total)


__all__ = [
    "FitnessTerms",
    "harmony_reward",
    "min_pairwise_delta_e",
    "fitness_terms",
    "evaluate_palette_solution",
]
