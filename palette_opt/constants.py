# palette_opt/constants.py
"""
Tunables used across the project.

- Fitness weights and caps (W_*, *_CAP)
- Harmony reward bands
- Background quality and separation thresholds
- Optimizer defaults (HC_*, SA_*, GA_*, PATH_*)
"""
from __future__ import annotations

from typing import Tuple

# =========================
# Fitness weights
# =========================
W_TEXT_CONTRAST = 2.0
W_UI_CONTRAST = 1.5
W_HARMONY_CONTRAST = 1.0
W_BG_QUALITY = 1.0
W_MIN_DELTA_E = 0.5

# Contrast beyond AAA earns nothing more
TEXT_CONTRAST_CAP = 7.0
MAIN_TEXT_MULTIPLIER = 2.0
UI_CONTRAST_CAP = 4.5
BG_SURFACE_CONTRAST_CAP = 3.0

# =========================
# Harmony reward curve
# =========================
# (upper bound exclusive, reward); ratios at or above the last bound earn HARMONY_ABOVE
HARMONY_BANDS: Tuple[Tuple[float, float], ...] = (
    (1.5, -2.0),
    (3.0, 1.0),
    (7.0, 2.0),
    (10.0, 1.0),
)
HARMONY_ABOVE = 0.0

# =========================
# Background quality
# =========================
BG_LUMINANCE_MIN = 0.1
BG_LUMINANCE_MAX = 0.9
BG_LUMINANCE_PENALTY = 2.0
BG_GREY_CHROMA_MAX = 5.0

# =========================
# Pairwise separation
# =========================
TARGET_MIN_DELTA_E = 10.0
SEPARATION_BONUS = 2.0

# =========================
# Optimizer defaults
# =========================
HC_MAX_ITERATIONS = 1000
HC_PATIENCE = 50
HC_NEIGHBOUR_STEP = 10

SA_MAX_ITERATIONS = 5000
SA_INITIAL_TEMPERATURE = 100.0
SA_COOLING_RATE = 0.995
SA_MIN_TEMPERATURE = 0.1
SA_NEIGHBOUR_STEP = 15

GA_MAX_ITERATIONS = 1000
GA_CROSSOVER_PROBABILITY = 70.0
GA_MUTATION_PROBABILITY = 10.0
GA_MUTATION_AMOUNT = 20
GA_THRESHOLD_FITNESS = 90.0
GA_THRESHOLD_BEST_FACTOR = 1.1
GA_CROSSOVER_OPERATION = "uniform"
GA_ELITISM_COUNT = 1
GA_SMALL_MUTATION_SHARE = 0.7

# Single colour evolution towards a target
SC_POPULATION_SIZE = 50
SC_GENERATIONS = 500
SC_MUTATION_RATE = 0.08
SC_MUTATION_AMOUNT = 20
SC_MAX_DELTA_E = 100.0
SC_CONVERGED_FITNESS = 99.5

# Distinct colour sets (CVD-aware annealing, cost is minimised)
DC_COUNT = 5
DC_INITIAL_TEMPERATURE = 1000.0
DC_COOLING_RATE = 0.99
DC_MIN_TEMPERATURE = 1e-4
DC_NUDGE = 0.05
DC_TARGET_COLOURS = (
    "#4269d0",
    "#efb118",
    "#ff725c",
    "#6cc5b0",
    "#3ca951",
    "#ff8ab7",
    "#a463f2",
    "#97bbf5",
    "#9c6b4e",
    "#9498a0",
)
DC_AVOID_COLOURS = ("#ff0000", "#000000")
DC_BACKGROUND = "#ffffff"
DC_ENERGY_WEIGHT = 1.25
DC_RANGE_WEIGHT = 1.0
DC_TARGET_WEIGHT = 0.75
DC_AVOID_WEIGHT = 0.5
DC_CONTRAST_WEIGHT = 0.25
# per simulated vision type
DC_DEFICIENCY_WEIGHTS = {
    "protanopia": 0.1,
    "protanomaly": 0.1,
    "deuteranopia": 0.1,
    "deuteranomaly": 0.5,
    "tritanopia": 0.05,
    "tritanomaly": 0.05,
}
MAX_CONTRAST_RATIO = 21.0

PATH_ITERATIONS = 10000
PATH_CONTRAST_PENALTY_WEIGHT = 0.1

# Progress lines every N iterations when debug is on
DEBUG_EVERY = 100
