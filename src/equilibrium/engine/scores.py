"""Score derivation — tension, vibe and shape smoothness from raw signals.

All functions here are pure.  Signal values are clamped on read, so a
:class:`SignalState` built by hand with out-of-range values still derives
in-range scores.
"""

from __future__ import annotations

import math

from equilibrium.models import Scores, SignalState

# ── Constants ─────────────────────────────────────────────────

SCREEN_TIME_MAX = 12.0
MOOD_MAX = 100.0

_SCREEN_FACTOR_PER_HOUR = 5.0
_SCREEN_FACTOR_CAP = 60.0
_MOVEMENT_FACTOR_MAX = 40.0
_STEPS_PER_MOVEMENT_POINT = 250.0

MIN_SMOOTHNESS = 0.3


# ── Numeric helpers ───────────────────────────────────────────


def clamp(value: float, low: float, high: float) -> float:
    """Clamp *value* into ``[low, high]``.  NaN clamps to *low*."""
    if math.isnan(value):
        return low
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties towards +∞ (``2.5 -> 3``, ``-2.5 -> -2``)."""
    return math.floor(value + 0.5)


# ── Individual scores ─────────────────────────────────────────


def derive_vibe_score(mood_x: float, mood_y: float) -> int:
    """Average positivity (``mood_x``) and energy (``100 - mood_y``)."""
    positivity = clamp(mood_x, 0.0, MOOD_MAX)
    energy = MOOD_MAX - clamp(mood_y, 0.0, MOOD_MAX)
    return int(clamp(round_half_up((positivity + energy) / 2), 0, 100))


def derive_shape_smoothness(vibe_score: int) -> float:
    return max(MIN_SMOOTHNESS, vibe_score / 100)


def derive_tension_score(screen_time: float, steps: int) -> int:
    """Stress proxy: sedentary screen exposure offset by movement.

    Screen exposure contributes up to 60 points (reached at 12 h), a lack of
    movement up to 40 points (fully offset at 10 000 steps).
    """
    screen_time = clamp(screen_time, 0.0, SCREEN_TIME_MAX)
    steps = max(0, steps)
    screen_factor = min(screen_time * _SCREEN_FACTOR_PER_HOUR, _SCREEN_FACTOR_CAP)
    movement_factor = max(0.0, _MOVEMENT_FACTOR_MAX - steps / _STEPS_PER_MOVEMENT_POINT)
    return int(clamp(round_half_up(screen_factor + movement_factor), 0, 100))


def derive_scores(signals: SignalState) -> Scores:
    """Derive every score from a single signal snapshot."""
    vibe = derive_vibe_score(signals.mood_x, signals.mood_y)
    return Scores(
        tension_score=derive_tension_score(signals.screen_time, signals.steps),
        vibe_score=vibe,
        shape_smoothness=derive_shape_smoothness(vibe),
    )
