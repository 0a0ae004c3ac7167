"""Signal engine — holds the current :class:`SignalState` and its derivation.

Every mutation goes through :meth:`SignalEngine._apply`, which clamps the new
values, swaps in a fresh immutable snapshot and recomputes the whole
:class:`DerivedOutput` from it before returning.  Readers therefore never see
scores and interventions drawn from different snapshots.
"""

from __future__ import annotations

from typing import Any, Mapping

import structlog

from equilibrium.engine.captions import get_captions, tension_label, vibe_label
from equilibrium.engine.interventions import InterventionSelector
from equilibrium.engine.scores import MOOD_MAX, SCREEN_TIME_MAX, clamp, derive_scores, round_half_up
from equilibrium.engine.shape import DEFAULT_BASE_RADIUS, DEFAULT_POINT_COUNT, generate_outline
from equilibrium.models import (
    Captions,
    DashboardSnapshot,
    DerivedOutput,
    Outline,
    SignalField,
    SignalState,
)

logger = structlog.get_logger(__name__)

# Ceiling for steps, also catches +inf
_STEPS_CEILING = 1_000_000


def normalise_signal(field: SignalField | str, value: Any) -> float | int:
    """Clamp *value* into the domain of *field*.

    Raises :class:`ValueError` for an unknown field name; out-of-range values
    are never rejected.
    """
    field = SignalField(field)
    number = float(value)
    if field is SignalField.SCREEN_TIME:
        return clamp(number, 0.0, SCREEN_TIME_MAX)
    if field is SignalField.STEPS:
        return int(round_half_up(clamp(number, 0.0, _STEPS_CEILING)))
    return clamp(number, 0.0, MOOD_MAX)


def recompute_all(signals: SignalState, selector: InterventionSelector | None = None) -> DerivedOutput:
    """Scores first, then the intervention, both from *signals*."""
    selector = selector or InterventionSelector()
    scores = derive_scores(signals)
    intervention = selector.select(
        scores.tension_score,
        clamp(signals.screen_time, 0.0, SCREEN_TIME_MAX),
        max(0, signals.steps),
    )
    return DerivedOutput(
        tension_score=scores.tension_score,
        vibe_score=scores.vibe_score,
        shape_smoothness=scores.shape_smoothness,
        intervention=intervention,
    )


class SignalEngine:
    """Reactive holder for one user's signals.

    Parameters
    ----------
    signals : SignalState | None
        Initial signals; defaults are used when omitted.
    selector : InterventionSelector | None
        Intervention rule chain; the built-in priority order when omitted.
    point_count, base_radius
        Outline geometry passed to :func:`generate_outline`.
    """

    def __init__(
        self,
        signals: SignalState | None = None,
        selector: InterventionSelector | None = None,
        point_count: int = DEFAULT_POINT_COUNT,
        base_radius: float = DEFAULT_BASE_RADIUS,
    ) -> None:
        self._selector = selector or InterventionSelector()
        self._point_count = point_count
        self._base_radius = base_radius
        self._signals = SignalState()
        self._derived = recompute_all(self._signals, self._selector)
        if signals is not None:
            self._apply(signals.model_dump())

    # ── Mutation ──────────────────────────────────────────────

    def set_signal(self, field: SignalField | str, value: float | int) -> DerivedOutput:
        """Store one clamped signal value and return the recomputed output."""
        return self._apply({SignalField(field).value: value})

    def set_signals(self, values: Mapping[SignalField | str, float | int]) -> DerivedOutput:
        """Store several signals at once with a single recomputation."""
        return self._apply({SignalField(k).value: v for k, v in values.items()})

    def reset(self) -> DerivedOutput:
        """Restore the default signals (used when a session begins or ends)."""
        self._signals = SignalState()
        self._derived = recompute_all(self._signals, self._selector)
        logger.info("engine.reset")
        return self._derived

    # ── Read ──────────────────────────────────────────────────

    @property
    def signals(self) -> SignalState:
        return self._signals

    def get_derived(self) -> DerivedOutput:
        """Return the cached output of the last mutation."""
        return self._derived

    def get_outline(self) -> Outline:
        derived = self._derived
        return generate_outline(
            derived.tension_score,
            derived.shape_smoothness,
            point_count=self._point_count,
            base_radius=self._base_radius,
        )

    def get_captions(self) -> Captions:
        return get_captions(self._signals)

    def snapshot(self) -> DashboardSnapshot:
        signals, derived = self._signals, self._derived
        return DashboardSnapshot(
            signals=signals,
            derived=derived,
            captions=get_captions(signals),
            tension_label=tension_label(derived.tension_score),
            vibe_label=vibe_label(derived.vibe_score),
            outline_path=self.get_outline().to_svg_path(),
        )

    # ── Internals ─────────────────────────────────────────────

    def _apply(self, values: dict[str, Any]) -> DerivedOutput:
        clamped = {name: normalise_signal(name, value) for name, value in values.items()}
        signals = self._signals.model_copy(update=clamped)
        derived = recompute_all(signals, self._selector)
        # signals and derived are swapped together
        self._signals, self._derived = signals, derived
        logger.debug(
            "engine.signals_set",
            fields=sorted(clamped),
            tension_score=derived.tension_score,
            vibe_score=derived.vibe_score,
            intervention=derived.intervention.type.value if derived.intervention else None,
        )
        return derived
