"""Intervention selector — an ordered rule chain, first match wins.

Rules are *not* disjoint: ``screen_time=5, steps=50`` satisfies both the
Digital Paralysis and The Slump conditions.  The order of
:func:`default_intervention_rules` decides which one surfaces.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import structlog

from equilibrium.models import Intervention, InterventionType

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class InterventionContext:
    """The values an intervention condition may look at."""

    tension_score: int
    screen_time: float
    steps: int


@dataclass(frozen=True)
class InterventionRule:
    rule_id: str
    condition: Callable[[InterventionContext], bool]
    intervention: Intervention


def default_intervention_rules() -> list[InterventionRule]:
    """Return the built-in rules in priority order."""
    return [
        InterventionRule(
            rule_id="digital_paralysis",
            condition=lambda ctx: ctx.screen_time > 4 and ctx.steps < 500,
            intervention=Intervention(
                type=InterventionType.DIGITAL_PARALYSIS,
                action="The Shake Out",
                message="Your body needs movement. A gentle stretch would help.",
                duration="2 min",
            ),
        ),
        InterventionRule(
            rule_id="overstimulated",
            condition=lambda ctx: ctx.tension_score > 60 and ctx.steps < 2000,
            intervention=Intervention(
                type=InterventionType.OVERSTIMULATED,
                action="Visual Reset",
                message="Your eyes deserve a break.",
                duration="3 min",
            ),
        ),
        InterventionRule(
            rule_id="the_slump",
            condition=lambda ctx: ctx.steps < 100,
            intervention=Intervention(
                type=InterventionType.THE_SLUMP,
                action="Hydration & Oxygen",
                message="A sip of water would help.",
                duration="1 min",
            ),
        ),
    ]


class InterventionSelector:
    """Evaluate an ordered list of :class:`InterventionRule` objects.

    Only the first matching rule produces an intervention; when nothing
    matches there is no active intervention.
    """

    def __init__(self, rules: list[InterventionRule] | None = None) -> None:
        self._rules: list[InterventionRule] = (
            rules if rules is not None else default_intervention_rules()
        )

    def list_rules(self) -> list[InterventionRule]:
        return list(self._rules)

    def select(self, tension_score: int, screen_time: float, steps: int) -> Intervention | None:
        ctx = InterventionContext(
            tension_score=tension_score,
            screen_time=screen_time,
            steps=steps,
        )
        for rule in self._rules:
            if rule.condition(ctx):
                logger.debug(
                    "interventions.rule_matched",
                    rule_id=rule.rule_id,
                    tension_score=tension_score,
                    screen_time=screen_time,
                    steps=steps,
                )
                return rule.intervention
        return None


_default_selector = InterventionSelector()


def select_intervention(tension_score: int, screen_time: float, steps: int) -> Intervention | None:
    """Pick at most one intervention using the built-in priority chain."""
    return _default_selector.select(tension_score, screen_time, steps)
