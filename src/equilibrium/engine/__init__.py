"""Signal-to-state derivation engine.

Turns four caller-supplied behavioural signals (screen time, steps and a
2-D mood coordinate) into wellness scores, an intervention suggestion,
caption tiers and a procedural outline.

Architecture
------------
1. **Scores** (`scores.py`): tension, vibe and shape smoothness.
2. **Interventions** (`interventions.py`): ordered rule chain, first match wins.
3. **Shape** (`shape.py`): closed Bézier outline and SVG export.
4. **Captions** (`captions.py`): tier lookups for each signal and score.
5. **State** (`state.py`): :class:`SignalEngine`, which recomputes all of the
   above from one snapshot on every mutation.

Nothing here reads sensors or persists history; signals are whatever the
caller last set.
"""

from equilibrium.engine.captions import get_captions, tension_label, vibe_label
from equilibrium.engine.interventions import (
    InterventionRule,
    InterventionSelector,
    default_intervention_rules,
    select_intervention,
)
from equilibrium.engine.scores import derive_scores
from equilibrium.engine.shape import generate_outline, render_svg
from equilibrium.engine.state import SignalEngine, normalise_signal, recompute_all

__all__ = [
    "InterventionRule",
    "InterventionSelector",
    "SignalEngine",
    "default_intervention_rules",
    "derive_scores",
    "generate_outline",
    "get_captions",
    "normalise_signal",
    "recompute_all",
    "render_svg",
    "select_intervention",
    "tension_label",
    "vibe_label",
]
