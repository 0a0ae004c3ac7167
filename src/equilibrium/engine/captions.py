"""Caption classifiers — map one signal or score to a user-facing tier label.

Every table is ordered and contiguous; the first matching band wins and the
last entry is the fallback, so each classifier is total.
"""

from __future__ import annotations

from equilibrium.models import Captions, SignalState

# ── Tables ────────────────────────────────────────────────────

# (exclusive upper bound in hours, caption); least screen time first
_SCREEN_POSITIVE_BANDS: list[tuple[float, str]] = [
    (1, "🌟 Amazing screen discipline! You're protecting your mental wellness."),
    (2, "✨ Excellent screen balance! Your mind has room to breathe."),
    (3, "💚 Healthy screen habits! You're in control of your time."),
    (4, "🌱 Good screen usage. Remember to take breaks and stretch."),
    (5, "⏰ Moderate screen time. Consider stepping away soon."),
    (6, "🌊 Screen time is adding up. Your eyes need a rest."),
    (7, "💪 High screen exposure. Time to disconnect and recharge."),
    (8, "🌸 Heavy screen use detected. Prioritize your wellbeing."),
    (9, "🧘 Extended screen time. Your mind deserves a digital detox."),
    (10, "💙 Screen overload. Please take a break - you matter more than the screen."),
    (11, "🤗 Very high screen time. Step away and do something kind for yourself."),
]
_SCREEN_POSITIVE_FALLBACK = "❤️ Critical screen time! Your health comes first. Power down and rest."

_SCREEN_BANDS: list[tuple[float, str]] = [
    (2, "📱 Excellent screen balance! You're protecting your mental space."),
    (4, "⏰ Healthy screen usage. You're in control of your time."),
    (6, "👀 Consider a screen break soon. Your eyes will thank you."),
    (8, "🌙 High screen time today. Maybe time to unplug?"),
]
_SCREEN_FALLBACK = "💙 Your mind needs rest from screens. Be kind to yourself."

# (inclusive step floor, caption); most active first
_STEPS_BANDS: list[tuple[int, str]] = [
    (8000, "🏃 Amazing! You're crushing your movement goals today!"),
    (5000, "👟 Great job staying active! Your body thanks you."),
    (2000, "🚶 Good progress! Every step counts toward wellness."),
    (500, "🌿 You're moving! Small steps lead to big changes."),
]
_STEPS_FALLBACK = "💫 Ready to move? Even a short walk can lift your mood."

# (is_positive, is_high_energy) -> caption
_MOOD_QUADRANTS: dict[tuple[bool, bool], str] = {
    (True, True): "🎉 Positive and energized! Ride this wonderful wave!",
    (True, False): "😌 Calm and content. This peaceful state is beautiful.",
    (False, True): "⚡ Feeling intense? Channel that energy into something creative.",
    (False, False): "🌙 Low energy is okay. Rest is productive. You're doing fine.",
}

_TENSION_LABELS: list[tuple[int, str]] = [
    (30, "Equilibrium"),
    (60, "Tension Rising"),
]
_TENSION_FALLBACK = "High Tension"

_VIBE_LABELS: list[tuple[int, str]] = [
    (75, "Excellent Mood"),
    (50, "Good Mood"),
    (25, "Low Mood"),
]
_VIBE_FALLBACK = "Need Support"


def _below(value: float, bands: list[tuple[float, str]], fallback: str) -> str:
    for upper, caption in bands:
        if value < upper:
            return caption
    return fallback


def _at_least(value: float, bands: list[tuple[int, str]], fallback: str) -> str:
    for floor, caption in bands:
        if value >= floor:
            return caption
    return fallback


# ── Classifiers ───────────────────────────────────────────────


def screen_positive_caption(screen_time: float) -> str:
    """Twelve one-hour bands, from under an hour to eleven hours and beyond."""
    return _below(screen_time, _SCREEN_POSITIVE_BANDS, _SCREEN_POSITIVE_FALLBACK)


def screen_caption(screen_time: float) -> str:
    return _below(screen_time, _SCREEN_BANDS, _SCREEN_FALLBACK)


def steps_caption(steps: int) -> str:
    return _at_least(steps, _STEPS_BANDS, _STEPS_FALLBACK)


def mood_caption(mood_x: float, mood_y: float) -> str:
    """Quadrant caption; ``mood_y`` below 50 counts as high energy."""
    return _MOOD_QUADRANTS[(mood_x > 50, mood_y < 50)]


def tension_label(tension_score: int) -> str:
    return _below(tension_score, _TENSION_LABELS, _TENSION_FALLBACK)


def vibe_label(vibe_score: int) -> str:
    return _at_least(vibe_score, _VIBE_LABELS, _VIBE_FALLBACK)


def get_captions(signals: SignalState) -> Captions:
    """All four signal captions for one snapshot."""
    return Captions(
        screen_positive=screen_positive_caption(signals.screen_time),
        steps=steps_caption(signals.steps),
        screen=screen_caption(signals.screen_time),
        mood=mood_caption(signals.mood_x, signals.mood_y),
    )
