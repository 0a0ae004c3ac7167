"""Tests for the caption classifiers."""

import pytest

from equilibrium.engine.captions import (
    get_captions,
    mood_caption,
    screen_caption,
    screen_positive_caption,
    steps_caption,
    tension_label,
    vibe_label,
)
from equilibrium.models import SignalState


class TestScreenPositive:
    @pytest.mark.parametrize(
        ("hours", "emoji"),
        [
            (0.0, "🌟"),
            (0.99, "🌟"),
            (1.0, "✨"),
            (2.5, "💚"),
            (3.2, "🌱"),
            (4.0, "⏰"),
            (5.5, "🌊"),
            (6.0, "💪"),
            (7.9, "🌸"),
            (8.0, "🧘"),
            (9.0, "💙"),
            (10.5, "🤗"),
            (11.0, "❤️"),
            (12.0, "❤️"),
        ],
    )
    def test_hourly_bands(self, hours, emoji):
        assert screen_positive_caption(hours).startswith(emoji)

    def test_twelve_distinct_captions(self):
        captions = {screen_positive_caption(h + 0.5) for h in range(12)}
        assert len(captions) == 12


class TestScreen:
    def test_boundary_at_two_hours(self):
        below = screen_caption(1.999)
        at = screen_caption(2.0)
        assert below != at
        assert below == "📱 Excellent screen balance! You're protecting your mental space."
        assert at == "⏰ Healthy screen usage. You're in control of your time."

    @pytest.mark.parametrize(
        ("hours", "emoji"),
        [(0, "📱"), (3.9, "⏰"), (4, "👀"), (6, "🌙"), (7.99, "🌙"), (8, "💙"), (12, "💙")],
    )
    def test_bands(self, hours, emoji):
        assert screen_caption(hours).startswith(emoji)


class TestSteps:
    @pytest.mark.parametrize(
        ("steps", "emoji"),
        [
            (10000, "🏃"),
            (8000, "🏃"),
            (7999, "👟"),
            (5000, "👟"),
            (2000, "🚶"),
            (1999, "🌿"),
            (500, "🌿"),
            (499, "💫"),
            (0, "💫"),
        ],
    )
    def test_bands(self, steps, emoji):
        assert steps_caption(steps).startswith(emoji)


class TestMood:
    def test_positive_and_energised(self):
        assert mood_caption(80, 20) == "🎉 Positive and energized! Ride this wonderful wave!"

    def test_positive_and_calm(self):
        assert mood_caption(80, 80) == "😌 Calm and content. This peaceful state is beautiful."

    def test_negative_and_energised(self):
        assert mood_caption(20, 20).startswith("⚡")

    def test_centre_counts_as_negative_low_energy(self):
        assert mood_caption(50, 50) == "🌙 Low energy is okay. Rest is productive. You're doing fine."


class TestLabels:
    @pytest.mark.parametrize(
        ("score", "label"),
        [(0, "Equilibrium"), (29, "Equilibrium"), (30, "Tension Rising"), (59, "Tension Rising"), (60, "High Tension")],
    )
    def test_tension(self, score, label):
        assert tension_label(score) == label

    @pytest.mark.parametrize(
        ("score", "label"),
        [(100, "Excellent Mood"), (75, "Excellent Mood"), (74, "Good Mood"), (50, "Good Mood"),
         (49, "Low Mood"), (25, "Low Mood"), (24, "Need Support")],
    )
    def test_vibe(self, score, label):
        assert vibe_label(score) == label


def test_get_captions_for_defaults():
    captions = get_captions(SignalState())
    assert captions.screen_positive.startswith("🌱")
    assert captions.steps.startswith("🌿")
    assert captions.screen.startswith("⏰")
    assert captions.mood.startswith("🌙")
