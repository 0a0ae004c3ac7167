"""Shared Pydantic models used across the framework."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

# ── Enums ─────────────────────────────────────────────────────


class SignalField(str, Enum):
    """The four caller-settable behavioural signals."""

    SCREEN_TIME = "screen_time"
    STEPS = "steps"
    MOOD_X = "mood_x"
    MOOD_Y = "mood_y"


class InterventionType(str, Enum):
    DIGITAL_PARALYSIS = "Digital Paralysis"
    OVERSTIMULATED = "Overstimulated"
    THE_SLUMP = "The Slump"


# ── Signals ───────────────────────────────────────────────────


class SignalState(BaseModel):
    """The engine's only persistent input.

    ``mood_y`` is inverted: 0 is high energy, 100 is low energy.
    """

    model_config = ConfigDict(frozen=True)

    screen_time: float = 3.2  # hours
    steps: int = 1200
    mood_x: float = 50.0  # 0 = negative, 100 = positive
    mood_y: float = 50.0  # 0 = high energy, 100 = low energy


# ── Derived output ────────────────────────────────────────────


class Intervention(BaseModel):
    """A suggested micro-action surfaced when thresholds indicate stress or inactivity."""

    model_config = ConfigDict(frozen=True)

    type: InterventionType
    action: str
    message: str
    duration: str


class Scores(BaseModel):
    model_config = ConfigDict(frozen=True)

    tension_score: int = Field(ge=0, le=100)
    vibe_score: int = Field(ge=0, le=100)
    shape_smoothness: float = Field(ge=0.3, le=1.0)


class DerivedOutput(BaseModel):
    """Everything computed from one :class:`SignalState` snapshot."""

    model_config = ConfigDict(frozen=True)

    tension_score: int = Field(ge=0, le=100)
    vibe_score: int = Field(ge=0, le=100)
    shape_smoothness: float = Field(ge=0.3, le=1.0)
    intervention: Intervention | None = None


class Captions(BaseModel):
    model_config = ConfigDict(frozen=True)

    screen_positive: str
    steps: str
    screen: str
    mood: str


# ── Outline geometry ──────────────────────────────────────────


class Point(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: float
    y: float


class CubicSegment(BaseModel):
    """One cubic Bézier segment ending at ``end``."""

    model_config = ConfigDict(frozen=True)

    control1: Point
    control2: Point
    end: Point


class Outline(BaseModel):
    """A closed procedural curve: a start point followed by cubic segments."""

    model_config = ConfigDict(frozen=True)

    point_count: int
    smoothness: float
    tension_score: int
    center: Point
    base_radius: float
    start: Point
    segments: list[CubicSegment]

    @property
    def vertices(self) -> list[Point]:
        """Every emitted vertex, first to last (the last closes the curve)."""
        return [self.start, *(s.end for s in self.segments)]

    @property
    def is_closed(self) -> bool:
        return bool(self.segments) and self.segments[-1].end == self.start

    def to_svg_path(self) -> str:
        """Render as an SVG path ``d`` attribute (``M … C … Z``)."""
        parts = [f"M {_fmt_point(self.start)}"]
        for seg in self.segments:
            parts.append(
                f"C {_fmt_point(seg.control1)} {_fmt_point(seg.control2)} {_fmt_point(seg.end)}"
            )
        parts.append("Z")
        return " ".join(parts)


def _fmt_point(p: Point) -> str:
    return f"{_fmt(p.x)},{_fmt(p.y)}"


def _fmt(value: float) -> str:
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


class DashboardSnapshot(BaseModel):
    """Signals plus everything the dashboard shows, drawn from one derivation."""

    signals: SignalState
    derived: DerivedOutput
    captions: Captions
    tension_label: str
    vibe_label: str
    outline_path: str
