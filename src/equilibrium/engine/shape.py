"""Procedural outline generator and SVG export.

The outline is a ring of ``point_count`` vertices whose radii are perturbed
by a sine pattern.  Lower smoothness means larger perturbation; the tension
score shifts the phase of the pattern.  At smoothness 1.0 the perturbation
vanishes and the outline is a near-circle.
"""

from __future__ import annotations

import math

from equilibrium.models import CubicSegment, Outline, Point

DEFAULT_POINT_COUNT = 8
DEFAULT_CENTER = (150.0, 150.0)
DEFAULT_BASE_RADIUS = 80.0

_NOISE_FREQUENCY = 3
_NOISE_PHASE_SCALE = 5.0
_NOISE_AMPLITUDE = 25.0
_CONTROL_OFFSET = 20.0

_CANVAS_SIZE = 300

# (vibe floor, start colour, end colour), highest floor first
_VIBE_GRADIENTS: list[tuple[int, str, str]] = [
    (75, "#34d399", "#14b8a6"),
    (50, "#fbbf24", "#f97316"),
    (25, "#fb923c", "#f87171"),
    (0, "#f87171", "#dc2626"),
]


def _radius(angle: float, tension_score: int, smoothness: float, base_radius: float) -> float:
    noise = (
        math.sin(angle * _NOISE_FREQUENCY + tension_score / 100 * _NOISE_PHASE_SCALE)
        * (1 - smoothness)
        * _NOISE_AMPLITUDE
    )
    return base_radius + noise


def _polar(cx: float, cy: float, angle: float, radius: float) -> Point:
    return Point(x=cx + math.cos(angle) * radius, y=cy + math.sin(angle) * radius)


def generate_outline(
    tension_score: int,
    smoothness: float,
    point_count: int = DEFAULT_POINT_COUNT,
    center: tuple[float, float] = DEFAULT_CENTER,
    base_radius: float = DEFAULT_BASE_RADIUS,
) -> Outline:
    """Build the closed outline for the given tension and smoothness.

    Segment *i* joins vertex *i-1* to vertex *i*.  Its first control point
    sits 20 units outside vertex *i-1* along that vertex's radius, its second
    20 units inside vertex *i*.  The final vertex wraps onto vertex 0, so the
    first and last emitted points are identical.
    """
    if point_count < 1:
        raise ValueError("point_count must be at least 1")

    cx, cy = center
    angles = [(i / point_count) * math.pi * 2 for i in range(point_count)]
    radii = [_radius(a, tension_score, smoothness, base_radius) for a in angles]

    segments: list[CubicSegment] = []
    for i in range(1, point_count + 1):
        prev = i - 1
        cur = i % point_count
        segments.append(
            CubicSegment(
                control1=_polar(cx, cy, angles[prev], radii[prev] + _CONTROL_OFFSET),
                control2=_polar(cx, cy, angles[cur], radii[cur] - _CONTROL_OFFSET),
                end=_polar(cx, cy, angles[cur], radii[cur]),
            )
        )

    return Outline(
        point_count=point_count,
        smoothness=smoothness,
        tension_score=tension_score,
        center=Point(x=cx, y=cy),
        base_radius=base_radius,
        start=_polar(cx, cy, angles[0], radii[0]),
        segments=segments,
    )


def vibe_gradient(vibe_score: int) -> tuple[str, str]:
    """Return the (start, end) gradient colours for a vibe score."""
    for floor, start, end in _VIBE_GRADIENTS:
        if vibe_score >= floor:
            return start, end
    return _VIBE_GRADIENTS[-1][1], _VIBE_GRADIENTS[-1][2]


def render_svg(outline: Outline, vibe_score: int) -> str:
    """Render *outline* as a standalone SVG document tinted by *vibe_score*."""
    start, end = vibe_gradient(vibe_score)
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{_CANVAS_SIZE}" height="{_CANVAS_SIZE}" '
        f'viewBox="0 0 {_CANVAS_SIZE} {_CANVAS_SIZE}">'
        '<defs><linearGradient id="grad" x1="0%" y1="0%" x2="100%" y2="100%">'
        f'<stop offset="0%" stop-color="{start}"/>'
        f'<stop offset="100%" stop-color="{end}"/>'
        "</linearGradient></defs>"
        f'<path d="{outline.to_svg_path()}" fill="url(#grad)" fill-opacity="0.3" '
        'stroke="url(#grad)" stroke-width="2"/>'
        "</svg>"
    )
