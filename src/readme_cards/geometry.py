"""Polar geometry for the doughnut layout.

Angles are in degrees. SVG's y axis points down, so a positive angle turns
clockwise on screen.
"""

from __future__ import annotations

import math
from typing import NamedTuple


class Point(NamedTuple):
    x: float
    y: float


class Polar(NamedTuple):
    radius: float
    angle: float


def degrees_to_radians(angle: float) -> float:
    return angle * (math.pi / 180.0)


def radians_to_degrees(angle: float) -> float:
    return angle / (math.pi / 180.0)


def polar_to_cartesian(cx: float, cy: float, radius: float, angle: float) -> Point:
    rads = degrees_to_radians(angle)
    return Point(cx + radius * math.cos(rads), cy + radius * math.sin(rads))


def cartesian_to_polar(cx: float, cy: float, x: float, y: float) -> Polar:
    radius = math.sqrt((x - cx) ** 2 + (y - cy) ** 2)
    angle = radians_to_degrees(math.atan2(y - cy, x - cx))
    if angle < 0:
        angle += 360
    return Polar(radius, angle)


def format_number(value: float) -> str:
    """Format a number for an SVG attribute, without a trailing ``.0``."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def describe_arc(
    cx: float,
    cy: float,
    radius: float,
    start_angle: float,
    end_angle: float,
) -> tuple[str, int]:
    """Build the path data of an arc between two angles.

    The arc is drawn from ``end_angle`` back to ``start_angle``, rotated 90
    degrees counter-clockwise so that 0 sits at 12 o'clock. Returns the path
    data and the large-arc flag.
    """
    start = polar_to_cartesian(cx, cy, radius, end_angle - 90)
    end = polar_to_cartesian(cx, cy, radius, start_angle - 90)
    large_arc = 0 if end_angle - start_angle <= 180 else 1
    r = format_number(radius)
    d = (
        f"M {format_number(start.x)} {format_number(start.y)} "
        f"A {r} {r} 0 {large_arc} 0 {format_number(end.x)} {format_number(end.y)}"
    )
    return d, large_arc
