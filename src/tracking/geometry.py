"""
Distance and coordinate helpers shared by gesture detection and drawing.
"""
import math
from typing import NamedTuple, Sequence


class DrawPoint(NamedTuple):
    """A point in surface pixel coordinates."""
    x: float
    y: float


def distance_3d(a: Sequence[float], b: Sequence[float]) -> float:
    """Euclidean distance between two (x, y, z) points."""
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    dz = a[2] - b[2]
    return math.sqrt(dx*dx + dy*dy + dz*dz)


def distance_2d(a: Sequence[float], b: Sequence[float]) -> float:
    """Planar distance between two points (z ignored)."""
    return distance_3d((a[0], a[1], 0.0), (b[0], b[1], 0.0))


def to_draw_point(landmark: Sequence[float], width: int, height: int) -> DrawPoint:
    """
    Map a normalized landmark to surface pixels.

    The x axis is mirrored to match the front-facing camera view, so every
    landmark-derived point must go through here.
    """
    return DrawPoint((1.0 - landmark[0]) * width, landmark[1] * height)
