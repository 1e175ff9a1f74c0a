"""
Ink trail capture, smoothing and stroke segmentation.
"""
from typing import List, Sequence

from .config import SMOOTHING_FACTOR, STROKE_BREAK_DISTANCE
from .geometry import DrawPoint, distance_2d
from .gesture_classifier import GestureState


def _smooth_step(previous: DrawPoint, current: DrawPoint, alpha: float) -> DrawPoint:
    return DrawPoint(
        previous.x + alpha * (current.x - previous.x),
        previous.y + alpha * (current.y - previous.y),
    )


def smooth(points: Sequence[DrawPoint], alpha: float = SMOOTHING_FACTOR) -> List[DrawPoint]:
    """
    Exponentially smooth a trail.

    The first point is kept as is; every later point moves from the previous
    smoothed point towards the raw sample by `alpha`. High alpha means light
    smoothing and little lag.
    """
    smoothed: List[DrawPoint] = []
    for point in points:
        point = DrawPoint(*point)
        if not smoothed:
            smoothed.append(point)
        else:
            smoothed.append(_smooth_step(smoothed[-1], point, alpha))
    return smoothed


def segment_strokes(
    points: Sequence[DrawPoint],
    break_distance: float = STROKE_BREAK_DISTANCE,
) -> List[List[DrawPoint]]:
    """
    Split a trail into disjoint strokes.

    A new stroke starts wherever two consecutive points are more than
    `break_distance` apart, which is where the pinch was released and
    picked up again somewhere else.
    """
    strokes: List[List[DrawPoint]] = []
    for i, point in enumerate(points):
        if i == 0 or distance_2d(points[i - 1], point) > break_distance:
            strokes.append([point])
        else:
            strokes[-1].append(point)
    return strokes


class TrailSmoother:
    """
    Accumulates the raw trail while pinching and serves its smoothed form.

    The raw trail is append-only, so the smoothed prefix is cached and only
    extended with new points. The result is always equal to smooth(raw).
    """

    def __init__(self, alpha: float = SMOOTHING_FACTOR):
        self._alpha = alpha
        self._raw: List[DrawPoint] = []
        self._smoothed: List[DrawPoint] = []

    def maybe_capture(self, gesture: GestureState, point: DrawPoint) -> bool:
        """
        Append point to the raw trail if the hand is pinching.

        Returns:
            True if the point was captured.
        """
        if not gesture.pinching:
            return False
        self._raw.append(DrawPoint(*point))
        return True

    def smoothed(self) -> List[DrawPoint]:
        """Smoothed trail, same length as the raw trail."""
        for point in self._raw[len(self._smoothed):]:
            if not self._smoothed:
                self._smoothed.append(point)
            else:
                self._smoothed.append(_smooth_step(self._smoothed[-1], point, self._alpha))
        return list(self._smoothed)

    def strokes(self, break_distance: float = STROKE_BREAK_DISTANCE) -> List[List[DrawPoint]]:
        return segment_strokes(self.smoothed(), break_distance)

    def clear(self) -> None:
        """Drop the whole trail. Only used when a session is torn down."""
        self._raw.clear()
        self._smoothed.clear()

    @property
    def raw_points(self) -> List[DrawPoint]:
        return list(self._raw)

    def __len__(self) -> int:
        return len(self._raw)
