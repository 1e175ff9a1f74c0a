"""
Overlay rendering: live finger markers, pinch status and the ink trail.
"""
from typing import Optional, Sequence

from tracking.config import (
    MARKER_RADIUS,
    LINE_WIDTH,
    TRAIL_WIDTH,
    STROKE_BREAK_DISTANCE,
    THUMB_COLOR,
    INDEX_COLOR,
    PINCH_COLOR,
    OPEN_COLOR,
    TRAIL_COLOR,
)
from tracking.geometry import to_draw_point
from tracking.gesture_classifier import PinchClassifier
from tracking.hand_tracker import HandLandmarks
from tracking.trail_smoother import TrailSmoother

STATUS_ORIGIN = (10, 20)
DISTANCE_ORIGIN = (10, 40)


class OverlayRenderer:
    """
    Repaints the whole overlay once per detection cycle.

    Works against any surface exposing clear, draw_marker, draw_line,
    draw_text and stroke_path (see drawing.surface.Surface).
    """

    def __init__(
        self,
        classifier: Optional[PinchClassifier] = None,
        break_distance: float = STROKE_BREAK_DISTANCE,
    ):
        self._classifier = classifier or PinchClassifier()
        self._break_distance = break_distance

    def render(self, hands: Sequence[HandLandmarks], trail: TrailSmoother, surface) -> None:
        surface.clear()

        for hand in hands:
            self._render_hand(hand, surface)

        # The trail is drawn even when no hand is in view
        surface.stroke_path(trail.strokes(self._break_distance), TRAIL_COLOR, TRAIL_WIDTH)

    def _render_hand(self, hand: HandLandmarks, surface) -> None:
        gesture = self._classifier.classify(hand)
        if gesture is None:
            return

        w, h = surface.width, surface.height
        thumb = to_draw_point(hand.thumb_tip, w, h)
        index = to_draw_point(hand.index_tip, w, h)
        color = PINCH_COLOR if gesture.pinching else OPEN_COLOR

        surface.draw_marker(thumb, MARKER_RADIUS, THUMB_COLOR)
        surface.draw_marker(index, MARKER_RADIUS, INDEX_COLOR)
        surface.draw_line(thumb, index, color, LINE_WIDTH)

        surface.draw_text(f"Status: {gesture.label}", STATUS_ORIGIN, color)
        surface.draw_text(f"Distance: {gesture.distance:.3f}", DISTANCE_ORIGIN, color)
