"""
Pinch detection from hand landmarks.
"""
from dataclasses import dataclass
from typing import Optional

from .config import PINCH_THRESHOLD
from .geometry import distance_3d
from .hand_tracker import HandLandmarks


@dataclass(frozen=True)
class GestureState:
    """Pinch state of one hand and the thumb-index distance behind it."""
    pinching: bool
    distance: float = 0.0

    @property
    def label(self) -> str:
        return "PINCHING" if self.pinching else "OPEN"


class PinchClassifier:
    """
    Classifies a hand as pinching when thumb tip and index tip are close.

    Classification is instantaneous: no smoothing, no hysteresis, no memory
    of previous frames.
    """

    def __init__(self, threshold: float = PINCH_THRESHOLD):
        self._threshold = threshold

    def is_pinching(self, distance: float) -> bool:
        return distance < self._threshold

    def classify(self, hand: HandLandmarks) -> Optional[GestureState]:
        """
        Classify a single hand.

        Returns:
            GestureState, or None when the hand lacks the thumb or index tip.
        """
        thumb = hand.thumb_tip
        index = hand.index_tip
        if thumb is None or index is None:
            return None

        distance = distance_3d(thumb, index)
        return GestureState(pinching=self.is_pinching(distance), distance=distance)
