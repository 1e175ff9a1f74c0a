import pytest
from tracking.hand_tracker import HandLandmarks, Landmark


@pytest.fixture
def make_hand():
    """Build a 21-landmark hand with the given thumb and index tips."""
    def _make(thumb=(0.5, 0.5, 0.0), index=(0.6, 0.5, 0.0), count=21):
        landmarks = [Landmark(0.5, 0.6, 0.0) for _ in range(count)]
        if count > HandLandmarks.THUMB_TIP:
            landmarks[HandLandmarks.THUMB_TIP] = Landmark(*thumb)
        if count > HandLandmarks.INDEX_TIP:
            landmarks[HandLandmarks.INDEX_TIP] = Landmark(*index)
        return HandLandmarks(landmarks=landmarks, handedness="Right", confidence=0.9)
    return _make
