import pytest
from drawing.overlay_renderer import OverlayRenderer
from tracking.config import (
    MARKER_RADIUS,
    LINE_WIDTH,
    TRAIL_WIDTH,
    THUMB_COLOR,
    INDEX_COLOR,
    PINCH_COLOR,
    OPEN_COLOR,
    TRAIL_COLOR,
)
from tracking.geometry import DrawPoint
from tracking.gesture_classifier import GestureState
from tracking.trail_smoother import TrailSmoother


class RecordingSurface:
    """Surface stand-in that records every draw call."""
    width = 1000
    height = 500

    def __init__(self):
        self.calls = []

    def clear(self):
        self.calls.append(("clear",))

    def draw_marker(self, center, radius, color):
        self.calls.append(("marker", tuple(center), radius, color))

    def draw_line(self, start, end, color, width):
        self.calls.append(("line", tuple(start), tuple(end), color, width))

    def draw_text(self, text, origin, color):
        self.calls.append(("text", text, tuple(origin), color))

    def stroke_path(self, segments, color, width):
        self.calls.append(("path", [list(s) for s in segments], color, width))

    def of(self, kind):
        return [c for c in self.calls if c[0] == kind]


@pytest.fixture
def renderer():
    return OverlayRenderer()


@pytest.fixture
def surface():
    return RecordingSurface()


def test_clears_first(renderer, surface, make_hand):
    renderer.render([make_hand()], TrailSmoother(), surface)
    assert surface.calls[0] == ("clear",)


def test_no_hands_still_draws_trail(renderer, surface):
    trail = TrailSmoother()
    trail.maybe_capture(GestureState(True), DrawPoint(10, 10))
    trail.maybe_capture(GestureState(True), DrawPoint(20, 10))

    renderer.render([], trail, surface)

    assert surface.of("marker") == []
    assert surface.of("text") == []
    paths = surface.of("path")
    assert len(paths) == 1
    assert paths[0][2] == TRAIL_COLOR
    assert paths[0][3] == TRAIL_WIDTH
    assert len(paths[0][1]) == 1


def test_pinching_hand(renderer, surface, make_hand):
    hand = make_hand(thumb=(0.5, 0.5, 0.0), index=(0.52, 0.5, 0.0))
    renderer.render([hand], TrailSmoother(), surface)

    thumb_marker, index_marker = surface.of("marker")
    assert thumb_marker[1] == pytest.approx((500.0, 250.0))
    assert thumb_marker[2:] == (MARKER_RADIUS, THUMB_COLOR)
    assert index_marker[1] == pytest.approx((480.0, 250.0))
    assert index_marker[2:] == (MARKER_RADIUS, INDEX_COLOR)

    (line,) = surface.of("line")
    assert line[3:] == (PINCH_COLOR, LINE_WIDTH)

    status, distance = surface.of("text")
    assert status[1] == "Status: PINCHING"
    assert distance[1] == "Distance: 0.020"
    assert status[2] == (10, 20)
    assert distance[2] == (10, 40)


def test_open_hand_uses_open_color(renderer, surface, make_hand):
    hand = make_hand(thumb=(0.3, 0.5, 0.0), index=(0.6, 0.5, 0.0))
    renderer.render([hand], TrailSmoother(), surface)

    (line,) = surface.of("line")
    assert line[3] == OPEN_COLOR
    assert surface.of("text")[0][1] == "Status: OPEN"


def test_malformed_hand_draws_nothing(renderer, surface, make_hand):
    renderer.render([make_hand(count=6)], TrailSmoother(), surface)

    assert surface.of("marker") == []
    assert surface.of("line") == []
    assert len(surface.of("path")) == 1


def test_trail_is_segmented_on_jumps(renderer, surface):
    trail = TrailSmoother(alpha=1.0)  # No smoothing, so distances stay exact
    for x in (0, 10, 210, 220):
        trail.maybe_capture(GestureState(True), DrawPoint(x, 100))

    renderer.render([], trail, surface)

    (path,) = surface.of("path")
    segments = path[1]
    assert len(segments) == 2
    assert [p.x for p in segments[0]] == [0, 10]
    assert [p.x for p in segments[1]] == [210, 220]


def test_trail_is_drawn_smoothed(renderer, surface):
    trail = TrailSmoother()
    trail.maybe_capture(GestureState(True), DrawPoint(0, 0))
    trail.maybe_capture(GestureState(True), DrawPoint(50, 0))

    renderer.render([], trail, surface)

    (path,) = surface.of("path")
    assert path[1][0][1].x == pytest.approx(40.0)
