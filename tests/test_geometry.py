import pytest
from tracking.geometry import DrawPoint, distance_3d, distance_2d, to_draw_point
from tracking.hand_tracker import Landmark


def test_distance_is_symmetric():
    a = Landmark(0.1, 0.2, 0.3)
    b = Landmark(0.7, 0.4, -0.2)
    assert distance_3d(a, b) == distance_3d(b, a)


def test_distance_to_self_is_zero():
    a = Landmark(0.25, 0.75, 0.1)
    assert distance_3d(a, a) == 0


def test_distance_3d_uses_depth():
    assert distance_3d((0, 0, 0), (3, 0, 4)) == pytest.approx(5.0)


def test_distance_2d_ignores_depth():
    assert distance_2d((0, 0, 10), (3, 4, -10)) == pytest.approx(5.0)
    assert distance_2d(DrawPoint(0, 0), DrawPoint(6, 8)) == pytest.approx(10.0)


def test_draw_point_is_mirrored():
    point = to_draw_point(Landmark(0.3, 0.5, 0.0), 1000, 800)
    assert point.x == pytest.approx(700)
    assert point.y == pytest.approx(400)


def test_draw_point_stays_on_surface():
    for x in (0.0, 0.5, 1.0):
        for y in (0.0, 0.5, 1.0):
            p = to_draw_point(Landmark(x, y, 0.0), 1920, 1280)
            assert 0 <= p.x <= 1920
            assert 0 <= p.y <= 1280
