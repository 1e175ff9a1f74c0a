import numpy as np
import pytest
from drawing.surface import Surface, composite


@pytest.fixture
def surface():
    return Surface(120, 80)


def test_new_surface_is_transparent(surface):
    assert surface.image.shape == (80, 120, 4)
    assert not surface.image.any()


def test_marker_and_clear(surface):
    surface.draw_marker((60, 40), 6, (0, 255, 0))
    assert tuple(surface.image[40, 60]) == (0, 255, 0, 255)

    surface.clear()
    assert not surface.image.any()


def test_line_and_text_draw_pixels(surface):
    surface.draw_line((10, 10), (100, 10), (255, 255, 255), 2)
    assert surface.image[10, 50, 3] > 0

    surface.clear()
    surface.draw_text("Status: OPEN", (10, 20), (255, 255, 255))
    assert surface.image[:, :, 3].any()


def test_single_point_segments_draw_nothing(surface):
    surface.stroke_path([[(10, 10)], [(50, 50)]], (255, 0, 0), 6)
    assert not surface.image.any()


def test_stroke_path_leaves_gap_between_segments(surface):
    surface.stroke_path([[(5, 40), (30, 40)], [(90, 40), (115, 40)]], (255, 0, 0), 6)

    assert surface.image[40, 20, 3] > 0
    assert surface.image[40, 100, 3] > 0
    assert surface.image[40, 60, 3] == 0


def test_draw_frame_mirrors_and_dims(surface):
    frame = np.zeros((80, 120, 3), dtype=np.uint8)
    frame[:, :10] = 255  # Bright left edge

    surface.draw_frame(frame, opacity=0.5, mirror=True)

    assert surface.image[40, 115, 0] in (127, 128)
    assert surface.image[40, 5, 0] == 0
    assert surface.image[:, :, 3].min() == 255


def test_draw_frame_scales_to_surface(surface):
    frame = np.full((40, 60, 3), 200, dtype=np.uint8)
    surface.draw_frame(frame)
    assert surface.image[79, 119, 0] == 200


def test_composite_layers_overlay_on_base():
    base = Surface(20, 20)
    overlay = Surface(20, 20)
    base.draw_frame(np.full((20, 20, 3), 50, dtype=np.uint8))
    overlay.draw_marker((10, 10), 3, (0, 0, 255))

    out = composite(base, overlay)

    assert out.shape == (20, 20, 3)
    assert tuple(out[10, 10]) == (0, 0, 255)
    assert tuple(out[0, 0]) == (50, 50, 50)
