"""
OpenCV-backed drawing surfaces.

Two surfaces are layered for display: an opaque base surface holding the
mirrored camera passthrough, and a transparent overlay holding markers,
status text and the ink trail. Each is addressed on its own.
"""
from typing import Sequence, Tuple
import cv2
import numpy as np

Color = Tuple[int, int, int]  # BGR

FONT = cv2.FONT_HERSHEY_SIMPLEX
FONT_SCALE = 0.5
FONT_THICKNESS = 1


def _pt(point: Sequence[float]) -> Tuple[int, int]:
    return (int(round(point[0])), int(round(point[1])))


class Surface:
    """
    Fixed-size BGRA pixel canvas.

    Alpha is 0 wherever nothing has been drawn, so an overlay surface can be
    composited over the base surface.
    """

    def __init__(self, width: int, height: int):
        self._width = width
        self._height = height
        self._image = np.zeros((height, width, 4), dtype=np.uint8)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def image(self) -> np.ndarray:
        return self._image

    def clear(self) -> None:
        self._image[:] = 0

    def draw_marker(self, center: Sequence[float], radius: int, color: Color) -> None:
        """Filled circle."""
        cv2.circle(self._image, _pt(center), radius, (*color, 255), -1, cv2.LINE_AA)

    def draw_line(self, start: Sequence[float], end: Sequence[float], color: Color, width: int) -> None:
        cv2.line(self._image, _pt(start), _pt(end), (*color, 255), width, cv2.LINE_AA)

    def draw_text(self, text: str, origin: Sequence[float], color: Color) -> None:
        """Text with its baseline starting at origin."""
        cv2.putText(self._image, text, _pt(origin), FONT, FONT_SCALE, (*color, 255), FONT_THICKNESS, cv2.LINE_AA)

    def stroke_path(self, segments: Sequence[Sequence[Sequence[float]]], color: Color, width: int) -> None:
        """
        Stroke disjoint open polylines. Single-point segments draw nothing,
        same as a bare move-to.
        """
        polylines = [
            np.array([_pt(p) for p in segment], dtype=np.int32)
            for segment in segments
            if len(segment) > 1
        ]
        if polylines:
            cv2.polylines(self._image, polylines, False, (*color, 255), width, cv2.LINE_AA)

    def draw_frame(self, frame: np.ndarray, opacity: float = 1.0, mirror: bool = False) -> None:
        """
        Replace the surface with a BGR video frame, scaled to fit.

        The frame is dimmed by `opacity` over black, as a semi-transparent
        draw over a cleared canvas would look.
        """
        if frame.shape[1] != self._width or frame.shape[0] != self._height:
            frame = cv2.resize(frame, (self._width, self._height), interpolation=cv2.INTER_LINEAR)
        if mirror:
            frame = cv2.flip(frame, 1)
        if opacity < 1.0:
            frame = cv2.convertScaleAbs(frame, alpha=opacity)
        self._image[:, :, :3] = frame[:, :, :3]
        self._image[:, :, 3] = 255


def composite(base: Surface, overlay: Surface) -> np.ndarray:
    """
    Layer overlay on top of base.

    Returns:
        BGR image the size of the base surface.
    """
    alpha = overlay.image[:, :, 3:4].astype(np.float32) / 255.0
    out = base.image[:, :, :3].astype(np.float32) * (1.0 - alpha) + overlay.image[:, :, :3].astype(np.float32) * alpha
    return out.astype(np.uint8)
