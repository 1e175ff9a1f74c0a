"""
AirDraw Drawing Module

Drawing surfaces and overlay rendering with OpenCV.
"""
from .surface import Surface, composite
from .overlay_renderer import OverlayRenderer

__all__ = [
    'Surface',
    'composite',
    'OverlayRenderer',
]
