"""
AirDraw UI Module

PyQt5 window for the drawing session.
"""
from .overlay_window import DrawingWindow

__all__ = [
    'DrawingWindow',
]
