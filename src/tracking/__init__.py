"""
AirDraw Tracking Module

Hand tracking, pinch detection and trail smoothing using MediaPipe.
"""
from .config import Config, load_config
from .geometry import DrawPoint, distance_3d, distance_2d, to_draw_point
from .hand_tracker import (
    CameraSource,
    HandLandmarkModel,
    HandLandmarks,
    Landmark,
    TrackingError,
    VideoSourceError,
    ModelLoadError,
)
from .gesture_classifier import PinchClassifier, GestureState
from .trail_smoother import TrailSmoother, smooth, segment_strokes

__all__ = [
    'Config',
    'load_config',
    'DrawPoint',
    'distance_3d',
    'distance_2d',
    'to_draw_point',
    'CameraSource',
    'HandLandmarkModel',
    'HandLandmarks',
    'Landmark',
    'TrackingError',
    'VideoSourceError',
    'ModelLoadError',
    'PinchClassifier',
    'GestureState',
    'TrailSmoother',
    'smooth',
    'segment_strokes',
]
