"""
AirDraw Session Module

Frame scheduling and the per-session drawing pipeline.
"""
from .scheduler import FrameScheduler, RefreshSignal
from .session import DrawingSession, SessionState, SessionStatus

__all__ = [
    'FrameScheduler',
    'RefreshSignal',
    'DrawingSession',
    'SessionState',
    'SessionStatus',
]
