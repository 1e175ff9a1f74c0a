"""
Background worker running the drawing session.
Runs the session's asyncio loop in a separate QThread to avoid blocking the UI.
"""
import asyncio
from typing import Optional
from PyQt5.QtCore import QObject, pyqtSignal

from tracking.config import Config
from tracking.hand_tracker import CameraSource, HandLandmarkModel

from .scheduler import RefreshSignal
from .session import DrawingSession, SessionStatus


class DrawingWorker(QObject):
    """
    Worker class that owns the drawing session and its event loop.
    Emits signals for UI updates.
    """
    # Signals
    frame_ready = pyqtSignal(object)      # Emits composited BGR numpy array
    pinch_changed = pyqtSignal(bool)
    status_changed = pyqtSignal(str, str)  # Status name, error message
    error = pyqtSignal(str)
    finished = pyqtSignal()

    def __init__(self, config: Config, parent=None):
        super().__init__(parent)
        self._config = config
        self._session: Optional[DrawingSession] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._stop_requested = False

    def _create_session(self) -> DrawingSession:
        session = DrawingSession(
            CameraSource(self._config.camera),
            HandLandmarkModel(self._config.model),
            refresh=RefreshSignal(self._config.display.refresh_hz).wait,
        )
        session.on_frame = self.frame_ready.emit
        session.on_pinch_changed = self.pinch_changed.emit
        session.on_status = lambda status, message: self.status_changed.emit(status.name, message)
        return session

    def start_process(self):
        """Main processing loop. Runs in worker thread until stop_process()."""
        if self._stop_requested:
            self.finished.emit()
            return

        self._loop = asyncio.new_event_loop()
        self._session = self._create_session()
        if self._stop_requested:
            # stop_process() ran before the session existed
            self._session.stop()
        try:
            self._loop.run_until_complete(self._session.run())
            if self._session.state.status == SessionStatus.FAILED:
                self.error.emit(self._session.state.error)
        except Exception as e:
            self.error.emit(f"Worker Exception: {str(e)}")
        finally:
            self._session.stop()
            self._loop.close()
            self._loop = None
            self.finished.emit()

    def stop_process(self):
        """Signal the session to stop. Safe to call from any thread, before or after start."""
        self._stop_requested = True
        loop, session = self._loop, self._session
        if loop is None or session is None or loop.is_closed():
            return
        loop.call_soon_threadsafe(session.stop)
