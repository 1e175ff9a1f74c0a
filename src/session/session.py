"""
Drawing session: owns the trail and gesture state and wires the camera,
the landmark model and the renderer into the frame scheduler.
"""
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Awaitable, Callable, List, Optional
import numpy as np

from tracking.config import CAPTURE_WIDTH, CAPTURE_HEIGHT, PASSTHROUGH_OPACITY, DETECTION_INTERVAL_MS
from tracking.geometry import to_draw_point
from tracking.gesture_classifier import GestureState, PinchClassifier
from tracking.hand_tracker import HandLandmarks, monotonic_ms
from tracking.trail_smoother import TrailSmoother
from drawing.overlay_renderer import OverlayRenderer
from drawing.surface import Surface, composite

from .scheduler import FrameScheduler


class SessionStatus(Enum):
    """Lifecycle of a drawing session."""
    LOADING = auto()
    READY = auto()
    FAILED = auto()
    STOPPED = auto()


@dataclass
class SessionState:
    """
    Everything a session accumulates across loop ticks.

    Only the detection loop mutates the trail and gesture fields.
    """
    trail: TrailSmoother = field(default_factory=TrailSmoother)
    hands: List[HandLandmarks] = field(default_factory=list)
    gesture: Optional[GestureState] = None
    pinching: bool = False
    status: SessionStatus = SessionStatus.LOADING
    error: str = ""


class DrawingSession:
    """
    One hand-drawing session, from camera start to teardown.

    The video source needs start(), stop() and a non-blocking read(); the model
    needs async initialize(), async detect(frame, timestamp_ms) and close().
    """

    def __init__(
        self,
        video,
        model,
        width: int = CAPTURE_WIDTH,
        height: int = CAPTURE_HEIGHT,
        refresh: Optional[Callable[[], Awaitable[None]]] = None,
        clock: Callable[[], int] = monotonic_ms,
        interval_ms: int = DETECTION_INTERVAL_MS,
    ):
        self._video = video
        self._model = model
        self._classifier = PinchClassifier()
        self._renderer = OverlayRenderer(self._classifier)
        self._refresh = refresh
        self._clock = clock
        self._interval_ms = interval_ms

        self.state = SessionState()
        self.base_surface = Surface(width, height)
        self.overlay_surface = Surface(width, height)
        self._scheduler: Optional[FrameScheduler] = None
        self._stop_requested = False

        # Optional listeners
        self.on_frame: Optional[Callable[[np.ndarray], None]] = None
        self.on_pinch_changed: Optional[Callable[[bool], None]] = None
        self.on_status: Optional[Callable[[SessionStatus, str], None]] = None

    async def start(self) -> bool:
        """
        Acquire the camera, load the model and start both loops.

        Returns:
            True if the session is running. On failure the state is FAILED
            with the error message set; there is no retry.
        """
        if self._stop_requested:
            return False
        if self._scheduler is not None:
            return True

        self._set_status(SessionStatus.LOADING)
        try:
            self._video.start()
            await self._model.initialize()
        except Exception as e:
            self._video.stop()
            self._model.close()
            if self._stop_requested:
                return False
            print(f"ERROR: Failed to initialize hand tracking: {e}")
            self._set_status(SessionStatus.FAILED, f"Failed to initialize hand tracking: {e}")
            return False

        # stop() may have run while the model was loading
        if self._stop_requested:
            self._video.stop()
            self._model.close()
            return False

        kwargs = {"interval_ms": self._interval_ms, "clock": self._clock}
        if self._refresh is not None:
            kwargs["refresh"] = self._refresh
        self._scheduler = FrameScheduler(self.passthrough_tick, self.detect_tick, **kwargs)
        self._scheduler.start()
        self._set_status(SessionStatus.READY)
        return True

    async def run(self) -> None:
        """Start the session and wait until it is stopped."""
        if not await self.start():
            return
        try:
            await self._scheduler.wait()
        finally:
            self.stop()

    def passthrough_tick(self) -> None:
        """Copy the current camera frame onto the base surface, mirrored and dimmed."""
        frame = self._video.read()
        if frame is None:
            return
        self.base_surface.draw_frame(frame, opacity=PASSTHROUGH_OPACITY, mirror=True)
        if self.on_frame is not None:
            self.on_frame(self.composite())

    async def detect_tick(self, timestamp_ms: int) -> None:
        """Detect, classify, capture and repaint the overlay."""
        frame = self._video.read()
        if frame is None:
            return

        try:
            hands = await self._model.detect(frame, timestamp_ms)
        except Exception as e:
            # Transient: skip this cycle and try again on the next one
            print(f"Inference error: {e}")
            return

        self.process_hands(hands)

    def process_hands(self, hands: List[HandLandmarks]) -> None:
        """Classify each hand, extend the trail and render the overlay."""
        state = self.state
        state.hands = list(hands)
        w, h = self.overlay_surface.width, self.overlay_surface.height

        for hand in hands:
            gesture = self._classifier.classify(hand)
            if gesture is None:
                continue
            state.gesture = gesture
            state.trail.maybe_capture(gesture, to_draw_point(hand.index_tip, w, h))
            if gesture.pinching != state.pinching:
                state.pinching = gesture.pinching
                if self.on_pinch_changed is not None:
                    self.on_pinch_changed(state.pinching)

        self._renderer.render(state.hands, state.trail, self.overlay_surface)

    def composite(self) -> np.ndarray:
        return composite(self.base_surface, self.overlay_surface)

    def stop(self) -> None:
        """Cancel both loops and release the camera and model. Idempotent."""
        if self._stop_requested:
            return
        self._stop_requested = True
        if self._scheduler is not None:
            self._scheduler.cancel()
        self._video.stop()
        self._model.close()
        if self.state.status != SessionStatus.FAILED:
            self._set_status(SessionStatus.STOPPED)

    def _set_status(self, status: SessionStatus, error: str = "") -> None:
        self.state.status = status
        self.state.error = error
        if self.on_status is not None:
            self.on_status(status, error)

    @property
    def scheduler(self) -> Optional[FrameScheduler]:
        return self._scheduler
