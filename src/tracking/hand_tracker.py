"""
Camera capture and MediaPipe hand landmark detection using the Tasks API.

The camera and the landmarker are kept apart: the camera feeds both the
passthrough video and detection, while detection runs on its own cadence.
"""
import asyncio
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, List, NamedTuple
import threading
import time
import cv2
import numpy as np
import mediapipe as mp

from .config import (
    CameraConfig,
    ModelConfig,
    CAPTURE_WIDTH,
    CAPTURE_HEIGHT,
    CAPTURE_FPS,
    MODEL_URL,
)

# MediaPipe Tasks API imports
BaseOptions = mp.tasks.BaseOptions
HandLandmarker = mp.tasks.vision.HandLandmarker
HandLandmarkerOptions = mp.tasks.vision.HandLandmarkerOptions
VisionRunningMode = mp.tasks.vision.RunningMode


class TrackingError(Exception):
    """Base class for hand tracking failures."""


class VideoSourceError(TrackingError):
    """Camera could not be acquired."""


class ModelLoadError(TrackingError):
    """Landmark model could not be loaded."""


class Landmark(NamedTuple):
    """Normalized landmark: x/y in [0, 1], z is relative depth."""
    x: float
    y: float
    z: float


@dataclass
class HandLandmarks:
    """
    Landmarks of one detected hand at one instant.

    Attributes:
        landmarks: Ordered landmarks, 21 for a well-formed hand
        handedness: 'Left' or 'Right'
        confidence: Detection confidence 0-1
    """
    landmarks: List[Landmark]
    handedness: str = "Unknown"
    confidence: float = 0.0

    # MediaPipe landmark indices for convenience
    THUMB_TIP = 4
    INDEX_TIP = 8

    def get(self, index: int) -> Optional[Landmark]:
        """Get landmark by index, or None if the hand is missing it."""
        if 0 <= index < len(self.landmarks):
            return self.landmarks[index]
        return None

    @property
    def thumb_tip(self) -> Optional[Landmark]:
        return self.get(self.THUMB_TIP)

    @property
    def index_tip(self) -> Optional[Landmark]:
        return self.get(self.INDEX_TIP)

    def __len__(self) -> int:
        return len(self.landmarks)


class CameraSource:
    """
    OpenCV camera wrapper with a background capture thread.

    VideoCapture.read() blocks until the camera delivers a frame, so a
    thread pulls frames as fast as they come and read() only hands out the
    latest one. Frames are returned unmirrored; mirroring happens when
    drawing.
    """

    def __init__(self, config: CameraConfig):
        self._config = config
        self._cap: Optional[cv2.VideoCapture] = None
        self._latest_frame: Optional[np.ndarray] = None
        self._frame_lock = threading.Lock()
        self._capture_thread: Optional[threading.Thread] = None
        self._is_running = False

    def start(self) -> None:
        """
        Open the camera, request the capture resolution and start capturing.

        Raises:
            VideoSourceError: if the device cannot be opened.
        """
        if self._cap is not None:
            return

        cap = cv2.VideoCapture(self._config.device_id)
        if not cap.isOpened():
            cap.release()
            raise VideoSourceError(f"Could not open camera {self._config.device_id}")

        cap.set(cv2.CAP_PROP_FRAME_WIDTH, CAPTURE_WIDTH)
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, CAPTURE_HEIGHT)
        cap.set(cv2.CAP_PROP_FPS, CAPTURE_FPS)
        self._cap = cap

        self._is_running = True
        self._capture_thread = threading.Thread(target=self._capture_loop, daemon=True)
        self._capture_thread.start()

    def _capture_loop(self):
        """Background thread to pull camera frames as fast as possible."""
        cap = self._cap
        while self._is_running:
            ret, frame = cap.read()
            if not ret:
                time.sleep(0.01)  # No frame yet, don't spin
                continue
            with self._frame_lock:
                self._latest_frame = frame

    def stop(self) -> None:
        """Stop capturing and release the camera. Safe to call more than once."""
        self._is_running = False
        if self._capture_thread is not None:
            self._capture_thread.join(timeout=1.0)
            self._capture_thread = None

        if self._cap is not None:
            self._cap.release()
            self._cap = None

        with self._frame_lock:
            self._latest_frame = None

    def read(self) -> Optional[np.ndarray]:
        """Latest BGR frame, or None if none has arrived yet. Never blocks on the camera."""
        with self._frame_lock:
            return self._latest_frame


class HandLandmarkModel:
    """
    MediaPipe Hand Landmarker in VIDEO running mode.

    Inference is blocking, so it is pushed onto a single worker thread and
    awaited. The landmarker is not reentrant: only one detect() call may be
    in flight at a time.
    """

    # Default model path relative to project root
    DEFAULT_MODEL_PATH = Path(__file__).parent.parent.parent / "models" / "hand_landmarker.task"

    def __init__(self, config: ModelConfig):
        self._config = config
        self._model_path = Path(config.model_path) if config.model_path else self.DEFAULT_MODEL_PATH
        self._landmarker: Optional[HandLandmarker] = None
        self._executor: Optional[ThreadPoolExecutor] = None
        self._in_flight = False
        self._last_timestamp_ms: int = -1

    async def initialize(self) -> None:
        """
        Load the model asset and create the landmarker.

        Raises:
            ModelLoadError: if the asset is missing or MediaPipe rejects it.
        """
        if self._landmarker is not None:
            return

        if not self._model_path.exists():
            raise ModelLoadError(
                f"Model file not found: {self._model_path} (download from {MODEL_URL})"
            )

        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="landmarker")
        loop = asyncio.get_running_loop()
        try:
            self._landmarker = await loop.run_in_executor(self._executor, self._create_landmarker)
        except Exception as e:
            self._shutdown_executor()
            raise ModelLoadError(str(e)) from e
        self._last_timestamp_ms = -1

    def _create_landmarker(self) -> HandLandmarker:
        delegate = BaseOptions.Delegate.GPU if self._config.delegate.upper() == "GPU" else BaseOptions.Delegate.CPU
        options = HandLandmarkerOptions(
            base_options=BaseOptions(
                model_asset_path=str(self._model_path),
                delegate=delegate,
            ),
            running_mode=VisionRunningMode.VIDEO,
            num_hands=self._config.num_hands,
        )
        return HandLandmarker.create_from_options(options)

    async def detect(self, frame: np.ndarray, timestamp_ms: int) -> List[HandLandmarks]:
        """
        Detect hands in a BGR frame.

        Returns:
            Zero or more hands, in MediaPipe's order.
        """
        if self._landmarker is None:
            raise RuntimeError("HandLandmarkModel.detect() called before initialize()")
        if self._in_flight:
            raise RuntimeError("HandLandmarkModel.detect() is not reentrant")

        # VIDEO mode requires strictly increasing timestamps
        timestamp_ms = int(timestamp_ms)
        if timestamp_ms <= self._last_timestamp_ms:
            timestamp_ms = self._last_timestamp_ms + 1
        self._last_timestamp_ms = timestamp_ms

        self._in_flight = True
        try:
            loop = asyncio.get_running_loop()
            return await loop.run_in_executor(self._executor, self._detect_sync, frame, timestamp_ms)
        finally:
            self._in_flight = False

    def _detect_sync(self, frame: np.ndarray, timestamp_ms: int) -> List[HandLandmarks]:
        rgb_frame = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        rgb_frame.flags.writeable = False
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=rgb_frame)

        result = self._landmarker.detect_for_video(mp_image, timestamp_ms)
        if not result.hand_landmarks:
            return []

        hands = []
        for i, hand_landmarks in enumerate(result.hand_landmarks):
            handedness = result.handedness[i][0] if i < len(result.handedness) else None
            hands.append(HandLandmarks(
                landmarks=[Landmark(lm.x, lm.y, lm.z) for lm in hand_landmarks],
                handedness=handedness.category_name if handedness else "Unknown",
                confidence=handedness.score if handedness else 0.0,
            ))
        return hands

    def close(self) -> None:
        """Release the landmarker. Safe to call more than once."""
        # Let a running inference finish before the landmarker goes away
        self._shutdown_executor(wait=True)
        if self._landmarker is not None:
            self._landmarker.close()
            self._landmarker = None

    def _shutdown_executor(self, wait: bool = False) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=wait)
            self._executor = None


def monotonic_ms() -> int:
    """Millisecond clock used for detection throttling and model timestamps."""
    return int(time.monotonic() * 1000)
