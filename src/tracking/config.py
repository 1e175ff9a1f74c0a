"""
Config loader for AirDraw.
Loads YAML configuration with dataclass validation.

Drawing and detection constants are fixed and live at module level;
only device/model/display settings come from the config file.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import yaml


# Capture request
CAPTURE_WIDTH = 1920
CAPTURE_HEIGHT = 1280
CAPTURE_FPS = 30

# Detection cadence and gesture thresholds
DETECTION_INTERVAL_MS = 100
PINCH_THRESHOLD = 0.05      # Normalized landmark units, not pixels
SMOOTHING_FACTOR = 0.8
STROKE_BREAK_DISTANCE = 75  # Pixels

# Overlay drawing
MARKER_RADIUS = 6
LINE_WIDTH = 2
TRAIL_WIDTH = 6
PASSTHROUGH_OPACITY = 0.5

# Colors (BGR, as OpenCV expects)
THUMB_COLOR = (0, 255, 0)       # #00FF00
INDEX_COLOR = (0, 0, 255)       # #FF0000
PINCH_COLOR = (0, 255, 255)     # #FFFF00
OPEN_COLOR = (255, 255, 255)    # #FFFFFF
TRAIL_COLOR = (255, 0, 0)       # #0000FF

MODEL_URL = (
    "https://storage.googleapis.com/mediapipe-models/hand_landmarker/"
    "hand_landmarker/float16/1/hand_landmarker.task"
)


@dataclass
class CameraConfig:
    device_id: int = 0


@dataclass
class ModelConfig:
    model_path: Optional[str] = None  # Defaults to models/hand_landmarker.task
    num_hands: int = 1
    delegate: str = "CPU"


@dataclass
class DisplayConfig:
    refresh_hz: float = 60.0
    window_title: str = "AirDraw"


@dataclass
class Config:
    camera: CameraConfig = field(default_factory=CameraConfig)
    model: ModelConfig = field(default_factory=ModelConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)


def _dict_to_dataclass(cls, data: dict):
    """Convert a dict to a dataclass, ignoring unknown keys."""
    if data is None:
        return cls()
    field_names = {f.name for f in cls.__dataclass_fields__.values()}
    filtered = {k: v for k, v in data.items() if k in field_names}
    return cls(**filtered)


def load_config(config_path: Optional[Path] = None) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses default config.yaml
                    in project root.

    Returns:
        Config dataclass with all settings.
    """
    if config_path is None:
        config_path = Path(__file__).parent.parent.parent / "config.yaml"

    config_path = Path(config_path)

    if not config_path.exists():
        return Config()

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f) or {}

    return Config(
        camera=_dict_to_dataclass(CameraConfig, data.get('camera')),
        model=_dict_to_dataclass(ModelConfig, data.get('model')),
        display=_dict_to_dataclass(DisplayConfig, data.get('display')),
    )
