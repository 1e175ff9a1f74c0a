"""
Drawing window - shows the composited camera and ink overlay.
"""
from PyQt5.QtWidgets import QMainWindow, QWidget, QVBoxLayout, QStackedLayout, QLabel
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QImage, QPixmap
import numpy as np


class DrawingWindow(QMainWindow):
    """
    Main window for a drawing session.

    Features:
    - Live composited frame (mirrored camera + overlay)
    - Loading / error banner over the frame
    - Pinch indicator
    """

    LOADING_TEXT = "Loading hand tracking..."

    def __init__(self, title: str = "AirDraw", parent=None):
        super().__init__(parent)
        self.setWindowTitle(title)
        self.setObjectName("DrawingWindow")
        self._pinching = False
        self._setup_ui()
        self.set_status("LOADING", "")

    def _setup_ui(self):
        """Build the UI."""
        central = QWidget()
        layout = QVBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)
        self.setCentralWidget(central)

        # Frame and banner share the same area
        stage = QWidget()
        stack = QStackedLayout(stage)
        stack.setStackingMode(QStackedLayout.StackAll)

        self.frame_view = QLabel()
        self.frame_view.setObjectName("FrameView")
        self.frame_view.setAlignment(Qt.AlignCenter)
        self.frame_view.setMinimumSize(640, 427)
        self.frame_view.setScaledContents(True)
        self.frame_view.setStyleSheet("background-color: black;")

        self.banner = QLabel()
        self.banner.setObjectName("StatusBanner")
        self.banner.setAlignment(Qt.AlignCenter)
        self.banner.setWordWrap(True)

        stack.addWidget(self.frame_view)
        stack.addWidget(self.banner)
        self.banner.raise_()
        layout.addWidget(stage)

        self.pinch_label = QLabel()
        self.pinch_label.setObjectName("PinchIndicator")
        self.pinch_label.setAlignment(Qt.AlignCenter)
        self.pinch_label.setFixedHeight(28)
        layout.addWidget(self.pinch_label)
        self._update_pinch_label()

    def set_frame(self, frame: np.ndarray):
        """
        Update the displayed frame.

        Args:
            frame: BGR numpy array, already mirrored and composited
        """
        if frame is None:
            self.frame_view.clear()
            return

        rgb = frame[:, :, ::-1].copy()
        h, w, ch = rgb.shape
        bytes_per_line = ch * w
        qimg = QImage(rgb.data, w, h, bytes_per_line, QImage.Format_RGB888)
        self.frame_view.setPixmap(QPixmap.fromImage(qimg))

    def set_status(self, status: str, message: str):
        """Show the loading or error banner, hide it once ready."""
        if status == "LOADING":
            self.banner.setText(self.LOADING_TEXT)
            self.banner.setStyleSheet("background-color: rgba(0, 0, 0, 128); color: white;")
            self.banner.show()
        elif status == "FAILED":
            self.banner.setText(message)
            self.banner.setStyleSheet("background-color: rgba(239, 68, 68, 128); color: white;")
            self.banner.show()
        else:
            self.banner.hide()

    def set_pinching(self, pinching: bool):
        self._pinching = pinching
        self._update_pinch_label()

    def _update_pinch_label(self):
        if self._pinching:
            self.pinch_label.setText("Pinching - drawing")
            self.pinch_label.setStyleSheet("background-color: #FFFF00; color: black;")
        else:
            self.pinch_label.setText("Open hand")
            self.pinch_label.setStyleSheet("background-color: #333333; color: white;")
