"""
AirDraw - Pinch-to-Draw Hand Tracking

Entry point for the application.
"""
import argparse
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="AirDraw - Pinch-to-Draw Hand Tracking",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: config.yaml)",
    )

    parser.add_argument(
        "--camera",
        type=int,
        default=None,
        help="Camera device id (overrides config)",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Run in an OpenCV window instead of the Qt window",
    )

    return parser.parse_args()


def run_debug(config):
    """
    Run the session in an OpenCV window.
    Useful for checking tracking without the Qt UI.
    """
    import asyncio
    import cv2
    from tracking import CameraSource, HandLandmarkModel
    from session import DrawingSession, RefreshSignal

    session = DrawingSession(
        CameraSource(config.camera),
        HandLandmarkModel(config.model),
        refresh=RefreshSignal(config.display.refresh_hz).wait,
    )

    def show_frame(frame):
        cv2.imshow(config.display.window_title, frame)
        if cv2.waitKey(1) & 0xFF == ord('q'):
            session.stop()

    def show_pinch(pinching):
        print(f"[{'PINCHING' if pinching else 'OPEN':8s}] trail points: {len(session.state.trail)}")

    session.on_frame = show_frame
    session.on_pinch_changed = show_pinch

    print("Starting debug mode...")
    print("Press 'q' to quit")
    print("-" * 40)

    try:
        asyncio.run(session.run())
    finally:
        session.stop()
        cv2.destroyAllWindows()

    if session.state.error:
        print(f"ERROR: {session.state.error}")
        return 1
    return 0


def run_window_mode(config):
    """Run AirDraw with the Qt window (session in a worker thread)."""
    import signal
    import atexit
    from PyQt5.QtWidgets import QApplication
    from PyQt5.QtCore import QThread, Qt
    from session.worker import DrawingWorker
    from ui import DrawingWindow

    app = QApplication(sys.argv)

    window = DrawingWindow(title=config.display.window_title)
    window.show()

    # Setup background worker and thread
    thread = QThread()
    worker = DrawingWorker(config)
    worker.moveToThread(thread)

    def cleanup():
        """Ensure camera is released on exit."""
        print("\nCleaning up camera resources...")
        worker.stop_process()
        thread.quit()
        thread.wait(2000)
        print("Cleanup complete.")

    # Register cleanup for various exit scenarios
    atexit.register(cleanup)

    def signal_handler(signum, frame):
        """Handle Ctrl+C and kill signals gracefully."""
        print(f"\nReceived signal {signum}, shutting down...")
        app.quit()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    # Connect signals (Use QueuedConnection to ensure UI updates happen in main thread)
    thread.started.connect(worker.start_process)
    worker.finished.connect(thread.quit)
    worker.frame_ready.connect(window.set_frame, Qt.QueuedConnection)
    worker.pinch_changed.connect(window.set_pinching, Qt.QueuedConnection)
    worker.status_changed.connect(window.set_status, Qt.QueuedConnection)
    worker.error.connect(lambda msg: print(f"WORKER ERROR: {msg}"), Qt.QueuedConnection)

    # Start thread
    thread.start()

    try:
        result = app.exec_()
    finally:
        cleanup()
        atexit.unregister(cleanup)  # Avoid double cleanup

    return result


def main():
    """Main entry point."""
    args = parse_args()

    # Load config
    from tracking import load_config
    config = load_config(args.config)

    # Apply CLI overrides
    if args.camera is not None:
        config.camera.device_id = args.camera

    print("AirDraw starting...")
    print(f"  Camera: {config.camera.device_id}")
    print(f"  Debug: {args.debug}")
    print()

    if args.debug:
        return run_debug(config)
    return run_window_mode(config)


if __name__ == "__main__":
    sys.exit(main())
