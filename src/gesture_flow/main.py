"""
Gesture Flow - Main Application
================================

Webcam demo: detects a hand, classifies its shape and shows the result
with a skeleton overlay and a recent-gesture panel.
"""

import argparse
import logging
import signal
import sys
import time
from dataclasses import dataclass, field
from typing import Optional

import cv2

from .core.pipeline import GesturePipeline
from .core.types import SHOWCASE_GESTURES
from .detection.hand_detector import HandDetector, HandDetectorConfig
from .recognition.gesture_classifier import GestureClassifier, GestureClassifierConfig
from .recognition.gesture_history import GestureHistory, GestureHistoryConfig
from .utils.config import get_section, load_config
from .utils.logger import GestureLogger, setup_logging
from .utils.performance import PerformanceMonitor
from .utils.visualization import Visualizer, VisualizerConfig

logger = logging.getLogger(__name__)

WINDOW_NAME = "Gesture Flow"
KEY_HELP = ["q/ESC: quit", "p: performance", "h: history", "g: gestures"]
MAX_FAILED_READS = 30


@dataclass
class CameraSettings:
    """Webcam capture settings."""
    device_id: int = 0
    width: int = 640
    height: int = 480
    mirror: bool = True

    @classmethod
    def from_dict(cls, config: dict) -> "CameraSettings":
        return cls(
            device_id=config.get("device_id", 0),
            width=config.get("width", 640),
            height=config.get("height", 480),
            mirror=config.get("mirror", True),
        )


@dataclass
class AppConfig:
    """Application configuration container."""
    camera: CameraSettings = field(default_factory=CameraSettings)
    mediapipe: HandDetectorConfig = field(default_factory=HandDetectorConfig)
    recognition: GestureClassifierConfig = field(default_factory=GestureClassifierConfig)
    history: GestureHistoryConfig = field(default_factory=GestureHistoryConfig)
    visualization: VisualizerConfig = field(default_factory=VisualizerConfig)
    target_fps: float = 25.0
    window_size: int = 30


def create_app_config(config_dict: dict) -> AppConfig:
    """Create AppConfig from configuration dictionary."""
    performance = get_section(config_dict, "performance")
    return AppConfig(
        camera=CameraSettings.from_dict(get_section(config_dict, "camera")),
        mediapipe=HandDetectorConfig.from_dict(get_section(config_dict, "mediapipe")),
        recognition=GestureClassifierConfig.from_dict(get_section(config_dict, "recognition")),
        history=GestureHistoryConfig.from_dict(get_section(config_dict, "history")),
        visualization=VisualizerConfig.from_dict(get_section(config_dict, "visualization")),
        target_fps=performance.get("target_fps", 25.0),
        window_size=performance.get("window_size", 30),
    )


class GestureFlowApp:
    """
    Camera loop tying detection, classification and display together.

    Keys:
        q/ESC  quit
        p      print performance report
        h      print gesture history
        g      print supported gestures
    """

    def __init__(self, config: AppConfig):
        self.config = config

        self.detector = HandDetector(config.mediapipe)
        self.pipeline = GesturePipeline(
            classifier=GestureClassifier(config.recognition),
            history=GestureHistory(config.history),
            event_logger=GestureLogger(),
        )
        self.events = self.pipeline.event_logger
        self.visualizer = Visualizer(config.visualization)
        self.performance = PerformanceMonitor(
            window_size=config.window_size,
            target_fps=config.target_fps,
        )

        self._capture: Optional[cv2.VideoCapture] = None
        self._running = False
        self._start_time = 0.0

    def start(self) -> bool:
        """Open the camera and the hand landmarker."""
        cam = self.config.camera
        self._capture = cv2.VideoCapture(cam.device_id)
        if not self._capture.isOpened():
            logger.error("Failed to open camera %d", cam.device_id)
            self._capture = None
            return False

        self._capture.set(cv2.CAP_PROP_FRAME_WIDTH, cam.width)
        self._capture.set(cv2.CAP_PROP_FRAME_HEIGHT, cam.height)

        if not self.detector.start():
            logger.error("Failed to start hand detector")
            self._release_camera()
            return False

        self._running = True
        self._start_time = time.monotonic()
        logger.info("Gesture Flow started (camera %d, %dx%d)", cam.device_id, cam.width, cam.height)
        return True

    def stop(self) -> None:
        """Release camera, detector and windows."""
        self._running = False
        self.detector.stop()
        self._release_camera()
        cv2.destroyAllWindows()
        for name, count in self.events.summary():
            logger.info("  %-12s x%d", name, count)
        logger.info("Gesture Flow stopped (%d gestures recorded)", self.events.total_gestures)

    def _release_camera(self) -> None:
        if self._capture is not None:
            self._capture.release()
            self._capture = None

    def run(self) -> int:
        """Run until the user quits. Returns a process exit status."""
        if not self.start():
            return 1

        signal.signal(signal.SIGINT, self._signal_handler)

        try:
            self._main_loop()
        finally:
            self.stop()
            print(self.performance.get_report())
        return 0

    def _main_loop(self) -> None:
        failed_reads = 0
        while self._running:
            ok, frame = self._capture.read()
            if not ok:
                failed_reads += 1
                if failed_reads == 1:
                    logger.warning("Camera frame not available")
                if failed_reads >= MAX_FAILED_READS:
                    logger.error("No camera frames after %d reads, stopping", failed_reads)
                    self._running = False
                    break
                self._handle_key(cv2.waitKey(1) & 0xFF)
                continue
            failed_reads = 0

            self.performance.frame_start()

            if self.config.camera.mirror:
                frame = cv2.flip(frame, 1)

            with self.performance.measure("detection"):
                timestamp_ms = int((time.monotonic() - self._start_time) * 1000)
                hands = self.detector.detect(frame, timestamp_ms)

            with self.performance.measure("classification"):
                result = self.pipeline.process(hands)

            self.performance.frame_complete()
            self._draw(frame, hands, result)
            cv2.imshow(WINDOW_NAME, frame)

            self._handle_key(cv2.waitKey(1) & 0xFF)

    def _draw(self, frame, hands, result) -> None:
        viz = self.visualizer
        if hands:
            viz.draw_hand(frame, hands[0])
        viz.draw_status(frame, self.pipeline.state.is_active)
        viz.draw_gesture(frame, result)
        viz.draw_history(frame, self.pipeline.history.display())
        viz.draw_performance(frame, fps=self.performance.fps,
                             latency_ms=self.performance.frame_time_ms)
        viz.draw_instructions(frame, KEY_HELP)

    def _handle_key(self, key: int) -> None:
        if key == ord("q") or key == 27:
            self._running = False
        elif key == ord("p"):
            print(self.performance.get_report())
        elif key == ord("h"):
            self.print_history()
        elif key == ord("g"):
            self.print_gestures()

    def print_history(self) -> None:
        entries = self.pipeline.history.recent()
        if not entries:
            print("No gestures recorded yet")
            return
        for entry in entries:
            stamp = time.strftime("%H:%M:%S", time.localtime(entry.timestamp))
            print(f"{stamp}  {entry.emoji}  {entry.label:<18} {entry.confidence_percent}%")

    def print_gestures(self) -> None:
        print("Supported gestures:")
        for emoji, name in SHOWCASE_GESTURES:
            print(f"  {emoji}  {name}")

    def _signal_handler(self, signum, frame) -> None:
        logger.info("Received signal %s, shutting down...", signum)
        self._running = False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gesture-flow",
        description="Real-time hand gesture recognition from a webcam",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Keyboard Controls:
  q/ESC     - Quit
  p         - Print performance report
  h         - Print gesture history
  g         - Print supported gestures

Examples:
  gesture-flow
  gesture-flow --camera 1 --no-mirror
  gesture-flow --config custom_config.yaml --debug
        """,
    )
    parser.add_argument("--config", "-c", default=None,
                        help="Path to configuration file (default: config/config.yaml)")
    parser.add_argument("--camera", type=int, default=None,
                        help="Camera device index")
    parser.add_argument("--no-mirror", action="store_true",
                        help="Do not flip the camera image horizontally")
    parser.add_argument("--debug", "-d", action="store_true",
                        help="Enable debug logging")
    parser.add_argument("--log-file", default=None,
                        help="Also write logs to this file")
    return parser


def main(argv=None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    config_dict = load_config(args.config)
    log_section = get_section(config_dict, "logging")
    setup_logging(
        level="DEBUG" if args.debug else log_section.get("level", "INFO"),
        log_file=args.log_file or log_section.get("file"),
    )

    app_config = create_app_config(config_dict)
    if args.camera is not None:
        app_config.camera.device_id = args.camera
    if args.no_mirror:
        app_config.camera.mirror = False
    if args.debug:
        app_config.recognition.debug = True

    return GestureFlowApp(app_config).run()


if __name__ == "__main__":
    sys.exit(main())
