"""
OpenCV overlays for the gesture demo.

Skeleton overlay, gesture readout and history panel drawn onto camera
frames.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import cv2
import numpy as np

from ..core.types import ClassificationResult
from ..detection.landmarks import HAND_CONNECTIONS, HandPose

Color = Tuple[int, int, int]


@dataclass
class VisualizerConfig:
    """Visualization settings."""
    show_landmarks: bool = True
    show_connections: bool = True
    show_history: bool = True
    show_fps: bool = True

    # Colors (BGR format)
    connection_color: Color = (136, 255, 0)   # #00ff88
    landmark_color: Color = (128, 0, 255)     # #ff0080
    text_color: Color = (255, 255, 255)
    active_color: Color = (136, 255, 0)
    inactive_color: Color = (0, 165, 255)
    warning_color: Color = (0, 0, 255)

    landmark_radius: int = 3
    line_width: int = 2
    font_scale: float = 0.7
    font_thickness: int = 2

    @classmethod
    def from_dict(cls, config: dict) -> "VisualizerConfig":
        """Create config from dictionary."""
        colors = config.get("colors") or {}
        return cls(
            show_landmarks=config.get("show_landmarks", True),
            show_connections=config.get("show_connections", True),
            show_history=config.get("show_history", True),
            show_fps=config.get("show_fps", True),
            connection_color=tuple(colors.get("connections", [136, 255, 0])),
            landmark_color=tuple(colors.get("landmarks", [128, 0, 255])),
            text_color=tuple(colors.get("text", [255, 255, 255])),
            landmark_radius=config.get("landmark_radius", 3),
            line_width=config.get("line_width", 2),
            font_scale=config.get("font_scale", 0.7),
            font_thickness=config.get("font_thickness", 2),
        )


class Visualizer:
    """
    Draws the hand skeleton and recognition readout on BGR frames.

    All draw methods modify the image in place and return it.

    Example:
        >>> viz = Visualizer(VisualizerConfig())
        >>> viz.draw_hand(frame, hands[0])
        >>> viz.draw_gesture(frame, pipeline.state.current)
        >>> cv2.imshow("Gesture Flow", frame)
    """

    def __init__(self, config: Optional[VisualizerConfig] = None):
        self.config = config or VisualizerConfig()
        self._font = cv2.FONT_HERSHEY_SIMPLEX

    def draw_hand(self, image: np.ndarray, hand: HandPose) -> np.ndarray:
        """
        Skeleton lines first, then the 21 points on top.

        Landmarks are normalized, so they are scaled to the frame size here.
        """
        height, width = image.shape[:2]
        points = [lm.to_pixel(width, height) for lm in hand.landmarks]

        if self.config.show_connections:
            for start_idx, end_idx in HAND_CONNECTIONS:
                cv2.line(image, points[start_idx], points[end_idx],
                         self.config.connection_color, self.config.line_width)

        if self.config.show_landmarks:
            for point in points:
                cv2.circle(image, point, self.config.landmark_radius,
                           self.config.landmark_color, -1)

        return image

    def draw_status(self, image: np.ndarray, active: bool) -> np.ndarray:
        """Tracking indicator in the top-right corner."""
        width = image.shape[1]
        text = "Tracking" if active else "Waiting"
        color = self.config.active_color if active else self.config.inactive_color

        cv2.circle(image, (width - 120, 25), 6, color, -1)
        cv2.putText(image, text, (width - 105, 31),
                    self._font, 0.6, color, 2)
        return image

    def draw_gesture(
        self,
        image: np.ndarray,
        result: ClassificationResult,
        position: Optional[Tuple[int, int]] = None,
    ) -> np.ndarray:
        """
        Draw the current gesture label with a confidence bar.

        Args:
            image: BGR image to draw on
            result: Latest classification
            position: Custom position (default: bottom-left)

        Returns:
            Image with gesture readout drawn
        """
        height = image.shape[0]
        x, y = position if position is not None else (20, height - 50)

        if not result.hand_detected:
            cv2.putText(image, "Show your hand to the camera", (x, y),
                        self._font, self.config.font_scale,
                        self.config.inactive_color, self.config.font_thickness)
            return image

        text = f"{result.label} ({result.confidence_percent}%)"
        cv2.putText(image, text, (x, y),
                    self._font, self.config.font_scale,
                    self.config.text_color, self.config.font_thickness)

        bar_width = 200
        filled = int(bar_width * max(0.0, min(1.0, result.confidence)))
        cv2.rectangle(image, (x, y + 12), (x + bar_width, y + 22), (80, 80, 80), -1)
        cv2.rectangle(image, (x, y + 12), (x + filled, y + 22),
                      self.config.active_color, -1)
        return image

    def draw_history(
        self,
        image: np.ndarray,
        entries: Sequence[ClassificationResult],
    ) -> np.ndarray:
        """Recent gestures, newest first, down the right edge."""
        if not self.config.show_history:
            return image

        width = image.shape[1]
        x, y = width - 220, 70
        cv2.putText(image, "Recent", (x, y), self._font, 0.5, self.config.text_color, 1)

        if not entries:
            cv2.putText(image, "No gestures detected yet", (x, y + 22),
                        self._font, 0.45, self.config.inactive_color, 1)
            return image

        for entry in entries:
            y += 22
            cv2.putText(image, f"{entry.label} {entry.confidence_percent}%", (x, y),
                        self._font, 0.5, self.config.text_color, 1)
        return image

    def draw_performance(
        self,
        image: np.ndarray,
        fps: float = 0.0,
        latency_ms: Optional[float] = None,
        extra_info: Optional[Dict[str, str]] = None,
    ) -> np.ndarray:
        """FPS (green at or above 25, red below), then latency and extra rows."""
        x, y = 20, 30

        if self.config.show_fps:
            color = self.config.active_color if fps >= 25 else self.config.warning_color
            cv2.putText(image, f"FPS: {fps:.1f}", (x, y),
                        self._font, self.config.font_scale, color, self.config.font_thickness)
            y += 25

        if latency_ms is not None:
            cv2.putText(image, f"Latency: {latency_ms:.1f}ms", (x, y),
                        self._font, 0.5, self.config.text_color, 1)
            y += 20

        if extra_info:
            for key, value in extra_info.items():
                cv2.putText(image, f"{key}: {value}", (x, y),
                            self._font, 0.5, self.config.text_color, 1)
                y += 20

        return image

    def draw_instructions(self, image: np.ndarray, lines: List[str]) -> np.ndarray:
        """Key help in the bottom-right corner."""
        height, width = image.shape[:2]
        y = height - len(lines) * 20 - 10
        for i, line in enumerate(lines):
            cv2.putText(image, line, (width - 200, y + i * 20),
                        self._font, 0.5, self.config.text_color, 1)
        return image
