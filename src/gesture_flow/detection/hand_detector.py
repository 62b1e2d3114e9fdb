"""
MediaPipe hand landmark source.

Wraps the Tasks API HandLandmarker and converts its output into HandPose
objects. MediaPipe itself is only imported when the detector starts, so
the landmark types and result conversion work without it.
"""

import logging
import urllib.request
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import cv2
import numpy as np

from .landmarks import HandPose, InvalidHandPoseError

logger = logging.getLogger(__name__)

MODEL_URL = (
    "https://storage.googleapis.com/mediapipe-models/hand_landmarker/"
    "hand_landmarker/float16/1/hand_landmarker.task"
)
DEFAULT_MODEL_PATH = Path("models") / "hand_landmarker.task"
FRAME_INTERVAL_MS = 33


@dataclass
class HandDetectorConfig:
    """HandLandmarker settings."""
    model_path: str = ""                  # Empty = DEFAULT_MODEL_PATH
    max_num_hands: int = 1
    min_detection_confidence: float = 0.7
    min_presence_confidence: float = 0.5
    min_tracking_confidence: float = 0.5
    running_mode: str = "VIDEO"           # IMAGE or VIDEO

    @classmethod
    def from_dict(cls, config: dict) -> "HandDetectorConfig":
        return cls(
            model_path=config.get("model_path") or "",
            max_num_hands=config.get("max_num_hands", 1),
            min_detection_confidence=config.get("min_detection_confidence", 0.7),
            min_presence_confidence=config.get("min_presence_confidence", 0.5),
            min_tracking_confidence=config.get("min_tracking_confidence", 0.5),
            running_mode=str(config.get("running_mode", "VIDEO")).upper(),
        )

    @property
    def resolved_model_path(self) -> Path:
        return Path(self.model_path) if self.model_path else DEFAULT_MODEL_PATH


def download_model(url: str, save_path: Path) -> bool:
    """
    Fetch the landmarker model unless it is already on disk.

    The file is written under a temporary name and renamed when complete,
    so an interrupted download never leaves a truncated model behind.
    """
    save_path = Path(save_path)
    if save_path.exists():
        return True

    partial = save_path.with_name(save_path.name + ".part")
    try:
        save_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("Downloading hand landmarker model from %s", url)
        urllib.request.urlretrieve(url, partial)
        partial.replace(save_path)
    except Exception as e:
        logger.error("Failed to download model: %s", e)
        if partial.exists():
            partial.unlink()
        return False

    logger.info("Model saved to %s", save_path)
    return True


def hands_from_result(result) -> List[HandPose]:
    """
    Convert a HandLandmarkerResult into HandPose objects.

    Hands whose landmark list cannot form a valid pose are dropped.
    """
    poses = []
    handedness = getattr(result, "handedness", None) or []

    for i, points in enumerate(result.hand_landmarks):
        categories = handedness[i] if i < len(handedness) else None
        side = categories[0] if categories else None
        try:
            poses.append(HandPose.from_landmarks(
                points,
                handedness=side.category_name if side else None,
                score=side.score if side else None,
            ))
        except InvalidHandPoseError as e:
            logger.debug("Dropping hand %d: %s", i, e)

    return poses


class HandDetector:
    """
    Landmark source backed by MediaPipe HandLandmarker.

    Example:
        >>> with HandDetector(HandDetectorConfig()) as detector:
        ...     hands = detector.detect(bgr_frame)
    """

    def __init__(self, config: Optional[HandDetectorConfig] = None):
        self.config = config or HandDetectorConfig()
        self._mp = None
        self._landmarker = None
        self._last_timestamp_ms = -1

    @property
    def is_running(self) -> bool:
        return self._landmarker is not None

    @property
    def video_mode(self) -> bool:
        return self.config.running_mode != "IMAGE"

    def start(self) -> bool:
        """Obtain the model and build the landmarker. Returns False on failure."""
        model_path = self.config.resolved_model_path
        if not download_model(MODEL_URL, model_path):
            logger.error("Hand landmarker model unavailable at %s", model_path)
            return False

        try:
            self._landmarker = self._create_landmarker(model_path)
        except Exception as e:
            logger.error("Failed to initialize HandLandmarker: %s", e)
            return False

        self._last_timestamp_ms = -1
        logger.info("HandLandmarker ready (%s mode, up to %d hand(s))",
                    self.config.running_mode, self.config.max_num_hands)
        return True

    def _create_landmarker(self, model_path: Path):
        import mediapipe as mp
        from mediapipe.tasks import python as mp_tasks
        from mediapipe.tasks.python import vision

        cfg = self.config
        mode = vision.RunningMode.VIDEO if self.video_mode else vision.RunningMode.IMAGE
        options = vision.HandLandmarkerOptions(
            base_options=mp_tasks.BaseOptions(model_asset_path=str(model_path)),
            running_mode=mode,
            num_hands=cfg.max_num_hands,
            min_hand_detection_confidence=cfg.min_detection_confidence,
            min_hand_presence_confidence=cfg.min_presence_confidence,
            min_tracking_confidence=cfg.min_tracking_confidence,
        )
        self._mp = mp
        return vision.HandLandmarker.create_from_options(options)

    def stop(self) -> None:
        """Close the landmarker; safe to call repeatedly."""
        if self._landmarker is None:
            return
        self._landmarker.close()
        self._landmarker = None
        logger.info("HandLandmarker closed")

    def _next_timestamp(self, timestamp_ms: Optional[int]) -> int:
        # VIDEO mode rejects timestamps that do not increase
        if timestamp_ms is None:
            timestamp_ms = self._last_timestamp_ms + FRAME_INTERVAL_MS
        timestamp_ms = max(int(timestamp_ms), self._last_timestamp_ms + 1)
        self._last_timestamp_ms = timestamp_ms
        return timestamp_ms

    def detect(self, bgr_image: np.ndarray, timestamp_ms: Optional[int] = None) -> List[HandPose]:
        """
        Find hands in one BGR camera frame.

        Args:
            bgr_image: OpenCV frame (H, W, 3)
            timestamp_ms: Frame time for VIDEO mode; generated when omitted

        Returns:
            Detected hands, empty if none or if the detector is not running
        """
        if self._landmarker is None:
            logger.warning("detect() called before start()")
            return []

        rgb = cv2.cvtColor(bgr_image, cv2.COLOR_BGR2RGB)
        frame = self._mp.Image(image_format=self._mp.ImageFormat.SRGB, data=rgb)

        if self.video_mode:
            result = self._landmarker.detect_for_video(frame, self._next_timestamp(timestamp_ms))
        else:
            result = self._landmarker.detect(frame)

        return hands_from_result(result)

    def __enter__(self):
        if not self.start():
            raise RuntimeError("Hand detector failed to start")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
        return False
