"""
Frame-driven gesture pipeline.

Takes the detector's hands for one frame, classifies the first hand,
feeds the history buffer and keeps the session state that the display
layer reads:

    HandDetector -> GesturePipeline.process() -> GestureClassifier
                                              -> GestureHistory
                                              -> PipelineState
"""

import logging
from typing import Optional, Sequence

from .types import ClassificationResult
from ..recognition.gesture_classifier import GestureClassifier
from ..recognition.gesture_history import GestureHistory
from ..utils.logger import GestureLogger, log_timing

logger = logging.getLogger(__name__)


class PipelineState:
    """Session state observed by the presentation layer.

    Written only from the frame-processing path.
    """

    def __init__(self):
        self.current: ClassificationResult = ClassificationResult.none()
        self.is_active: bool = False
        self.frame_count: int = 0
        self.hands_seen: int = 0

    @property
    def status_text(self) -> str:
        return "Tracking" if self.is_active else "Waiting"

    def to_display_dict(self, history: GestureHistory) -> dict:
        """Snapshot in the shape the overlay / UI renders."""
        return {
            "gesture": self.current.name,
            "emoji": self.current.emoji,
            "label": self.current.label,
            "confidence": self.current.confidence,
            "confidence_percent": self.current.confidence_percent,
            "active": self.is_active,
            "status": self.status_text,
            "history": [
                {
                    "gesture": entry.name,
                    "emoji": entry.emoji,
                    "label": entry.label,
                    "confidence_percent": entry.confidence_percent,
                }
                for entry in history.display()
            ],
        }


class GesturePipeline:
    """Per-frame classify -> record -> publish cycle.

    Example:
        >>> pipeline = GesturePipeline()
        >>> result = pipeline.process(detector.detect(frame))
        >>> pipeline.snapshot()["status"]
        'Tracking'
    """

    def __init__(
        self,
        classifier: Optional[GestureClassifier] = None,
        history: Optional[GestureHistory] = None,
        event_logger: Optional[GestureLogger] = None,
    ):
        self.classifier = classifier or GestureClassifier()
        self.history = history or GestureHistory()
        self.event_logger = event_logger or GestureLogger()
        self.state = PipelineState()

    @log_timing
    def process(self, hands: Optional[Sequence]) -> ClassificationResult:
        """
        Process one frame's detections.

        Args:
            hands: Detected hand poses for the frame (None or empty if none)

        Returns:
            Classification of the first hand, or a ``none`` result
        """
        self.state.frame_count += 1

        if not hands:
            self.state.is_active = False
            self.state.current = ClassificationResult.none()
            self.event_logger.log_status(False)
            return self.state.current

        self.state.is_active = True
        self.state.hands_seen += 1
        self.event_logger.log_status(True)

        result = self.classifier.classify_hands(hands)
        self.state.current = result

        if self.history.record(result):
            self.event_logger.log_gesture(result)

        return result

    def snapshot(self) -> dict:
        return self.state.to_display_dict(self.history)
