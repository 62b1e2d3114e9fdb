"""Shared gesture types."""
from .types import (
    ClassificationResult,
    GestureType,
    GESTURE_EMOJI,
    GESTURE_LABELS,
    SHOWCASE_GESTURES,
    gesture_emoji,
    gesture_label,
)

__all__ = [
    "ClassificationResult",
    "GestureType",
    "GESTURE_EMOJI",
    "GESTURE_LABELS",
    "SHOWCASE_GESTURES",
    "gesture_emoji",
    "gesture_label",
]
