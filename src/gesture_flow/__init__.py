"""
Gesture Flow
============

Hand gesture recognition from MediaPipe hand landmarks.

Modules:
    - core: Gesture types, classification results, frame pipeline
    - detection: Landmark types and the MediaPipe hand detector
    - recognition: Finger predicates, decision table, classifier, history
    - utils: Configuration, logging, performance, visualization
"""

__version__ = "1.0.0"

from .core.types import ClassificationResult, GestureType
from .detection.landmarks import HandPose, Landmark, LandmarkIndex
from .recognition.gesture_classifier import GestureClassifier, GestureClassifierConfig
from .recognition.gesture_history import GestureHistory, GestureHistoryConfig
from .core.pipeline import GesturePipeline

__all__ = [
    "ClassificationResult",
    "GestureType",
    "HandPose",
    "Landmark",
    "LandmarkIndex",
    "GestureClassifier",
    "GestureClassifierConfig",
    "GestureHistory",
    "GestureHistoryConfig",
    "GesturePipeline",
]
