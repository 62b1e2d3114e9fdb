"""Gesture recognition module."""
from .gesture_classifier import GestureClassifier, GestureClassifierConfig
from .gesture_history import GestureHistory, GestureHistoryConfig
from .rules import GestureRule, build_rules

__all__ = [
    "GestureClassifier",
    "GestureClassifierConfig",
    "GestureHistory",
    "GestureHistoryConfig",
    "GestureRule",
    "build_rules",
]
