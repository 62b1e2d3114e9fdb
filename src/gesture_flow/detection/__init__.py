"""Hand landmark types. The MediaPipe detector lives in detection.hand_detector."""
from .landmarks import HandPose, Landmark, LandmarkIndex, InvalidHandPoseError, HAND_CONNECTIONS

__all__ = ["HandPose", "Landmark", "LandmarkIndex", "InvalidHandPoseError", "HAND_CONNECTIONS"]
