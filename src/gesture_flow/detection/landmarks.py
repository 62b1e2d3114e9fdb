"""
Hand Landmark Types
====================

Normalized 21-point hand skeleton as produced by MediaPipe Hands.
Pure data types with no dependency on the detector runtime.
"""

import numpy as np
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, List, NamedTuple, Optional, Sequence, Tuple

NUM_LANDMARKS = 21


class InvalidHandPoseError(ValueError):
    """Raised when landmark data cannot form a 21-point hand pose."""


class LandmarkIndex(IntEnum):
    """Hand landmark indices following MediaPipe convention."""
    WRIST = 0
    THUMB_CMC = 1
    THUMB_MCP = 2
    THUMB_IP = 3
    THUMB_TIP = 4
    INDEX_MCP = 5
    INDEX_PIP = 6
    INDEX_DIP = 7
    INDEX_TIP = 8
    MIDDLE_MCP = 9
    MIDDLE_PIP = 10
    MIDDLE_DIP = 11
    MIDDLE_TIP = 12
    RING_MCP = 13
    RING_PIP = 14
    RING_DIP = 15
    RING_TIP = 16
    PINKY_MCP = 17
    PINKY_PIP = 18
    PINKY_DIP = 19
    PINKY_TIP = 20


FINGERTIPS = (
    LandmarkIndex.THUMB_TIP,
    LandmarkIndex.INDEX_TIP,
    LandmarkIndex.MIDDLE_TIP,
    LandmarkIndex.RING_TIP,
    LandmarkIndex.PINKY_TIP,
)

# Skeleton edges as drawn by @mediapipe/hands
HAND_CONNECTIONS: List[Tuple[int, int]] = [
    (0, 1), (1, 2), (2, 3), (3, 4),          # Thumb
    (0, 5), (5, 6), (6, 7), (7, 8),          # Index
    (5, 9), (9, 10), (10, 11), (11, 12),     # Middle
    (9, 13), (13, 14), (14, 15), (15, 16),   # Ring
    (13, 17), (17, 18), (18, 19), (19, 20),  # Pinky
    (0, 17),                                 # Palm base
]


class Landmark(NamedTuple):
    """A single landmark point with normalized coordinates."""
    x: float  # 0.0 to 1.0, normalized by image width
    y: float  # 0.0 to 1.0, normalized by image height
    z: float = 0.0  # Depth relative to wrist, unused by the classifier

    def to_pixel(self, width: int, height: int) -> Tuple[int, int]:
        """Convert normalized coordinates to pixel coordinates."""
        return (int(self.x * width), int(self.y * height))


def _to_landmark(point) -> Landmark:
    """Coerce one detector point into a Landmark."""
    if isinstance(point, Landmark):
        return point

    if hasattr(point, "x") and hasattr(point, "y"):
        x, y, z = point.x, point.y, getattr(point, "z", 0.0)
    else:
        coords = list(point)
        if len(coords) not in (2, 3):
            raise InvalidHandPoseError(
                f"Landmark needs 2 or 3 coordinates, got {len(coords)}"
            )
        x, y = coords[0], coords[1]
        z = coords[2] if len(coords) == 3 else 0.0

    return Landmark(x=float(x), y=float(y), z=float(z or 0.0))


@dataclass(frozen=True)
class HandPose:
    """
    One detected hand: exactly 21 landmarks plus detector metadata.

    Example:
        >>> pose = HandPose.from_landmarks(results.hand_landmarks[0])
        >>> pose.get(LandmarkIndex.INDEX_TIP).y
        0.31
    """
    landmarks: Tuple[Landmark, ...]
    handedness: Optional[str] = None  # "Left" / "Right"
    score: Optional[float] = None

    def __post_init__(self):
        if len(self.landmarks) != NUM_LANDMARKS:
            raise InvalidHandPoseError(
                f"Hand pose needs {NUM_LANDMARKS} landmarks, got {len(self.landmarks)}"
            )

    @classmethod
    def from_landmarks(
        cls,
        points: Sequence,
        handedness: Optional[str] = None,
        score: Optional[float] = None,
    ) -> "HandPose":
        """
        Build a pose from raw detector output.

        Accepts MediaPipe NormalizedLandmark objects, (x, y[, z]) sequences,
        Landmark tuples, or a numpy array of shape (21, 2) / (21, 3).

        Raises:
            InvalidHandPoseError: wrong landmark count or malformed point
        """
        if isinstance(points, cls):
            return points

        try:
            landmarks = tuple(_to_landmark(p) for p in points)
        except InvalidHandPoseError:
            raise
        except (TypeError, ValueError, AttributeError) as e:
            raise InvalidHandPoseError(f"Malformed landmark: {e}") from e

        return cls(landmarks=landmarks, handedness=handedness, score=score)

    def get(self, index: int) -> Landmark:
        """Get landmark by index."""
        return self.landmarks[index]

    def __getitem__(self, index: int) -> Landmark:
        return self.landmarks[index]

    def __len__(self) -> int:
        return len(self.landmarks)

    def __iter__(self) -> Iterator[Landmark]:
        return iter(self.landmarks)

    @property
    def palm_center(self) -> Tuple[float, float]:
        """Mean of the wrist and the four finger MCP joints."""
        idx = (
            LandmarkIndex.WRIST,
            LandmarkIndex.INDEX_MCP,
            LandmarkIndex.MIDDLE_MCP,
            LandmarkIndex.RING_MCP,
            LandmarkIndex.PINKY_MCP,
        )
        xs = [self.landmarks[i].x for i in idx]
        ys = [self.landmarks[i].y for i in idx]
        return (sum(xs) / len(xs), sum(ys) / len(ys))

    def to_numpy(self) -> np.ndarray:
        """Convert landmarks to numpy array of shape (21, 3)."""
        return np.array([[lm.x, lm.y, lm.z] for lm in self.landmarks])
