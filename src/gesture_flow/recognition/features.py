"""
Per-pose geometric features consumed by the gesture rules.

Finger extension states are computed up front; distances and angles are
computed lazily because most rules never need them.
"""

from functools import cached_property

from ..detection.landmarks import HandPose, LandmarkIndex
from .finger_state import (
    DEFAULT_FINGER_RATIO,
    DEFAULT_THUMB_RATIO,
    FingerStates,
    distance,
    vector_angle,
)


class HandFeatures:
    """Finger states plus on-demand distances/angles for one hand pose."""

    def __init__(
        self,
        pose: HandPose,
        finger_ratio: float = DEFAULT_FINGER_RATIO,
        thumb_ratio: float = DEFAULT_THUMB_RATIO,
    ):
        self.pose = pose
        self.fingers = FingerStates.from_pose(pose, finger_ratio, thumb_ratio)

    def _dist(self, a: LandmarkIndex, b: LandmarkIndex) -> float:
        return distance(self.pose.get(a), self.pose.get(b))

    @property
    def extended_count(self) -> int:
        return self.fingers.extended_count

    def only(self, *fingers: str) -> bool:
        return self.fingers.only(*fingers)

    @cached_property
    def thumb_index_distance(self) -> float:
        return self._dist(LandmarkIndex.THUMB_TIP, LandmarkIndex.INDEX_TIP)

    @cached_property
    def thumb_middle_distance(self) -> float:
        return self._dist(LandmarkIndex.THUMB_TIP, LandmarkIndex.MIDDLE_TIP)

    @cached_property
    def index_middle_gap(self) -> float:
        return self._dist(LandmarkIndex.INDEX_TIP, LandmarkIndex.MIDDLE_TIP)

    @cached_property
    def middle_ring_gap(self) -> float:
        return self._dist(LandmarkIndex.MIDDLE_TIP, LandmarkIndex.RING_TIP)

    @cached_property
    def ring_pinky_gap(self) -> float:
        return self._dist(LandmarkIndex.RING_TIP, LandmarkIndex.PINKY_TIP)

    @cached_property
    def thumb_index_angle(self) -> float:
        """Degrees between thumb (MCP->tip) and index (MCP->tip) vectors."""
        return vector_angle(
            self.pose.get(LandmarkIndex.THUMB_MCP),
            self.pose.get(LandmarkIndex.THUMB_TIP),
            self.pose.get(LandmarkIndex.INDEX_MCP),
            self.pose.get(LandmarkIndex.INDEX_TIP),
        )

    @property
    def thumb_pointing_down(self) -> bool:
        # Image y grows downward
        tip = self.pose.get(LandmarkIndex.THUMB_TIP)
        base = self.pose.get(LandmarkIndex.THUMB_MCP)
        return tip.y > base.y

    def __repr__(self):
        return f"HandFeatures({self.fingers.as_dict()})"
