"""
Finger Extension Predicates
============================

Geometric tests deciding whether each finger is straightened or curled.
All distances are planar (x, y) in normalized image space; z is ignored.
"""

import math
from dataclasses import dataclass
from typing import Dict, Tuple

import numpy as np

from ..detection.landmarks import HandPose, Landmark, LandmarkIndex

FINGER_NAMES = ("thumb", "index", "middle", "ring", "pinky")

# finger -> (tip, pip, mcp). The thumb chain is (tip, ip, mcp).
FINGER_JOINTS: Dict[str, Tuple[LandmarkIndex, LandmarkIndex, LandmarkIndex]] = {
    "thumb": (LandmarkIndex.THUMB_TIP, LandmarkIndex.THUMB_IP, LandmarkIndex.THUMB_MCP),
    "index": (LandmarkIndex.INDEX_TIP, LandmarkIndex.INDEX_PIP, LandmarkIndex.INDEX_MCP),
    "middle": (LandmarkIndex.MIDDLE_TIP, LandmarkIndex.MIDDLE_PIP, LandmarkIndex.MIDDLE_MCP),
    "ring": (LandmarkIndex.RING_TIP, LandmarkIndex.RING_PIP, LandmarkIndex.RING_MCP),
    "pinky": (LandmarkIndex.PINKY_TIP, LandmarkIndex.PINKY_PIP, LandmarkIndex.PINKY_MCP),
}

DEFAULT_FINGER_RATIO = 0.8
DEFAULT_THUMB_RATIO = 1.2


def distance(a: Landmark, b: Landmark) -> float:
    """Euclidean distance between two landmarks in the image plane."""
    return float(np.hypot(a.x - b.x, a.y - b.y))


def is_finger_extended(
    tip: Landmark,
    pip: Landmark,
    mcp: Landmark,
    ratio: float = DEFAULT_FINGER_RATIO,
) -> bool:
    """
    A finger is extended when the straight tip-to-knuckle distance is close
    to the length of the bent path through the middle joint.
    """
    tip_to_pip = distance(tip, pip)
    pip_to_mcp = distance(pip, mcp)
    tip_to_mcp = distance(tip, mcp)
    return tip_to_mcp > (tip_to_pip + pip_to_mcp) * ratio


def is_thumb_extended(
    tip: Landmark,
    ip: Landmark,
    mcp: Landmark,
    ratio: float = DEFAULT_THUMB_RATIO,
) -> bool:
    """Thumb is extended when its tip reaches well past the IP joint."""
    thumb_length = distance(tip, mcp)
    base_length = distance(ip, mcp)
    return thumb_length > base_length * ratio


def vector_angle(
    a_start: Landmark,
    a_end: Landmark,
    b_start: Landmark,
    b_end: Landmark,
) -> float:
    """
    Angle in degrees between vectors (a_end - a_start) and (b_end - b_start).

    Raises:
        ZeroDivisionError: if either vector has zero length
    """
    a = np.array([a_end.x - a_start.x, a_end.y - a_start.y])
    b = np.array([b_end.x - b_start.x, b_end.y - b_start.y])

    dot = float(np.dot(a, b))
    a_mag = float(np.linalg.norm(a))
    b_mag = float(np.linalg.norm(b))

    cosine = dot / (a_mag * b_mag)
    # Rounding can push near-parallel vectors just outside acos' domain
    cosine = max(-1.0, min(1.0, cosine))
    return math.degrees(math.acos(cosine))


@dataclass(frozen=True)
class FingerStates:
    """Extended/curled state of all five fingers."""
    thumb: bool
    index: bool
    middle: bool
    ring: bool
    pinky: bool

    @classmethod
    def from_pose(
        cls,
        pose: HandPose,
        finger_ratio: float = DEFAULT_FINGER_RATIO,
        thumb_ratio: float = DEFAULT_THUMB_RATIO,
    ) -> "FingerStates":
        states = {}
        for finger, (tip_idx, pip_idx, mcp_idx) in FINGER_JOINTS.items():
            tip, pip, mcp = pose.get(tip_idx), pose.get(pip_idx), pose.get(mcp_idx)
            if finger == "thumb":
                states[finger] = is_thumb_extended(tip, pip, mcp, thumb_ratio)
            else:
                states[finger] = is_finger_extended(tip, pip, mcp, finger_ratio)
        return cls(**states)

    @property
    def pattern(self) -> Tuple[bool, bool, bool, bool, bool]:
        return (self.thumb, self.index, self.middle, self.ring, self.pinky)

    @property
    def extended_count(self) -> int:
        return sum(self.pattern)

    def only(self, *fingers: str) -> bool:
        """True iff exactly the named fingers are extended."""
        unknown = set(fingers) - set(FINGER_NAMES)
        if unknown:
            raise ValueError(f"Unknown finger names: {sorted(unknown)}")
        return all(
            getattr(self, name) == (name in fingers) for name in FINGER_NAMES
        )

    def as_dict(self) -> Dict[str, bool]:
        return dict(zip(FINGER_NAMES, self.pattern))
