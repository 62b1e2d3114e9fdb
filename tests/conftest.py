"""
Shared fixtures and the synthetic hand pose builder.
"""

import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from gesture_flow.detection.landmarks import HandPose, Landmark
from gesture_flow.recognition.gesture_classifier import GestureClassifier
from gesture_flow.recognition.gesture_history import GestureHistory

WRIST = (0.5, 0.8)

# MCP x position per finger; MCP row sits at y=0.60
FINGER_X = {"index": 0.44, "middle": 0.50, "ring": 0.56, "pinky": 0.62}
FINGER_BASE = {"index": 5, "middle": 9, "ring": 13, "pinky": 17}
MCP_Y = 0.60

# Straight: tip 0.12 above MCP, path through PIP is 0.12 long -> extended.
# Curled: tip folds back to 0.01 above MCP -> not extended.
STRAIGHT_OFFSETS = (0.0, 0.05, 0.09, 0.12)
CURLED_OFFSETS = (0.0, 0.05, 0.03, 0.01)

THUMB_CMC = (0.42, 0.75)
THUMB_MCP = (0.38, 0.70)
THUMB_IP = (0.34, 0.70)
THUMB_TIP_EXTENDED = (0.30, 0.70)   # 0.08 from MCP, IP is 0.04 -> extended
THUMB_TIP_CURLED = (0.36, 0.68)     # folded back next to MCP -> not extended


def make_points(extended=(), overrides=None):
    """
    Build 21 (x, y) points for a hand held upright, palm to camera.

    Args:
        extended: Names of fingers to straighten ("thumb", "index", ...)
        overrides: {landmark index: (x, y)} applied last

    Returns:
        List of 21 (x, y) tuples
    """
    points = [None] * 21
    points[0] = WRIST

    points[1] = THUMB_CMC
    points[2] = THUMB_MCP
    points[3] = THUMB_IP
    points[4] = THUMB_TIP_EXTENDED if "thumb" in extended else THUMB_TIP_CURLED

    for finger, base in FINGER_BASE.items():
        offsets = STRAIGHT_OFFSETS if finger in extended else CURLED_OFFSETS
        x = FINGER_X[finger]
        for i, dy in enumerate(offsets):
            points[base + i] = (x, MCP_Y - dy)

    for index, point in (overrides or {}).items():
        points[index] = point

    return points


def make_pose(extended=(), overrides=None, handedness="Right"):
    """HandPose built from make_points()."""
    points = make_points(extended, overrides)
    return HandPose(
        landmarks=tuple(Landmark(x, y) for x, y in points),
        handedness=handedness,
        score=0.98,
    )


@pytest.fixture
def classifier():
    return GestureClassifier()


@pytest.fixture
def history():
    return GestureHistory()


@pytest.fixture
def fist_pose():
    return make_pose()


@pytest.fixture
def open_hand_pose():
    return make_pose(("thumb", "index", "middle", "ring", "pinky"))


@pytest.fixture
def build_pose():
    """The make_pose() builder, for tests that shape their own hands."""
    return make_pose


@pytest.fixture
def build_points():
    return make_points
