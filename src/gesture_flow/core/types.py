"""
Shared domain types for the gesture recognition system.

Centralizes the gesture enumeration, the classification result container,
and the display lookup tables used by the presentation layer.
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union


# =============================================================================
# Gesture Types
# =============================================================================

class GestureType(Enum):
    """Closed set of recognized hand shapes."""
    FIST = "fist"
    OPEN_HAND = "open_hand"
    THUMBS_UP = "thumbs_up"
    THUMBS_DOWN = "thumbs_down"
    POINTING = "pointing"
    PEACE = "peace"
    OK = "ok"
    ROCK_ON = "rock_on"
    CALL_ME = "call_me"
    GUN = "gun"
    SPOCK = "spock"
    L_SHAPE = "l_shape"
    THREE = "three"
    FOUR = "four"
    ONE = "one"
    TWO = "two"
    UNKNOWN = "unknown"
    NONE = "none"

    @classmethod
    def from_string(cls, name: str) -> 'GestureType':
        """Convert a string gesture name to GestureType enum, safely."""
        try:
            return cls(name)
        except ValueError:
            return cls.NONE


# =============================================================================
# Display Metadata
# =============================================================================

GESTURE_EMOJI: Dict[GestureType, str] = {
    GestureType.PEACE: "✌️",
    GestureType.THUMBS_UP: "👍",
    GestureType.THUMBS_DOWN: "👎",
    GestureType.OK: "👌",
    GestureType.POINTING: "👉",
    GestureType.FIST: "✊",
    GestureType.OPEN_HAND: "✋",
    GestureType.ROCK_ON: "🤘",
    GestureType.CALL_ME: "🤙",
    GestureType.GUN: "👉",
    GestureType.SPOCK: "🖖",
    GestureType.L_SHAPE: "🤟",
    GestureType.THREE: "3️⃣",
    GestureType.FOUR: "4️⃣",
    GestureType.ONE: "1️⃣",
    GestureType.TWO: "2️⃣",
    GestureType.NONE: "❓",
    GestureType.UNKNOWN: "🤔",
}

GESTURE_LABELS: Dict[GestureType, str] = {
    GestureType.PEACE: "Peace Sign",
    GestureType.THUMBS_UP: "Thumbs Up",
    GestureType.THUMBS_DOWN: "Thumbs Down",
    GestureType.OK: "OK Sign",
    GestureType.POINTING: "Pointing",
    GestureType.FIST: "Fist",
    GestureType.OPEN_HAND: "Open Hand",
    GestureType.ROCK_ON: "Rock On",
    GestureType.CALL_ME: "Call Me",
    GestureType.GUN: "Gun Gesture",
    GestureType.SPOCK: "Vulcan Salute",
    GestureType.L_SHAPE: "L-Shape",
    GestureType.THREE: "Number Three",
    GestureType.FOUR: "Number Four",
    GestureType.ONE: "Number One",
    GestureType.TWO: "Number Two",
    GestureType.NONE: "No Hand Detected",
    GestureType.UNKNOWN: "Unknown Gesture",
}

# "Supported gestures" card, in display order
SHOWCASE_GESTURES: List[Tuple[str, str]] = [
    ("✌️", "Peace"),
    ("👍", "Thumbs Up"),
    ("👎", "Thumbs Down"),
    ("👌", "OK Sign"),
    ("👉", "Pointing"),
    ("✊", "Fist"),
    ("✋", "Open Hand"),
    ("🤘", "Rock On"),
    ("🤙", "Call Me"),
    ("🖖", "Vulcan Salute"),
    ("🤟", "L-Shape"),
    ("1️⃣", "One"),
    ("2️⃣", "Two"),
    ("3️⃣", "Three"),
    ("4️⃣", "Four"),
]

_FALLBACK_EMOJI = "❓"
_FALLBACK_LABEL = "Unknown"


def _lookup(gesture: Union[GestureType, str]) -> Optional[GestureType]:
    if isinstance(gesture, GestureType):
        return gesture
    try:
        return GestureType(gesture)
    except ValueError:
        return None


def gesture_emoji(gesture: Union[GestureType, str]) -> str:
    """Display glyph for a gesture; unrecognized names get a question mark."""
    gesture_type = _lookup(gesture)
    if gesture_type is None:
        return _FALLBACK_EMOJI
    return GESTURE_EMOJI.get(gesture_type, _FALLBACK_EMOJI)


def gesture_label(gesture: Union[GestureType, str]) -> str:
    """Human-readable name for a gesture."""
    gesture_type = _lookup(gesture)
    if gesture_type is None:
        return _FALLBACK_LABEL
    return GESTURE_LABELS.get(gesture_type, _FALLBACK_LABEL)


# =============================================================================
# Data Containers
# =============================================================================

@dataclass(frozen=True)
class ClassificationResult:
    """Container for gesture classification output.

    Immutable once produced. The timestamp is informational and does not
    take part in equality, so two classifications of the same pose compare
    equal.
    """
    gesture: GestureType
    confidence: float
    timestamp: float = field(default_factory=time.time, compare=False)

    @staticmethod
    def none(timestamp: Optional[float] = None) -> "ClassificationResult":
        """Create empty/no hand result."""
        if timestamp is None:
            return ClassificationResult(GestureType.NONE, 0.0)
        return ClassificationResult(GestureType.NONE, 0.0, timestamp)

    @property
    def name(self) -> str:
        return self.gesture.value

    @property
    def emoji(self) -> str:
        return gesture_emoji(self.gesture)

    @property
    def label(self) -> str:
        return gesture_label(self.gesture)

    @property
    def confidence_percent(self) -> int:
        return int(round(self.confidence * 100))

    @property
    def hand_detected(self) -> bool:
        return self.gesture != GestureType.NONE

    def to_dict(self) -> dict:
        return {
            "gesture": self.name,
            "confidence": self.confidence,
            "timestamp": self.timestamp,
        }

    def __repr__(self):
        return f"ClassificationResult({self.gesture.value}, conf={self.confidence:.2f})"
