"""
Gesture Decision Table
=======================

Ordered, first-match-wins rules mapping finger patterns and geometry to a
gesture and a fixed confidence. Order is significant: earlier rules shadow
later, more general ones.

Known shadowing (kept as-is):
    - thumbs_down requires zero extended fingers, which fist already claims
    - one / two repeat the pointing / peace patterns
    - four only fires when the spock gap test fails
    - l_shape only fires when thumb-index distance is between the ok and
      gun thresholds
"""

from dataclasses import dataclass
from typing import Callable, Tuple

from ..core.types import GestureType
from .features import HandFeatures


@dataclass(frozen=True)
class GestureRule:
    """One row of the decision table."""
    gesture: GestureType
    confidence: float
    matches: Callable[[HandFeatures], bool]
    description: str = ""

    def __repr__(self):
        return f"GestureRule({self.gesture.value}, {self.confidence:.2f})"


def _spock_split(f: HandFeatures) -> bool:
    """Middle-ring gap strictly wider than both neighbouring gaps."""
    return f.middle_ring_gap > f.index_middle_gap and f.middle_ring_gap > f.ring_pinky_gap


FOUR_FINGERS = ("index", "middle", "ring", "pinky")


def build_rules(
    ok_max_distance: float = 0.06,
    gun_min_distance: float = 0.08,
    l_shape_angle: Tuple[float, float] = (70.0, 110.0),
) -> Tuple[GestureRule, ...]:
    """Build the decision table with the given geometric thresholds."""
    l_min, l_max = l_shape_angle

    return (
        GestureRule(
            GestureType.FIST, 0.95,
            lambda f: f.extended_count == 0,
            "no fingers extended",
        ),
        GestureRule(
            GestureType.OPEN_HAND, 0.95,
            lambda f: f.extended_count == 5,
            "all fingers extended",
        ),
        GestureRule(
            GestureType.THUMBS_UP, 0.90,
            lambda f: f.only("thumb"),
            "only thumb extended",
        ),
        GestureRule(
            GestureType.THUMBS_DOWN, 0.85,
            lambda f: f.only() and f.thumb_pointing_down,
            "no fingers extended, thumb tip below its base",
        ),
        GestureRule(
            GestureType.POINTING, 0.90,
            lambda f: f.only("index"),
            "only index extended",
        ),
        GestureRule(
            GestureType.PEACE, 0.90,
            lambda f: f.only("index", "middle"),
            "index and middle extended",
        ),
        GestureRule(
            GestureType.OK, 0.90,
            lambda f: f.only("thumb", "index") and f.thumb_index_distance < ok_max_distance,
            "thumb and index extended, tips touching",
        ),
        GestureRule(
            GestureType.ROCK_ON, 0.90,
            lambda f: f.only("index", "pinky"),
            "index and pinky extended",
        ),
        GestureRule(
            GestureType.CALL_ME, 0.85,
            lambda f: f.only("thumb", "pinky"),
            "thumb and pinky extended",
        ),
        GestureRule(
            GestureType.GUN, 0.80,
            lambda f: f.only("thumb", "index") and f.thumb_index_distance > gun_min_distance,
            "thumb and index extended, tips apart",
        ),
        GestureRule(
            GestureType.SPOCK, 0.85,
            lambda f: f.only(*FOUR_FINGERS) and _spock_split(f),
            "four fingers extended, split between middle and ring",
        ),
        GestureRule(
            GestureType.L_SHAPE, 0.80,
            lambda f: f.only("thumb", "index") and l_min < f.thumb_index_angle < l_max,
            "thumb and index extended at a right angle",
        ),
        GestureRule(
            GestureType.THREE, 0.85,
            lambda f: f.only("thumb", "index", "middle"),
            "thumb, index and middle extended",
        ),
        GestureRule(
            GestureType.FOUR, 0.85,
            lambda f: f.only(*FOUR_FINGERS),
            "four fingers extended",
        ),
        GestureRule(
            GestureType.ONE, 0.80,
            lambda f: f.only("index"),
            "only index extended",
        ),
        GestureRule(
            GestureType.TWO, 0.80,
            lambda f: f.only("index", "middle"),
            "index and middle extended",
        ),
    )


DEFAULT_RULES = build_rules()
