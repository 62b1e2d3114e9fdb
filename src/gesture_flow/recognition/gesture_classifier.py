"""
Static Gesture Classifier
==========================

Rule-based gesture recognition using hand landmark geometry.
Evaluates an ordered decision table over finger-extension states,
fingertip distances and the thumb/index angle.
"""

import logging
import time
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ..core.types import ClassificationResult, GestureType
from ..detection.landmarks import NUM_LANDMARKS, HandPose
from .features import HandFeatures
from .rules import GestureRule, build_rules

logger = logging.getLogger(__name__)


@dataclass
class GestureClassifierConfig:
    """Gesture classifier configuration."""
    # Straightness required for index..pinky (fraction of bent path length)
    finger_extension_ratio: float = 0.8
    # Thumb tip reach relative to the IP-MCP segment
    thumb_extension_ratio: float = 1.2
    # Thumb-index tip distance bounds for ok / gun
    ok_max_distance: float = 0.06
    gun_min_distance: float = 0.08
    # Open interval for the l_shape thumb/index angle, degrees
    l_shape_min_angle: float = 70.0
    l_shape_max_angle: float = 110.0
    # Reported when no rule matches
    unknown_confidence: float = 0.6
    # Enable detailed logging
    debug: bool = False

    @classmethod
    def from_dict(cls, config: dict) -> "GestureClassifierConfig":
        """Create config from dictionary."""
        return cls(
            finger_extension_ratio=config.get("finger_extension_ratio", 0.8),
            thumb_extension_ratio=config.get("thumb_extension_ratio", 1.2),
            ok_max_distance=config.get("ok_max_distance", 0.06),
            gun_min_distance=config.get("gun_min_distance", 0.08),
            l_shape_min_angle=config.get("l_shape_min_angle", 70.0),
            l_shape_max_angle=config.get("l_shape_max_angle", 110.0),
            unknown_confidence=config.get("unknown_confidence", 0.6),
            debug=config.get("debug", False),
        )


class GestureClassifier:
    """
    Rule-based static gesture classifier.

    Classification never raises: a missing or malformed pose, or a fault in
    the geometry, yields a ``none`` result with zero confidence. The
    classifier keeps no state between calls.

    Example:
        >>> classifier = GestureClassifier()
        >>> result = classifier.classify(pose)
        >>> print(f"{result.label}: {result.confidence_percent}%")
    """

    def __init__(
        self,
        config: Optional[GestureClassifierConfig] = None,
        rules: Optional[Sequence[GestureRule]] = None,
    ):
        self.config = config or GestureClassifierConfig()
        if rules is None:
            rules = build_rules(
                ok_max_distance=self.config.ok_max_distance,
                gun_min_distance=self.config.gun_min_distance,
                l_shape_angle=(self.config.l_shape_min_angle, self.config.l_shape_max_angle),
            )
        self._rules: Tuple[GestureRule, ...] = tuple(rules)

    @property
    def rules(self) -> Tuple[GestureRule, ...]:
        """The decision table, in evaluation order."""
        return self._rules

    def classify(self, pose, timestamp: Optional[float] = None) -> ClassificationResult:
        """
        Classify a single hand pose.

        Args:
            pose: HandPose or 21 raw landmark points; None if no hand
            timestamp: Result timestamp (defaults to now)

        Returns:
            ClassificationResult with the first matching rule's gesture
        """
        if timestamp is None:
            timestamp = time.time()

        if pose is None:
            return ClassificationResult.none(timestamp)

        try:
            if len(pose) != NUM_LANDMARKS:
                return ClassificationResult.none(timestamp)

            features = self._features(pose)
            for rule in self._rules:
                if rule.matches(features):
                    if self.config.debug:
                        logger.debug("Finger states: %s -> %s", features.fingers.as_dict(), rule)
                    return ClassificationResult(rule.gesture, rule.confidence, timestamp)

        except Exception as e:
            logger.warning("Gesture classification error: %s", e)
            return ClassificationResult.none(timestamp)

        if self.config.debug:
            logger.debug("Finger states: %s -> no rule", features.fingers.as_dict())
        return ClassificationResult(GestureType.UNKNOWN, self.config.unknown_confidence, timestamp)

    def classify_hands(self, hands: Optional[Sequence], timestamp: Optional[float] = None) -> ClassificationResult:
        """Classify the first hand of a multi-hand detection."""
        if not hands:
            return ClassificationResult.none(timestamp)
        return self.classify(hands[0], timestamp)

    def matching_rules(self, pose) -> List[GestureRule]:
        """
        Every rule whose predicate holds for the pose, in table order.

        Diagnostic for precedence: the first entry is what ``classify``
        reports, the rest are shadowed. Faulting rules are skipped.
        """
        features = self._features(pose)
        matched = []
        for rule in self._rules:
            try:
                if rule.matches(features):
                    matched.append(rule)
            except ArithmeticError as e:
                logger.debug("Rule %s skipped: %s", rule, e)
        return matched

    def _features(self, pose) -> HandFeatures:
        return HandFeatures(
            HandPose.from_landmarks(pose),
            finger_ratio=self.config.finger_extension_ratio,
            thumb_ratio=self.config.thumb_extension_ratio,
        )
