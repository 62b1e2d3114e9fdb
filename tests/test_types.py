"""
Tests for gesture types and classification results
====================================================
"""

import dataclasses

import pytest

from gesture_flow.core.types import (
    GESTURE_EMOJI,
    GESTURE_LABELS,
    SHOWCASE_GESTURES,
    ClassificationResult,
    GestureType,
    gesture_emoji,
    gesture_label,
)


class TestGestureType:

    def test_closed_set(self):
        assert len(GestureType) == 18

    def test_from_string(self):
        assert GestureType.from_string("peace") == GestureType.PEACE
        assert GestureType.from_string("wave") == GestureType.NONE

    def test_every_gesture_has_display_metadata(self):
        for gesture in GestureType:
            assert gesture in GESTURE_EMOJI
            assert gesture in GESTURE_LABELS


class TestDisplayLookups:

    def test_known_gesture(self):
        assert gesture_emoji(GestureType.SPOCK) == "🖖"
        assert gesture_label("spock") == "Vulcan Salute"

    def test_unknown_name_falls_back(self):
        assert gesture_emoji("wave") == "❓"
        assert gesture_label("wave") == "Unknown"

    def test_showcase(self):
        assert len(SHOWCASE_GESTURES) == 15
        assert SHOWCASE_GESTURES[0] == ("✌️", "Peace")


class TestClassificationResult:

    def test_none(self):
        result = ClassificationResult.none(timestamp=12.5)
        assert result.gesture == GestureType.NONE
        assert result.confidence == 0.0
        assert result.timestamp == 12.5
        assert not result.hand_detected

    def test_equality_ignores_timestamp(self):
        a = ClassificationResult(GestureType.OK, 0.9, timestamp=1.0)
        b = ClassificationResult(GestureType.OK, 0.9, timestamp=99.0)
        assert a == b
        assert a != ClassificationResult(GestureType.OK, 0.85, timestamp=1.0)

    def test_immutable(self):
        result = ClassificationResult(GestureType.FIST, 0.95)
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.confidence = 0.1

    def test_display_properties(self):
        result = ClassificationResult(GestureType.CALL_ME, 0.85)
        assert result.name == "call_me"
        assert result.emoji == "🤙"
        assert result.label == "Call Me"
        assert result.confidence_percent == 85
        assert result.hand_detected

    def test_to_dict(self):
        result = ClassificationResult(GestureType.GUN, 0.8, timestamp=3.0)
        assert result.to_dict() == {"gesture": "gun", "confidence": 0.8, "timestamp": 3.0}

    def test_repr(self):
        assert repr(ClassificationResult(GestureType.FIST, 0.95)) == "ClassificationResult(fist, conf=0.95)"
