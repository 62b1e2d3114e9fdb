"""
Tests for the frame pipeline
=============================
"""

from unittest.mock import Mock

import pytest

from gesture_flow.core.pipeline import GesturePipeline
from gesture_flow.core.types import GestureType
from gesture_flow.utils.logger import GestureLogger


@pytest.fixture
def pipeline():
    return GesturePipeline()


class TestGesturePipeline:

    def test_initial_state(self, pipeline):
        state = pipeline.state
        assert state.current.gesture == GestureType.NONE
        assert not state.is_active
        assert state.frame_count == 0
        assert state.status_text == "Waiting"

    def test_no_hands(self, pipeline):
        result = pipeline.process([])
        assert result.gesture == GestureType.NONE
        assert not pipeline.state.is_active
        assert pipeline.state.frame_count == 1
        assert len(pipeline.history) == 0

    def test_none_hands(self, pipeline):
        assert pipeline.process(None).gesture == GestureType.NONE

    def test_hand_is_classified_and_recorded(self, pipeline, fist_pose):
        result = pipeline.process([fist_pose])
        assert result.gesture == GestureType.FIST
        assert pipeline.state.is_active
        assert pipeline.state.status_text == "Tracking"
        assert pipeline.state.hands_seen == 1
        assert pipeline.history.recent(1)[0].gesture == GestureType.FIST

    def test_low_confidence_not_recorded(self, pipeline, build_pose):
        result = pipeline.process([build_pose(("middle",))])
        assert result.gesture == GestureType.UNKNOWN
        assert pipeline.state.current == result
        assert len(pipeline.history) == 0

    def test_only_first_hand_used(self, pipeline, fist_pose, open_hand_pose):
        assert pipeline.process([open_hand_pose, fist_pose]).gesture == GestureType.OPEN_HAND

    def test_multi_hand_frames_go_through_classify_hands(self, fist_pose, open_hand_pose):
        pipeline = GesturePipeline()
        pipeline.classifier.classify_hands = Mock(wraps=pipeline.classifier.classify_hands)

        result = pipeline.process([fist_pose, open_hand_pose])

        pipeline.classifier.classify_hands.assert_called_once_with([fist_pose, open_hand_pose])
        assert result.gesture == GestureType.FIST

    def test_losing_hand_resets_current(self, pipeline, fist_pose):
        pipeline.process([fist_pose])
        pipeline.process([])
        assert pipeline.state.current.gesture == GestureType.NONE
        assert not pipeline.state.is_active
        # History survives the hand leaving the frame
        assert len(pipeline.history) == 1

    def test_event_logging(self, fist_pose, build_pose):
        event_logger = Mock(spec=GestureLogger)
        pipeline = GesturePipeline(event_logger=event_logger)

        pipeline.process([fist_pose])
        pipeline.process([build_pose(("middle",))])
        pipeline.process([])

        assert event_logger.log_gesture.call_count == 1
        event_logger.log_status.assert_any_call(True)
        event_logger.log_status.assert_called_with(False)

    def test_snapshot(self, pipeline, fist_pose, build_pose):
        pipeline.process([fist_pose])
        pipeline.process([build_pose(("index", "middle"))])

        snap = pipeline.snapshot()
        assert snap["gesture"] == "peace"
        assert snap["label"] == "Peace Sign"
        assert snap["confidence_percent"] == 90
        assert snap["active"] is True
        assert snap["status"] == "Tracking"
        assert [row["gesture"] for row in snap["history"]] == ["peace", "fist"]
        assert snap["history"][1]["emoji"] == "✊"
