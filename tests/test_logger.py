"""
Tests for logging helpers
==========================
"""

import logging
import logging.handlers

import pytest

from gesture_flow.core.types import ClassificationResult, GestureType
from gesture_flow.utils.logger import GestureLogger, log_timing, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:

    def test_console_only(self, restore_root_logger):
        root = setup_logging("DEBUG")
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], logging.StreamHandler)

    def test_with_rotating_file(self, restore_root_logger, tmp_path):
        log_file = tmp_path / "logs" / "gesture_flow.log"
        root = setup_logging("INFO", log_file=str(log_file), max_size_mb=1, backup_count=2)

        file_handlers = [h for h in root.handlers if isinstance(h, logging.handlers.RotatingFileHandler)]
        assert len(file_handlers) == 1
        assert file_handlers[0].maxBytes == 1024 * 1024
        assert file_handlers[0].backupCount == 2
        assert log_file.parent.is_dir()

    def test_unknown_level_falls_back_to_info(self, restore_root_logger):
        assert setup_logging("CHATTY").level == logging.INFO


class TestGestureLogger:

    def test_log_gesture(self, caplog):
        events = GestureLogger()
        with caplog.at_level(logging.INFO, logger="gesture_events"):
            events.log_gesture(ClassificationResult(GestureType.PEACE, 0.9), latency_ms=4.2)

        assert events.total_gestures == 1
        assert "peace" in caplog.text
        assert "4.2ms" in caplog.text

    def test_status_logged_on_transition_only(self, caplog):
        events = GestureLogger()
        with caplog.at_level(logging.INFO, logger="gesture_events"):
            events.log_status(True)
            events.log_status(True)
            events.log_status(False)
            events.log_status(False)

        messages = [r.getMessage() for r in caplog.records if r.name == "gesture_events"]
        assert messages == ["Hand tracking", "Hand lost, waiting"]

    def test_summary(self):
        events = GestureLogger()
        for gesture in (GestureType.FIST, GestureType.PEACE, GestureType.FIST):
            events.log_gesture(ClassificationResult(gesture, 0.9))

        assert events.total_gestures == 3
        assert events.summary() == [("fist", 2), ("peace", 1)]


class TestLogTiming:

    def test_preserves_result_and_name(self, caplog):
        @log_timing
        def double(x):
            return x * 2

        with caplog.at_level(logging.DEBUG):
            assert double(21) == 42

        assert double.__name__ == "double"
        assert "double took" in caplog.text
