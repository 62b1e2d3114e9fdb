"""
Tests for configuration loading
================================
"""

import logging

import pytest

from gesture_flow.utils.config import (
    DEFAULT_CONFIG,
    DEFAULT_CONFIG_PATH,
    _deep_merge,
    get_section,
    load_config,
)


class TestDeepMerge:

    def test_nested_override(self):
        merged = _deep_merge({"a": {"x": 1, "y": 2}, "b": 3}, {"a": {"y": 5}})
        assert merged == {"a": {"x": 1, "y": 5}, "b": 3}

    def test_does_not_mutate_base(self):
        base = {"a": {"x": 1}}
        _deep_merge(base, {"a": {"x": 2}})
        assert base == {"a": {"x": 1}}


class TestLoadConfig:

    def test_shipped_config_matches_defaults(self):
        config = load_config(DEFAULT_CONFIG_PATH)
        assert config["recognition"]["ok_max_distance"] == 0.06
        assert config["history"]["capacity"] == 10
        assert config["mediapipe"]["min_detection_confidence"] == 0.7
        assert config["visualization"]["colors"]["connections"] == [136, 255, 0]

    def test_missing_file_uses_defaults(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING):
            config = load_config(str(tmp_path / "missing.yaml"))
        assert config == DEFAULT_CONFIG
        assert "Config file not found" in caplog.text

    def test_defaults_are_copied(self, tmp_path):
        config = load_config(str(tmp_path / "missing.yaml"))
        config["history"]["capacity"] = 99
        assert DEFAULT_CONFIG["history"]["capacity"] == 10

    def test_partial_file_merges(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("history:\n  capacity: 4\ncamera:\n  mirror: false\n")

        config = load_config(str(path))
        assert config["history"]["capacity"] == 4
        assert config["history"]["min_confidence"] == 0.7
        assert config["camera"]["mirror"] is False
        assert config["camera"]["width"] == 640

    def test_empty_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_config(str(path)) == DEFAULT_CONFIG

    def test_non_mapping_root(self, tmp_path, caplog):
        path = tmp_path / "config.yaml"
        path.write_text("- just\n- a list\n")
        with caplog.at_level(logging.WARNING):
            assert load_config(str(path)) == DEFAULT_CONFIG
        assert "should be a mapping" in caplog.text


class TestGetSection:

    def test_present(self):
        assert get_section({"camera": {"width": 320}}, "camera") == {"width": 320}

    @pytest.mark.parametrize("config", [{}, {"camera": None}])
    def test_absent(self, config):
        assert get_section(config, "camera") == {}

    def test_malformed(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert get_section({"camera": "640x480"}, "camera") == {}
        assert "should be a dict" in caplog.text
