"""
Configuration loading.
Reads the YAML config and merges it over built-in defaults.
"""

import copy
import os
import logging

import yaml

logger = logging.getLogger(__name__)

_BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))
DEFAULT_CONFIG_PATH = os.path.join(_BASE_DIR, "config", "config.yaml")

DEFAULT_CONFIG = {
    "camera": {
        "device_id": 0,
        "width": 640,
        "height": 480,
        "mirror": True,
    },
    "mediapipe": {
        "model_path": "",
        "max_num_hands": 1,
        "min_detection_confidence": 0.7,
        "min_presence_confidence": 0.5,
        "min_tracking_confidence": 0.5,
        "running_mode": "VIDEO",
    },
    "recognition": {
        "finger_extension_ratio": 0.8,
        "thumb_extension_ratio": 1.2,
        "ok_max_distance": 0.06,
        "gun_min_distance": 0.08,
        "l_shape_min_angle": 70.0,
        "l_shape_max_angle": 110.0,
        "unknown_confidence": 0.6,
        "debug": False,
    },
    "history": {
        "capacity": 10,
        "min_confidence": 0.7,
        "display_count": 5,
    },
    "visualization": {},
    "logging": {
        "level": "INFO",
        "file": None,
    },
    "performance": {
        "target_fps": 25.0,
        "window_size": 30,
    },
}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base dict."""
    merged = base.copy()
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(path=None) -> dict:
    """
    Load configuration from a YAML file.

    Missing files fall back to DEFAULT_CONFIG with a warning; values present
    in the file override the defaults key by key.
    """
    path = path or DEFAULT_CONFIG_PATH
    defaults = copy.deepcopy(DEFAULT_CONFIG)

    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
        logger.info("Loaded config from %s", path)
    except FileNotFoundError:
        logger.warning("Config file not found: %s, using defaults", path)
        return defaults

    if not isinstance(data, dict):
        logger.warning("Config root in %s should be a mapping, got %s", path, type(data).__name__)
        return defaults

    return _deep_merge(defaults, data)


def get_section(config: dict, name: str) -> dict:
    """Get a config section, tolerating absent or malformed sections."""
    section = config.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        logger.warning("Section '%s' should be a dict, got %s", name, type(section).__name__)
        return {}
    return section
