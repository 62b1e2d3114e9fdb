"""Utility modules for configuration, logging and performance."""
from .config import load_config
from .logger import setup_logging, GestureLogger
from .performance import PerformanceMonitor, Timer

__all__ = ["load_config", "setup_logging", "GestureLogger", "PerformanceMonitor", "Timer"]
