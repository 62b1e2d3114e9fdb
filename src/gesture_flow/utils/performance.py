"""
Frame-rate and stage latency tracking for the camera loop.
"""

import time
from collections import deque
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, Optional

STAGES = ("detection", "classification")


class Timer:
    """
    Stopwatch on time.perf_counter, usable as a context manager.

    Example:
        >>> with Timer("classify") as t:
        ...     classifier.classify(pose)
        >>> t.elapsed_ms
        0.41
    """

    def __init__(self, name: str = ""):
        self.name = name
        self._started: Optional[float] = None
        self._stopped: Optional[float] = None

    def start(self) -> "Timer":
        self._started, self._stopped = time.perf_counter(), None
        return self

    def stop(self) -> float:
        """Freeze the reading and return it in seconds."""
        self._stopped = time.perf_counter()
        return self.elapsed

    @property
    def elapsed(self) -> float:
        """Seconds since start(); keeps counting until stop()."""
        if self._started is None:
            return 0.0
        until = time.perf_counter() if self._stopped is None else self._stopped
        return until - self._started

    @property
    def elapsed_ms(self) -> float:
        return 1000.0 * self.elapsed

    def __enter__(self):
        return self.start()

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
        return False


class RollingWindow:
    """Mean over the last ``size`` samples."""

    def __init__(self, size: int):
        self._samples = deque(maxlen=size)

    def add(self, value: float) -> None:
        self._samples.append(value)

    @property
    def mean(self) -> float:
        if not self._samples:
            return 0.0
        return sum(self._samples) / len(self._samples)

    def __len__(self) -> int:
        return len(self._samples)


@dataclass
class PerformanceMetrics:
    """Point-in-time view of loop performance."""
    fps: float = 0.0
    frame_time_ms: float = 0.0
    detection_time_ms: float = 0.0
    classification_time_ms: float = 0.0
    total_frames: int = 0
    slow_frames: int = 0

    @property
    def slow_percent(self) -> float:
        return 100.0 * self.slow_frames / max(1, self.total_frames)


class PerformanceMonitor:
    """
    Rolling FPS plus per-stage latency for the detect -> classify loop.

    A frame counts as slow when it takes longer than one period of
    ``target_fps``.

    Example:
        >>> monitor = PerformanceMonitor()
        >>> monitor.frame_start()
        >>> with monitor.measure("detection"):
        ...     hands = detector.detect(frame)
        >>> with monitor.measure("classification"):
        ...     pipeline.process(hands)
        >>> monitor.frame_complete()
    """

    def __init__(self, window_size: int = 30, target_fps: float = 25.0):
        self.window_size = window_size
        self.target_fps = target_fps
        self._frames = RollingWindow(window_size)
        self._stages: Dict[str, RollingWindow] = {}
        self._frame_began: Optional[float] = None
        self._total = 0
        self._slow = 0

    def frame_start(self) -> None:
        self._frame_began = time.perf_counter()

    def frame_complete(self) -> None:
        """Close the open frame; a no-op when frame_start() was not called."""
        if self._frame_began is None:
            return
        took = time.perf_counter() - self._frame_began
        self._frame_began = None

        self._frames.add(took)
        self._total += 1
        if took * self.target_fps > 1.0:
            self._slow += 1

    @contextmanager
    def measure(self, stage: str):
        """Time a named stage; recorded even when the block raises."""
        began = time.perf_counter()
        try:
            yield
        finally:
            if stage not in self._stages:
                self._stages[stage] = RollingWindow(self.window_size)
            self._stages[stage].add(time.perf_counter() - began)

    @property
    def fps(self) -> float:
        mean = self._frames.mean
        return 1.0 / mean if mean > 0 else 0.0

    @property
    def frame_time_ms(self) -> float:
        return 1000.0 * self._frames.mean

    def stage_time_ms(self, stage: str) -> float:
        window = self._stages.get(stage)
        return 1000.0 * window.mean if window is not None else 0.0

    def get_metrics(self) -> PerformanceMetrics:
        return PerformanceMetrics(
            fps=self.fps,
            frame_time_ms=self.frame_time_ms,
            detection_time_ms=self.stage_time_ms("detection"),
            classification_time_ms=self.stage_time_ms("classification"),
            total_frames=self._total,
            slow_frames=self._slow,
        )

    def get_report(self) -> str:
        """Multi-line summary for the console."""
        m = self.get_metrics()
        lines = [
            "Performance Report",
            "=" * 40,
            f"FPS: {m.fps:.1f} (target: >={self.target_fps})",
            f"Frame Time: {m.frame_time_ms:.1f}ms",
        ]
        lines += [f"  {stage.capitalize()}: {self.stage_time_ms(stage):.2f}ms" for stage in STAGES]
        lines.append(f"Frames: {m.total_frames} total, {m.slow_frames} slow ({m.slow_percent:.1f}%)")
        return "\n".join(lines) + "\n"
