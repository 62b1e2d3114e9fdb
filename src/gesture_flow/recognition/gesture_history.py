"""
Gesture History
================

Bounded FIFO of recent high-confidence classifications for display.
"""

import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional

from ..core.types import ClassificationResult

logger = logging.getLogger(__name__)


@dataclass
class GestureHistoryConfig:
    """Gesture history configuration."""
    capacity: int = 10            # Entries retained
    min_confidence: float = 0.7   # Strictly greater is required to record
    display_count: int = 5        # Rows shown in the "recent gestures" panel

    @classmethod
    def from_dict(cls, config: dict) -> "GestureHistoryConfig":
        """Create config from dictionary."""
        return cls(
            capacity=config.get("capacity", 10),
            min_confidence=config.get("min_confidence", 0.7),
            display_count=config.get("display_count", 5),
        )


class GestureHistory:
    """
    Rolling record of confident classifications.

    Only results with confidence above the threshold are kept; once the
    buffer is full the oldest entry is dropped.

    Example:
        >>> history = GestureHistory()
        >>> history.record(classifier.classify(pose))
        True
        >>> [r.name for r in history.recent(3)]
        ['peace', 'fist', 'open_hand']
    """

    def __init__(self, config: Optional[GestureHistoryConfig] = None):
        self.config = config or GestureHistoryConfig()
        if self.config.capacity < 1:
            raise ValueError(f"History capacity must be positive, got {self.config.capacity}")
        self._entries: Deque[ClassificationResult] = deque(maxlen=self.config.capacity)

    def record(self, result: ClassificationResult) -> bool:
        """
        Append a result if it is confident enough.

        Returns:
            True if the result was stored
        """
        if result.confidence <= self.config.min_confidence:
            return False

        if len(self._entries) == self._entries.maxlen:
            logger.debug("History full, evicting %s", self._entries[0])
        self._entries.append(result)
        return True

    def recent(self, n: Optional[int] = None) -> List[ClassificationResult]:
        """Last ``n`` entries, most recent first (all entries if n is None)."""
        newest_first = list(reversed(self._entries))
        if n is None:
            return newest_first
        if n <= 0:
            return []
        return newest_first[:n]

    def display(self) -> List[ClassificationResult]:
        """Entries for the recent-gestures panel."""
        return self.recent(self.config.display_count)

    @property
    def entries(self) -> List[ClassificationResult]:
        """All entries, oldest first."""
        return list(self._entries)

    @property
    def is_full(self) -> bool:
        return len(self._entries) == self._entries.maxlen

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)
