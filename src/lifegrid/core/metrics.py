"""Frame rate tracking for animated frontends."""

from typing import Deque, Optional
from collections import deque
import time

import numpy as np


class FrameRateMonitor:
    """Tracks frames per second over a sliding window of recent frames."""

    def __init__(self, window: int = 100) -> None:
        """Initialize the monitor.

        Args:
            window: Number of most recent frame rates kept for statistics
        """
        if window <= 0:
            raise ValueError(f"Window must be positive, got {window}")
        self.window = window
        self._frames: Deque[float] = deque(maxlen=window)
        self._last_timestamp: Optional[float] = None

    def frame(self, now: Optional[float] = None) -> float:
        """Record a rendered frame.

        Args:
            now: Timestamp in seconds (defaults to time.perf_counter())

        Returns:
            Frame rate since the previous frame (0.0 for the first frame)
        """
        if now is None:
            now = time.perf_counter()

        previous = self._last_timestamp
        self._last_timestamp = now
        if previous is None:
            return 0.0

        delta = now - previous
        fps = 1.0 / delta if delta > 0 else 0.0
        self._frames.append(fps)
        return fps

    @property
    def latest(self) -> float:
        """Most recent frame rate."""
        return self._frames[-1] if self._frames else 0.0

    @property
    def mean(self) -> float:
        """Mean frame rate over the window."""
        return float(np.mean(self._frames)) if self._frames else 0.0

    @property
    def minimum(self) -> float:
        """Lowest frame rate in the window."""
        return float(min(self._frames)) if self._frames else 0.0

    @property
    def maximum(self) -> float:
        """Highest frame rate in the window."""
        return float(max(self._frames)) if self._frames else 0.0

    def reset(self) -> None:
        """Forget all recorded frames."""
        self._frames.clear()
        self._last_timestamp = None

    def summary(self) -> str:
        """Format the frame rate statistics for display."""
        return (
            "Frames per Second:\n"
            f"         latest = {round(self.latest)}\n"
            f"avg of last {self.window} = {round(self.mean)}\n"
            f"min of last {self.window} = {round(self.minimum)}\n"
            f"max of last {self.window} = {round(self.maximum)}"
        )
