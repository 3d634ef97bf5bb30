"""Frame timing."""

from __future__ import annotations

import time
from typing import Callable


class Clock:
    """Tracks time since start and the time between ticks, in seconds."""

    def __init__(self, timer: Callable[[], float] = time.perf_counter) -> None:
        self._timer = timer
        now = timer()
        self._start = now
        self._frame = now
        self.time = 0.0
        self.delta_time = 0.0

    def tick(self) -> None:
        """Record a frame: update total time and the time since the last tick."""
        now = self._timer()
        self.time = now - self._start
        self.delta_time = now - self._frame
        self._frame = now

    def reset(self) -> None:
        """Restart the measurement of total time."""
        self._start = self._timer()

    def elapsed(self) -> float:
        """Seconds since start or the last reset."""
        return self._timer() - self._start