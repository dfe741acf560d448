from __future__ import annotations

import time
from collections.abc import Callable


class Clock:
    """Wall-clock frame timer.

    The first `tick()` after construction or `reset()` only records the baseline
    and returns 0.0; every later call returns the seconds elapsed since the
    previous one.
    """

    def __init__(self, time_fn: Callable[[], float] = time.perf_counter):
        self._time_fn = time_fn
        self._last: float | None = None

    def reset(self) -> None:
        self._last = None

    def tick(self) -> float:
        now = float(self._time_fn())
        if self._last is None:
            self._last = now
            return 0.0
        elapsed = max(0.0, now - self._last)
        self._last = now
        return elapsed
