# src/rune_rotation/tasks/work_timer.py

from __future__ import annotations

import time
from collections.abc import Callable

Clock = Callable[[], float]


class WorkTimer:
    """
    Pausable stopwatch tracking accumulated work time on one task.

    Time only accumulates between resume() (or start()) and pause().
    The clock is injectable so tests can drive it deterministically.
    """

    def __init__(self, name: str = "", *, clock: Clock = time.monotonic) -> None:
        self.name = name
        self._clock = clock
        self._accumulated = 0.0
        self._running_since: float | None = None
        self._started = False

    def __repr__(self) -> str:
        return (
            f"WorkTimer(name={self.name!r}, elapsed={self.elapsed:.3f}, "
            f"running={self.running})"
        )

    @property
    def started(self) -> bool:
        return self._started

    @property
    def running(self) -> bool:
        return self._running_since is not None

    @property
    def elapsed(self) -> float:
        total = self._accumulated
        if self._running_since is not None:
            total += max(0.0, self._clock() - self._running_since)
        return total

    def start(self) -> None:
        """Zero the timer and start running."""
        self._accumulated = 0.0
        self._running_since = self._clock()
        self._started = True

    def pause(self) -> None:
        if self._running_since is None:
            return
        self._accumulated += max(0.0, self._clock() - self._running_since)
        self._running_since = None

    def resume(self) -> None:
        # Resuming a never-started timer behaves like start().
        if not self._started:
            self.start()
            return
        if self._running_since is None:
            self._running_since = self._clock()

    def reset(self) -> None:
        self._accumulated = 0.0
        self._running_since = None
        self._started = False
