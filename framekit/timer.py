"""Frame timer tracking per-frame delta, total running time and FPS."""

from __future__ import annotations

import time
from collections.abc import Callable

__all__ = ["Timer"]


class Timer:
    """Tick-based frame timer.

    ``counter`` returns a monotonically increasing tick count and
    ``ticks_per_second`` gives its resolution. FPS is recomputed every
    half second of ticks.
    """

    def __init__(
        self,
        counter: Callable[[], int] | None = None,
        ticks_per_second: int | None = None,
    ) -> None:
        if counter is None:
            counter = time.perf_counter_ns
            if ticks_per_second is None:
                ticks_per_second = 1_000_000_000
        if ticks_per_second is None:
            raise ValueError("ticks_per_second is required with a custom counter")
        if ticks_per_second <= 0:
            raise ValueError("ticks_per_second must be positive")
        self._counter = counter
        self._ticks_per_second = ticks_per_second
        self._fps_update_interval = ticks_per_second >> 1
        self._current_time = 0
        self._last_time = 0
        self._last_fps_update = 0
        self._frame_count = 0
        self._running_time = 0.0
        self._frames_per_second = 0.0
        self._time_elapsed = 0.0
        self._stopped = True

    def update(self) -> None:
        """Advance one frame; does nothing while stopped."""
        if self._stopped:
            return
        tps = self._ticks_per_second
        self._current_time = self._counter()
        self._time_elapsed = (self._current_time - self._last_time) / tps
        self._running_time += self._time_elapsed

        self._frame_count += 1
        if self._current_time - self._last_fps_update >= self._fps_update_interval:
            span = self._current_time / tps - self._last_fps_update / tps
            self._frames_per_second = self._frame_count / span
            self._last_fps_update = self._current_time
            self._frame_count = 0

        self._last_time = self._current_time

    def start(self) -> None:
        """Start the timer; it must currently be stopped."""
        if not self._stopped:
            raise RuntimeError("timer is already running")
        self._last_time = self._counter()
        self._stopped = False

    def stop(self) -> None:
        """Stop the timer, adding the time since the last frame."""
        if self._stopped:
            raise RuntimeError("timer is already stopped")
        stop_time = self._counter()
        self._running_time += (stop_time - self._last_time) / self._ticks_per_second
        self._stopped = True

    @property
    def stopped(self) -> bool:
        """Whether the timer is stopped."""
        return self._stopped

    @property
    def delta(self) -> float:
        """Seconds since the previous frame, or 0.0 while stopped."""
        return 0.0 if self._stopped else self._time_elapsed

    @property
    def fps(self) -> float:
        """Most recently measured frames per second."""
        return self._frames_per_second

    @property
    def running(self) -> float:
        """Total seconds accumulated while running."""
        return self._running_time