"""Call-scoped elapsed-time meter."""

from __future__ import annotations

import time

MILLISECONDS = "MILLISECONDS"


class Stopwatch:
    """Monotonic stopwatch. Elapsed time can be read while running or stopped."""

    __slots__ = ("_start", "_elapsed", "_running")

    def __init__(self) -> None:
        self._start = 0.0
        self._elapsed = 0.0
        self._running = False

    @classmethod
    def create_started(cls) -> Stopwatch:
        return cls().start()

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self) -> Stopwatch:
        if self._running:
            raise RuntimeError("Stopwatch is already running")
        self._running = True
        self._start = time.perf_counter()
        return self

    def stop(self) -> Stopwatch:
        if not self._running:
            raise RuntimeError("Stopwatch is already stopped")
        self._elapsed += time.perf_counter() - self._start
        self._running = False
        return self

    def elapsed(self) -> float:
        """Elapsed seconds."""
        if self._running:
            return self._elapsed + (time.perf_counter() - self._start)
        return self._elapsed

    def elapsed_ms(self) -> int:
        return int(self.elapsed() * 1000)
