"""Time sources used by the health checks."""

import time
from datetime import datetime, timezone
from typing import Protocol


class Clock(Protocol):
    """Wall-clock, monotonic counter and process uptime."""

    def now(self) -> datetime:
        """Current UTC time."""
        ...

    def monotonic(self) -> float:
        """Monotonic counter in seconds, for measuring elapsed time."""
        ...

    def uptime(self) -> float:
        """Seconds since the process started serving."""
        ...


class SystemClock:
    """Clock backed by the system time functions."""

    def __init__(self, started_at: float | None = None) -> None:
        self._started_at = time.monotonic() if started_at is None else started_at

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def monotonic(self) -> float:
        return time.monotonic()

    def uptime(self) -> float:
        return max(0.0, time.monotonic() - self._started_at)


def elapsed_ms(clock: Clock, started: float) -> int:
    """Whole milliseconds elapsed on ``clock`` since ``started``."""
    return max(0, int((clock.monotonic() - started) * 1000))
