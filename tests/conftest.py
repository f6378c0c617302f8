"""Pytest configuration and fixtures for all tests.

Tests never reach a real MongoDB: the health probe is wired to an
in-memory database fake and a manually driven clock.
"""

import os
from datetime import datetime, timezone

import pytest

from healthprobe.config import Settings
from healthprobe.core.exceptions import DatabaseUnavailableError
from healthprobe.services.database import ConnectionState, PingResult


class FakeClock:
    """Clock whose time only moves when a test moves it."""

    def __init__(self, uptime: float = 60.0) -> None:
        self.current = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
        self.ticks = 1000.0
        self.uptime_seconds = uptime

    def now(self) -> datetime:
        return self.current

    def monotonic(self) -> float:
        return self.ticks

    def uptime(self) -> float:
        return self.uptime_seconds

    def advance(self, seconds: float) -> None:
        self.ticks += seconds


class FakeDatabase:
    """Database checker with a settable state and canned ping outcome."""

    def __init__(
        self,
        state: ConnectionState = ConnectionState.CONNECTED,
        clock: FakeClock | None = None,
        ping_latency: float = 0.0,
    ) -> None:
        self.state = state
        self.clock = clock
        self.ping_latency = ping_latency
        self.ping_result = PingResult.success()
        self.ping_calls = 0
        self.connect_error: Exception | None = None
        self.closed = False

    def status(self) -> ConnectionState:
        return self.state

    async def ping(self) -> PingResult:
        self.ping_calls += 1
        if self.clock is not None:
            self.clock.advance(self.ping_latency)
        return self.ping_result

    def fail_pings(self, reason: str = "connection refused") -> None:
        self.ping_result = PingResult.failure(DatabaseUnavailableError(reason))

    async def connect(self) -> None:
        if self.connect_error is not None:
            raise self.connect_error
        self.state = ConnectionState.CONNECTED

    async def close(self) -> None:
        self.closed = True
        self.state = ConnectionState.DISCONNECTED


@pytest.fixture(autouse=True)
def isolate_from_env():
    """Clear HEALTHPROBE_* env vars so local configuration cannot leak into tests."""
    original_values = {
        key: os.environ.pop(key) for key in list(os.environ) if key.startswith("HEALTHPROBE_")
    }

    yield

    os.environ.update(original_values)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        env="testing",
        mongodb_uri="mongodb://db.test:27017",
        db_ping_timeout_seconds=0.05,
        readiness_grace_period_seconds=5.0,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def database(clock: FakeClock) -> FakeDatabase:
    return FakeDatabase(clock=clock)
