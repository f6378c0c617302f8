"""MongoDB connection with lifecycle state tracking."""

import asyncio
import threading
from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Protocol

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import errors as mongo_errors
from pymongo import monitoring

from healthprobe.config import Settings, get_settings
from healthprobe.core.exceptions import (
    DatabaseConnectionError,
    DatabaseError,
    DatabasePingTimeoutError,
    DatabaseUnavailableError,
    InvalidConfigurationError,
)
from healthprobe.utils.logging import LoggerMixin


class ConnectionState(IntEnum):
    """Database connection state."""

    DISCONNECTED = 0
    CONNECTED = 1
    CONNECTING = 2
    DISCONNECTING = 3

    @property
    def is_pingable(self) -> bool:
        """Whether a ping is worth attempting in this state."""
        return self in (ConnectionState.CONNECTED, ConnectionState.CONNECTING)


@dataclass(frozen=True)
class PingResult:
    """Outcome of a database ping: ok, or the error that made it fail."""

    error: DatabaseError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls) -> "PingResult":
        return cls()

    @classmethod
    def failure(cls, error: DatabaseError) -> "PingResult":
        return cls(error=error)


class DatabaseHealthChecker(Protocol):
    """What the health checks need from a database."""

    def status(self) -> ConnectionState: ...

    async def ping(self) -> PingResult: ...


class ManagedDatabase(DatabaseHealthChecker, Protocol):
    """A health-checkable database whose lifecycle the application owns."""

    async def connect(self) -> None: ...

    async def close(self) -> None: ...


class TopologyStateListener(monitoring.TopologyListener):
    """Forwards the driver's server monitoring to a connection state callback.

    Runs on pymongo's monitor threads, so the callback must be thread-safe.
    """

    def __init__(self, on_change: Callable[[bool], None]) -> None:
        self._on_change = on_change

    def opened(self, event: monitoring.TopologyOpenedEvent) -> None:
        pass

    def description_changed(self, event: monitoring.TopologyDescriptionChangedEvent) -> None:
        self._on_change(event.new_description.has_readable_server())

    def closed(self, event: monitoring.TopologyClosedEvent) -> None:
        pass


class MongoDatabase(LoggerMixin):
    """Owns the motor client and reports its connection state.

    The state follows the driver's topology monitoring: CONNECTED while a
    readable server is known, CONNECTING while the driver is still looking
    for one. Pings adjust it too, for deployments where monitoring lags.
    """

    log_component = "mongodb"

    def __init__(
        self,
        settings: Settings | None = None,
        client_factory: Callable[..., Any] = AsyncIOMotorClient,
    ) -> None:
        """Initialize without connecting.

        Args:
            settings: Application settings
            client_factory: Callable building the motor client from a URI
        """
        self.settings = settings or get_settings()
        self._client_factory = client_factory
        self._client: Any | None = None
        self._state = ConnectionState.DISCONNECTED
        self._lock = threading.Lock()

    def _log_context(self) -> dict[str, Any]:
        return {"database": self.settings.mongodb_database}

    @property
    def client(self) -> Any | None:
        """Underlying motor client, if connected."""
        return self._client

    def status(self) -> ConnectionState:
        return self._state

    def _set_state(
        self,
        state: ConnectionState,
        allowed_from: tuple[ConnectionState, ...] | None = None,
    ) -> None:
        """Move to ``state``, unless the current state is not in ``allowed_from``."""
        with self._lock:
            previous = self._state
            if allowed_from is not None and previous not in allowed_from:
                return
            self._state = state

        if state != previous:
            self.log.info("Database state changed", previous=previous.name, state=state.name)

    def _on_topology_changed(self, has_readable_server: bool) -> None:
        self._set_state(
            ConnectionState.CONNECTED if has_readable_server else ConnectionState.CONNECTING,
            allowed_from=(ConnectionState.CONNECTING, ConnectionState.CONNECTED),
        )

    async def connect(self) -> None:
        """Create the client and verify it with a ping.

        Raises:
            InvalidConfigurationError: If the connection URI is rejected.
            DatabaseConnectionError: If the server does not answer. The state
                stays CONNECTING and the driver keeps retrying in the background.
        """
        if self._client is not None:
            self.log.warning("Database already connected", state=self._state.name)
            return

        self._set_state(ConnectionState.CONNECTING)
        try:
            self._client = self._client_factory(
                self.settings.mongodb_uri,
                serverSelectionTimeoutMS=self.settings.mongodb_server_selection_timeout_ms,
                appname="healthprobe",
                event_listeners=[TopologyStateListener(self._on_topology_changed)],
            )
        except mongo_errors.ConfigurationError as e:
            self._set_state(ConnectionState.DISCONNECTED)
            raise InvalidConfigurationError("mongodb_uri", str(e)) from e

        result = await self.ping()
        if not result.ok:
            raise DatabaseConnectionError(result.error.message)

        self.log.info("Connected to MongoDB")

    async def ping(self) -> PingResult:
        """Run the ``ping`` admin command, bounded by the configured timeout.

        Never raises: any failure comes back as a failed result.
        """
        if self._client is None:
            return PingResult.failure(DatabaseUnavailableError("client is not connected"))

        timeout = self.settings.db_ping_timeout_seconds
        try:
            await asyncio.wait_for(self._client.admin.command("ping"), timeout=timeout)
        except asyncio.TimeoutError:
            return self._ping_failed(DatabasePingTimeoutError(timeout))
        except Exception as e:
            return self._ping_failed(DatabaseUnavailableError(f"{type(e).__name__}: {e}"))

        self._set_state(ConnectionState.CONNECTED, allowed_from=(ConnectionState.CONNECTING,))
        return PingResult.success()

    def _ping_failed(self, error: DatabaseError) -> PingResult:
        self.log.warning("Database ping failed", error=error.message)
        self._set_state(ConnectionState.CONNECTING, allowed_from=(ConnectionState.CONNECTED,))
        return PingResult.failure(error)

    async def close(self) -> None:
        """Close the client. Safe to call more than once."""
        if self._client is None:
            self._set_state(ConnectionState.DISCONNECTED)
            return

        self._set_state(ConnectionState.DISCONNECTING)
        self._client.close()
        self._client = None
        self._set_state(ConnectionState.DISCONNECTED)
        self.log.info("MongoDB connection closed")
