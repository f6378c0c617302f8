"""Health, readiness and liveness checks."""

from fastapi import status

from healthprobe.config import Settings, get_settings
from healthprobe.core.clock import Clock, elapsed_ms
from healthprobe.models.health import (
    DatabaseStatus,
    HealthReport,
    HealthStatus,
    LivenessReport,
    ReadinessReport,
)
from healthprobe.services.database import ConnectionState, DatabaseHealthChecker
from healthprobe.utils.logging import get_logger

logger = get_logger(__name__)

READY_MESSAGE = "Service is ready to accept requests"
NOT_READY_MESSAGE = "Service is not ready yet"


class HealthProbe:
    """Builds the reports served by the health endpoints.

    Each check returns the report together with the HTTP status code to
    send. Database failures degrade the report and never raise.
    """

    def __init__(
        self,
        database: DatabaseHealthChecker,
        clock: Clock,
        settings: Settings | None = None,
    ) -> None:
        self.database = database
        self.clock = clock
        self.settings = settings or get_settings()

    async def check_health(self) -> tuple[HealthReport, int]:
        """Probe the database and report overall health."""
        started = self.clock.monotonic()

        report = HealthReport(
            timestamp=self.clock.now().isoformat(),
            uptime_seconds=self.clock.uptime(),
        )

        state = self.database.status()
        if state.is_pingable:
            ping_started = self.clock.monotonic()
            result = await self.database.ping()
            if result.ok:
                report.database.status = DatabaseStatus.UP
                report.database.response_time_ms = elapsed_ms(self.clock, ping_started)
            else:
                report.database.status = DatabaseStatus.DOWN
                report.status = HealthStatus.DEGRADED
                logger.warning("Health degraded: database ping failed", error=result.error.message)
        else:
            report.database.status = DatabaseStatus.DOWN
            report.status = HealthStatus.DEGRADED
            logger.warning("Health degraded: database not connected", state=state.name)

        report.response_time_ms = elapsed_ms(self.clock, started)

        if report.status == HealthStatus.UP:
            return report, status.HTTP_200_OK
        return report, status.HTTP_503_SERVICE_UNAVAILABLE

    def check_readiness(self) -> tuple[ReadinessReport, int]:
        """Ready once the database is connected and the startup grace period has passed."""
        ready = (
            self.database.status() == ConnectionState.CONNECTED
            and self.clock.uptime() > self.settings.readiness_grace_period_seconds
        )

        if ready:
            return ReadinessReport(ready=True, message=READY_MESSAGE), status.HTTP_200_OK
        return (
            ReadinessReport(ready=False, message=NOT_READY_MESSAGE),
            status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    def check_liveness(self) -> tuple[LivenessReport, int]:
        """Always alive while the process can answer."""
        return (
            LivenessReport(alive=True, timestamp=self.clock.now().isoformat()),
            status.HTTP_200_OK,
        )
