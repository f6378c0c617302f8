"""healthprobe services."""

from healthprobe.services.database import (
    ConnectionState,
    DatabaseHealthChecker,
    MongoDatabase,
    PingResult,
)
from healthprobe.services.health import HealthProbe

__all__ = [
    "ConnectionState",
    "DatabaseHealthChecker",
    "HealthProbe",
    "MongoDatabase",
    "PingResult",
]
