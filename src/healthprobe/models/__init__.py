"""healthprobe data models."""

from healthprobe.models.health import (
    DatabaseHealth,
    DatabaseStatus,
    HealthReport,
    HealthStatus,
    LivenessReport,
    ReadinessReport,
)

__all__ = [
    "DatabaseHealth",
    "DatabaseStatus",
    "HealthReport",
    "HealthStatus",
    "LivenessReport",
    "ReadinessReport",
]
