"""Health check models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class HealthStatus(str, Enum):
    """Overall service status."""

    UP = "UP"
    DEGRADED = "DEGRADED"


class DatabaseStatus(str, Enum):
    """Database status as seen by the last probe."""

    UP = "UP"
    DOWN = "DOWN"
    UNKNOWN = "UNKNOWN"


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DatabaseHealth(CamelModel):
    """Database section of the health report."""

    status: DatabaseStatus = DatabaseStatus.UNKNOWN
    response_time_ms: int = Field(default=0, ge=0)


class HealthReport(CamelModel):
    """Response body of GET /health."""

    status: HealthStatus = HealthStatus.UP
    timestamp: str
    uptime_seconds: float = Field(ge=0)
    database: DatabaseHealth = Field(default_factory=DatabaseHealth)
    response_time_ms: int = Field(default=0, ge=0)


class ReadinessReport(CamelModel):
    """Response body of GET /health/ready."""

    ready: bool
    message: str


class LivenessReport(CamelModel):
    """Response body of GET /health/live."""

    alive: bool = True
    timestamp: str
