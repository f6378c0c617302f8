"""
healthprobe Custom Exceptions

Defines application-specific exceptions for consistent error handling.
"""

from typing import Any


class HealthProbeError(Exception):
    """Base exception for all healthprobe errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


# =============================================================================
# Database Errors
# =============================================================================


class DatabaseError(HealthProbeError):
    """Base exception for database-related errors."""

    pass


class DatabaseConnectionError(DatabaseError):
    """Raised when the initial database connection cannot be established."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            f"Failed to connect to database: {reason}",
            details={"reason": reason},
        )
        self.reason = reason


class DatabaseUnavailableError(DatabaseError):
    """Raised when the database does not answer a ping."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            f"Database unreachable: {reason}",
            details={"reason": reason},
        )
        self.reason = reason


class DatabasePingTimeoutError(DatabaseError):
    """Raised when a database ping exceeds its time budget."""

    def __init__(self, timeout_seconds: float) -> None:
        super().__init__(
            f"Database ping timed out after {timeout_seconds}s",
            details={"timeout_seconds": timeout_seconds},
        )
        self.timeout_seconds = timeout_seconds


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(HealthProbeError):
    """Raised when there's a configuration problem."""

    pass


class InvalidConfigurationError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(
            f"Invalid configuration for {field}: {reason}",
            details={"field": field, "reason": reason},
        )
        self.field = field
        self.reason = reason
