"""
healthprobe FastAPI Dependencies

Provides dependency injection functions for FastAPI routes.
"""

from typing import Annotated

from fastapi import Depends, Request

from healthprobe.services.health import HealthProbe


def get_health_probe(request: Request) -> HealthProbe:
    """Get health probe from app state."""
    return request.app.state.health_probe


HealthProbeDep = Annotated[HealthProbe, Depends(get_health_probe)]
