"""Health check endpoints."""

from fastapi import APIRouter, Response

from healthprobe.core.dependencies import HealthProbeDep
from healthprobe.models.health import HealthReport, LivenessReport, ReadinessReport

router = APIRouter(tags=["Health"])


@router.get(
    "",
    response_model=HealthReport,
    responses={503: {"model": HealthReport, "description": "Database impaired"}},
)
async def health_check(response: Response, probe: HealthProbeDep) -> HealthReport:
    """
    Health check endpoint.

    Pings the database and reports uptime and response times. Answers 503
    with status DEGRADED when the database is down or unreachable.
    """
    report, status_code = await probe.check_health()
    response.status_code = status_code
    return report


@router.get(
    "/ready",
    response_model=ReadinessReport,
    responses={503: {"model": ReadinessReport, "description": "Not ready"}},
)
async def readiness_check(response: Response, probe: HealthProbeDep) -> ReadinessReport:
    """
    Readiness probe.

    Ready once the database is connected and the startup grace period has
    elapsed. Does not ping the database.
    """
    report, status_code = probe.check_readiness()
    response.status_code = status_code
    return report


@router.get("/live", response_model=LivenessReport)
async def liveness_check(probe: HealthProbeDep) -> LivenessReport:
    """
    Liveness probe.

    Returns 200 while the process is running. Used by container orchestrators
    to decide whether to restart the container.
    """
    report, _ = probe.check_liveness()
    return report
