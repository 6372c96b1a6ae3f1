"""
Liveness and readiness probes.
"""
from fastapi import APIRouter, Response

from chatstats.core.database import check_db_connection
from chatstats.core.logging import get_logger
from chatstats.schemas.report import HealthResponse

logger = get_logger(__name__)

router = APIRouter(prefix="/health", tags=["Health"])


@router.get(
    "/live",
    response_model=HealthResponse,
    summary="Liveness probe",
    description="Always returns 200 to indicate the service is alive."
)
async def liveness() -> HealthResponse:
    return HealthResponse(status="ok")


@router.get(
    "/ready",
    response_model=HealthResponse,
    summary="Readiness probe",
    description="Returns 200 when the message store is reachable."
)
async def readiness(response: Response) -> HealthResponse:
    """Readiness probe: the reports are useless without the database."""
    db_ok = check_db_connection()
    checks = {"database": "ok" if db_ok else "failed"}

    if not db_ok:
        logger.warning("Readiness check failed: database not reachable")
        response.status_code = 503
        return HealthResponse(status="not ready", checks=checks)

    return HealthResponse(status="ok", checks=checks)
