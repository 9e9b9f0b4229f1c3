"""Liveness and readiness probes for the disclosure service."""

from fastapi import APIRouter, status
from pydantic import BaseModel

from medtag.config import settings
from medtag.database import check_database_connection

router = APIRouter()


class HealthResponse(BaseModel):
    """Liveness probe body."""

    status: str
    version: str
    environment: str


class DetailedHealthResponse(HealthResponse):
    """Readiness probe body, including the profile store."""

    database: str


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Liveness probe",
)
async def health_check() -> HealthResponse:
    """Report that the process is up; touches no store."""
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        environment=settings.environment,
    )


@router.get(
    "/health/detailed",
    response_model=DetailedHealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Readiness probe",
)
async def detailed_health_check() -> DetailedHealthResponse:
    """
    Report whether public disclosures can currently be served.

    The profile, contact and subscription tables share one database, so a
    single connectivity check covers every lookup on the public path.
    """
    db_healthy = await check_database_connection()

    return DetailedHealthResponse(
        status="healthy" if db_healthy else "degraded",
        version=settings.app_version,
        environment=settings.environment,
        database="healthy" if db_healthy else "unhealthy",
    )


@router.get(
    "/ping",
    status_code=status.HTTP_200_OK,
    summary="Ping",
)
async def ping() -> dict[str, str]:
    return {"message": "pong"}
