"""Health check endpoints for production monitoring."""

from __future__ import annotations

import time

from fastapi import APIRouter, Request

from materiality.schemas.health import HealthResponse, ServiceHealth
from materiality.store import data_store

router = APIRouter(tags=["health"])


async def _check_service(name: str, check_fn) -> ServiceHealth:
    """Run a health check function and return a ServiceHealth result."""
    start = time.monotonic()
    try:
        details = await check_fn()
        latency = (time.monotonic() - start) * 1000
        return ServiceHealth(
            service=name,
            status="healthy",
            latency_ms=round(latency, 2),
            details=details,
        )
    except Exception as exc:
        latency = (time.monotonic() - start) * 1000
        return ServiceHealth(
            service=name,
            status="unhealthy",
            latency_ms=round(latency, 2),
            details=str(exc)[:200],
        )


async def _check_app() -> None:
    """Application self-check — always passes."""
    return None


async def _check_store() -> str:
    """The in-memory store answers reads."""
    saved = len(data_store.list())
    return f"{saved} saved assessment(s), {len(data_store.sessions)} open session(s)"


def _narrative_health(request: Request) -> ServiceHealth:
    settings = request.app.state.settings
    if settings.narrative_service_url:
        return ServiceHealth(service="narrative", status="healthy", details="configured")
    return ServiceHealth(
        service="narrative",
        status="degraded",
        details="not configured; suggestions fall back to a fixed message",
    )


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Basic health check — is the application running?"""
    settings = request.app.state.settings
    services = [
        await _check_service("app", _check_app),
        await _check_service("store", _check_store),
    ]
    overall = "healthy" if all(s.status == "healthy" for s in services) else "degraded"

    return HealthResponse(
        status=overall,
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
        services=services,
    )


@router.get("/health/ready", response_model=HealthResponse)
async def readiness_check(request: Request) -> HealthResponse:
    """Readiness check — core services plus the narrative collaborator.

    An unconfigured narrative service degrades readiness without failing it.
    """
    settings = request.app.state.settings
    services = [
        await _check_service("app", _check_app),
        await _check_service("store", _check_store),
        _narrative_health(request),
    ]

    if any(s.status == "unhealthy" for s in services):
        overall = "unhealthy"
    elif all(s.status == "healthy" for s in services):
        overall = "healthy"
    else:
        overall = "degraded"

    return HealthResponse(
        status=overall,
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
        services=services,
    )


@router.get("/health/live")
async def liveness_check() -> dict[str, str]:
    """Liveness probe — is the process alive?"""
    return {"status": "alive"}
