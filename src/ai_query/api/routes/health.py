"""
Health Check Routes
===================

Kubernetes-compatible health and readiness endpoints.
"""

from fastapi import APIRouter, Request

from ai_query import __version__
from ai_query.api.schemas import HealthResponse, HealthStatus, ReadinessResponse

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
)
async def health_check() -> HealthResponse:
    """Liveness for load balancers and monitoring."""
    return HealthResponse(status=HealthStatus.HEALTHY, version=__version__, checks={"api": True})


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness check",
)
async def readiness_check(request: Request) -> ReadinessResponse:
    """
    Ready once configuration is loaded and the generator is wired.

    Returns:
        ReadinessResponse with individual checks
    """
    generator = getattr(request.app.state, "generator", None)
    checks = {
        "generator": generator is not None,
        "config_loaded": bool(generator and generator.config_manager.loaded),
    }
    return ReadinessResponse(ready=all(checks.values()), checks=checks)
