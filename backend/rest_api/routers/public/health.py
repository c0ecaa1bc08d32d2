"""
Health check endpoints for the REST API.
Provides basic and detailed health status of the service and its dependencies.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text

from shared.config.settings import settings
from shared.infrastructure.db import SessionLocal
from shared.utils.health import (
    HealthStatus,
    health_check_with_timeout,
    aggregate_health_checks,
)
from rest_api.services.llm import llm_client


router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
def health_check():
    """
    Basic health check endpoint.
    Returns service status without checking dependencies.
    """
    return {
        "status": "healthy",
        "service": "rest-api",
        "environment": settings.environment,
    }


@health_check_with_timeout(timeout=3.0, component="database")
async def check_database_health() -> dict:
    with SessionLocal() as db:
        db.execute(text("SELECT 1"))
    return {"dialect": db.get_bind().dialect.name}


@health_check_with_timeout(timeout=5.0, component="llm")
async def check_llm_health() -> dict:
    # No key configured is reported, not counted as an outage
    if not llm_client.is_configured:
        return {"configured": False}
    if not await llm_client.is_available():
        raise RuntimeError("language model API unreachable")
    return {"configured": True}


@router.get("/health/detailed")
async def detailed_health_check():
    """
    Detailed health check that verifies connectivity to dependencies.

    Returns 503 Service Unavailable if any dependency is down.
    """
    health_results = await aggregate_health_checks([
        check_database_health(),
        check_llm_health(),
    ])

    checks = {
        "service": "rest-api",
        "environment": settings.environment,
        "status": health_results["status"],
        "dependencies": health_results["components"],
    }

    if checks["status"] != HealthStatus.HEALTHY.value:
        return JSONResponse(content=checks, status_code=503)

    return checks
