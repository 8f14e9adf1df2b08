"""
Health check endpoint.
"""

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter

from incident_call.api.v1.schemas.incident import HealthCheckResponse
from incident_call.core.dependencies import SettingsDep

router = APIRouter()


@router.get("/health", response_model=HealthCheckResponse, tags=["Health"])
async def health_check(settings=SettingsDep) -> Dict[str, Any]:
    """
    Health check endpoint.

    Returns:
        Health status with timestamp, version and whether required settings are present
    """
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc),
        "version": settings.version,
        "configured": settings.is_configured,
    }
