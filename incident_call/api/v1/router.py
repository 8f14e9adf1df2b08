"""
API v1 router aggregation.
"""

from fastapi import APIRouter
from incident_call.api.v1.endpoints import incidents, health

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(incidents.router, prefix="/incidents", tags=["Incidents"])
api_router.include_router(health.router, tags=["Health"])

__all__ = ["api_router"]
