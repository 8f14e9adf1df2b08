"""
API request/response schemas for the incident call trigger.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from incident_call.domain.models.incident import PARTICIPANTS_REQUIRED, IncidentRequest

__all__ = [
    "PARTICIPANTS_REQUIRED",
    "IncidentRequest",
    "IncidentCallResponse",
    "ErrorResponse",
    "HealthCheckResponse",
]


class IncidentCallResponse(BaseModel):
    """Successful incident call."""
    meetingId: Optional[str] = None
    joinUrl: str


class ErrorResponse(BaseModel):
    """Downstream failure."""
    error: str


class HealthCheckResponse(BaseModel):
    """Health check response."""
    status: str = "ok"
    timestamp: datetime
    version: str
    configured: bool
