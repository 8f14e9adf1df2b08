"""
API v1 schemas module.
"""

from .incident import (
    PARTICIPANTS_REQUIRED,
    IncidentRequest,
    IncidentCallResponse,
    ErrorResponse,
    HealthCheckResponse,
)

__all__ = [
    "PARTICIPANTS_REQUIRED",
    "IncidentRequest",
    "IncidentCallResponse",
    "ErrorResponse",
    "HealthCheckResponse",
]
