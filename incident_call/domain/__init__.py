"""
Domain layer exports.
"""

from .models import (
    AccessToken,
    MeetingWindow,
    OnlineMeeting,
    JoinUrlSource,
    IncidentRequest,
)

__all__ = [
    "AccessToken",
    "MeetingWindow",
    "OnlineMeeting",
    "JoinUrlSource",
    "IncidentRequest",
]
