"""
Domain models module.
"""

from .meeting import (
    AccessToken,
    MeetingWindow,
    OnlineMeeting,
    JoinUrlSource,
    format_graph_datetime,
)
from .incident import (
    PARTICIPANTS_REQUIRED,
    MAX_OFFSET_MINUTES,
    IncidentRequest,
)

__all__ = [
    "AccessToken",
    "MeetingWindow",
    "OnlineMeeting",
    "JoinUrlSource",
    "format_graph_datetime",
    "PARTICIPANTS_REQUIRED",
    "MAX_OFFSET_MINUTES",
    "IncidentRequest",
]
