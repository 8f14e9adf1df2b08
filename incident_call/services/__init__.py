"""
Graph-backed services for the incident call flow.
"""

from .token_provider import TokenProvider
from .meeting_creator import MeetingCreator
from .notifier import Notifier, render_incident_email
from .incident_call_service import IncidentCallService, IncidentCallResult, CallStage

__all__ = [
    "TokenProvider",
    "MeetingCreator",
    "Notifier",
    "render_incident_email",
    "IncidentCallService",
    "IncidentCallResult",
    "CallStage",
]
