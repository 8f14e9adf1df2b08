"""
Custom exceptions for the Incident Teams Call service.
"""

from typing import Any, Dict, Optional


class IncidentCallError(Exception):
    """Base exception for incident call errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(IncidentCallError):
    """Raised when the inbound request cannot be accepted."""
    pass


class ConfigurationError(IncidentCallError):
    """Raised when configuration is incomplete."""
    pass


class DownstreamError(IncidentCallError):
    """
    A provider call answered with a non-success status or could not be made.

    ``status_code`` is None when no response was received.
    """

    action = "Request"

    def __init__(self, status_code: Optional[int] = None, body: str = "", reason: Optional[str] = None):
        self.status_code = status_code
        self.body = body
        if status_code is not None:
            message = f"{self.action} failed: {status_code} {body}".rstrip()
        else:
            message = f"{self.action} failed: {reason or 'no response'}"
        super().__init__(message, {"status_code": status_code, "body": body})


class AuthError(DownstreamError):
    """Raised when the client-credentials exchange fails."""
    action = "Token request"


class MeetingCreationError(DownstreamError):
    """Raised when the online meeting cannot be created."""
    action = "Create meeting"


class NotificationError(DownstreamError):
    """Raised when the notification email cannot be sent."""
    action = "SendMail"


class MissingJoinUrlError(IncidentCallError):
    """Raised when a created meeting carries no usable join URL."""

    def __init__(self, meeting_id: Optional[str] = None):
        super().__init__(
            "No joinUrl returned from Graph meeting creation",
            {"meeting_id": meeting_id},
        )
