"""
Online meeting creation through Microsoft Graph.
"""

from typing import Any, Dict
from urllib.parse import quote

import httpx

from incident_call.core.config import GraphSettings
from incident_call.core.exceptions import MeetingCreationError
from incident_call.core.logging import get_logger
from incident_call.domain.models import AccessToken, MeetingWindow

logger = get_logger("meeting_creator")

DEFAULT_MEETING_SUBJECT = "Automated Teams Meeting"


class MeetingCreator:
    """Creates Teams online meetings on behalf of a fixed organizer."""

    def __init__(self, settings: GraphSettings, organizer_upn: str, http_client: httpx.AsyncClient):
        self._settings = settings
        self._organizer_upn = organizer_upn
        self._http_client = http_client

    @property
    def endpoint(self) -> str:
        return f"{self._settings.base_url.rstrip('/')}/users/{quote(self._organizer_upn, safe='')}/onlineMeetings"

    async def create_meeting(
        self,
        token: AccessToken,
        subject: str,
        window: MeetingWindow
    ) -> Dict[str, Any]:
        """
        Create an online meeting.

        Args:
            token: Application access token.
            subject: Meeting subject.
            window: Meeting start and end.

        Returns:
            The Graph onlineMeeting representation, unmodified.

        Raises:
            MeetingCreationError: On a non-success status or transport failure.
        """
        body = {
            "subject": subject or DEFAULT_MEETING_SUBJECT,
            "startDateTime": window.start_iso,
            "endDateTime": window.end_iso,
        }

        try:
            response = await self._http_client.post(
                self.endpoint,
                headers={**token.authorization_header, "Content-Type": "application/json"},
                json=body,
            )
        except httpx.HTTPError as e:
            raise MeetingCreationError(reason=str(e) or type(e).__name__) from e

        if not response.is_success:
            raise MeetingCreationError(response.status_code, response.text)

        try:
            meeting = response.json()
        except ValueError as e:
            raise MeetingCreationError(response.status_code, response.text) from e

        if not isinstance(meeting, dict):
            raise MeetingCreationError(response.status_code, response.text)

        logger.info(f"Created online meeting {meeting.get('id')} for {self._organizer_upn}")
        return meeting
