"""
Incident call orchestration.

Authenticates, creates the online meeting and notifies participants, in
that order, within a single invocation. Nothing is retried and nothing is
rolled back: a meeting created before a failed notification stays live.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional

import httpx

from incident_call.core.config import Settings
from incident_call.core.exceptions import ConfigurationError, IncidentCallError
from incident_call.core.logging import get_logger
from incident_call.domain.models import IncidentRequest, MeetingWindow, OnlineMeeting
from incident_call.services.meeting_creator import MeetingCreator
from incident_call.services.notifier import Notifier, build_mail_subject, render_incident_email
from incident_call.services.token_provider import TokenProvider

logger = get_logger("incident_call_service")


class CallStage(str, Enum):
    """Stages of one invocation."""
    VALIDATING = "validating"
    AUTHENTICATING = "authenticating"
    CREATING_MEETING = "creating_meeting"
    NOTIFYING = "notifying"
    RESPONDING = "responding"
    FAILED = "failed"


class CallProgress:
    """Stage tracker for a single invocation."""

    def __init__(self):
        self.stage = CallStage.VALIDATING

    def enter(self, stage: CallStage) -> None:
        logger.debug(f"Incident call stage: {self.stage.value} -> {stage.value}")
        self.stage = stage


@dataclass(frozen=True)
class IncidentCallResult:
    """Outcome of a successful invocation."""
    meeting: OnlineMeeting
    window: MeetingWindow
    notified: bool

    @property
    def meeting_id(self) -> Optional[str]:
        return self.meeting.meeting_id

    @property
    def join_url(self) -> str:
        return self.meeting.join_url


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class IncidentCallService:
    """
    Runs the token -> meeting -> mail sequence for one incident request.

    Args:
        settings: Application settings, passed in once at startup.
        transport: Optional httpx transport for the per-invocation client.
        clock: Source of the current time.
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        clock: Callable[[], datetime] = utc_now
    ):
        self._settings = settings
        self._transport = transport
        self._clock = clock

    @property
    def settings(self) -> Settings:
        return self._settings

    def _new_http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self._settings.graph.timeout_seconds,
            transport=self._transport,
        )

    async def run(self, request: IncidentRequest) -> IncidentCallResult:
        """
        Execute the call flow for an already validated request.

        Raises:
            IncidentCallError: From whichever stage failed.
        """
        progress = CallProgress()
        try:
            return await self._run(request, progress)
        except IncidentCallError as e:
            e.details.setdefault("stage", progress.stage.value)
            logger.error(f"Incident call failed during {progress.stage.value}: {e.message}")
            progress.enter(CallStage.FAILED)
            raise

    async def _run(self, request: IncidentRequest, progress: CallProgress) -> IncidentCallResult:
        missing = self._settings.missing_fields()
        if missing:
            raise ConfigurationError(
                f"Missing configuration: {', '.join(missing)}",
                {"missing": missing},
            )

        async with self._new_http_client() as client:
            progress.enter(CallStage.AUTHENTICATING)
            token = await TokenProvider(self._settings.azure, client).get_token()

            progress.enter(CallStage.CREATING_MEETING)
            window = MeetingWindow.from_offsets(
                self._clock(),
                request.start_in_minutes,
                request.duration_minutes,
            )
            payload = await MeetingCreator(
                self._settings.graph,
                self._settings.organizer_upn,
                client,
            ).create_meeting(token, request.subject, window)
            meeting = OnlineMeeting.from_graph(payload)
            logger.debug(f"Join URL resolved from {meeting.join_url_source.value}")

            progress.enter(CallStage.NOTIFYING)
            notified = await Notifier(self._settings.graph, self._settings.sender, client).send_mail(
                token,
                to=list(request.participants),
                subject=build_mail_subject(request.priority, request.subject),
                body_html=render_incident_email(
                    request.priority,
                    request.subject,
                    window.start_iso,
                    meeting.join_url,
                ),
            )

        progress.enter(CallStage.RESPONDING)
        logger.info(
            f"Incident call ready: priority={request.priority} meeting={meeting.meeting_id} "
            f"participants={len(request.participants)}"
        )
        return IncidentCallResult(meeting=meeting, window=window, notified=notified)
