"""
Data models for the incident meeting flow.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Dict, Optional

from incident_call.core.exceptions import MissingJoinUrlError


def format_graph_datetime(value: datetime) -> str:
    """Render a datetime as ISO-8601 UTC with millisecond precision."""
    utc = value.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


@dataclass(frozen=True)
class AccessToken:
    """Application bearer token. Never cached across invocations."""
    value: str
    token_type: str = "Bearer"
    expires_in: Optional[int] = None

    def __repr__(self) -> str:
        return f"AccessToken(token_type={self.token_type!r}, expires_in={self.expires_in!r})"

    @property
    def authorization_header(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.value}"}


@dataclass(frozen=True)
class MeetingWindow:
    """Start and end of the meeting to create."""
    start: datetime
    end: datetime

    @classmethod
    def from_offsets(
        cls,
        now: datetime,
        start_in_minutes: float,
        duration_minutes: float
    ) -> "MeetingWindow":
        """
        Build a window relative to ``now``.

        The start is never in the past and the meeting lasts at least a minute.
        """
        start = now + timedelta(minutes=max(0, start_in_minutes))
        end = start + timedelta(minutes=max(1, duration_minutes))
        return cls(start=start, end=end)

    @property
    def start_iso(self) -> str:
        return format_graph_datetime(self.start)

    @property
    def end_iso(self) -> str:
        return format_graph_datetime(self.end)


class JoinUrlSource(str, Enum):
    """Where in the meeting payload the join URL was found."""
    JOIN_URL = "joinUrl"
    JOIN_WEB_URL = "joinWebUrl"
    JOIN_INFORMATION = "joinInformation.joinUrl"


@dataclass(frozen=True)
class OnlineMeeting:
    """
    Online meeting as returned by Graph, reduced to what the flow needs.
    """
    meeting_id: Optional[str]
    join_url: str
    join_url_source: JoinUrlSource
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_graph(cls, payload: Dict[str, Any]) -> "OnlineMeeting":
        """
        Parse a Graph onlineMeeting payload.

        Direct fields are checked before the nested join information.

        Raises:
            MissingJoinUrlError: If no branch yields a non-empty URL.
        """
        meeting_id = payload.get("id")

        for source in (JoinUrlSource.JOIN_URL, JoinUrlSource.JOIN_WEB_URL):
            value = payload.get(source.value)
            if isinstance(value, str) and value:
                return cls(meeting_id, value, source, payload)

        join_information = payload.get("joinInformation")
        if isinstance(join_information, dict):
            value = join_information.get("joinUrl")
            if isinstance(value, str) and value:
                return cls(meeting_id, value, JoinUrlSource.JOIN_INFORMATION, payload)

        raise MissingJoinUrlError(meeting_id)
