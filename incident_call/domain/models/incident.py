"""
Parsed incident call request.
"""

from datetime import datetime, timezone
from typing import Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from incident_call.core.exceptions import ValidationError
from incident_call.domain.models.meeting import format_graph_datetime

PARTICIPANTS_REQUIRED = "participants array required"

# Ten years; keeps any meeting window inside datetime's range
MAX_OFFSET_MINUTES = 10 * 366 * 24 * 60

_FIELD_MESSAGES = {
    "participants": "participants must be email address strings",
    "startInMinutes": "startInMinutes must be a number",
    "durationMinutes": "durationMinutes must be a number",
    "priority": "priority must be a string",
    "subject": "subject must be a string",
}


def _describe(error: PydanticValidationError) -> str:
    first = error.errors()[0]
    field = str(first["loc"][0])
    if first["type"] == "less_than_equal":
        return f"{field} must be at most {MAX_OFFSET_MINUTES}"
    return _FIELD_MESSAGES.get(field, f"{field} is invalid")


class IncidentRequest(BaseModel):
    """Parsed and defaulted incident call request."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    priority: str = Field(default="P1", description="Incident priority label")
    subject: str = Field(..., description="Meeting and mail subject")
    participants: Tuple[str, ...] = Field(..., min_length=1, description="Recipient addresses")
    start_in_minutes: float = Field(
        default=1, alias="startInMinutes", allow_inf_nan=False, le=MAX_OFFSET_MINUTES
    )
    duration_minutes: float = Field(
        default=30, alias="durationMinutes", allow_inf_nan=False, le=MAX_OFFSET_MINUTES
    )

    @field_validator("start_in_minutes", "duration_minutes", mode="before")
    @classmethod
    def reject_booleans(cls, v: Any) -> Any:
        if isinstance(v, bool):
            raise ValueError("booleans are not offsets")
        return v

    @classmethod
    def from_payload(cls, payload: Any, now: Optional[datetime] = None) -> "IncidentRequest":
        """
        Parse a decoded JSON body, applying defaults.

        Null and empty-string fields take their defaults; an explicit 0 is kept.

        Raises:
            ValidationError: If participants are missing or a field has the wrong type or range.
        """
        if not isinstance(payload, dict):
            payload = {}

        participants = payload.get("participants")
        if not isinstance(participants, list) or not participants:
            raise ValidationError(PARTICIPANTS_REQUIRED)

        data = {key: value for key, value in payload.items() if value is not None and value != ""}
        if "subject" not in data:
            now = now or datetime.now(timezone.utc)
            data["subject"] = f"P1 Incident - {format_graph_datetime(now)}"

        try:
            return cls.model_validate(data)
        except PydanticValidationError as e:
            raise ValidationError(
                _describe(e),
                {"errors": e.errors(include_url=False, include_input=False)},
            ) from e
