"""
Participant notification via Graph sendMail.
"""

from html import escape
from typing import Sequence
from urllib.parse import quote

import httpx

from incident_call.core.config import GraphSettings
from incident_call.core.exceptions import NotificationError
from incident_call.core.logging import get_logger
from incident_call.domain.models import AccessToken

logger = get_logger("notifier")


def build_mail_subject(priority: str, subject: str) -> str:
    return f"[{priority}] {subject} - Teams meeting"


def render_incident_email(priority: str, subject: str, start_iso: str, join_url: str) -> str:
    """
    Render the HTML body sent to participants.

    The join URL appears both as a link and as plain text so it survives
    clients that strip anchors.
    """
    link = escape(join_url, quote=True)
    return (
        f"<p>Priority: <b>{escape(priority)}</b></p>\n"
        f"<p>{escape(subject)}</p>\n"
        f"<p>Start: {escape(start_iso)}</p>\n"
        f'<p>Join the Teams meeting: <a href="{link}">Join meeting</a></p>\n'
        f"<p>Link: {link}</p>\n"
    )


class Notifier:
    """Sends a single HTML email from the configured sender mailbox."""

    def __init__(
        self,
        settings: GraphSettings,
        sender: str,
        http_client: httpx.AsyncClient
    ):
        self._settings = settings
        self._sender = sender
        self._http_client = http_client

    @property
    def endpoint(self) -> str:
        return f"{self._settings.base_url.rstrip('/')}/users/{quote(self._sender, safe='')}/sendMail"

    async def send_mail(
        self,
        token: AccessToken,
        to: Sequence[str],
        subject: str,
        body_html: str
    ) -> bool:
        """
        Send one message addressed to every recipient.

        Returns:
            True once Graph has accepted the message.

        Raises:
            NotificationError: On a non-success status or transport failure.
        """
        mail = {
            "message": {
                "subject": subject,
                "body": {
                    "contentType": "HTML",
                    "content": body_html,
                },
                "toRecipients": [{"emailAddress": {"address": address}} for address in to],
            },
            "saveToSentItems": self._settings.save_to_sent_items,
        }

        try:
            response = await self._http_client.post(
                self.endpoint,
                headers={**token.authorization_header, "Content-Type": "application/json"},
                json=mail,
            )
        except httpx.HTTPError as e:
            raise NotificationError(reason=str(e) or type(e).__name__) from e

        if not response.is_success:
            raise NotificationError(response.status_code, response.text)

        logger.info(f"Sent meeting notification to {len(to)} recipient(s)")
        return True
