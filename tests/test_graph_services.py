"""Tests for the token provider, meeting creator and notifier against a fake Graph."""

import asyncio

import httpx
import pytest

from incident_call.core.config import GraphSettings
from incident_call.core.exceptions import AuthError, MeetingCreationError, NotificationError
from incident_call.domain.models import AccessToken, MeetingWindow
from incident_call.services.meeting_creator import MeetingCreator
from incident_call.services.notifier import Notifier, build_mail_subject, render_incident_email
from incident_call.services.token_provider import TokenProvider

from .conftest import CLIENT_ID, CLIENT_SECRET, FIXED_NOW, JOIN_URL, ORGANIZER, TENANT_ID

TOKEN = AccessToken(value="tok-1")


def get_token(fake_graph, settings):
    async def _run():
        async with fake_graph.client() as client:
            return await TokenProvider(settings.azure, client).get_token()
    return asyncio.run(_run())


def create_meeting(fake_graph, settings, subject="DB down"):
    window = MeetingWindow.from_offsets(FIXED_NOW, 0, 15)

    async def _run():
        async with fake_graph.client() as client:
            creator = MeetingCreator(settings.graph, settings.organizer_upn, client)
            return await creator.create_meeting(TOKEN, subject, window)
    return asyncio.run(_run())


def send_mail(fake_graph, settings, to=("a@x.com", "b@x.com")):
    async def _run():
        async with fake_graph.client() as client:
            notifier = Notifier(settings.graph, settings.sender, client)
            return await notifier.send_mail(TOKEN, list(to), "[P1] DB down - Teams meeting", "<p>hi</p>")
    return asyncio.run(_run())


class TestTokenProvider:

    def test_client_credentials_exchange(self, fake_graph, settings):
        token = get_token(fake_graph, settings)

        assert token.value == "tok-1"
        assert token.expires_in == 3599

        request = fake_graph.calls("token")[0]
        assert request.method == "POST"
        assert request.url.path == f"/{TENANT_ID}/oauth2/v2.0/token"
        assert fake_graph.form_body("token") == {
            "client_id": CLIENT_ID,
            "scope": "https://graph.microsoft.com/.default",
            "client_secret": CLIENT_SECRET,
            "grant_type": "client_credentials",
        }

    def test_rejected_credentials_raise_auth_error(self, fake_graph, settings):
        fake_graph.respond("token", 401, json={"error": "invalid_client"})

        with pytest.raises(AuthError) as exc_info:
            get_token(fake_graph, settings)

        error = exc_info.value
        assert error.status_code == 401
        assert "invalid_client" in error.body
        assert error.message.startswith("Token request failed: 401")

    def test_success_without_token_is_auth_error(self, fake_graph, settings):
        fake_graph.respond("token", 200, json={"token_type": "Bearer"})

        with pytest.raises(AuthError) as exc_info:
            get_token(fake_graph, settings)
        assert "access_token missing" in exc_info.value.message

    def test_transport_failure_is_auth_error(self, fake_graph, settings):
        fake_graph.fail("token", httpx.ConnectError("connection refused"))

        with pytest.raises(AuthError) as exc_info:
            get_token(fake_graph, settings)
        assert exc_info.value.status_code is None
        assert "connection refused" in exc_info.value.message

    def test_single_attempt(self, fake_graph, settings):
        fake_graph.respond("token", 503, text="unavailable")

        with pytest.raises(AuthError):
            get_token(fake_graph, settings)
        assert len(fake_graph.calls("token")) == 1


class TestMeetingCreator:

    def test_creates_meeting_for_organizer(self, fake_graph, settings):
        meeting = create_meeting(fake_graph, settings)

        assert meeting == {"id": "meeting-1", "joinUrl": JOIN_URL}

        request = fake_graph.calls("meeting")[0]
        assert request.method == "POST"
        assert request.url.host == "graph.microsoft.com"
        assert ORGANIZER.split("@")[0] in str(request.url)
        assert request.headers["Authorization"] == "Bearer tok-1"
        assert fake_graph.json_body("meeting") == {
            "subject": "DB down",
            "startDateTime": "2024-05-01T12:00:00.000Z",
            "endDateTime": "2024-05-01T12:15:00.000Z",
        }

    def test_blank_subject_gets_fallback(self, fake_graph, settings):
        create_meeting(fake_graph, settings, subject="")
        assert fake_graph.json_body("meeting")["subject"] == "Automated Teams Meeting"

    def test_response_is_returned_unmodified(self, fake_graph, settings):
        fake_graph.respond("meeting", 201, json={"id": "m2", "joinInformation": {"joinUrl": JOIN_URL}})
        meeting = create_meeting(fake_graph, settings)
        assert meeting["joinInformation"]["joinUrl"] == JOIN_URL

    def test_error_status_raises(self, fake_graph, settings):
        fake_graph.respond("meeting", 403, text="Forbidden: application access policy")

        with pytest.raises(MeetingCreationError) as exc_info:
            create_meeting(fake_graph, settings)

        assert exc_info.value.status_code == 403
        assert exc_info.value.body == "Forbidden: application access policy"
        assert exc_info.value.message == "Create meeting failed: 403 Forbidden: application access policy"

    def test_non_object_body_raises(self, fake_graph, settings):
        fake_graph.respond("meeting", 201, json=["unexpected"])

        with pytest.raises(MeetingCreationError):
            create_meeting(fake_graph, settings)


class TestNotifier:

    def test_sends_one_mail_to_all_recipients(self, fake_graph, settings):
        assert send_mail(fake_graph, settings) is True

        assert len(fake_graph.calls("mail")) == 1
        request = fake_graph.calls("mail")[0]
        assert request.headers["Authorization"] == "Bearer tok-1"
        body = fake_graph.json_body("mail")
        assert body["message"]["toRecipients"] == [
            {"emailAddress": {"address": "a@x.com"}},
            {"emailAddress": {"address": "b@x.com"}},
        ]
        assert "ccRecipients" not in body["message"]
        assert body["message"]["body"] == {"contentType": "HTML", "content": "<p>hi</p>"}
        assert body["saveToSentItems"] is True

    def test_save_to_sent_items_can_be_disabled(self, fake_graph, settings):
        quiet = settings.model_copy(update={"graph": GraphSettings(_env_file=None, save_to_sent_items=False)})
        send_mail(fake_graph, quiet)
        assert fake_graph.json_body("mail")["saveToSentItems"] is False

    def test_sends_from_override_mailbox(self, fake_graph, settings):
        override = settings.model_copy(update={"from_email": "noc@contoso.com"})
        send_mail(fake_graph, override)
        assert "noc" in str(fake_graph.calls("mail")[0].url)

    def test_sends_from_organizer_by_default(self, fake_graph, settings):
        send_mail(fake_graph, settings)
        assert "teams-bot" in str(fake_graph.calls("mail")[0].url)

    def test_error_status_raises(self, fake_graph, settings):
        fake_graph.respond("mail", 400, json={"error": {"code": "ErrorInvalidRecipients"}})

        with pytest.raises(NotificationError) as exc_info:
            send_mail(fake_graph, settings)

        assert exc_info.value.status_code == 400
        assert exc_info.value.message.startswith("SendMail failed: 400")


class TestIncidentEmail:

    def test_body_contains_link_and_plain_url(self):
        html = render_incident_email("P2", "DB down", "2024-05-01T12:00:00.000Z", "https://teams.example/join?a=1&b=2")

        assert "Priority: <b>P2</b>" in html
        assert "<p>DB down</p>" in html
        assert "Start: 2024-05-01T12:00:00.000Z" in html
        assert '<a href="https://teams.example/join?a=1&amp;b=2">Join meeting</a>' in html
        assert "Link: https://teams.example/join?a=1&amp;b=2" in html

    def test_caller_text_is_escaped(self):
        html = render_incident_email("<P1>", "<script>alert(1)</script>", "now", JOIN_URL)
        assert "<script>" not in html
        assert "&lt;script&gt;" in html

    def test_mail_subject(self):
        assert build_mail_subject("P2", "DB down") == "[P2] DB down - Teams meeting"
