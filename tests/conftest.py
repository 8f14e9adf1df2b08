"""
Shared fixtures: explicit settings, a fixed clock and a fake Graph/identity backend.
"""

import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Tuple
from urllib.parse import parse_qs

import httpx
import pytest

from incident_call.core.config import AzureSettings, GraphSettings, Settings

TENANT_ID = "tenant-123"
CLIENT_ID = "client-abc"
CLIENT_SECRET = "s3cret"
ORGANIZER = "teams-bot@contoso.com"
JOIN_URL = "https://teams.microsoft.com/l/meetup-join/19%3ameeting_abc"
FIXED_NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeGraph:
    """
    Routes requests to canned responses and records everything it receives.

    Responses are stored as (status, kwargs) and built per request.
    """

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.routes: Dict[str, Tuple[int, Dict[str, Any]]] = {
            "token": (200, {"json": {"access_token": "tok-1", "token_type": "Bearer", "expires_in": 3599}}),
            "meeting": (201, {"json": {"id": "meeting-1", "joinUrl": JOIN_URL}}),
            "mail": (202, {}),
        }
        self.errors: Dict[str, Exception] = {}

    def respond(self, route: str, status: int, **kwargs) -> None:
        self.routes[route] = (status, kwargs)

    def fail(self, route: str, error: Exception) -> None:
        self.errors[route] = error

    @staticmethod
    def route_of(request: httpx.Request) -> str:
        if request.url.host == "login.microsoftonline.com":
            return "token"
        if request.url.path.endswith("/onlineMeetings"):
            return "meeting"
        if request.url.path.endswith("/sendMail"):
            return "mail"
        return "unknown"

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.route_of(request)
        if route in self.errors:
            raise self.errors[route]
        if route not in self.routes:
            return httpx.Response(404, text="not found")
        status, kwargs = self.routes[route]
        return httpx.Response(status, **kwargs)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self.transport)

    def calls(self, route: str) -> List[httpx.Request]:
        return [r for r in self.requests if self.route_of(r) == route]

    def json_body(self, route: str, index: int = 0) -> Dict[str, Any]:
        return json.loads(self.calls(route)[index].content)

    def form_body(self, route: str, index: int = 0) -> Dict[str, str]:
        parsed = parse_qs(self.calls(route)[index].content.decode())
        return {key: values[0] for key, values in parsed.items()}


@pytest.fixture
def fake_graph():
    return FakeGraph()


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        azure=AzureSettings(
            _env_file=None,
            tenant_id=TENANT_ID,
            client_id=CLIENT_ID,
            client_secret=CLIENT_SECRET,
        ),
        graph=GraphSettings(_env_file=None),
        organizer_upn=ORGANIZER,
        from_email=None,
    )


@pytest.fixture
def clock():
    return lambda: FIXED_NOW
