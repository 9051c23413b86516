"""Pytest shared fixtures for the Okta create-user action."""
import json
import pathlib
import sys

# Add project root to Python path
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
import requests

from okta_create_user.config import ActionContext

OKTA_URL = "https://example.okta.com"
USERS_URL = f"{OKTA_URL}/api/v1/users"
TOKEN_URL = "https://auth.example.com/oauth2/token"


class StubResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, payload=None, status_code: int = 200, reason: str = "", text=None):
        self._payload = payload
        self.status_code = status_code
        self.reason = reason
        if text is not None:
            self.text = text
        else:
            self.text = json.dumps(payload) if payload is not None else ""

    def json(self):
        if self._payload is None:
            raise ValueError("Not JSON")
        return self._payload


def make_user(user_id="user123", email="john.doe@example.com", login=None, **profile):
    """Okta user representation as returned by the Users API."""
    return {
        "id": user_id,
        "status": "ACTIVE",
        "created": "2024-01-15T10:00:00.000Z",
        "activated": "2024-01-15T10:00:00.000Z",
        "statusChanged": "2024-01-15T10:00:00.000Z",
        "lastLogin": None,
        "lastUpdated": "2024-01-15T10:00:00.000Z",
        "profile": {
            "firstName": profile.get("firstName", "John"),
            "lastName": profile.get("lastName", "Doe"),
            "email": email,
            "login": login or email,
        },
    }


class FakeOkta:
    """Records outgoing requests and answers them from programmed routes.

    Defaults model a fresh org: lookups answer 404 and creates succeed.
    A route programmed with an exception raises it, like a dropped connection.
    """

    def __init__(self):
        self.calls = []
        self.routes = {}
        self.default_get = StubResponse({"errorCode": "E0000007", "errorSummary": "Not found"}, 404)
        self.default_post = StubResponse(make_user(), 200)

    def on(self, method: str, url: str, response) -> None:
        self.routes[(method, url)] = response

    def _answer(self, method, url, default, kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        response = self.routes.get((method, url), default)
        if isinstance(response, Exception):
            raise response
        return response

    def get(self, url, *args, **kwargs):
        return self._answer("GET", url, self.default_get, kwargs)

    def post(self, url, *args, **kwargs):
        return self._answer("POST", url, self.default_post, kwargs)

    def calls_to(self, method: str, url: str = None):
        return [c for c in self.calls if c["method"] == method and (url is None or c["url"] == url)]


# ─────────────────────────────────────────────────────────────────────────────
# Network Guard Rails
# ─────────────────────────────────────────────────────────────────────────────
@pytest.fixture(autouse=True)
def _block_network(monkeypatch, request):
    """
    Prevent unit tests from hitting live endpoints.

    Integration tests are explicitly marked with @pytest.mark.integration and
    are allowed to perform real HTTP calls by skipping this fixture.
    """
    if request.node.get_closest_marker("integration"):
        return

    def _blocked(url, *args, **kwargs):
        raise RuntimeError(f"Unexpected network access in unit test: {url}")

    monkeypatch.setattr(requests, "get", _blocked)
    monkeypatch.setattr(requests, "post", _blocked)


@pytest.fixture()
def okta(monkeypatch):
    """Fake Okta org wired into requests.get / requests.post."""
    fake = FakeOkta()
    monkeypatch.setattr(requests, "get", fake.get)
    monkeypatch.setattr(requests, "post", fake.post)
    return fake


@pytest.fixture()
def context():
    """Context with a static Okta API token."""
    return ActionContext(secrets={"BEARER_AUTH_TOKEN": "test-okta-token-123456"})


@pytest.fixture()
def params():
    """Minimal valid create-user parameters."""
    return {
        "email": "john.doe@example.com",
        "login": "john.doe@example.com",
        "firstName": "John",
        "lastName": "Doe",
        "address": OKTA_URL,
    }
