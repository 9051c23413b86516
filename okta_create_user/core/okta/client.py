"""Low-level HTTP client for the Okta Users API.

Handles headers, URL building, and error body parsing. Unlike a generic
client it does not raise on HTTP errors: callers branch on the status code
(a 404 on lookup is an expected outcome, not a failure).
"""
from __future__ import annotations
import logging
from typing import Any, Optional
from urllib.parse import quote

import requests

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 30
USERS_PATH = "/api/v1/users"


def request_headers(authorization: str) -> dict[str, str]:
    """Full header set for Okta JSON API calls."""
    return {
        "Authorization": authorization,
        "Accept": "application/json",
        "Content-Type": "application/json",
    }


class OktaClient:
    """HTTP client for one invocation against one Okta org.

    Usage:
        client = OktaClient("https://example.okta.com", "SSWS 00abc")
        resp = client.get(client.user_path("alice@example.com"))
    """

    def __init__(self, base_url: str, authorization: str):
        """Initialize Okta client.

        Args:
            base_url: Okta org URL without trailing slash
            authorization: Fully formed Authorization header value
        """
        self.base_url = base_url
        self._headers = request_headers(authorization)

    @staticmethod
    def user_path(login: str) -> str:
        """Path of a single user, with the login percent-encoded."""
        return f"{USERS_PATH}/{quote(login, safe='')}"

    def get(self, path: str, **kwargs) -> requests.Response:
        """Execute GET request.

        Args:
            path: API endpoint path (e.g., "/api/v1/users/alice")
            **kwargs: Additional arguments for requests.get

        Returns:
            Response object, whatever its status
        """
        url = f"{self.base_url}{path}"
        return requests.get(url, headers=dict(self._headers), timeout=REQUEST_TIMEOUT, **kwargs)

    def post(self, path: str, json: Optional[dict] = None, **kwargs) -> requests.Response:
        """Execute POST request with a JSON payload.

        Args:
            path: API endpoint path
            json: JSON payload
            **kwargs: Additional arguments for requests.post

        Returns:
            Response object, whatever its status
        """
        url = f"{self.base_url}{path}"
        return requests.post(url, json=json, headers=dict(self._headers), timeout=REQUEST_TIMEOUT, **kwargs)


def is_success(resp: requests.Response) -> bool:
    return 200 <= resp.status_code < 300


def parse_error_body(resp: requests.Response, operation: str) -> Any:
    """Return the parsed JSON error body, or None when it is not JSON.

    Parse failures are logged and swallowed so the caller can still raise
    its status-only error.
    """
    try:
        body = resp.json()
    except ValueError:
        logger.error(f"Failed to parse {operation} error response (HTTP {resp.status_code})")
        return None
    logger.error(f"{operation} error details: {body}")
    return body


def error_summary(body: Any) -> Optional[str]:
    """Okta's human-readable ``errorSummary`` from an error body, if any."""
    if isinstance(body, dict):
        summary = body.get("errorSummary")
        if isinstance(summary, str) and summary:
            return summary
    return None
