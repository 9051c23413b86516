"""Authorization header resolution for Okta API calls.

Credentials are resolved once per invocation from the action context into one
of four credential kinds, then turned into a ready-to-use ``Authorization``
header value. Nothing is cached between invocations.
"""
from __future__ import annotations
import base64
import json
import logging
from dataclasses import dataclass
from typing import Optional, Union

import requests

from ...config.settings import ActionContext
from .client import REQUEST_TIMEOUT
from .exceptions import AuthConfigurationError, TokenAcquisitionError

logger = logging.getLogger(__name__)

AUTH_STYLE_IN_PARAMS = "InParams"


@dataclass(frozen=True)
class BearerToken:
    """Static API token (BEARER_AUTH_TOKEN)."""
    token: str


@dataclass(frozen=True)
class BasicCredentials:
    """Username and password (BASIC_USERNAME / BASIC_PASSWORD)."""
    username: str
    password: str


@dataclass(frozen=True)
class AuthorizationCodeToken:
    """Pre-issued OAuth2 access token (OAUTH2_AUTHORIZATION_CODE_ACCESS_TOKEN)."""
    access_token: str


@dataclass(frozen=True)
class ClientCredentials:
    """OAuth2 client-credentials configuration."""
    token_url: str
    client_id: str
    client_secret: str
    scope: Optional[str] = None
    audience: Optional[str] = None
    auth_style: Optional[str] = None


Credential = Union[BearerToken, BasicCredentials, AuthorizationCodeToken, ClientCredentials]


def credential_from_context(context: ActionContext) -> Credential:
    """Pick the credential kind from the context secrets, first match wins.

    Raises:
        AuthConfigurationError: If no credential is configured, or the
            client-credentials flow lacks its token URL or client ID
    """
    secrets = context.secrets
    env = context.environment

    if secrets.get("BEARER_AUTH_TOKEN"):
        return BearerToken(secrets["BEARER_AUTH_TOKEN"])

    if secrets.get("BASIC_USERNAME") and secrets.get("BASIC_PASSWORD"):
        return BasicCredentials(secrets["BASIC_USERNAME"], secrets["BASIC_PASSWORD"])

    if secrets.get("OAUTH2_AUTHORIZATION_CODE_ACCESS_TOKEN"):
        return AuthorizationCodeToken(secrets["OAUTH2_AUTHORIZATION_CODE_ACCESS_TOKEN"])

    if secrets.get("OAUTH2_CLIENT_CREDENTIALS_CLIENT_SECRET"):
        token_url = env.get("OAUTH2_CLIENT_CREDENTIALS_TOKEN_URL")
        client_id = env.get("OAUTH2_CLIENT_CREDENTIALS_CLIENT_ID")
        if not token_url or not client_id:
            raise AuthConfigurationError(
                "OAuth2 Client Credentials flow requires TOKEN_URL and CLIENT_ID in env"
            )
        return ClientCredentials(
            token_url=token_url,
            client_id=client_id,
            client_secret=secrets["OAUTH2_CLIENT_CREDENTIALS_CLIENT_SECRET"],
            scope=env.get("OAUTH2_CLIENT_CREDENTIALS_SCOPE") or None,
            audience=env.get("OAUTH2_CLIENT_CREDENTIALS_AUDIENCE") or None,
            auth_style=env.get("OAUTH2_CLIENT_CREDENTIALS_AUTH_STYLE") or None,
        )

    raise AuthConfigurationError(
        "No authentication configured. Provide one of: "
        "BEARER_AUTH_TOKEN, BASIC_USERNAME/BASIC_PASSWORD, "
        "OAUTH2_AUTHORIZATION_CODE_ACCESS_TOKEN, or OAUTH2_CLIENT_CREDENTIALS_*"
    )


def _bearer(token: str) -> str:
    return token if token.startswith("Bearer ") else f"Bearer {token}"


def _basic(username: str, password: str) -> str:
    encoded = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return f"Basic {encoded}"


def fetch_client_credentials_token(credential: ClientCredentials) -> str:
    """Fetch an access token using the OAuth2 client credentials flow.

    Client credentials go into an HTTP Basic header unless the auth style is
    ``InParams``, in which case they are sent as form parameters.

    Raises:
        TokenAcquisitionError: On a transport failure, a non-success status
            or a response without ``access_token``
    """
    data = {"grant_type": "client_credentials"}
    if credential.scope:
        data["scope"] = credential.scope
    if credential.audience:
        data["audience"] = credential.audience

    headers = {
        "Content-Type": "application/x-www-form-urlencoded",
        "Accept": "application/json",
    }
    if credential.auth_style == AUTH_STYLE_IN_PARAMS:
        data["client_id"] = credential.client_id
        data["client_secret"] = credential.client_secret
    else:
        headers["Authorization"] = _basic(credential.client_id, credential.client_secret)

    try:
        resp = requests.post(credential.token_url, data=data, headers=headers, timeout=REQUEST_TIMEOUT)
    except requests.RequestException as e:
        raise TokenAcquisitionError(f"OAuth2 token request failed: {e}") from e
    if resp.status_code >= 400:
        try:
            error_text = json.dumps(resp.json())
        except ValueError:
            error_text = resp.text
        status = f"{resp.status_code} {resp.reason}" if resp.reason else str(resp.status_code)
        raise TokenAcquisitionError(
            f"OAuth2 token request failed: {status} - {error_text}",
            status_code=resp.status_code,
            body=error_text,
        )

    try:
        payload = resp.json()
    except ValueError:
        payload = {}
    access_token = payload.get("access_token") if isinstance(payload, dict) else None
    if not access_token:
        raise TokenAcquisitionError("No access_token in OAuth2 response", status_code=resp.status_code)

    logger.debug(f"Obtained client credentials token from {credential.token_url}")
    return access_token


def authorization_header(credential: Credential) -> str:
    """Return the Authorization header value for a resolved credential."""
    if isinstance(credential, BearerToken):
        return _bearer(credential.token)
    if isinstance(credential, BasicCredentials):
        return _basic(credential.username, credential.password)
    if isinstance(credential, AuthorizationCodeToken):
        return _bearer(credential.access_token)
    if isinstance(credential, ClientCredentials):
        return f"Bearer {fetch_client_credentials_token(credential)}"
    raise AuthConfigurationError(f"Unsupported credential type: {type(credential).__name__}")


def resolve_authorization(context: ActionContext) -> str:
    """Resolve the context into a generic Authorization header value."""
    return authorization_header(credential_from_context(context))


def okta_authorization_header(context: ActionContext) -> str:
    """Resolve the Authorization header, using Okta's SSWS scheme for API tokens.

    Only static bearer tokens are rewritten; OAuth2-derived bearer tokens are
    sent as ``Bearer``.
    """
    credential = credential_from_context(context)
    header = authorization_header(credential)

    if isinstance(credential, BearerToken) and header.startswith("Bearer "):
        token = header[len("Bearer "):]
        return token if token.startswith("SSWS ") else f"SSWS {token}"
    return header
