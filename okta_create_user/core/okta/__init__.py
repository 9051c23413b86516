"""Okta Users API client library.

Architecture:
- auth.py: credential resolution and Authorization header building
- client.py: HTTP client and error body parsing
- users.py: user lookup, creation and duplicate reconciliation
- exceptions.py: typed exceptions carrying provider status codes

Usage:
    from okta_create_user.core.okta import OktaClient, UserService, okta_authorization_header

    client = OktaClient(base_url, okta_authorization_header(context))
    user = UserService(client).ensure_user(profile, ["00g1"])
"""
from .auth import (
    AuthorizationCodeToken,
    BasicCredentials,
    BearerToken,
    ClientCredentials,
    Credential,
    authorization_header,
    credential_from_context,
    fetch_client_credentials_token,
    okta_authorization_header,
    resolve_authorization,
)
from .client import OktaClient, REQUEST_TIMEOUT, request_headers
from .exceptions import (
    OktaActionError,
    MissingParameterError,
    MissingAddressError,
    InvalidAttributesError,
    AuthConfigurationError,
    TokenAcquisitionError,
    IdentityConflictError,
    ExistenceCheckError,
    UnreconciledDuplicateError,
    CreateUserError,
)
from .users import (
    UserService,
    STRATEGY_PRECHECK,
    STRATEGY_ON_CONFLICT,
    is_duplicate_login_error,
)

__all__ = [
    # Auth
    "AuthorizationCodeToken",
    "BasicCredentials",
    "BearerToken",
    "ClientCredentials",
    "Credential",
    "authorization_header",
    "credential_from_context",
    "fetch_client_credentials_token",
    "okta_authorization_header",
    "resolve_authorization",

    # Client
    "OktaClient",
    "REQUEST_TIMEOUT",
    "request_headers",

    # Exceptions
    "OktaActionError",
    "MissingParameterError",
    "MissingAddressError",
    "InvalidAttributesError",
    "AuthConfigurationError",
    "TokenAcquisitionError",
    "IdentityConflictError",
    "ExistenceCheckError",
    "UnreconciledDuplicateError",
    "CreateUserError",

    # Users
    "UserService",
    "STRATEGY_PRECHECK",
    "STRATEGY_ON_CONFLICT",
    "is_duplicate_login_error",
]
