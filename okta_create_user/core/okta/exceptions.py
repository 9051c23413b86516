"""Okta action exceptions for error handling."""
from __future__ import annotations
from typing import Any, Optional

RETRYABLE_STATUS_CODES = frozenset({429, 502, 503, 504})


class OktaActionError(Exception):
    """Base exception for all create-user action failures.

    Attributes:
        message: Human-readable error message
        status_code: HTTP status code returned by the provider, if any
        body: Parsed provider error body, if any
    """

    http_status = 500

    def __init__(self, message: str, status_code: Optional[int] = None, body: Any = None):
        self.message = message
        self.status_code = status_code
        self.body = body
        super().__init__(message)

    @property
    def is_retryable(self) -> bool:
        """True when the orchestrator's retry policy covers this status code."""
        return self.status_code in RETRYABLE_STATUS_CODES

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "statusCode": self.status_code,
            "body": self.body,
        }


class MissingParameterError(OktaActionError):
    """One or more required input parameters are absent or empty."""

    http_status = 400

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__(f"Missing required parameter(s): {', '.join(self.missing)}")


class MissingAddressError(OktaActionError):
    """Neither the address parameter nor the ADDRESS environment variable is set."""

    http_status = 400


class InvalidAttributesError(OktaActionError):
    """additionalProfileAttributes is not a valid JSON object."""

    http_status = 400


class AuthConfigurationError(OktaActionError):
    """No usable credential set is present in the context."""
    pass


class TokenAcquisitionError(OktaActionError):
    """OAuth2 client-credentials token request failed."""

    http_status = 502


class IdentityConflictError(OktaActionError):
    """Login already exists under a different email."""

    http_status = 409

    def __init__(self, message: str, body: Any = None):
        super().__init__(message, status_code=409, body=body)


class ExistenceCheckError(OktaActionError):
    """Lookup of an existing user returned an unexpected status."""

    http_status = 502


class UnreconciledDuplicateError(OktaActionError):
    """Create reported a duplicate login but the existing user could not be fetched."""

    http_status = 502


class CreateUserError(OktaActionError):
    """User creation was rejected by the provider."""

    http_status = 502
