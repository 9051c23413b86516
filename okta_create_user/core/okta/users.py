"""Okta user lookup, creation and duplicate reconciliation."""
from __future__ import annotations
import logging
from typing import TYPE_CHECKING, Any, Optional, Sequence

import requests

from .client import USERS_PATH, OktaClient, error_summary, is_success, parse_error_body
from .exceptions import (
    CreateUserError,
    ExistenceCheckError,
    IdentityConflictError,
    OktaActionError,
    UnreconciledDuplicateError,
)

if TYPE_CHECKING:
    from ..profile import UserProfile

logger = logging.getLogger(__name__)

STRATEGY_PRECHECK = "precheck"
STRATEGY_ON_CONFLICT = "on_conflict"
STRATEGIES = (STRATEGY_PRECHECK, STRATEGY_ON_CONFLICT)

# Okta "Api validation failed"; a duplicate login is reported through it with a
# "login: ..." error cause.
DUPLICATE_ERROR_CODE = "E0000001"
DUPLICATE_CAUSE_PREFIX = "login:"


def _normalize_email(value: Any) -> str:
    return str(value).strip().lower()


def is_duplicate_login_error(body: Any) -> bool:
    """Return True when a create error body signals that the login already exists."""
    if not isinstance(body, dict) or body.get("errorCode") != DUPLICATE_ERROR_CODE:
        return False
    for cause in body.get("errorCauses") or []:
        summary = cause.get("errorSummary") if isinstance(cause, dict) else None
        if isinstance(summary, str) and summary.startswith(DUPLICATE_CAUSE_PREFIX):
            return True
    return False


def _user_body(resp, error_cls: type[OktaActionError], prefix: str) -> dict:
    """Decode a 2xx user response, failing with the status attached when it is not JSON."""
    try:
        return resp.json()
    except ValueError as e:
        raise error_cls(
            f"{prefix}: HTTP {resp.status_code} response is not JSON",
            status_code=resp.status_code,
        ) from e


class UserService:
    """Service for creating Okta users idempotently."""

    def __init__(self, client: OktaClient):
        """Initialize user service.

        Args:
            client: Okta client carrying the invocation's authorization
        """
        self.client = client

    def get_user_by_login(self, login: str) -> Optional[dict]:
        """Return the user with this login, or None if Okta answers 404.

        Raises:
            ExistenceCheckError: On a transport failure or any other non-success status
        """
        try:
            resp = self.client.get(self.client.user_path(login))
        except requests.RequestException as e:
            raise ExistenceCheckError(f"Failed to check if user exists: {e}") from e

        if is_success(resp):
            return _user_body(resp, ExistenceCheckError, "Failed to check if user exists")
        if resp.status_code == 404:
            return None

        body = parse_error_body(resp, "Get user")
        raise ExistenceCheckError(
            f"Failed to check if user exists: HTTP {resp.status_code}",
            status_code=resp.status_code,
            body=body,
        )

    def _post_user(self, profile: UserProfile, group_ids: Sequence[str]):
        payload: dict[str, Any] = {"profile": profile.to_payload()}
        if group_ids:
            payload["groupIds"] = list(group_ids)
        try:
            return self.client.post(USERS_PATH, json=payload)
        except requests.RequestException as e:
            raise CreateUserError(f"Failed to create user: {e}") from e

    @staticmethod
    def _create_error(resp, body: Any) -> CreateUserError:
        message = f"Failed to create user: HTTP {resp.status_code}"
        summary = error_summary(body)
        if summary:
            message = f"{message} - {summary}"
        return CreateUserError(message, status_code=resp.status_code, body=body)

    @staticmethod
    def _created(resp) -> dict:
        user = _user_body(resp, CreateUserError, "Failed to create user")
        logger.info(f"Successfully created user {user.get('id')}")
        return user

    def create_user(self, profile: UserProfile, group_ids: Sequence[str] = ()) -> dict:
        """Create the user, embedding group IDs in the request when present.

        Raises:
            CreateUserError: If Okta rejects the request or cannot be reached
        """
        resp = self._post_user(profile, group_ids)
        if is_success(resp):
            return self._created(resp)

        body = parse_error_body(resp, "Create user")
        raise self._create_error(resp, body)

    @staticmethod
    def assert_same_identity(existing: dict, email: str) -> None:
        """Ensure an existing user with the requested login carries the requested email.

        Raises:
            IdentityConflictError: If the emails differ after trimming and case folding
        """
        existing_email = _normalize_email((existing.get("profile") or {}).get("email"))
        if existing_email != _normalize_email(email):
            raise IdentityConflictError(
                "Login already exists in the organization for a user with a different email",
                body={"id": existing.get("id")},
            )

    def create_with_precheck(self, profile: UserProfile, group_ids: Sequence[str] = ()) -> dict:
        """Look the login up first; return a matching existing user or create a new one."""
        existing = self.get_user_by_login(profile.login)
        if existing is not None:
            self.assert_same_identity(existing, profile.email)
            logger.info(f"User {existing.get('id')} already exists with matching attributes")
            return existing
        return self.create_user(profile, group_ids)

    def create_or_reconcile_on_conflict(self, profile: UserProfile, group_ids: Sequence[str] = ()) -> dict:
        """Create directly; on a duplicate-login error, return the existing user instead.

        A failed follow-up lookup keeps the status code of the create error.
        """
        resp = self._post_user(profile, group_ids)
        if is_success(resp):
            return self._created(resp)

        body = parse_error_body(resp, "Create user")
        if not is_duplicate_login_error(body):
            raise self._create_error(resp, body)

        logger.info(f"Login {profile.login} already exists, fetching existing user")
        try:
            existing = self.get_user_by_login(profile.login)
        except ExistenceCheckError as e:
            reason = f"HTTP {e.status_code}" if e.status_code is not None else str(e.__cause__ or e)
            raise UnreconciledDuplicateError(
                f"User already exists but could not be fetched: {reason}",
                status_code=resp.status_code,
                body=body,
            ) from e
        if existing is None:
            raise UnreconciledDuplicateError(
                "User already exists but could not be fetched: HTTP 404",
                status_code=resp.status_code,
                body=body,
            )
        return existing

    def ensure_user(
        self,
        profile: UserProfile,
        group_ids: Sequence[str] = (),
        strategy: str = STRATEGY_PRECHECK,
    ) -> dict:
        """Create the user or return the existing one, per reconciliation strategy.

        Args:
            profile: Profile to create
            group_ids: Group IDs embedded in the create request
            strategy: ``precheck`` (lookup then create) or ``on_conflict``
                (create, reconcile on duplicate-login error)
        """
        if strategy == STRATEGY_ON_CONFLICT:
            return self.create_or_reconcile_on_conflict(profile, group_ids)
        if strategy == STRATEGY_PRECHECK:
            return self.create_with_precheck(profile, group_ids)
        raise OktaActionError(f"Unknown reconcile strategy '{strategy}'. Expected one of: {', '.join(STRATEGIES)}")
