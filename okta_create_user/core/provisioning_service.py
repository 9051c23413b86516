"""
Provisioning Service Layer: Okta create-user action handlers

This module provides the three handlers the job orchestrator calls, used by
the CLI runner and the HTTP surface alike:

    CLI (okta-create-user) ──┐
                             ├──> provisioning_service.py ──> core.okta ──> Okta
    HTTP (/actions/*) ───────┘

Flow of invoke():
    validate params → resolve base URL → build profile → resolve auth
    → reconcile existing user / create → normalize result

Every invocation is independent: no tokens, lookups or results are kept
between calls, and all failures propagate as OktaActionError subclasses with
the provider status code attached so the orchestrator can apply its retry
policy.
"""

from __future__ import annotations
import datetime
import logging
from typing import Any, Mapping, Optional, TypedDict

from ..config.settings import ActionContext
from .okta import (
    OktaActionError,
    OktaClient,
    STRATEGY_PRECHECK,
    UserService,
    okta_authorization_header,
)
from .okta.users import STRATEGIES
from .profile import build_profile, parse_group_ids
from .validators import REQUIRED_PARAMS, assert_required, resolve_base_url

logger = logging.getLogger(__name__)


class ActionResult(TypedDict):
    id: Optional[str]
    status: Optional[str]
    created: Optional[str]
    activated: Optional[str]
    statusChanged: Optional[str]
    lastLogin: Optional[str]
    lastUpdated: Optional[str]
    profile: Optional[dict]
    groupIds: list[str]


def build_user_response(user: Mapping[str, Any], group_ids: list[str]) -> ActionResult:
    """Project an Okta user onto the action's output schema.

    ``groupIds`` is the requested list, not the membership Okta confirmed.
    """
    return ActionResult(
        id=user.get("id"),
        status=user.get("status"),
        created=user.get("created"),
        activated=user.get("activated"),
        statusChanged=user.get("statusChanged"),
        lastLogin=user.get("lastLogin"),
        lastUpdated=user.get("lastUpdated"),
        profile=user.get("profile"),
        groupIds=list(group_ids),
    )


def _reconcile_strategy(context: ActionContext) -> str:
    strategy = (context.environment.get("RECONCILE_STRATEGY") or STRATEGY_PRECHECK).strip().lower()
    if strategy not in STRATEGIES:
        raise OktaActionError(
            f"Unknown reconcile strategy '{strategy}'. Expected one of: {', '.join(STRATEGIES)}"
        )
    return strategy


def invoke(params: Mapping[str, Any], context: ActionContext) -> ActionResult:
    """Create the Okta user described by params, or return the matching existing one.

    Args:
        params: Action inputs (email, login, firstName, lastName required;
            department, employeeNumber, groupIds, additionalProfileAttributes,
            address optional)
        context: Secrets and environment for this invocation

    Returns:
        ActionResult for the created or reconciled user

    Raises:
        OktaActionError: Any validation, auth or provider failure
    """
    assert_required(params, REQUIRED_PARAMS)
    logger.info(f"Starting Okta user creation for {params['email']}")

    base_url = resolve_base_url(params, context)
    profile = build_profile(params)
    group_ids = parse_group_ids(params.get("groupIds"))
    strategy = _reconcile_strategy(context)

    client = OktaClient(base_url, okta_authorization_header(context))
    user = UserService(client).ensure_user(profile, group_ids, strategy=strategy)
    logger.info(f"Okta user creation completed for {params['email']} (id={user.get('id')})")

    return build_user_response(user, group_ids)


def _status_code(value: Any) -> Optional[int]:
    """Coerce a serialized status code (503 or "503") to int; anything else is None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def error(params: Mapping[str, Any], context: ActionContext) -> None:
    """Error handler: log and re-raise so the orchestrator applies its retry policy.

    The orchestrator retries 429/502/503/504 on its own; nothing is retried here.
    """
    err = params.get("error")
    email = params.get("email")

    if isinstance(err, BaseException):
        logger.error(f"User creation failed for {email}: {err}")
        raise err

    if isinstance(err, Mapping):
        rebuilt = OktaActionError(
            str(err.get("message") or "Unknown error"),
            status_code=_status_code(err.get("statusCode")),
            body=err.get("body"),
        )
    else:
        rebuilt = OktaActionError(str(err) if err else "Unknown error")

    logger.error(f"User creation failed for {email}: {rebuilt.message}")
    raise rebuilt


def halt(params: Mapping[str, Any], context: ActionContext) -> dict[str, Any]:
    """Halt handler. No compensation: the create request either completed or it did not."""
    reason = params.get("reason")
    email = params.get("email")
    logger.info(f"User creation job is being halted ({reason}) for {email}")

    return {
        "email": email or "unknown",
        "reason": reason,
        "haltedAt": datetime.datetime.now(datetime.timezone.utc).isoformat(),
        "cleanupCompleted": True,
    }
