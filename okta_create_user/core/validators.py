"""Input validation helpers for action parameters."""
from __future__ import annotations
from typing import Any, Iterable, Mapping, Optional

from ..config.settings import ActionContext
from .okta.exceptions import MissingAddressError, MissingParameterError

REQUIRED_PARAMS = ("email", "login", "firstName", "lastName")


def assert_required(params: Optional[Mapping[str, Any]], keys: Iterable[str] = REQUIRED_PARAMS) -> None:
    """Ensure every required parameter is present and non-empty.

    Args:
        params: Action input parameters
        keys: Required parameter names

    Raises:
        MissingParameterError: Listing every missing key, in the order given
    """
    params = params or {}
    missing = [key for key in keys if params.get(key) is None or params.get(key) == ""]
    if missing:
        raise MissingParameterError(missing)


def resolve_base_url(params: Optional[Mapping[str, Any]], context: ActionContext) -> str:
    """Return the Okta base URL from the address parameter or ADDRESS env.

    Exactly one trailing slash is removed.

    Raises:
        MissingAddressError: If neither source provides an address
    """
    address = (params or {}).get("address") or context.environment.get("ADDRESS")
    if not address:
        raise MissingAddressError("No URL specified. Provide address parameter or ADDRESS environment variable")
    return address[:-1] if address.endswith("/") else address
