"""Okta user profile construction from action input parameters."""
from __future__ import annotations
import json
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from .okta.exceptions import InvalidAttributesError


@dataclass(frozen=True)
class UserProfile:
    """Profile sent to Okta on user creation.

    ``extra`` holds caller-supplied attributes from additionalProfileAttributes.
    They are merged last, so an extra key overrides any named field,
    including the four required ones.
    """
    email: str
    login: str
    first_name: str
    last_name: str
    department: Optional[str] = None
    employee_number: Optional[str] = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        """Return the Okta wire representation of the profile."""
        profile: dict[str, Any] = {
            "email": self.email,
            "login": self.login,
            "firstName": self.first_name,
            "lastName": self.last_name,
        }
        if self.department:
            profile["department"] = self.department
        if self.employee_number:
            profile["employeeNumber"] = self.employee_number
        profile.update(self.extra)
        return profile


def parse_additional_attributes(raw: Optional[str]) -> dict[str, Any]:
    """Parse the additionalProfileAttributes JSON string.

    Raises:
        InvalidAttributesError: If the string is not a JSON object
    """
    if not raw:
        return {}
    try:
        attrs = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise InvalidAttributesError(f"Invalid additionalProfileAttributes JSON: {e}") from e
    if not isinstance(attrs, dict):
        raise InvalidAttributesError(
            f"Invalid additionalProfileAttributes JSON: expected an object, got {type(attrs).__name__}"
        )
    return attrs


def parse_group_ids(raw: Optional[str]) -> list[str]:
    """Split a comma-separated group ID string, trimming and dropping empty entries."""
    if not raw:
        return []
    return [group_id.strip() for group_id in raw.split(",") if group_id.strip()]


def build_profile(params: Mapping[str, Any]) -> UserProfile:
    """Build the user profile from validated action parameters."""
    return UserProfile(
        email=params["email"],
        login=params["login"],
        first_name=params["firstName"],
        last_name=params["lastName"],
        department=params.get("department") or None,
        employee_number=params.get("employeeNumber") or None,
        extra=parse_additional_attributes(params.get("additionalProfileAttributes")),
    )
