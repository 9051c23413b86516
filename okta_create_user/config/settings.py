"""Context and settings loader with environment variable and Docker secrets integration."""
from __future__ import annotations
import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

SECRET_NAMES = (
    "BEARER_AUTH_TOKEN",
    "BASIC_USERNAME",
    "BASIC_PASSWORD",
    "OAUTH2_AUTHORIZATION_CODE_ACCESS_TOKEN",
    "OAUTH2_CLIENT_CREDENTIALS_CLIENT_SECRET",
)

ENVIRONMENT_NAMES = (
    "ADDRESS",
    "OAUTH2_CLIENT_CREDENTIALS_TOKEN_URL",
    "OAUTH2_CLIENT_CREDENTIALS_CLIENT_ID",
    "OAUTH2_CLIENT_CREDENTIALS_SCOPE",
    "OAUTH2_CLIENT_CREDENTIALS_AUDIENCE",
    "OAUTH2_CLIENT_CREDENTIALS_AUTH_STYLE",
    "RECONCILE_STRATEGY",
)


def _load_secret_from_file(secret_name: str, env_var: str | None = None) -> str | None:
    """
    Load secret from /run/secrets (Docker secrets pattern).

    Priority:
    1. /run/secrets/{secret_name} (Docker secrets mount)
    2. Environment variable (fallback)

    Args:
        secret_name: Name of the secret file in /run/secrets
        env_var: Optional environment variable name to check as fallback

    Returns:
        Secret value or None if not found
    """
    secret_file = Path("/run/secrets") / secret_name

    if secret_file.exists() and secret_file.is_file():
        try:
            secret_value = secret_file.read_text().strip()
            if secret_value:
                return secret_value
        except OSError as e:
            print(f"[settings] ✗ Failed to read /run/secrets/{secret_name}: {e}")

    if env_var:
        secret_value = os.getenv(env_var)
        if secret_value:
            return secret_value

    return None


@dataclass(frozen=True)
class ActionContext:
    """Immutable execution context handed to every action call.

    Secrets and environment are copied into read-only mappings so the core
    never observes later changes to the caller's dicts or to os.environ.
    """
    secrets: Mapping[str, str] = field(default_factory=dict)
    environment: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "secrets", MappingProxyType(dict(self.secrets or {})))
        object.__setattr__(self, "environment", MappingProxyType(dict(self.environment or {})))

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any] | None) -> "ActionContext":
        """Build a context from the orchestrator's ``{secrets, environment}`` shape."""
        raw = raw or {}
        return cls(
            secrets=raw.get("secrets") or {},
            environment=raw.get("environment") or {},
        )


def load_context() -> ActionContext:
    """Load the action context from /run/secrets and environment variables."""
    secrets = {}
    for name in SECRET_NAMES:
        value = _load_secret_from_file(name.lower(), name)
        if value:
            secrets[name] = value

    environment = {name: os.environ[name] for name in ENVIRONMENT_NAMES if os.environ.get(name)}
    return ActionContext(secrets=secrets, environment=environment)


@dataclass
class AppConfig:
    """Application configuration container for the HTTP surface."""
    context: ActionContext
    log_level: str = "INFO"


def load_settings() -> AppConfig:
    """Load application settings from environment and /run/secrets."""
    context = load_context()
    log_level = os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"

    auth_kinds = [name for name in SECRET_NAMES if name in context.secrets]
    print(
        f"[settings] address={'set' if context.environment.get('ADDRESS') else 'EMPTY'}; "
        f"secrets={', '.join(auth_kinds) or 'NONE'}; log_level={log_level}"
    )

    return AppConfig(context=context, log_level=log_level)
