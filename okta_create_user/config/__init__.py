"""Configuration module for the Okta create-user action."""
from .settings import ActionContext, AppConfig, load_context, load_settings

__all__ = ["ActionContext", "AppConfig", "load_context", "load_settings"]
