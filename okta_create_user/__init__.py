"""Okta create-user integration action.

To run the action directly:
    from okta_create_user.config import ActionContext
    from okta_create_user.core.provisioning_service import invoke

To serve it over HTTP:
    from okta_create_user.flask_app import create_app
"""
# Note: flask_app is not imported here so the CLI and core work without
# loading Flask.

__version__ = "1.0.0"
