"""Tests for health check endpoints."""
import pytest

from okta_create_user.config import ActionContext, AppConfig
from okta_create_user.flask_app import create_app


def make_client(context):
    app = create_app(AppConfig(context=context))
    app.config.update(TESTING=True)
    return app.test_client()


def test_health_check():
    """Test basic health check endpoint."""
    response = make_client(ActionContext()).get("/health")
    assert response.status_code == 200
    assert response.data == b"ok"
    assert response.content_type.startswith("text/plain")


def test_ready_when_configured():
    context = ActionContext(secrets={"BEARER_AUTH_TOKEN": "tok"}, environment={"ADDRESS": "https://x.okta.com"})
    response = make_client(context).get("/ready")
    assert response.status_code == 200
    assert response.get_json() == {"ready": True, "checks": {"address": True, "credentials": True}}


@pytest.mark.parametrize(
    "context, failing",
    [
        (ActionContext(secrets={"BEARER_AUTH_TOKEN": "tok"}), "address"),
        (ActionContext(environment={"ADDRESS": "https://x.okta.com"}), "credentials"),
    ],
)
def test_not_ready(context, failing):
    response = make_client(context).get("/ready")
    assert response.status_code == 503
    assert response.get_json()["checks"][failing] is False
