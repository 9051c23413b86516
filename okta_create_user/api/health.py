"""Health check endpoints."""
from flask import Blueprint, current_app, jsonify

bp = Blueprint("health", __name__)


@bp.route("/health")
def health_check():
    """Basic health check endpoint."""
    return ("ok", 200, {"Content-Type": "text/plain"})


@bp.route("/ready")
def readiness_check():
    """Ready once a base URL and at least one credential are configured.

    Invocations may still carry their own context, so this reports the
    process-level configuration only.
    """
    cfg = current_app.config.get("APP_CONFIG")
    context = cfg.context if cfg else None
    checks = {
        "address": bool(context and context.environment.get("ADDRESS")),
        "credentials": bool(context and context.secrets),
    }
    status = 200 if all(checks.values()) else 503
    return jsonify({"ready": status == 200, "checks": checks}), status
