"""Action endpoints: invoke, error and halt over HTTP.

Request body: ``{"params": {...}, "context": {"secrets": {...}, "environment": {...}}}``.
When ``context`` is omitted the process context loaded at startup is used.
"""
from __future__ import annotations
import logging

from flask import Blueprint, abort, current_app, jsonify, request

from ..config.settings import ActionContext
from ..core import provisioning_service

logger = logging.getLogger(__name__)

bp = Blueprint("actions", __name__, url_prefix="/actions")


def _read_call():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        abort(400, "Request body must be a JSON object")

    params = payload.get("params") or {}
    if not isinstance(params, dict):
        abort(400, "params must be a JSON object")

    if "context" in payload:
        context = ActionContext.from_dict(payload.get("context"))
    else:
        context = current_app.config["APP_CONFIG"].context
    return params, context


@bp.route("/invoke", methods=["POST"])
def invoke():
    """Run the create-user action."""
    params, context = _read_call()
    result = provisioning_service.invoke(params, context)
    return jsonify(result), 200


@bp.route("/error", methods=["POST"])
def error():
    """Re-raise the reported error; the error handlers render it."""
    params, context = _read_call()
    provisioning_service.error(params, context)
    abort(500)


@bp.route("/halt", methods=["POST"])
def halt():
    """Acknowledge a halt request."""
    params, context = _read_call()
    return jsonify(provisioning_service.halt(params, context)), 200
