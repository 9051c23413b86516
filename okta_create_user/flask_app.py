"""Flask application factory and bootstrap.

This module provides the create_app() factory function that serves the
create-user action handlers over HTTP.
"""
from __future__ import annotations
import logging
from typing import Optional

from flask import Flask

from .config import AppConfig, load_settings


# ─────────────────────────────────────────────────────────────────────────────
# Application Factory
# ─────────────────────────────────────────────────────────────────────────────
def create_app(cfg: Optional[AppConfig] = None) -> Flask:
    """Create and configure Flask application."""
    cfg = cfg or load_settings()

    logging.basicConfig(
        level=getattr(logging, cfg.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = Flask(__name__)
    app.config["APP_CONFIG"] = cfg

    from .api import actions, health
    app.register_blueprint(health.bp)
    app.register_blueprint(actions.bp)

    from .api.errors import register_error_handlers
    register_error_handlers(app)

    return app
