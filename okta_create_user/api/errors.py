"""Error handlers for the application."""
from flask import jsonify
from werkzeug.exceptions import HTTPException

from ..core.okta.exceptions import OktaActionError


def register_error_handlers(app):
    """Register error handlers with the Flask app."""

    @app.errorhandler(OktaActionError)
    def action_error(error):
        """Render action failures with the provider status code when there is one."""
        code = error.status_code
        status = code if isinstance(code, int) and code >= 400 else error.http_status
        if status >= 500:
            app.logger.error(f"Action failed: {error}")
        else:
            app.logger.warning(f"Action rejected: {error}")
        return jsonify(error.to_dict()), status

    @app.errorhandler(HTTPException)
    def http_error(error):
        """Render werkzeug HTTP errors as JSON."""
        return jsonify({"error": error.name, "message": error.description}), error.code

    @app.errorhandler(Exception)
    def handle_exception(error):
        """Handle uncaught exceptions."""
        if isinstance(error, HTTPException):
            return http_error(error)

        # Exception text only; headers and secrets are never attached
        app.logger.error(f"Unhandled exception: {error}", exc_info=True)
        return jsonify({"error": "Internal Server Error", "message": "An unexpected error occurred"}), 500
