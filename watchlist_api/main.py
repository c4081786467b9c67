"""Flask application entry point.

    flask --app watchlist_api.main run
    python -m watchlist_api.main
"""

import logging

from flask import Flask, Response, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from .config import SETTINGS_KEY, Settings
from .db import init_db
from .exceptions import (
    AuthenticationError,
    PermissionDenied,
    ResourceNotFound,
    ValidationError,
    WatchlistError,
)

logger = logging.getLogger(__name__)


def _plain_text(message: str, status: int) -> Response:
    """Error bodies are plain text, not a JSON envelope."""
    return Response(message, status=status, mimetype="text/plain")


# Error handlers
def handle_validation_error(error):
    """Handle ValidationError exceptions."""
    return _plain_text(error.message, 400)


def handle_authentication_error(error):
    """Handle AuthenticationError exceptions."""
    return _plain_text(error.message, 401)


def handle_permission_denied(error):
    """Handle PermissionDenied exceptions."""
    return _plain_text(error.message, 403)


def handle_not_found(error):
    """Handle ResourceNotFound exceptions."""
    return _plain_text(error.message, 404)


def handle_watchlist_error(error):
    """Handle generic WatchlistError exceptions (e.g. DatabaseError)."""
    logger.error(f"{error.__class__.__name__}: {error.message}")
    return _plain_text(error.message, 500)


def handle_internal_error(error):
    """Handle unexpected exceptions; HTTP errors (404, 405, ...) pass through."""
    if isinstance(error, HTTPException):
        return error
    logger.error(f"Internal error: {error}", exc_info=error)
    return _plain_text("An internal error occurred", 500)


def health():
    """Health check endpoint."""
    return jsonify({"status": "ok"})


def create_app(settings: Settings | None = None) -> Flask:
    """
    Build the Flask app.

    Args:
        settings: Configuration for this app. Loaded from the environment
            (and .env) when omitted.

    Returns:
        Configured Flask app with database initialized
    """
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    if settings is None:
        settings = Settings()

    app = Flask(__name__)
    app.config[SETTINGS_KEY] = settings

    CORS(app, origins=settings.cors_origins, supports_credentials=True)

    try:
        init_db(settings.database_url)
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise

    app.register_error_handler(ValidationError, handle_validation_error)
    app.register_error_handler(AuthenticationError, handle_authentication_error)
    app.register_error_handler(PermissionDenied, handle_permission_denied)
    app.register_error_handler(ResourceNotFound, handle_not_found)
    app.register_error_handler(WatchlistError, handle_watchlist_error)
    app.register_error_handler(Exception, handle_internal_error)

    app.add_url_rule("/health", view_func=health)

    # Register API blueprints
    from .api import watchlists_bp
    from .auth.api import auth_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(watchlists_bp, url_prefix="/watchlists")

    return app


if __name__ == "__main__":
    settings = Settings()
    create_app(settings).run(port=settings.port)
