"""Application factory for the script hosting service."""
from __future__ import annotations

from collections.abc import Mapping

from flask import Flask, current_app, jsonify
from werkzeug.exceptions import HTTPException

from .config import get_config
from .store import Forbidden, ScriptNotFound, ScriptRepository, ValidationFailed
from .store.ids import IdGenerator

STORE_KEY = "script_store"


def create_app(config_name: str | None = None, overrides: Mapping[str, object] | None = None) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__, instance_relative_config=True)

    config_obj = get_config(config_name)
    app.config.from_object(config_obj)
    if overrides:
        app.config.update(overrides)
    app.logger.setLevel(app.config["LOG_LEVEL"])

    register_store(app)
    register_blueprints(app)
    register_error_handlers(app)
    register_cli(app)

    return app


def register_store(app: Flask) -> None:
    """Attach a fresh script store to the application."""
    config = app.config
    app.extensions[STORE_KEY] = ScriptRepository(
        id_generator=IdGenerator(config["SCRIPT_ID_BYTES"]),
        max_content_length=config["SCRIPT_MAX_CHARS"],
        max_id_attempts=config["SCRIPT_ID_MAX_ATTEMPTS"],
        max_page_size=config["SCRIPTS_MAX_PER_PAGE"],
        raw_requires_owner=config["RAW_REQUIRES_OWNER"],
    )


def get_store() -> ScriptRepository:
    """Return the store owned by the current application."""
    return current_app.extensions[STORE_KEY]


def register_blueprints(app: Flask) -> None:
    """Register application blueprints."""
    from .scripts import scripts_bp

    app.register_blueprint(scripts_bp)


def register_error_handlers(app: Flask) -> None:
    """Translate store failures and HTTP errors into JSON responses."""

    @app.errorhandler(ValidationFailed)
    def handle_validation(exc: ValidationFailed):
        errors = [issue.to_dict() for issue in exc.issues]
        return jsonify(error="Validation failed.", errors=errors), 400

    @app.errorhandler(ScriptNotFound)
    def handle_not_found(exc: ScriptNotFound):
        return jsonify(error="Script not found."), 404

    @app.errorhandler(Forbidden)
    def handle_forbidden(exc: Forbidden):
        return jsonify(error="You do not own this script."), 403

    @app.errorhandler(HTTPException)
    def handle_http(exc: HTTPException):
        return jsonify(error=exc.description or exc.name), exc.code

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        app.logger.exception("Unhandled error: %s", exc)
        return jsonify(error="Internal server error"), 500


def register_cli(app: Flask) -> None:
    """Add helpful CLI commands."""

    @app.shell_context_processor
    def shell_context() -> dict[str, object]:
        return {"store": app.extensions[STORE_KEY]}
