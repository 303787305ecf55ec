"""Flask application factory for the payroll and break-even API."""

import os
from warnings import warn

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import BadRequest

from .http import problem_response
from .routes import register_routes
from .routes.config import get_configuration_metadata

ALLOWED_ORIGINS_ENV = "BREAKEVEN_ALLOWED_ORIGINS"


def _parse_allowed_origins(raw: str | None) -> list[str]:
    """Split a comma separated origin list, ignoring blanks and duplicates."""

    if not raw:
        return []
    return sorted({origin.strip() for origin in raw.split(",") if origin.strip()})


def _configure_cors(app: Flask) -> None:
    origins = _parse_allowed_origins(os.getenv(ALLOWED_ORIGINS_ENV))
    if not origins:
        warn(
            f"No allowed origins configured in {ALLOWED_ORIGINS_ENV}; "
            "browsers on other origins cannot call the API.",
            stacklevel=2,
        )

    CORS(
        app,
        resources={r"/api/*": {"origins": origins}},
        supports_credentials=False,
        methods=["GET", "OPTIONS", "POST"],
        allow_headers=["Content-Type"],
    )


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(BadRequest)
    def handle_bad_request(error: BadRequest):
        message = error.description or "Malformed request"
        return problem_response("bad_request", status=400, message=message).to_response()

    @app.errorhandler(FileNotFoundError)
    def handle_missing_year(error: FileNotFoundError):
        """Requests for tax years absent from the manifest."""

        return problem_response("not_found", status=404, message=str(error)).to_response()

    @app.errorhandler(ValueError)
    def handle_value_error(error: ValueError):
        """Invalid payloads, invalid amounts and configuration errors."""

        return problem_response(
            "validation_error", status=400, message=str(error)
        ).to_response()


def create_app() -> Flask:
    """Build the application with CORS, blueprints and JSON error handlers."""

    app = Flask(__name__)
    _configure_cors(app)
    register_routes(app)

    @app.get("/health")
    def health_check():
        return jsonify({"status": "ok", **get_configuration_metadata()})

    _register_error_handlers(app)
    return app
