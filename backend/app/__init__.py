"""Application factory and app-wide configuration."""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from flask import Flask, request
from flask_cors import CORS

from backend.app.api.routes import api_bp
from backend.core.config import Settings, load_settings
from backend.core.scenarios import ScenarioStore
from backend.utils.logging import set_request_id, setup_logging

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> Flask:
    """Build the Flask app instance."""
    settings = settings or load_settings()
    setup_logging(settings.log_level)

    app = Flask(__name__)
    app.config["SETTINGS"] = settings
    app.extensions["scenario_store"] = ScenarioStore(settings.scenario_store_path)

    CORS(
        app,
        resources={r"/api/*": {"origins": list(settings.cors_origins)}},
        supports_credentials=True,
    )

    @app.before_request
    def _assign_request_id() -> None:
        set_request_id(request.headers.get("X-Request-ID") or uuid.uuid4().hex[:12])

    app.register_blueprint(api_bp, url_prefix="/api")
    logger.info(
        "app created env=%s store=%s", settings.env, settings.scenario_store_path
    )
    return app
