"""
project: dungeongen
module: __init__.py
License: MIT

Flask application factory for the dungeon generator service.

The generation core lives in `dungeongen.dungeon` and has no web
dependencies beyond an optional app-context lookup. This module wires it to
a Flask app: configuration from environment variables (a local `.env` is
honoured via python-dotenv), the dungeon API blueprint and JSON error
handlers.
"""

import logging
import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify

__version__ = "0.4.0"


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() not in {"0", "false", "no", ""}


def create_app(test_config=None):
    """Build and return a configured Flask app.

    ``test_config`` (a mapping) is applied last so tests can override any key,
    e.g. ``{"TESTING": True, "DUNGEON_DISABLE_CACHE": True}``.
    """
    # Load .env if present so DUNGEON_* / DUNGEONGEN_* can be supplied without exporting them
    load_dotenv()
    app = Flask(__name__, instance_relative_config=True)
    app.config.update(
        SECRET_KEY=os.getenv("SECRET_KEY", "dev-secret-change-me"),
        # Dungeon generation feature flags / metrics
        DUNGEON_ENABLE_GENERATION_METRICS=_env_flag("DUNGEON_ENABLE_GENERATION_METRICS", "1"),
        DUNGEON_DISABLE_CACHE=_env_flag("DUNGEON_DISABLE_CACHE", "0"),
        DUNGEON_DEFAULTS={},
    )
    if test_config:
        app.config.update(test_config)

    from dungeongen.dungeon.errors import InvalidConfigurationError
    from dungeongen.routes.dungeon_api import bp_dungeon

    app.register_blueprint(bp_dungeon)

    @app.errorhandler(InvalidConfigurationError)
    def invalid_configuration(e):
        return jsonify({"error": "invalid_configuration", "details": e.details}), 400

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({"error": "not_found"}), 404

    # Log details under a short id; the client only sees the id
    @app.errorhandler(500)
    def internal_error(e):
        error_id = uuid.uuid4().hex[:8]
        logging.exception("Unhandled exception (id=%s)", error_id)
        return jsonify({"error": "internal_error", "error_id": error_id}), 500

    return app
