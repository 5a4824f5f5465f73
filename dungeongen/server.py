"""
project: dungeongen
module: server.py
License: MIT

Server bootstrap: builds the app, configures logging and runs the Flask
development server.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from dungeongen import create_app

_LEVEL_NAMES = {"debug": logging.DEBUG, "info": logging.INFO, "warn": logging.WARNING, "error": logging.ERROR}


def start_server(host="0.0.0.0", port=5000, debug: bool = False, app=None):  # pragma: no cover (runtime only)
    """Start the HTTP server.

    When debug=True, Flask's debugger and reloader provide verbose tracebacks.
    Also configures application logging to a rotating file and console.
    """
    app = app or create_app()
    _configure_logging(app)
    try:
        print(f"[INFO] Starting dungeon server on {host}:{port}")
        app.run(host=host, port=port, debug=debug)
    except KeyboardInterrupt:
        print("\n[INFO] Server stopped by user (Ctrl+C)")
        sys.exit(0)


def _configure_logging(app):
    """Send stdlib log records (Flask, werkzeug, error handlers) to instance/app.log and stderr.

    Level comes from ``DUNGEONGEN_LOG_LEVEL`` like the structured logger, so
    one variable controls both. Returns the log file path.
    """
    os.makedirs(app.instance_path, exist_ok=True)
    log_path = os.path.join(app.instance_path, "app.log")
    level = _LEVEL_NAMES.get(os.getenv("DUNGEONGEN_LOG_LEVEL", "info").lower(), logging.INFO)
    fmt = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    handlers = [
        RotatingFileHandler(log_path, maxBytes=app.config.get("LOG_MAX_BYTES", 1_000_000), backupCount=3),
        logging.StreamHandler(),
    ]
    root = logging.getLogger()
    # reconfiguring replaces handlers instead of stacking them
    for h in list(root.handlers):
        root.removeHandler(h)
    root.setLevel(level)
    for h in handlers:
        h.setLevel(level)
        h.setFormatter(fmt)
        root.addHandler(h)
    return log_path
