"""
Logging Setup

Configures logging for the Flask application and for the content services,
which log through ordinary module loggers.
"""

import logging
import sys
from flask import request, has_request_context

LOG_FORMAT = '[%(asctime)s] %(levelname)s in %(module)s: %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Module loggers that should share the application's handler
SERVICE_LOGGERS = ('services',)


def build_handler():
    """Stdout handler with the application's log format."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def setup_logger(app):
    """
    Configure logging for the Flask application.

    Sets up:
    - Timestamped log format on stdout
    - The same handler for the content loader and blog service loggers
    - Request logging for all incoming HTTP requests
    - Log level based on debug mode

    Args:
        app: Flask application instance
    """
    level = logging.DEBUG if app.debug else logging.INFO
    handler = build_handler()

    app.logger.addHandler(handler)
    app.logger.setLevel(level)
    app.logger.propagate = False

    for name in SERVICE_LOGGERS:
        service_logger = logging.getLogger(name)
        if not service_logger.handlers:
            service_logger.addHandler(build_handler())
        service_logger.setLevel(level)

    @app.before_request
    def log_request_info():
        """Log incoming request details."""
        if has_request_context():
            app.logger.info(
                f"Request: {request.method} {request.path} "
                f"from {request.remote_addr}"
            )

    @app.after_request
    def log_response_info(response):
        """Log response status."""
        if has_request_context():
            app.logger.info(
                f"Response: {response.status_code} for "
                f"{request.method} {request.path}"
            )
        return response

    app.logger.info(f"Logging configured - Level: {logging.getLevelName(app.logger.level)}")

    return app
