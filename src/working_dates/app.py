"""
Flask Application Factory.

Creates and configures the Flask application.
"""

import signal
import sys
from typing import Optional

from flask import Flask

from working_dates.api import api_bp
from working_dates.config import settings
from working_dates.infrastructure.holidays import get_holiday_repository
from working_dates.infrastructure.logging import log_request_context, logger
from working_dates.infrastructure.metrics import setup_metrics_middleware


def _handle_sigterm(signum: int, frame) -> None:
    """
    Handle SIGTERM for graceful shutdown.

    Container platforms send SIGTERM before stopping the instance.
    """
    logger.info(
        "Received SIGTERM, shutting down gracefully",
        extra={"extra_fields": {"signal": signum}}
    )
    sys.exit(0)


signal.signal(signal.SIGTERM, _handle_sigterm)


def create_app(config: Optional[dict] = None) -> Flask:
    """
    Create and configure the Flask application.

    Args:
        config: Optional configuration dictionary. ``HOLIDAYS_PRELOAD``
            overrides the environment setting.

    Returns:
        Configured Flask application.
    """
    app = Flask(__name__)

    app.json.sort_keys = False
    app.config["HOLIDAYS_PRELOAD"] = settings.holidays.preload

    if config:
        app.config.update(config)

    log_request_context(app)
    setup_metrics_middleware(app)

    app.register_blueprint(api_bp)

    if app.config["HOLIDAYS_PRELOAD"]:
        get_holiday_repository().preload()

    logger.info(
        "Application initialized",
        extra={"extra_fields": {
            "environment": settings.environment,
            "timezone": settings.business_time.timezone,
            "holidays_url": settings.holidays.url,
        }}
    )

    return app


app = create_app()


if __name__ == "__main__":
    app.run(
        host="0.0.0.0",
        port=settings.port,
        debug=settings.debug or settings.environment == "development",
    )
