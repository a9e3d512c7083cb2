"""
Gateway Service -- Application Factory.

The gateway is the single entry point of the microservices variant.  It
forwards ``/api/users/...`` to the users service and ``/api/tasks...`` to
the todos service, relaying their envelopes unchanged, so clients see the
same HTTP surface as the monolith and layered backends.

Key Concepts Demonstrated:
- Application Factory pattern (create_app) for flexible configuration
- Blueprint registration for modular route organisation
- Environment-aware configuration loading via get_config
"""

from __future__ import annotations

import logging

from flask import Flask

from gateway.config import get_config
from shared.errors import register_error_handlers
from shared.request_id import init_request_id

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(config_name: str | None = None) -> Flask:
    """
    Construct and configure the gateway Flask application.

    Args:
        config_name: Optional environment key ("development", "testing",
            "production").  When *None*, the FLASK_ENV environment
            variable is consulted, defaulting to "development".

    Returns:
        A fully-configured Flask application with the gateway blueprint
        registered and ready to proxy requests.
    """
    app = Flask(__name__)
    config_class = get_config(config_name)
    app.config.from_object(config_class)
    app.json.sort_keys = False

    logger.info("Creating gateway app with config: %s", config_class.__name__)
    logger.info(
        "Routing /api/users to %s and /api/tasks to %s (timeout %ss)",
        app.config["USERS_SERVICE_URL"],
        app.config["TODOS_SERVICE_URL"],
        app.config["PROXY_TIMEOUT"],
    )

    init_request_id(app)
    register_error_handlers(app, logger)

    from .routes import gateway_bp

    app.register_blueprint(gateway_bp)
    return app
