"""
Users service Flask application factory.

Provides the ``create_app`` factory function used to build the users
micro-service.  In the microservices variant the users service is the sole
owner of user records; the todos service asks it whether a user exists
over HTTP before creating or listing tasks.

Key Concepts Demonstrated:
- Application factory pattern (create_app)
- Flask extension initialisation (SQLAlchemy)
- Blueprint-based route registration
- Lazy import to avoid circular dependencies
"""

from __future__ import annotations

import logging
import os

from flask import Flask
from flask_sqlalchemy import SQLAlchemy

from services.users.config import get_config
from shared.errors import register_error_handlers
from shared.request_id import init_request_id

# Shared SQLAlchemy instance -- initialised with a concrete app inside create_app()
db = SQLAlchemy()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(config_name: str | None = None) -> Flask:
    """
    Create and configure the users service Flask application.

    Args:
        config_name: The configuration environment to load (e.g.
            ``"development"``, ``"testing"``, ``"production"``).  When
            ``None``, the value is resolved from the ``FLASK_ENV``
            environment variable, defaulting to ``"development"``.

    Returns:
        A fully configured :class:`~flask.Flask` application instance
        with all extensions initialised and database tables created.
    """
    app = Flask(__name__, instance_relative_config=True)
    config_class = get_config(config_name)
    app.config.from_object(config_class)
    app.json.sort_keys = False

    logger.info("Creating users service app with config: %s", config_class.__name__)

    os.makedirs(app.instance_path, exist_ok=True)

    db.init_app(app)
    init_request_id(app)
    register_error_handlers(app, logger)

    # Import inside the factory to avoid circular imports -- the blueprint
    # module references ``db`` from this package, which must exist first.
    from .routes.api import api_bp

    app.register_blueprint(api_bp)

    with app.app_context():
        db.create_all()
        logger.info("Users service database tables created")

    return app
