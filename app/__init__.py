"""
Monolith backend application factory module.

In the monolith every endpoint is one route function that validates the
payload, queries the database and builds the response itself.  There are
no layers to time separately, so each request's trace holds a single
``Handler`` step.
"""

import logging
import os
from flask import Flask
from flask_sqlalchemy import SQLAlchemy

from config import get_config
from shared.errors import register_error_handlers
from shared.request_id import init_request_id

# Bound to the app inside create_app
db = SQLAlchemy()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def create_app(config_name: str | None = None) -> Flask:
    """
    Build the monolith Flask application.

    Wires the database, the request-id hooks and the JSON error handlers,
    then registers the API blueprint and creates the users and tasks
    tables.

    Args:
        config_name: Configuration environment name.
                     If None, uses FLASK_ENV environment variable.

    Returns:
        The configured application.
    """
    app = Flask(__name__, instance_relative_config=True)

    config_class = get_config(config_name)
    app.config.from_object(config_class)
    app.json.sort_keys = False

    logger.info("Creating monolith app with config: %s", config_class.__name__)

    os.makedirs(app.instance_path, exist_ok=True)

    db.init_app(app)
    init_request_id(app)
    register_error_handlers(app, logger)

    from app.routes.api import api_bp

    app.register_blueprint(api_bp)

    with app.app_context():
        db.create_all()
        logger.info("Monolith tables created")

    return app
