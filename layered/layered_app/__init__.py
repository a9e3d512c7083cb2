"""
Layered Backend Flask Application Factory.

Assembles the layered variant of the todo API.  Each request travels
through three independently instrumented layers:

  * **controllers** -- validate input, own the request trace, build the
    response envelope.
  * **services** -- business rules (user existence, task ownership).
  * **repositories** -- data access through Flask-SQLAlchemy.

The layers are wired together here, once per application, with the
logger injected into each of them.
"""

from __future__ import annotations

import logging
import os

from flask import Flask
from flask_sqlalchemy import SQLAlchemy

from layered.config import get_config
from shared.errors import register_error_handlers
from shared.request_id import init_request_id

db = SQLAlchemy()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

CONTROLLERS_EXTENSION = "layered_controllers"


def create_app(config_name: str | None = None) -> Flask:
    """
    Create and configure the layered backend application.

    Args:
        config_name: Optional configuration environment name
            (``"development"``, ``"testing"``, ``"production"``).  When
            *None*, the value is read from the ``FLASK_ENV`` environment
            variable, defaulting to ``"development"``.

    Returns:
        A fully configured Flask application instance.
    """
    app = Flask(__name__, instance_relative_config=True)
    config_class = get_config(config_name)
    app.config.from_object(config_class)
    app.json.sort_keys = False

    logger.info("Creating layered app with config: %s", config_class.__name__)

    os.makedirs(app.instance_path, exist_ok=True)

    db.init_app(app)
    init_request_id(app)
    register_error_handlers(app, logger)

    from .controllers import TaskController, UserController
    from .repositories import TaskRepository, UserRepository
    from .routes import api_bp
    from .services import TaskService

    task_repository = TaskRepository(db, logger=logging.getLogger(f"{__name__}.repositories"))
    user_repository = UserRepository(db, logger=logging.getLogger(f"{__name__}.repositories"))
    task_service = TaskService(
        task_repository,
        user_repository,
        logger=logging.getLogger(f"{__name__}.services"),
    )
    app.extensions[CONTROLLERS_EXTENSION] = {
        "tasks": TaskController(task_service, logger=logging.getLogger(f"{__name__}.controllers")),
        "users": UserController(user_repository, logger=logging.getLogger(f"{__name__}.controllers")),
    }

    app.register_blueprint(api_bp)

    with app.app_context():
        db.create_all()
        logger.info("Layered database tables created")

    return app
