"""
Todos Service Flask Application Factory.

Provides the ``create_app`` factory function that assembles the todos
micro-service.  The service owns task records only; whether a user exists
is answered by the users service, reached over HTTP through
:class:`~services.todos.todos_app.clients.UsersClient`.

The pipeline mirrors the layered backend (controller, service, repository)
with one extra instrumented hop: the remote user lookup, recorded as a
``Client`` step.

Key Concepts Demonstrated:
- Application factory pattern (``create_app``)
- API-only service architecture (no server-rendered views)
- Service-to-service HTTP with explicit timeouts
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from flask import Flask
from flask_sqlalchemy import SQLAlchemy

from services.todos.config import get_config
from shared.errors import register_error_handlers
from shared.request_id import init_request_id

db = SQLAlchemy()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

CONTROLLER_EXTENSION = "todos_controller"


def _ensure_sqlite_db_parent_exists(database_uri: str) -> None:
    """Create parent directories for file-based SQLite URIs when missing."""
    sqlite_prefix = "sqlite:///"
    if not database_uri.startswith(sqlite_prefix):
        return

    sqlite_path = database_uri[len(sqlite_prefix) :].split("?", 1)[0]
    if sqlite_path == ":memory:":
        return

    Path(sqlite_path).parent.mkdir(parents=True, exist_ok=True)


def create_app(config_name: str | None = None) -> Flask:
    """
    Create and configure the todos service application.

    Loads the configuration, initialises SQLAlchemy, wires the users
    client, repository, service and controller together, registers the API
    blueprint and ensures that all database tables exist.

    Args:
        config_name: Optional configuration environment name
            (``"development"``, ``"testing"``, ``"production"``).  When *None*,
            the value is read from the ``FLASK_ENV`` environment variable,
            defaulting to ``"development"``.

    Returns:
        A fully configured Flask application instance ready to serve requests.
    """
    app = Flask(__name__, instance_relative_config=True)
    config_class = get_config(config_name)
    app.config.from_object(config_class)
    app.json.sort_keys = False

    logger.info("Creating todos service app with config: %s", config_class.__name__)

    os.makedirs(app.instance_path, exist_ok=True)
    _ensure_sqlite_db_parent_exists(app.config.get("SQLALCHEMY_DATABASE_URI", ""))

    db.init_app(app)
    init_request_id(app)
    register_error_handlers(app, logger)

    from .clients import UsersClient
    from .controllers import TaskController
    from .repositories import TaskRepository
    from .routes.api import api_bp
    from .services import TaskService

    users_client = UsersClient(
        app.config["USERS_SERVICE_URL"],
        timeout=app.config["USERS_SERVICE_TIMEOUT"],
        logger=logging.getLogger(f"{__name__}.clients"),
    )
    task_service = TaskService(
        TaskRepository(db, logger=logging.getLogger(f"{__name__}.repositories")),
        users_client,
        logger=logging.getLogger(f"{__name__}.services"),
    )
    app.extensions[CONTROLLER_EXTENSION] = TaskController(
        task_service, logger=logging.getLogger(f"{__name__}.controllers")
    )

    app.register_blueprint(api_bp)

    with app.app_context():
        db.create_all()
        logger.info("Todos service database tables created")

    return app
