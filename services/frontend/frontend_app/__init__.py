"""
Frontend service Flask application factory.

Provides the ``create_app`` factory function that assembles the frontend
micro-service.  This service acts as a stateless Backend-for-Frontend (BFF):
it serves server-rendered HTML pages via Jinja templates and calls the
task API of whichever backend architecture (monolith, layered or
microservices) the visitor has selected.

The BFF never accesses a database directly.  Its job is presentation: it
keeps the ``trace`` returned by each backend call and draws it as a
latency diagram so the three architectures can be compared side by side.

Key Concepts Demonstrated:
- Application factory pattern (``create_app``)
- Backend-for-Frontend (BFF) architecture
- Blueprint-based route registration
- Lazy import to avoid circular dependencies
"""

from __future__ import annotations

import logging

from flask import Flask

from services.frontend.config import get_config

from .models import Architecture

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(config_name: str | None = None) -> Flask:
    """
    Create and configure the frontend service application.

    Args:
        config_name: Optional configuration environment name
            (``"development"``, ``"testing"``, ``"production"``).  When
            *None*, the value is read from the ``FLASK_ENV`` environment
            variable, defaulting to ``"development"``.

    Returns:
        A fully configured :class:`~flask.Flask` application instance
        ready to serve HTML pages.
    """
    app = Flask(__name__, instance_relative_config=True)
    config_class = get_config(config_name)
    app.config.from_object(config_class)

    logger.info("Creating frontend service app with config: %s", config_class.__name__)

    if Architecture.parse(app.config["DEFAULT_ARCHITECTURE"]) is None:
        logger.warning(
            "Unknown DEFAULT_ARCHITECTURE %r, using %s",
            app.config["DEFAULT_ARCHITECTURE"],
            Architecture.MICROSERVICES.value,
        )
        app.config["DEFAULT_ARCHITECTURE"] = Architecture.MICROSERVICES.value
    for architecture in Architecture:
        logger.info(
            "%s backend at %s", architecture.label, app.config[architecture.url_config_key]
        )

    # The blueprint imports the backend client and diagram modules, which
    # need this package initialised first.
    from .routes.views import views_bp

    app.register_blueprint(views_bp)
    return app
