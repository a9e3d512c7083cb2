"""
Configuration Classes for the Todos Service.

Centralises all environment-dependent settings (database URI, location of
the users service) into a hierarchy of configuration classes.  The base
``Config`` class defines development defaults, while subclasses override
only what differs per environment.

Key Concepts Demonstrated:
- Class-based configuration with inheritance
- Environment-variable overrides for twelve-factor app compliance
- Explicit timeouts for service-to-service HTTP calls
"""

from __future__ import annotations

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent


class Config:
    """
    Base configuration with development-safe defaults.

    Attributes:
        SECRET_KEY: Flask session signing key.
        SQLALCHEMY_TRACK_MODIFICATIONS: Disabled to save memory.
        SQLALCHEMY_DATABASE_URI: Database connection string (default: local
            SQLite file).
        USERS_SERVICE_URL: Base URL of the users service.
        USERS_SERVICE_TIMEOUT: Seconds to wait for a user lookup before
            giving up.
    """

    SECRET_KEY: str = os.environ.get(
        "SECRET_KEY", "todos-service-dev-secret-change-in-production"
    )
    SQLALCHEMY_TRACK_MODIFICATIONS: bool = False
    SQLALCHEMY_DATABASE_URI: str = os.environ.get(
        "DATABASE_URL",
        f"sqlite:///{BASE_DIR / 'instance' / 'todos.db'}",
    )

    USERS_SERVICE_URL: str = os.environ.get("USERS_SERVICE_URL", "http://localhost:5001")
    USERS_SERVICE_TIMEOUT: float = float(os.environ.get("USERS_SERVICE_TIMEOUT", "5"))


class DevelopmentConfig(Config):
    """
    Development environment configuration.

    Enables debug mode for auto-reloading and verbose error pages.
    """

    DEBUG: bool = True
    TESTING: bool = False


class TestingConfig(Config):
    """
    Testing environment configuration.

    Uses an in-memory SQLite database and a placeholder users service URL;
    tests replace the HTTP layer so nothing is ever sent there.
    """

    DEBUG: bool = True
    TESTING: bool = True
    SQLALCHEMY_DATABASE_URI: str = os.environ.get("TEST_DATABASE_URL", "sqlite://")
    USERS_SERVICE_URL: str = "http://users-service.test"
    USERS_SERVICE_TIMEOUT: float = 1.0


class ProductionConfig(Config):
    """
    Production environment configuration.

    All secrets and URLs should be supplied through environment variables.
    """

    DEBUG: bool = False
    TESTING: bool = False


config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env: str | None = None) -> type[Config]:
    """
    Look up and return the configuration class for the given environment.

    Args:
        env: Environment name (``"development"``, ``"testing"``,
            ``"production"``).  When ``None``, falls back to the
            ``FLASK_ENV`` environment variable, defaulting to
            ``"development"``.

    Returns:
        The configuration class (not an instance) corresponding to the
        requested environment.
    """
    if env is None:
        env = os.environ.get("FLASK_ENV", "development")
    return config.get(env, config["default"])
