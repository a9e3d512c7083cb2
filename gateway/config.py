"""
Gateway Service -- Configuration.

Defines environment-specific configuration classes for the API gateway.
Each class captures the URLs of the two downstream microservices (users
and todos) and the proxy timeout.  The ``get_config`` factory selects the
right class based on the ``FLASK_ENV`` environment variable (or an explicit
key).

Key Concepts Demonstrated:
- Class-based configuration with inheritance for DRY defaults
- Environment-variable overrides for 12-factor app deployability
- Separate testing configuration with short timeouts and fake URLs
"""

from __future__ import annotations

import os


class Config:
    """
    Base (shared) configuration for the gateway.

    Individual settings can be overridden by environment variables,
    following 12-factor app conventions.
    """

    SECRET_KEY: str = os.environ.get("SECRET_KEY", "gateway-dev-secret-change-in-production")

    # URL of the users microservice.
    USERS_SERVICE_URL: str = os.environ.get("USERS_SERVICE_URL", "http://localhost:5001")

    # URL of the todos microservice.
    TODOS_SERVICE_URL: str = os.environ.get("TODOS_SERVICE_URL", "http://localhost:5002")

    # Seconds to wait for a downstream response before answering 502.
    PROXY_TIMEOUT: float = float(os.environ.get("PROXY_TIMEOUT", "10"))


class DevelopmentConfig(Config):
    """Development overrides: Flask debug mode on."""

    DEBUG: bool = True
    TESTING: bool = False


class TestingConfig(Config):
    """
    Test-suite overrides.

    Points service URLs at non-routable test hosts so that tests never
    accidentally hit real services, with a 1 second timeout.
    """

    DEBUG: bool = True
    TESTING: bool = True
    USERS_SERVICE_URL: str = os.environ.get("TEST_USERS_SERVICE_URL", "http://users.test")
    TODOS_SERVICE_URL: str = os.environ.get("TEST_TODOS_SERVICE_URL", "http://todos.test")
    PROXY_TIMEOUT: float = float(os.environ.get("TEST_PROXY_TIMEOUT", "1"))


class ProductionConfig(Config):
    """Production overrides; URLs come from the deployment environment."""

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
    Return the configuration class for the given environment.

    Args:
        env: One of ``"development"``, ``"testing"``, or
            ``"production"``.  When *None*, the ``FLASK_ENV``
            environment variable is consulted, falling back to
            ``"development"`` if unset.

    Returns:
        The ``Config`` subclass matching the requested environment,
        or ``DevelopmentConfig`` if the key is unrecognised.
    """
    if env is None:
        env = os.environ.get("FLASK_ENV", "development")
    return config.get(env, config["default"])
