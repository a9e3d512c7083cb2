"""
Configuration classes for the frontend service.

The frontend service is a stateless BFF (backend-for-frontend).  It serves
server-rendered HTML and delegates every task operation, over HTTP, to one
of the three backend architectures chosen by the visitor.
"""

from __future__ import annotations

import os


class Config:
    """Base configuration for all frontend environments."""

    SECRET_KEY: str = os.environ.get(
        "SECRET_KEY", "frontend-service-dev-secret-change-in-production"
    )

    # Base URL per architecture.  The microservices URL points at the gateway.
    MONOLITH_API_URL: str = os.environ.get("MONOLITH_API_URL", "http://localhost:5000")
    LAYERED_API_URL: str = os.environ.get("LAYERED_API_URL", "http://localhost:5003")
    MICROSERVICES_API_URL: str = os.environ.get("MICROSERVICES_API_URL", "http://localhost:8000")
    BACKEND_TIMEOUT: float = float(os.environ.get("BACKEND_TIMEOUT", "5"))

    DEFAULT_ARCHITECTURE: str = os.environ.get("DEFAULT_ARCHITECTURE", "microservices")
    TRACE_NODE_SPACING: int = int(os.environ.get("TRACE_NODE_SPACING", "180"))

    SESSION_COOKIE_HTTPONLY: bool = True
    SESSION_COOKIE_SAMESITE: str = os.environ.get("SESSION_COOKIE_SAMESITE", "Lax")
    SESSION_COOKIE_SECURE: bool = (
        os.environ.get("SESSION_COOKIE_SECURE", "false").strip().lower() == "true"
    )


class DevelopmentConfig(Config):
    """Configuration for local development."""

    DEBUG: bool = True
    TESTING: bool = False


class TestingConfig(Config):
    """Configuration for automated tests."""

    DEBUG: bool = True
    TESTING: bool = True

    MONOLITH_API_URL: str = os.environ.get("TEST_MONOLITH_API_URL", "http://monolith.test")
    LAYERED_API_URL: str = os.environ.get("TEST_LAYERED_API_URL", "http://layered.test")
    MICROSERVICES_API_URL: str = os.environ.get(
        "TEST_MICROSERVICES_API_URL", "http://gateway.test"
    )
    BACKEND_TIMEOUT: float = float(os.environ.get("TEST_BACKEND_TIMEOUT", "1"))
    DEFAULT_ARCHITECTURE: str = "microservices"


class ProductionConfig(Config):
    """Configuration for production deployments."""

    DEBUG: bool = False
    TESTING: bool = False
    SESSION_COOKIE_SECURE: bool = (
        os.environ.get("SESSION_COOKIE_SECURE", "true").strip().lower() == "true"
    )


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
        env: Environment name. When None, falls back to FLASK_ENV.

    Returns:
        The selected configuration class.
    """
    if env is None:
        env = os.environ.get("FLASK_ENV", "development")
    return config.get(env, config["default"])
