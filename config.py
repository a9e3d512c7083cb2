"""
Monolith backend configuration module.

The monolith is the simplest of the three backends: one process, one
database, and one route function per endpoint.  Its only settings are the
session key and where the task/user tables live.  Every value can be
overridden from the environment.
"""

import os
from pathlib import Path

# Directory holding this file; the SQLite file goes under instance/
BASE_DIR = Path(__file__).resolve().parent


class Config:
    """
    Settings shared by every monolith environment.

    Attributes:
        SECRET_KEY: Flask signing key.
        SQLALCHEMY_TRACK_MODIFICATIONS: Disabled; nothing listens for
            model events.
        SQLALCHEMY_DATABASE_URI: Users and tasks database, a local SQLite
            file unless ``DATABASE_URL`` says otherwise.
    """

    SECRET_KEY: str = os.environ.get("SECRET_KEY", "monolith-dev-secret-change-in-production")
    SQLALCHEMY_TRACK_MODIFICATIONS: bool = False
    SQLALCHEMY_DATABASE_URI: str = os.environ.get(
        "DATABASE_URL",
        f"sqlite:///{BASE_DIR / 'instance' / 'monolith.db'}"
    )


class DevelopmentConfig(Config):
    """Local runs with the reloader and debugger."""

    DEBUG: bool = True
    TESTING: bool = False


class TestingConfig(Config):
    """Test runs against a throwaway database."""

    DEBUG: bool = True
    TESTING: bool = True

    # sqlite:// is in-memory; Flask-SQLAlchemy pins it to one connection
    SQLALCHEMY_DATABASE_URI: str = os.environ.get("TEST_DATABASE_URL", "sqlite://")


class ProductionConfig(Config):
    """Deployed runs; supply SECRET_KEY and DATABASE_URL."""

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
    Pick the monolith configuration class for an environment.

    Args:
        env: ``"development"``, ``"testing"`` or ``"production"``.
             Defaults to the FLASK_ENV environment variable.

    Returns:
        The matching configuration class, ``DevelopmentConfig`` when the
        name is unknown.
    """
    if env is None:
        env = os.environ.get("FLASK_ENV", "development")
    return config.get(env, config["default"])
