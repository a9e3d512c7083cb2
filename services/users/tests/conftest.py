"""
Shared pytest fixtures for users service tests.

Key SDET Concepts Demonstrated:
- Session-scoped app fixture with per-test database isolation
- Faker-backed factory fixture
"""

from __future__ import annotations

import os

import pytest
from faker import Faker

os.environ["FLASK_ENV"] = "testing"

from services.users.users_app import create_app, db
from services.users.users_app.models import User

fake = Faker()


@pytest.fixture(scope="session")
def app():
    """Provide the users service app for the whole test session."""
    application = create_app("testing")
    yield application


@pytest.fixture(scope="function")
def client(app):
    """Provide a per-test client for the users service."""
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture(scope="function")
def db_session(app):
    """Create fresh tables for each test and drop them afterwards."""
    with app.app_context():
        db.create_all()
        yield db
        db.session.rollback()
        db.drop_all()


@pytest.fixture
def user_factory(db_session):
    """Factory fixture for creating User rows."""

    def _create_user(name: str | None = None, email: str | None = None) -> User:
        user = User(name=name or fake.name(), email=email or fake.unique.email())
        db_session.session.add(user)
        db_session.session.commit()
        return user

    return _create_user
