"""
Shared pytest fixtures for the monolith test suite.

This module contains fixtures that are shared across all test modules
under ``tests/``.  Fixtures follow the Arrange-Act-Assert (AAA) pattern
and ensure test isolation by providing fresh data for each test.

Key Concepts Demonstrated:
- Fixture scopes (function, session)
- Fixture dependencies
- Test data factories
- Database setup/teardown
- Test client creation
"""

import os
from datetime import datetime
from typing import Any

import pytest
from faker import Faker

# Set testing environment before importing app
os.environ["FLASK_ENV"] = "testing"

from app import create_app, db
from app.models import Task, User
from shared.test_helpers import json_headers

# Initialize Faker for generating test data
fake = Faker()


# -----------------------------------------------------------------------------
# Application Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture(scope="session")
def app():
    """
    Create the monolith application instance for the test session.

    Yields:
        Flask application instance configured for testing.
    """
    application = create_app("testing")
    yield application


@pytest.fixture(scope="function")
def client(app):
    """
    Create a test client for making HTTP requests.

    Args:
        app: Flask application fixture.

    Yields:
        Flask test client for making HTTP requests.
    """
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture(scope="function")
def db_session(app):
    """
    Create a fresh database for each test.

    Creates all tables before the test and drops them afterwards so no
    rows leak between tests.

    Args:
        app: Flask application fixture.

    Yields:
        The Flask-SQLAlchemy extension bound to the test app.
    """
    with app.app_context():
        db.create_all()
        yield db
        db.session.rollback()
        db.drop_all()


# -----------------------------------------------------------------------------
# Test Data Factory Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def user_factory(db_session):
    """
    Factory fixture for creating User rows.

    Example:
        def test_something(user_factory):
            user = user_factory(name="Ada")
            assert user.id is not None
    """

    def _create_user(name: str | None = None, email: str | None = None) -> User:
        user = User(name=name or fake.name(), email=email or fake.unique.email())
        db_session.session.add(user)
        db_session.session.commit()
        return user

    return _create_user


@pytest.fixture
def task_factory(db_session):
    """
    Factory fixture for creating Task rows owned by a given user.

    Args:
        db_session: Database fixture.

    Returns:
        Function that creates and returns Task instances.
    """

    def _create_task(
        user: User,
        title: str | None = None,
        description: str | None = None,
        completed: bool = False,
        created_at: datetime | None = None,
    ) -> Task:
        task = Task(
            title=title or fake.sentence(nb_words=4),
            description=description or fake.paragraph(),
            completed=completed,
            user_id=user.id,
        )
        if created_at is not None:
            task.created_at = created_at
        db_session.session.add(task)
        db_session.session.commit()
        return task

    return _create_task


@pytest.fixture
def sample_user(user_factory) -> User:
    """A single user for tests that act on behalf of one person."""
    return user_factory(name="Sample User", email="sample@example.com")


@pytest.fixture
def other_user(user_factory) -> User:
    """A second user, used to exercise ownership checks."""
    return user_factory(name="Other User", email="other@example.com")


@pytest.fixture
def sample_task(task_factory, sample_user) -> Task:
    """A single task owned by ``sample_user``."""
    return task_factory(
        sample_user,
        title="Sample Task",
        description="This is a sample task for testing",
    )


# -----------------------------------------------------------------------------
# Test Data Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def valid_task_data(sample_user) -> dict[str, Any]:
    """
    Provide a valid create-task payload for ``sample_user``.

    Returns:
        Dictionary with valid task field values.
    """
    return {
        "title": "Test Task",
        "description": "This is a test task description",
        "userId": sample_user.id,
    }


@pytest.fixture
def api_headers() -> dict[str, str]:
    """
    Provide common headers for API requests.

    Returns:
        Dictionary of HTTP headers.
    """
    return json_headers()
