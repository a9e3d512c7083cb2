"""
Shared pytest fixtures for the layered backend tests.

Mirrors the monolith fixtures (session-scoped app, per-test client and
database) and adds factories for the layered backend's own models.

Key SDET Concepts Demonstrated:
- Fixture scoping (session vs. function) for performance and isolation
- Factory fixtures backed by Faker
- Teardown patterns (rollback + drop_all) to prevent test pollution
"""

from __future__ import annotations

import os

import pytest
from faker import Faker

os.environ["FLASK_ENV"] = "testing"

from layered.layered_app import create_app, db
from layered.layered_app.models import Task, User

fake = Faker()


@pytest.fixture(scope="session")
def app():
    """Provide the layered Flask app for the whole test session."""
    application = create_app("testing")
    yield application


@pytest.fixture(scope="function")
def client(app):
    """Provide a per-test client for the layered backend."""
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


@pytest.fixture
def task_factory(db_session):
    """Factory fixture for creating Task rows owned by a given user."""

    def _create_task(user: User, title: str | None = None, description: str | None = None) -> Task:
        task = Task(
            title=title or fake.sentence(nb_words=4),
            description=description or fake.paragraph(),
            user_id=user.id,
        )
        db_session.session.add(task)
        db_session.session.commit()
        return task

    return _create_task


@pytest.fixture
def owner(user_factory) -> User:
    return user_factory(name="Owner")


@pytest.fixture
def intruder(user_factory) -> User:
    return user_factory(name="Intruder")


@pytest.fixture
def owned_task(task_factory, owner) -> Task:
    return task_factory(owner, title="Owned task", description="Belongs to owner")
