"""
Shared pytest fixtures for todos service tests.

The todos service asks the users service whether a user exists.  Tests
replace ``requests.get`` inside the users client with a fake directory so
no HTTP traffic leaves the process.

Key SDET Concepts Demonstrated:
- Fixture scoping (session vs. function) for performance and isolation
- Monkeypatching an outbound HTTP dependency
- Factory fixtures backed by Faker
"""

from __future__ import annotations

import os
from collections.abc import Callable

import pytest
from faker import Faker

os.environ["FLASK_ENV"] = "testing"

from services.todos.todos_app import create_app, db
from services.todos.todos_app.models import Task
from shared.test_helpers import FakeResponse, envelope

fake = Faker()


@pytest.fixture(scope="session")
def app():
    """Provide the todos service app for the whole test session."""
    application = create_app("testing")
    yield application


@pytest.fixture(scope="function")
def client(app):
    """Provide a per-test client for the todos service."""
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


class FakeUserDirectory:
    """
    Stand-in for the users service behind ``requests.get``.

    Attributes:
        user_ids: Ids the directory reports as existing.
        calls: URLs requested, in order.
        timeouts: ``timeout`` argument of each call.
    """

    def __init__(self) -> None:
        self.user_ids: set[int] = set()
        self.calls: list[str] = []
        self.timeouts: list[float] = []

    def __call__(self, url: str, timeout: float | None = None, **_) -> FakeResponse:
        self.calls.append(url)
        self.timeouts.append(timeout)
        user_id = int(url.rstrip("/").rsplit("/", 1)[-1])
        if user_id in self.user_ids:
            return FakeResponse(
                200,
                envelope("User found", data={"id": user_id, "name": f"User {user_id}"}),
            )
        return FakeResponse(404, envelope("User not found", success=False))


@pytest.fixture
def users_directory(monkeypatch) -> FakeUserDirectory:
    """Patch the users client's ``requests.get`` with a fake directory."""
    directory = FakeUserDirectory()
    monkeypatch.setattr("services.todos.todos_app.clients.requests.get", directory)
    return directory


@pytest.fixture
def task_factory(db_session) -> Callable[..., Task]:
    """Factory fixture for creating Task rows directly in the todos database."""

    def _create_task(
        user_id: int,
        title: str | None = None,
        description: str | None = None,
        task_id: int | None = None,
    ) -> Task:
        task = Task(
            title=title or fake.sentence(nb_words=4),
            description=description or fake.paragraph(),
            user_id=user_id,
        )
        if task_id is not None:
            task.id = task_id
        db_session.session.add(task)
        db_session.session.commit()
        return task

    return _create_task
