"""
Shared pytest fixtures for frontend BFF tests.

The frontend reaches its backends through ``requests.request``.  The
``backend`` fixture replaces that call with a small router that answers
from canned responses keyed by method and path, and records every call so
tests can check which backend URL was used.

Key SDET Concepts Demonstrated:
- Isolating a BFF from its backends with a fake HTTP layer
- Session seeding through ``session_transaction``
"""

from __future__ import annotations

import os
from typing import Any
from urllib.parse import urlsplit

import pytest

os.environ["FLASK_ENV"] = "testing"

from services.frontend.frontend_app import create_app
from shared.test_helpers import FakeResponse, envelope

ACTING_USER = {"id": 1, "name": "Ada Lovelace", "email": "ada@example.com"}


@pytest.fixture(scope="session")
def app():
    """Provide the frontend app for the whole test session."""
    application = create_app("testing")
    yield application


@pytest.fixture(scope="function")
def client(app):
    """Provide a per-test client with a fresh cookie jar."""
    with app.test_client() as test_client:
        yield test_client


class FakeBackend:
    """
    Router standing in for every backend behind ``requests.request``.

    Attributes:
        routes: ``(method, path)`` to response (or exception to raise).
        calls: ``(method, url, kwargs)`` of each call, in order.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Any] = {}
        self.calls: list[tuple[str, str, dict[str, Any]]] = []

    def on(self, method: str, path: str, status: int = 200, **envelope_kwargs: Any) -> None:
        self.routes[(method, path)] = FakeResponse(status, envelope(**envelope_kwargs))

    def fail(self, method: str, path: str, error: Exception) -> None:
        self.routes[(method, path)] = error

    def __call__(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append((method, url, kwargs))
        outcome = self.routes.get((method, urlsplit(url).path))
        if outcome is None:
            return FakeResponse(404, envelope("Route not found", success=False))
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    @property
    def urls(self) -> list[str]:
        return [url for _, url, _ in self.calls]


@pytest.fixture
def backend(monkeypatch) -> FakeBackend:
    """Patch the backend client's outbound ``requests.request``."""
    fake = FakeBackend()
    monkeypatch.setattr("services.frontend.frontend_app.backend.requests.request", fake)
    return fake


@pytest.fixture
def acting_client(client):
    """A client whose session already holds an acting user."""
    with client.session_transaction() as sess:
        sess["user"] = dict(ACTING_USER)
    return client
