"""
Shared pytest fixtures for gateway tests.

The gateway talks to its downstream services through
``requests.request``; the ``downstream`` fixture replaces that call with a
recorder that answers from a queue of canned responses.
"""

from __future__ import annotations

import os
from typing import Any

import pytest

os.environ["FLASK_ENV"] = "testing"

from gateway.gateway_app import create_app
from shared.test_helpers import FakeResponse, envelope


@pytest.fixture(scope="session")
def app():
    """Provide the gateway app for the whole test session."""
    application = create_app("testing")
    yield application


@pytest.fixture(scope="function")
def client(app):
    """Provide a per-test client for the gateway."""
    with app.test_client() as test_client:
        yield test_client


class DownstreamRecorder:
    """
    Stand-in for ``requests.request`` that records every forwarded call.

    Attributes:
        calls: Keyword arguments of each call, in order.
        response: Response returned for every call.
        error: Exception raised instead, when set.
    """

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []
        self.response = FakeResponse(200, envelope("Forwarded"))
        self.error: Exception | None = None

    def __call__(self, **kwargs: Any) -> FakeResponse:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response

    @property
    def last(self) -> dict[str, Any]:
        return self.calls[-1]


@pytest.fixture
def downstream(monkeypatch) -> DownstreamRecorder:
    """Patch the gateway's outbound ``requests.request``."""
    recorder = DownstreamRecorder()
    monkeypatch.setattr("gateway.gateway_app.routes.requests.request", recorder)
    return recorder
