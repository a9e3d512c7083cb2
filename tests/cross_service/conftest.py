"""
Fixtures that wire several in-process apps together.

Every service reaches its peers through the shared ``requests`` module, so
a single fake ``requests.request`` (and ``requests.get`` for the todos
service's user lookups) routes each outbound call to the Flask test
client registered for the target host.  Test clients are created without
``with`` so no request context outlives its call and nests under the
caller's.

Key SDET Concepts Demonstrated:
- Contract verification between real services without a network
- Host-based routing of outbound HTTP to in-process apps
"""

from __future__ import annotations

import os
from collections.abc import Callable
from typing import Any
from urllib.parse import urlsplit

import pytest

os.environ["FLASK_ENV"] = "testing"

from gateway.gateway_app import create_app as create_gateway_app
from layered.layered_app import create_app as create_layered_app
from layered.layered_app import db as layered_db
from layered.layered_app.models import User as LayeredUser
from services.frontend.frontend_app import create_app as create_frontend_app
from services.todos.todos_app import create_app as create_todos_app
from services.todos.todos_app import db as todos_db
from services.users.users_app import create_app as create_users_app
from services.users.users_app import db as users_db
from services.users.users_app.models import User as ServiceUser
from shared.test_helpers import FakeResponse, as_requests_get, route_to_test_client


def route_by_host(clients: dict[str, Any]) -> Callable[..., FakeResponse]:
    """
    Build a ``requests.request`` replacement that dispatches on URL host.

    Args:
        clients: Host name (``"users.test"``) to Flask test client.

    Returns:
        The dispatching callable.
    """
    dispatchers = {host: route_to_test_client(client) for host, client in clients.items()}

    def _dispatch(method: str = "GET", url: str = "", **kwargs: Any) -> FakeResponse:
        host = urlsplit(url).hostname
        if host not in dispatchers:
            raise AssertionError(f"Unexpected outbound call to {url}")
        return dispatchers[host](method=method, url=url, **kwargs)

    return _dispatch


@pytest.fixture(scope="module")
def users_app():
    return create_users_app("testing")


@pytest.fixture(scope="module")
def todos_app():
    return create_todos_app("testing")


@pytest.fixture(scope="module")
def gateway_app():
    return create_gateway_app("testing")


@pytest.fixture(scope="module")
def layered_app():
    return create_layered_app("testing")


@pytest.fixture(scope="module")
def frontend_app():
    return create_frontend_app("testing")


@pytest.fixture
def frontend(frontend_app):
    """Frontend test client for the visitor's browser."""
    return frontend_app.test_client()


@pytest.fixture
def microservices(users_app, todos_app, gateway_app, monkeypatch):
    """
    Route the gateway and the todos service to in-process peers.

    Yields:
        The users service app, for seeding users.
    """
    with users_app.app_context():
        users_db.create_all()
    with todos_app.app_context():
        todos_db.create_all()

    users_client = users_app.test_client()
    router = route_by_host(
        {
            "gateway.test": gateway_app.test_client(),
            "users.test": users_client,
            "todos.test": todos_app.test_client(),
        }
    )
    monkeypatch.setattr("requests.request", router)
    monkeypatch.setattr(
        "services.todos.todos_app.clients.requests.get",
        as_requests_get(route_by_host({"users-service.test": users_client})),
    )

    yield users_app

    with users_app.app_context():
        users_db.session.remove()
        users_db.drop_all()
    with todos_app.app_context():
        todos_db.session.remove()
        todos_db.drop_all()


@pytest.fixture
def service_user(microservices) -> dict[str, Any]:
    """A user stored in the users service."""
    with microservices.app_context():
        user = ServiceUser(name="Ada Lovelace", email="ada@example.com")
        users_db.session.add(user)
        users_db.session.commit()
        return user.to_dict()


@pytest.fixture
def service_intruder(microservices) -> dict[str, Any]:
    """A second user stored in the users service."""
    with microservices.app_context():
        user = ServiceUser(name="Mallory", email="mallory@example.com")
        users_db.session.add(user)
        users_db.session.commit()
        return user.to_dict()


@pytest.fixture
def layered_user(layered_app, monkeypatch) -> dict[str, Any]:
    """A user in the layered backend, with the frontend routed to it."""
    with layered_app.app_context():
        layered_db.create_all()
        user = LayeredUser(name="Grace Hopper", email="grace@example.com")
        layered_db.session.add(user)
        layered_db.session.commit()
        data = user.to_dict()

    monkeypatch.setattr(
        "requests.request", route_by_host({"layered.test": layered_app.test_client()})
    )
    yield data

    with layered_app.app_context():
        layered_db.session.remove()
        layered_db.drop_all()


@pytest.fixture
def monolith_backend(app, monkeypatch):
    """Route the frontend's monolith calls to the monolith app."""
    monkeypatch.setattr("requests.request", route_by_host({"monolith.test": app.test_client()}))
    return app
