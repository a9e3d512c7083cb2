"""
API tests for the todos micro-service.

The users service is replaced by the ``users_directory`` fixture, which
patches ``requests.get`` inside the users client.

Key SDET Concepts Demonstrated:
- Exact trace assertions across controller, service, repository and
  client steps
- Fault injection (users service down) with partial-trace verification
- Authorization negative paths
"""

from __future__ import annotations

import pytest
import requests

pytestmark = pytest.mark.integration


def _trace_names(response) -> list[str]:
    return [step["name"] for step in response.get_json()["trace"]]


def test_health_check(client, db_session):
    response = client.get("/")

    assert response.status_code == 200
    assert response.get_json()["message"] == "Server is running"


class TestCreateTask:
    """Tests for POST /api/tasks."""

    @pytest.mark.smoke
    def test_create_task_for_existing_user(self, client, db_session, users_directory):
        # Arrange
        users_directory.user_ids.add(1)

        # Act
        response = client.post(
            "/api/tasks", json={"title": "Buy milk", "description": "2%", "userId": 1}
        )

        # Assert
        assert response.status_code == 201
        body = response.get_json()
        assert body["success"] is True
        assert body["message"] == "Task created successfully"
        assert body["data"]["title"] == "Buy milk"
        assert body["data"]["userId"] == 1
        assert _trace_names(response) == [
            "Controller: createTask",
            "Service: createTask",
            "Repository: createTask",
            "Client: getUserById",
        ]
        assert users_directory.calls == ["http://users-service.test/api/users/1"]
        assert users_directory.timeouts == [1.0]

    def test_unknown_user_returns_404(self, client, db_session, users_directory):
        response = client.post(
            "/api/tasks", json={"title": "Orphan", "description": "", "userId": 8}
        )

        assert response.status_code == 404
        assert response.get_json()["message"] == "User not found"
        assert _trace_names(response) == []

    def test_users_service_down_returns_502(self, client, db_session, monkeypatch):
        # Arrange
        def unreachable(url, timeout=None):
            raise requests.exceptions.ConnectionError("connection refused")

        monkeypatch.setattr("services.todos.todos_app.clients.requests.get", unreachable)

        # Act
        response = client.post(
            "/api/tasks", json={"title": "Buy milk", "description": "2%", "userId": 1}
        )

        # Assert
        assert response.status_code == 502
        body = response.get_json()
        assert body["success"] is False
        assert body["message"] == "User service unavailable"
        assert body["trace"] == []

    def test_invalid_payload_never_calls_users_service(self, client, db_session, users_directory):
        response = client.post("/api/tasks", json={"title": "No user"})

        assert response.status_code == 400
        assert users_directory.calls == []


class TestGetTasks:
    """Tests for GET /api/tasks/<userId>."""

    def test_list_trace_and_filtering(self, client, users_directory, task_factory):
        users_directory.user_ids.update({1, 2})
        task_factory(1, title="Mine")
        task_factory(2, title="Theirs")

        response = client.get("/api/tasks/1")

        assert response.status_code == 200
        assert [task["title"] for task in response.get_json()["data"]] == ["Mine"]
        assert _trace_names(response) == [
            "Controller: getTasks",
            "Service: getTasks",
            "Repository: getTasks",
            "Client: getUserById",
        ]

    def test_timeout_returns_502(self, client, db_session, monkeypatch):
        def slow(url, timeout=None):
            raise requests.exceptions.Timeout("read timed out")

        monkeypatch.setattr("services.todos.todos_app.clients.requests.get", slow)

        response = client.get("/api/tasks/1")

        assert response.status_code == 502
        assert response.get_json()["message"] == "User service unavailable"


class TestGetTaskById:
    """Tests for GET /api/tasks/by-id/<id>."""

    def test_get_trace(self, client, users_directory, task_factory):
        task = task_factory(4)

        response = client.get(f"/api/tasks/by-id/{task.id}")

        assert response.status_code == 200
        assert response.get_json()["data"]["userId"] == 4
        assert _trace_names(response) == [
            "Controller: getTaskById",
            "Service: getTaskById",
            "Repository: getTaskById",
        ]
        assert users_directory.calls == []

    def test_repeated_reads_return_identical_payloads(self, client, users_directory, task_factory):
        task = task_factory(4, title="Water plants")

        first = client.get(f"/api/tasks/by-id/{task.id}").get_json()["data"]
        second = client.get(f"/api/tasks/by-id/{task.id}").get_json()["data"]

        assert first == second
        assert first["title"] == "Water plants"

    def test_id_beyond_storable_range_matches_no_route(self, client, db_session):
        response = client.get("/api/tasks/by-id/99999999999999999999")

        assert response.status_code == 404
        assert response.get_json()["message"] == "Route not found"


class TestUpdateTask:
    """Tests for PATCH /api/tasks/<id>."""

    def test_owner_update_trace(self, client, users_directory, task_factory):
        task = task_factory(3)

        response = client.patch(
            f"/api/tasks/{task.id}",
            json={"title": "Done", "description": "Finished", "completed": True, "userId": 3},
        )

        assert response.status_code == 200
        assert response.get_json()["data"]["completed"] is True
        assert _trace_names(response) == [
            "Controller: updateTask",
            "Service: updateTask",
            "Repository: updateTask",
            "Repository: getTaskById",
            "Service: getTaskById",
            "Repository: getTaskById",
        ]

    def test_non_owner_update_is_forbidden(self, client, users_directory, task_factory):
        task = task_factory(3, title="Original")

        response = client.patch(
            f"/api/tasks/{task.id}",
            json={"title": "Hijacked", "description": "x", "userId": 2},
        )

        assert response.status_code == 403
        assert response.get_json()["message"] == "Unauthorized to update this task"
        assert "Repository: updateTask" not in _trace_names(response)
        assert client.get(f"/api/tasks/by-id/{task.id}").get_json()["data"]["title"] == "Original"


class TestDeleteTask:
    """Tests for DELETE /api/tasks/<id>."""

    def test_owner_delete_trace(self, client, users_directory, task_factory):
        task = task_factory(3)

        response = client.delete(f"/api/tasks/{task.id}", json={"userId": 3})

        assert response.status_code == 200
        assert response.get_json()["message"] == "Task deleted successfully"
        assert _trace_names(response) == [
            "Controller: deleteTask",
            "Service: deleteTask",
            "Repository: deleteTask",
            "Repository: getTaskById",
            "Service: getTaskById",
            "Repository: getTaskById",
        ]
        assert client.get(f"/api/tasks/by-id/{task.id}").status_code == 404

    def test_delete_someone_elses_task_is_forbidden(self, client, users_directory, task_factory):
        # Arrange: task 5 belongs to user 3
        task_factory(3, title="Not yours", task_id=5)

        # Act: user 2 tries to delete it
        response = client.delete("/api/tasks/5", json={"userId": 2})

        # Assert
        assert response.status_code == 403
        body = response.get_json()
        assert body["success"] is False
        assert "Unauthorized" in body["message"]
        assert _trace_names(response) == ["Service: getTaskById", "Repository: getTaskById"]
        assert client.get("/api/tasks/by-id/5").status_code == 200

    def test_missing_task_returns_404(self, client, db_session, users_directory):
        response = client.delete("/api/tasks/404", json={"userId": 1})

        assert response.status_code == 404
        assert response.get_json()["message"] == "Task not found"
        assert _trace_names(response) == []

    def test_missing_body_returns_400(self, client, db_session):
        response = client.delete("/api/tasks/1")

        assert response.status_code == 400
        assert response.get_json()["message"].startswith("Invalid input")

    def test_user_id_beyond_storable_range_returns_400(self, client, db_session, users_directory):
        response = client.delete("/api/tasks/1", json={"userId": 2**63})

        assert response.status_code == 400
        assert users_directory.calls == []
