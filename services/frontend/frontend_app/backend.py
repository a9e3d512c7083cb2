"""
HTTP client for the backend the visitor has selected.

All three architectures expose the same JSON surface, so one client class
serves them all; only the base URL differs.  Calls go out through
``requests`` with the configured ``BACKEND_TIMEOUT``.  Transport failures
are not caught here: ``requests.Timeout`` and ``requests.RequestException``
propagate to the view, which turns them into a flash message.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import requests
from flask import current_app

from .models import Architecture


@dataclass
class BackendResult:
    """
    Decoded response envelope.

    Attributes:
        status_code: HTTP status of the response.
        success: The envelope's ``success`` flag.
        message: The envelope's ``message``.
        data: The envelope's ``data``, if any.
        trace: The envelope's ``trace`` (empty when absent).
        request_id: The envelope's ``requestId``, if any.
    """

    status_code: int
    success: bool
    message: str
    data: Any = None
    trace: list[dict[str, Any]] = field(default_factory=list)
    request_id: str | None = None

    @classmethod
    def from_response(cls, response: requests.Response) -> BackendResult:
        try:
            payload = response.json()
        except ValueError:
            payload = None
        if not isinstance(payload, dict):
            return cls(
                status_code=response.status_code,
                success=False,
                message=f"Unexpected response from backend (HTTP {response.status_code})",
            )
        return cls(
            status_code=response.status_code,
            success=bool(payload.get("success")),
            message=str(payload.get("message", "")),
            data=payload.get("data"),
            trace=list(payload.get("trace") or []),
            request_id=payload.get("requestId"),
        )


class BackendClient:
    """
    Task API client for one backend architecture.

    Args:
        architecture: Which backend this client talks to.
        base_url: Root URL of that backend.
        timeout: Seconds to wait for each call.
        logger: Logger for outbound call diagnostics.
    """

    def __init__(
        self,
        architecture: Architecture,
        base_url: str,
        timeout: float,
        logger: logging.Logger,
    ) -> None:
        self.architecture = architecture
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.logger = logger

    @classmethod
    def for_architecture(cls, architecture: Architecture) -> BackendClient:
        """Build a client from the current app's configuration."""
        return cls(
            architecture,
            current_app.config[architecture.url_config_key],
            timeout=current_app.config["BACKEND_TIMEOUT"],
            logger=logging.getLogger(__name__),
        )

    def _call(self, method: str, path: str, **kwargs: Any) -> BackendResult:
        url = f"{self.base_url}/{path.lstrip('/')}"
        response = requests.request(method=method, url=url, timeout=self.timeout, **kwargs)
        result = BackendResult.from_response(response)
        self.logger.info(
            "[%s] %s %s -> %s (%d steps)",
            result.request_id,
            method,
            url,
            response.status_code,
            len(result.trace),
        )
        return result

    def get_user(self, user_id: int) -> BackendResult:
        return self._call("GET", f"/api/users/{user_id}")

    def list_tasks(self, user_id: int) -> BackendResult:
        return self._call("GET", f"/api/tasks/{user_id}")

    def get_task(self, task_id: int) -> BackendResult:
        return self._call("GET", f"/api/tasks/by-id/{task_id}")

    def create_task(self, user_id: int, title: str, description: str) -> BackendResult:
        return self._call(
            "POST",
            "/api/tasks",
            json={"title": title, "description": description, "userId": user_id},
        )

    def update_task(
        self,
        task_id: int,
        user_id: int,
        *,
        title: str,
        description: str,
        completed: bool,
    ) -> BackendResult:
        return self._call(
            "PATCH",
            f"/api/tasks/{task_id}",
            json={
                "title": title,
                "description": description,
                "completed": completed,
                "userId": user_id,
            },
        )

    def delete_task(self, task_id: int, user_id: int) -> BackendResult:
        return self._call("DELETE", f"/api/tasks/{task_id}", json={"userId": user_id})
