"""
Controller for the todos service.

Owns the request's ``TraceContext``, validates input and builds the
response envelope.  Before updating or deleting, the controller fetches
the task through the service and checks ownership itself, so a request
from the wrong user is refused before the mutating service call starts.
"""

from __future__ import annotations

import logging
from typing import Any

from flask import Response

from shared.errors import AppError, error_response
from shared.responses import send_response
from shared.tracing import Layer, TraceContext, step_name
from shared.validation import (
    parse_positive_int,
    update_fields,
    validate_create_task,
    validate_delete_task,
    validate_update_task,
)

from .services import TaskService


def _controller(operation: str) -> str:
    return step_name(Layer.CONTROLLER, operation)


class TaskController:
    """HTTP-facing task operations."""

    def __init__(self, service: TaskService, logger: logging.Logger) -> None:
        self.service = service
        self.logger = logger

    def _failure(self, error: Exception, trace: TraceContext, request_id: str) -> tuple[Response, int]:
        return error_response(error, trace=trace, request_id=request_id, logger=self.logger)

    def _check_owner(self, task_id: int, user_id: int, action: str, trace: TraceContext) -> None:
        task = self.service.get_task_by_id(task_id, trace)
        if task.user_id != user_id:
            self.logger.warning(
                "User %s tried to %s task %s owned by %s", user_id, action, task_id, task.user_id
            )
            raise AppError.forbidden(f"Unauthorized to {action} this task")

    def create_task(self, payload: Any, request_id: str) -> tuple[Response, int]:
        is_valid, error = validate_create_task(payload)
        if not is_valid:
            raise AppError.validation(error)

        trace = TraceContext()
        try:
            with trace.timed(_controller("createTask")):
                task = self.service.create_task(
                    {"title": payload["title"], "description": payload["description"]},
                    payload["userId"],
                    trace,
                )
        except Exception as exc:
            return self._failure(exc, trace, request_id)

        self.logger.info(
            "[%s] Task created: %s in %.3f ms", request_id, task.title, trace.request_trace[0].latency
        )
        return send_response(
            success=True,
            message="Task created successfully",
            data=task.to_dict(),
            trace=trace,
            request_id=request_id,
            status=201,
        )

    def get_tasks(self, raw_user_id: Any, request_id: str) -> tuple[Response, int]:
        user_id = parse_positive_int(raw_user_id)
        if user_id is None:
            raise AppError.validation("Missing userId")

        trace = TraceContext()
        try:
            with trace.timed(_controller("getTasks")):
                tasks = self.service.get_tasks(user_id, trace)
        except Exception as exc:
            return self._failure(exc, trace, request_id)

        self.logger.info("[%s] Tasks fetched: %d", request_id, len(tasks))
        return send_response(
            success=True,
            message="Tasks fetched successfully",
            data=[task.to_dict() for task in tasks],
            trace=trace,
            request_id=request_id,
        )

    def get_task_by_id(self, task_id: int, request_id: str) -> tuple[Response, int]:
        trace = TraceContext()
        try:
            with trace.timed(_controller("getTaskById")):
                task = self.service.get_task_by_id(task_id, trace)
        except Exception as exc:
            return self._failure(exc, trace, request_id)

        return send_response(
            success=True,
            message="Task fetched successfully",
            data=task.to_dict(),
            trace=trace,
            request_id=request_id,
        )

    def update_task(self, task_id: int, payload: Any, request_id: str) -> tuple[Response, int]:
        data = {**(payload if isinstance(payload, dict) else {}), "id": task_id}
        is_valid, error = validate_update_task(data)
        if not is_valid:
            raise AppError.validation(error)

        trace = TraceContext()
        try:
            with trace.timed(_controller("updateTask")):
                self._check_owner(task_id, data["userId"], "update", trace)
                task = self.service.update_task(update_fields(data), task_id, data["userId"], trace)
        except Exception as exc:
            return self._failure(exc, trace, request_id)

        self.logger.info("[%s] Task updated: %s", request_id, task_id)
        return send_response(
            success=True,
            message="Task updated successfully",
            data=task.to_dict(),
            trace=trace,
            request_id=request_id,
        )

    def delete_task(self, task_id: int, payload: Any, request_id: str) -> tuple[Response, int]:
        data = {**(payload if isinstance(payload, dict) else {}), "taskId": task_id}
        is_valid, error = validate_delete_task(data)
        if not is_valid:
            raise AppError.validation(error)

        trace = TraceContext()
        try:
            with trace.timed(_controller("deleteTask")):
                self._check_owner(task_id, data["userId"], "delete", trace)
                self.service.delete_task(task_id, data["userId"], trace)
        except Exception as exc:
            return self._failure(exc, trace, request_id)

        self.logger.info("[%s] Task deleted: %s", request_id, task_id)
        return send_response(
            success=True,
            message="Task deleted successfully",
            trace=trace,
            request_id=request_id,
        )
