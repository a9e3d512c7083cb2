"""
Service layer for the todos service.

Same business rules as the layered backend, but the acting user is checked
against the users service.  That remote lookup is timed as a ``Client``
step; repository calls are timed as ``Repository`` steps and each service
method as a whole as a ``Service`` step.
"""

from __future__ import annotations

import logging
from typing import Any

from shared.errors import AppError
from shared.tracing import Layer, TraceContext, step_name

from .clients import UsersClient
from .models import Task
from .repositories import TaskRepository


def _service(operation: str) -> str:
    return step_name(Layer.SERVICE, operation)


def _repository(operation: str) -> str:
    return step_name(Layer.REPOSITORY, operation)


class TaskService:
    """Business operations on tasks."""

    def __init__(
        self,
        tasks: TaskRepository,
        users: UsersClient,
        logger: logging.Logger,
    ) -> None:
        self.tasks = tasks
        self.users = users
        self.logger = logger

    def _ensure_user(self, user_id: int, trace: TraceContext) -> None:
        with trace.timed(step_name(Layer.CLIENT, "getUserById")):
            if self.users.get_user_by_id(user_id) is None:
                raise AppError.not_found("User not found")

    def create_task(self, fields: dict[str, Any], user_id: int, trace: TraceContext) -> Task:
        with trace.timed(_service("createTask")):
            self._ensure_user(user_id, trace)
            with trace.timed(_repository("createTask")):
                task = self.tasks.create_task(fields, user_id)
                if task is None:
                    raise AppError.custom("Failed to create task", 400)
        return task

    def get_tasks(self, user_id: int, trace: TraceContext) -> list[Task]:
        with trace.timed(_service("getTasks")):
            self._ensure_user(user_id, trace)
            with trace.timed(_repository("getTasks")):
                tasks = self.tasks.get_tasks(user_id)
        return tasks

    def get_task_by_id(self, task_id: int, trace: TraceContext) -> Task:
        with trace.timed(_service("getTaskById")):
            with trace.timed(_repository("getTaskById")):
                task = self.tasks.get_task_by_id(task_id)
                if task is None:
                    raise AppError.not_found("Task not found")
        return task

    def _owned_task(self, task_id: int, user_id: int, action: str, trace: TraceContext) -> Task:
        with trace.timed(_repository("getTaskById")):
            task = self.tasks.get_task_by_id(task_id)
            if task is None:
                raise AppError.not_found("Task not found")
            if task.user_id != user_id:
                raise AppError.forbidden(f"Unauthorized to {action} this task")
        return task

    def update_task(
        self,
        fields: dict[str, Any],
        task_id: int,
        user_id: int,
        trace: TraceContext,
    ) -> Task:
        with trace.timed(_service("updateTask")):
            self._owned_task(task_id, user_id, "update", trace)
            with trace.timed(_repository("updateTask")):
                task = self.tasks.update_task(fields, task_id)
                if task is None:
                    raise AppError.not_found("Task not found or failed to update")
        return task

    def delete_task(self, task_id: int, user_id: int, trace: TraceContext) -> None:
        with trace.timed(_service("deleteTask")):
            self._owned_task(task_id, user_id, "delete", trace)
            with trace.timed(_repository("deleteTask")):
                if not self.tasks.delete_task(task_id):
                    raise AppError.not_found("Task not found or failed to delete")
