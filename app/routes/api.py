"""
REST API endpoints for the monolith backend.

Every handler does all of its work inline (user lookup, ownership check,
database query) inside a single timed scope, so a successful request
produces exactly one trace step named ``"Handler: <operation>"``.

Endpoints:
    GET    /                        - Health check
    GET    /api/users/<id>          - Look up a user
    POST   /api/tasks               - Create a task
    GET    /api/tasks/<user_id>     - List a user's tasks (newest first)
    GET    /api/tasks/by-id/<id>    - Get a single task by ID
    PATCH  /api/tasks/<id>          - Update a task owned by the caller
    DELETE /api/tasks/<id>          - Delete a task owned by the caller
"""

import logging
from flask import Blueprint, Response, g, request
from sqlalchemy import select

from app import db
from app.models import Task, User
from shared.errors import AppError, error_response
from shared.responses import send_response
from shared.tracing import Layer, TraceContext, step_name
from shared.validation import (
    ID_CONVERTER,
    parse_positive_int,
    update_fields,
    validate_create_task,
    validate_delete_task,
    validate_update_task,
)

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


# -----------------------------------------------------------------------------
# Helper Functions
# -----------------------------------------------------------------------------

def _error_response(error: Exception, trace: TraceContext) -> tuple[Response, int]:
    """
    Map a failure raised inside a handler to an envelope with the partial trace.

    Args:
        error: The raised exception.
        trace: Trace accumulated before the failure.

    Returns:
        Envelope response with the error's status code.
    """
    return error_response(error, trace=trace, request_id=g.request_id, logger=logger)


def _require_user(user_id: int) -> User:
    """Fetch a user or raise a not-found error."""
    user = db.session.get(User, user_id)
    if user is None:
        raise AppError.not_found("User not found")
    return user


def _require_owned_task(task_id: int, user_id: int, action: str) -> Task:
    """Fetch a task and check that *user_id* owns it."""
    task = db.session.get(Task, task_id)
    if task is None:
        raise AppError.not_found("Task not found")
    if task.user_id != user_id:
        raise AppError.forbidden(f"Unauthorized to {action} this task")
    return task


# -----------------------------------------------------------------------------
# API Endpoints
# -----------------------------------------------------------------------------

@api_bp.route("/", methods=["GET"])
def health_check() -> tuple[Response, int]:
    """Health check endpoint for deployment verification."""
    logger.info("[%s] Health check", g.request_id)
    return send_response(
        success=True,
        message="Server is running",
        request_id=g.request_id,
    )


@api_bp.route(f"/api/users/<{ID_CONVERTER}:user_id>", methods=["GET"])
def get_user(user_id: int) -> tuple[Response, int]:
    """
    Look up a user by ID.

    Returns:
        Envelope with the user, or 404 if the user does not exist.
    """
    user = _require_user(user_id)
    return send_response(
        success=True,
        message="User found",
        data=user.to_dict(),
        request_id=g.request_id,
    )


@api_bp.route("/api/tasks", methods=["POST"])
def create_task() -> tuple[Response, int]:
    """
    Create a new task for an existing user.

    Request Body (JSON):
        title: Task title (required)
        description: Task description (required, may be empty)
        userId: Owner ID (required)

    Returns:
        201 envelope with the created task and its trace.
    """
    data = request.get_json(silent=True)
    is_valid, error = validate_create_task(data)
    if not is_valid:
        raise AppError.validation(error)

    trace = TraceContext()
    try:
        with trace.timed(step_name(Layer.HANDLER, "createTask")):
            _require_user(data["userId"])
            task = Task(
                title=data["title"],
                description=data["description"],
                user_id=data["userId"],
            )
            db.session.add(task)
            db.session.commit()
    except Exception as exc:
        db.session.rollback()
        return _error_response(exc, trace)

    logger.info("[%s] Task created for user %s: %s", g.request_id, task.user_id, task.title)
    return send_response(
        success=True,
        message="Task created successfully",
        data=task.to_dict(),
        trace=trace,
        request_id=g.request_id,
        status=201,
    )


@api_bp.route("/api/tasks/<user_id>", methods=["GET"])
def get_tasks(user_id: str) -> tuple[Response, int]:
    """
    List all tasks of a user, newest first.

    Returns:
        Envelope with the list of tasks, or 404 if the user does not exist.
    """
    parsed_user_id = parse_positive_int(user_id)
    if parsed_user_id is None:
        raise AppError.validation("Missing userId")

    trace = TraceContext()
    try:
        with trace.timed(step_name(Layer.HANDLER, "getTasks")):
            _require_user(parsed_user_id)
            stmt = (
                select(Task)
                .where(Task.user_id == parsed_user_id)
                .order_by(Task.created_at.desc(), Task.id.desc())
            )
            tasks = db.session.scalars(stmt).all()
    except Exception as exc:
        return _error_response(exc, trace)

    logger.info("[%s] Tasks fetched for user %s: %d", g.request_id, parsed_user_id, len(tasks))
    return send_response(
        success=True,
        message="Tasks fetched successfully",
        data=[task.to_dict() for task in tasks],
        trace=trace,
        request_id=g.request_id,
    )


@api_bp.route(f"/api/tasks/by-id/<{ID_CONVERTER}:task_id>", methods=["GET"])
def get_task(task_id: int) -> tuple[Response, int]:
    """
    Get a single task by ID.

    Returns:
        Envelope with the task, or 404 if not found.
    """
    trace = TraceContext()
    try:
        with trace.timed(step_name(Layer.HANDLER, "getTaskById")):
            task = db.session.get(Task, task_id)
            if task is None:
                raise AppError.not_found("Task not found")
    except Exception as exc:
        return _error_response(exc, trace)

    return send_response(
        success=True,
        message="Task fetched successfully",
        data=task.to_dict(),
        trace=trace,
        request_id=g.request_id,
    )


@api_bp.route(f"/api/tasks/<{ID_CONVERTER}:task_id>", methods=["PATCH"])
def update_task(task_id: int) -> tuple[Response, int]:
    """
    Update a task owned by the requesting user.

    Request Body (JSON):
        title: New title (required)
        description: New description (required)
        completed: Completion flag (optional)
        userId: Acting user ID (required)

    Returns:
        Envelope with the updated task; 404 if the task does not exist,
        403 if the user does not own it.
    """
    body = request.get_json(silent=True)
    payload = {**(body if isinstance(body, dict) else {}), "id": task_id}
    is_valid, error = validate_update_task(payload)
    if not is_valid:
        raise AppError.validation(error)

    trace = TraceContext()
    try:
        with trace.timed(step_name(Layer.HANDLER, "updateTask")):
            task = _require_owned_task(task_id, payload["userId"], "update")
            for field, value in update_fields(payload).items():
                setattr(task, field, value)
            db.session.commit()
    except Exception as exc:
        db.session.rollback()
        return _error_response(exc, trace)

    logger.info("[%s] Task updated: %s", g.request_id, task_id)
    return send_response(
        success=True,
        message="Task updated successfully",
        data=task.to_dict(),
        trace=trace,
        request_id=g.request_id,
    )


@api_bp.route(f"/api/tasks/<{ID_CONVERTER}:task_id>", methods=["DELETE"])
def delete_task(task_id: int) -> tuple[Response, int]:
    """
    Delete a task owned by the requesting user.

    Request Body (JSON):
        userId: Acting user ID (required)

    Returns:
        Envelope confirming deletion; 404 if the task does not exist,
        403 if the user does not own it.
    """
    body = request.get_json(silent=True)
    payload = {**(body if isinstance(body, dict) else {}), "taskId": task_id}
    is_valid, error = validate_delete_task(payload)
    if not is_valid:
        raise AppError.validation(error)

    trace = TraceContext()
    try:
        with trace.timed(step_name(Layer.HANDLER, "deleteTask")):
            task = _require_owned_task(task_id, payload["userId"], "delete")
            db.session.delete(task)
            db.session.commit()
    except Exception as exc:
        db.session.rollback()
        return _error_response(exc, trace)

    logger.info("[%s] Task deleted: %s", g.request_id, task_id)
    return send_response(
        success=True,
        message="Task deleted successfully",
        trace=trace,
        request_id=g.request_id,
    )
