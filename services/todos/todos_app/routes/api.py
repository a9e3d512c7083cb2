"""
REST API Endpoints for the Todos Service.

Routes stay thin: they read the JSON body and request id off the Flask
request and delegate to the :class:`TaskController` wired by the factory.

Endpoints:
    GET    /                        - Service health check
    POST   /api/tasks               - Create a task
    GET    /api/tasks/<user_id>     - List a user's tasks
    GET    /api/tasks/by-id/<id>    - Retrieve a single task
    PATCH  /api/tasks/<id>          - Update a task
    DELETE /api/tasks/<id>          - Delete a task
"""

from __future__ import annotations

import logging

from flask import Blueprint, Response, current_app, g, request

from shared.responses import send_response
from shared.validation import ID_CONVERTER

from .. import CONTROLLER_EXTENSION
from ..controllers import TaskController

logger = logging.getLogger(__name__)

api_bp = Blueprint("todos_api", __name__)


def _controller() -> TaskController:
    return current_app.extensions[CONTROLLER_EXTENSION]


@api_bp.route("/", methods=["GET"])
def health_check() -> tuple[Response, int]:
    """
    Liveness / readiness health-check endpoint.

    Returns:
        A 200 envelope stating that the server is running.
    """
    logger.info("[%s] Health check", g.request_id)
    return send_response(success=True, message="Server is running", request_id=g.request_id)


@api_bp.route("/api/tasks", methods=["POST"])
def create_task() -> tuple[Response, int]:
    return _controller().create_task(request.get_json(silent=True), g.request_id)


@api_bp.route("/api/tasks/<user_id>", methods=["GET"])
def get_tasks(user_id: str) -> tuple[Response, int]:
    return _controller().get_tasks(user_id, g.request_id)


@api_bp.route(f"/api/tasks/by-id/<{ID_CONVERTER}:task_id>", methods=["GET"])
def get_task(task_id: int) -> tuple[Response, int]:
    return _controller().get_task_by_id(task_id, g.request_id)


@api_bp.route(f"/api/tasks/<{ID_CONVERTER}:task_id>", methods=["PATCH"])
def update_task(task_id: int) -> tuple[Response, int]:
    return _controller().update_task(task_id, request.get_json(silent=True), g.request_id)


@api_bp.route(f"/api/tasks/<{ID_CONVERTER}:task_id>", methods=["DELETE"])
def delete_task(task_id: int) -> tuple[Response, int]:
    return _controller().delete_task(task_id, request.get_json(silent=True), g.request_id)
