"""
HTTP routes for the layered backend.

Routes are thin: they pull the request id and JSON body off the Flask
request and hand them to the matching controller.

Endpoints:
    GET    /                        - Health check
    GET    /api/users/<id>          - Look up a user
    POST   /api/tasks               - Create a task
    GET    /api/tasks/<user_id>     - List a user's tasks
    GET    /api/tasks/by-id/<id>    - Get a task by ID
    PATCH  /api/tasks/<id>          - Update a task
    DELETE /api/tasks/<id>          - Delete a task
"""

from __future__ import annotations

import logging

from flask import Blueprint, Response, current_app, g, request

from shared.responses import send_response
from shared.validation import ID_CONVERTER

from . import CONTROLLERS_EXTENSION

logger = logging.getLogger(__name__)

api_bp = Blueprint("layered_api", __name__)


def _controllers() -> dict:
    return current_app.extensions[CONTROLLERS_EXTENSION]


@api_bp.route("/", methods=["GET"])
def health_check() -> tuple[Response, int]:
    logger.info("[%s] Health check", g.request_id)
    return send_response(success=True, message="Server is running", request_id=g.request_id)


@api_bp.route(f"/api/users/<{ID_CONVERTER}:user_id>", methods=["GET"])
def get_user(user_id: int) -> tuple[Response, int]:
    return _controllers()["users"].get_user(user_id, g.request_id)


@api_bp.route("/api/tasks", methods=["POST"])
def create_task() -> tuple[Response, int]:
    return _controllers()["tasks"].create_task(request.get_json(silent=True), g.request_id)


@api_bp.route("/api/tasks/<user_id>", methods=["GET"])
def get_tasks(user_id: str) -> tuple[Response, int]:
    return _controllers()["tasks"].get_tasks(user_id, g.request_id)


@api_bp.route(f"/api/tasks/by-id/<{ID_CONVERTER}:task_id>", methods=["GET"])
def get_task(task_id: int) -> tuple[Response, int]:
    return _controllers()["tasks"].get_task_by_id(task_id, g.request_id)


@api_bp.route(f"/api/tasks/<{ID_CONVERTER}:task_id>", methods=["PATCH"])
def update_task(task_id: int) -> tuple[Response, int]:
    return _controllers()["tasks"].update_task(task_id, request.get_json(silent=True), g.request_id)


@api_bp.route(f"/api/tasks/<{ID_CONVERTER}:task_id>", methods=["DELETE"])
def delete_task(task_id: int) -> tuple[Response, int]:
    return _controllers()["tasks"].delete_task(task_id, request.get_json(silent=True), g.request_id)
