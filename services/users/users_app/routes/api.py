"""
Users service API endpoints.

Endpoints:
    GET  /                 -- Liveness probe.
    GET  /api/users/<id>   -- Look up a user by id (used by the todos
                              service and by the frontend).
"""

from __future__ import annotations

import logging

from flask import Blueprint, Response, g

from shared.errors import AppError
from shared.responses import send_response
from shared.validation import ID_CONVERTER

from .. import db
from ..models import User

logger = logging.getLogger(__name__)

api_bp = Blueprint("users_api", __name__)


@api_bp.route("/", methods=["GET"])
def health_check() -> tuple[Response, int]:
    """
    Liveness / readiness health-check endpoint.

    Returns:
        A 200 envelope stating that the server is running.
    """
    logger.info("[%s] Health check", g.request_id)
    return send_response(success=True, message="Server is running", request_id=g.request_id)


@api_bp.route(f"/api/users/<{ID_CONVERTER}:user_id>", methods=["GET"])
def get_user(user_id: int) -> tuple[Response, int]:
    """
    Return a single user.

    Returns:
        200 with the user in ``data``.
        404 if no user has this id.
    """
    user = db.session.get(User, user_id)
    if user is None:
        logger.info("[%s] User %s not found", g.request_id, user_id)
        raise AppError.not_found("User not found")

    return send_response(
        success=True,
        message="User found",
        data=user.to_dict(),
        request_id=g.request_id,
    )
