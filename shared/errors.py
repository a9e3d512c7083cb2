"""
Application error model shared by every backend variant.

All expected failures are raised as a single ``AppError`` carrying an
``ErrorKind``.  The outermost layer of each request pipeline matches on the
kind to pick the HTTP status and message, instead of relying on a hierarchy
of exception subclasses.

Key Concepts Demonstrated:
- Tagged error kinds (``str, Enum``) mapped to HTTP status codes
- Blueprint-independent JSON error handlers registered on the app
- Generic 500 responses that never leak internal detail
"""

from __future__ import annotations

import logging
from enum import Enum

from flask import Flask, Response, g, request
from werkzeug.exceptions import HTTPException

from shared.responses import send_response
from shared.tracing import TraceContext


class ErrorKind(str, Enum):
    """Closed set of failure kinds a pipeline can report."""

    VALIDATION = "validation"
    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    APP = "app"
    INTERNAL = "internal"


# APP has no fixed status; the raiser supplies one.
STATUS_CODES: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.APP: 400,
    ErrorKind.INTERNAL: 500,
}

DEFAULT_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.VALIDATION: "Validation Error",
    ErrorKind.BAD_REQUEST: "Bad Request",
    ErrorKind.UNAUTHORIZED: "Unauthorized",
    ErrorKind.FORBIDDEN: "Forbidden",
    ErrorKind.NOT_FOUND: "Not Found",
    ErrorKind.CONFLICT: "Conflict",
    ErrorKind.APP: "Application Error",
    ErrorKind.INTERNAL: "Internal Server Error",
}

INTERNAL_ERROR_MESSAGE = "Internal server error"


class AppError(Exception):
    """
    An expected failure with a kind, a client-safe message and a status.

    Args:
        kind: The failure kind.
        message: Human-readable message returned to the client.  Defaults to
            the kind's standard message.
        status_code: Explicit HTTP status.  Only meaningful for
            ``ErrorKind.APP``; every other kind uses its fixed status.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str | None = None,
        status_code: int | None = None,
    ) -> None:
        self.kind = kind
        self.message = message or DEFAULT_MESSAGES[kind]
        if kind is ErrorKind.APP and status_code is not None:
            self.status_code = status_code
        else:
            self.status_code = STATUS_CODES[kind]
        super().__init__(self.message)

    @classmethod
    def validation(cls, message: str | None = None) -> AppError:
        return cls(ErrorKind.VALIDATION, message)

    @classmethod
    def not_found(cls, message: str | None = None) -> AppError:
        return cls(ErrorKind.NOT_FOUND, message)

    @classmethod
    def forbidden(cls, message: str | None = None) -> AppError:
        return cls(ErrorKind.FORBIDDEN, message)

    @classmethod
    def internal(cls, message: str | None = None) -> AppError:
        return cls(ErrorKind.INTERNAL, message)

    @classmethod
    def custom(cls, message: str, status_code: int) -> AppError:
        return cls(ErrorKind.APP, message, status_code)

    def __repr__(self) -> str:
        return f"<AppError {self.kind.value} {self.status_code}: {self.message}>"


def error_response(
    error: Exception,
    *,
    trace: TraceContext | None,
    request_id: str | None,
    logger: logging.Logger,
) -> tuple[Response, int]:
    """
    Turn a failure caught at a pipeline boundary into an envelope.

    ``AppError`` keeps its own message and status; anything else is logged
    with its stack trace and reported as a generic 500.  The partial trace
    recorded before the failure is attached in both cases.

    Args:
        error: The caught exception.
        trace: Steps recorded before the failure.
        request_id: Identifier of the current request.
        logger: Logger injected by the calling component.

    Returns:
        A ``(Response, status)`` tuple.
    """
    if isinstance(error, AppError):
        logger.error("[%s] %s error: %s", request_id, error.kind.value, error.message)
        return send_response(
            success=False,
            message=error.message,
            trace=trace,
            request_id=request_id,
            status=error.status_code,
        )
    logger.exception("[%s] Internal server error: %s", request_id, error)
    return send_response(
        success=False,
        message=INTERNAL_ERROR_MESSAGE,
        trace=trace,
        request_id=request_id,
        status=STATUS_CODES[ErrorKind.INTERNAL],
    )


def register_error_handlers(app: Flask, logger: logging.Logger) -> None:
    """
    Attach JSON envelope error handlers to *app*.

    Handles ``AppError`` raised outside a controller's own handling (for
    example from validation at the route boundary), unknown ``/api/*``
    routes, and any unclassified exception.

    Args:
        app: The Flask application to configure.
        logger: Logger used to report failures.
    """

    @app.errorhandler(AppError)
    def handle_app_error(error: AppError) -> tuple[Response, int]:
        logger.error("[%s] %s error: %s", g.get("request_id"), error.kind.value, error.message)
        return send_response(
            success=False,
            message=error.message,
            request_id=g.get("request_id"),
            status=error.status_code,
        )

    @app.errorhandler(404)
    def handle_not_found(_: Exception) -> tuple[Response, int]:
        message = "Route not found" if request.path.startswith("/api/") else "Not Found"
        return send_response(
            success=False,
            message=message,
            request_id=g.get("request_id"),
            status=404,
        )

    @app.errorhandler(405)
    def handle_method_not_allowed(_: Exception) -> tuple[Response, int]:
        return send_response(
            success=False,
            message="Method not allowed",
            request_id=g.get("request_id"),
            status=405,
        )

    @app.errorhandler(Exception)
    def handle_unexpected(error: Exception) -> tuple[Response, int]:
        if isinstance(error, HTTPException):
            return send_response(
                success=False,
                message=error.description or error.name,
                request_id=g.get("request_id"),
                status=error.code or 500,
            )
        logger.exception("[%s] Internal server error: %s", g.get("request_id"), error)
        return send_response(
            success=False,
            message=INTERNAL_ERROR_MESSAGE,
            request_id=g.get("request_id"),
            status=500,
        )
