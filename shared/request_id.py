"""
Request-id hooks.

Assigns a UUID4 to every inbound request, exposes it as ``g.request_id``
for log lines and response envelopes, and echoes it back in the
``X-Request-Id`` response header.  A well-formed UUID already present on
the inbound ``X-Request-Id`` header is kept, so a call proxied through the
gateway carries one id end to end.
"""

from __future__ import annotations

import uuid

from flask import Flask, Response, g, request

REQUEST_ID_HEADER = "X-Request-Id"


def _inbound_request_id() -> str | None:
    raw = request.headers.get(REQUEST_ID_HEADER, "").strip()
    if not raw:
        return None
    try:
        return str(uuid.UUID(raw))
    except ValueError:
        return None


def init_request_id(app: Flask) -> None:
    """Register the before/after request hooks on *app*."""

    @app.before_request
    def assign_request_id() -> None:
        g.request_id = _inbound_request_id() or str(uuid.uuid4())

    @app.after_request
    def echo_request_id(response: Response) -> Response:
        request_id = g.get("request_id")
        if request_id:
            response.headers[REQUEST_ID_HEADER] = request_id
        return response


def current_request_id() -> str | None:
    return g.get("request_id")
