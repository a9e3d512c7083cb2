"""
Gateway Reverse-Proxy Routes.

Every inbound ``/api/users`` or ``/api/tasks`` request is forwarded to the
owning microservice and the downstream response is relayed back to the
caller unchanged: same status, same JSON envelope (including the trace
recorded by the todos service).

The gateway handles the HTTP concerns a normal service never sees:

  * **Hop-by-hop headers** are connection-scoped (RFC 7230 section 6.1)
    and are dropped in both directions.
  * **Host** and **Content-Length** describe the gateway hop and are
    recomputed by ``requests`` and Flask respectively.
  * **Request id**: the gateway's own ``X-Request-Id`` is sent downstream
    so the downstream service reuses it.
  * **Timeouts**: a slow or unreachable downstream service yields a 502
    envelope instead of a hung worker.

Unknown ``/api/*`` paths are not proxied; the shared 404 handler answers
them with ``"Route not found"``.

Key Concepts Demonstrated:
- Reverse-proxy pattern: transparent request/response forwarding
- Hop-by-hop header filtering per the HTTP/1.1 specification
- Timeout handling that surfaces as 502 Bad Gateway
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import urljoin

import requests
from flask import Blueprint, Response, current_app, g, request

from shared.request_id import REQUEST_ID_HEADER, current_request_id
from shared.responses import send_response

logger = logging.getLogger(__name__)

gateway_bp = Blueprint("gateway", __name__)

PROXY_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]

HOP_BY_HOP_HEADERS = {
    "connection",
    "keep-alive",
    "proxy-authenticate",
    "proxy-authorization",
    "te",
    "trailers",
    "transfer-encoding",
    "upgrade",
}

# Dropped on the way out; Flask and requests set their own values.
RESPONSE_SKIP_HEADERS = HOP_BY_HOP_HEADERS | {"content-length", REQUEST_ID_HEADER.lower()}


def _filtered_request_headers() -> dict[str, str]:
    """
    Build the header dict sent to the downstream service.

    Hop-by-hop headers, ``Host`` and ``Content-Length`` are dropped, and
    ``X-Request-Id`` is set to the id assigned by the gateway.

    Returns:
        A dictionary of headers safe to forward.
    """
    headers: dict[str, str] = {}
    for name, value in request.headers.items():
        lower = name.lower()
        if lower in HOP_BY_HOP_HEADERS or lower in {"host", "content-length"}:
            continue
        if lower == REQUEST_ID_HEADER.lower():
            continue
        headers[name] = value
    request_id = current_request_id()
    if request_id:
        headers[REQUEST_ID_HEADER] = request_id
    return headers


def _relay(downstream_response: Any) -> Response:
    """Wrap a ``requests`` response in a Flask ``Response``."""
    response = Response(downstream_response.content, status=downstream_response.status_code)
    for name, value in downstream_response.headers.items():
        if name.lower() in RESPONSE_SKIP_HEADERS:
            continue
        response.headers[name] = value
    return response


def proxy_request(target_base_url: str, downstream_path: str) -> tuple[Response, int]:
    """
    Forward the current Flask request to a downstream service.

    Args:
        target_base_url: Root URL of the downstream service
            (e.g. ``"http://localhost:5002"``).
        downstream_path: Path to request on that service
            (e.g. ``"/api/tasks/1"``).

    Returns:
        A ``(Response, status_code)`` tuple.  Transport failures and
        timeouts become a 502 envelope.
    """
    target_url = urljoin(target_base_url.rstrip("/") + "/", downstream_path.lstrip("/"))
    logger.info("[%s] Proxying %s %s -> %s", g.request_id, request.method, request.path, target_url)

    try:
        downstream_response = requests.request(
            method=request.method,
            url=target_url,
            headers=_filtered_request_headers(),
            params=request.args,
            data=request.get_data(),
            allow_redirects=False,
            timeout=current_app.config["PROXY_TIMEOUT"],
        )
    except requests.Timeout:
        logger.error("[%s] Downstream request to %s timed out", g.request_id, target_url)
        return send_response(
            success=False,
            message="Downstream request timed out",
            request_id=g.request_id,
            status=502,
        )
    except requests.RequestException as exc:
        logger.error("[%s] Downstream request to %s failed: %s", g.request_id, target_url, exc)
        return send_response(
            success=False,
            message="Downstream service unavailable",
            request_id=g.request_id,
            status=502,
        )

    return _relay(downstream_response), downstream_response.status_code


@gateway_bp.route("/", methods=["GET"])
def health_check() -> tuple[Response, int]:
    """
    Shallow health probe for the gateway itself.

    Not proxied; answers from the gateway directly.

    Returns:
        A 200 envelope stating that the server is running.
    """
    return send_response(success=True, message="Server is running", request_id=g.request_id)


@gateway_bp.route("/api/users/<path:path>", methods=PROXY_METHODS)
def proxy_users(path: str) -> tuple[Response, int]:
    """Forward ``/api/users/...`` requests to the users service."""
    return proxy_request(current_app.config["USERS_SERVICE_URL"], f"/api/users/{path}")


@gateway_bp.route("/api/tasks", defaults={"path": ""}, methods=PROXY_METHODS)
@gateway_bp.route("/api/tasks/<path:path>", methods=PROXY_METHODS)
def proxy_tasks(path: str) -> tuple[Response, int]:
    """
    Forward ``/api/tasks...`` requests to the todos service.

    Args:
        path: The sub-path after ``/api/tasks/``; empty for ``/api/tasks``.
    """
    downstream_path = f"/api/tasks/{path}" if path else "/api/tasks"
    return proxy_request(current_app.config["TODOS_SERVICE_URL"], downstream_path)
