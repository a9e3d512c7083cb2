"""
Response envelope builder.

Every backend variant answers with the same JSON shape::

    {"success": bool, "message": str, "data"?: any,
     "trace"?: [{"name": str, "latency": float}], "requestId"?: str}

Optional fields are omitted when not provided rather than sent as null.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from flask import Response, jsonify

from shared.tracing import TraceContext, TraceStep


def build_envelope(
    *,
    success: bool,
    message: str,
    data: Any = None,
    trace: TraceContext | Iterable[TraceStep | dict[str, Any]] | None = None,
    request_id: str | None = None,
) -> dict[str, Any]:
    """
    Build the response body dictionary.

    ``data`` and ``trace`` are included whenever they are not ``None`` (an
    empty trace is still a trace); ``requestId`` only when truthy.

    Args:
        success: Whether the operation succeeded.
        message: Human-readable outcome message.
        data: Optional payload.
        trace: A ``TraceContext`` or a sequence of steps.
        request_id: Optional request identifier.

    Returns:
        A JSON-serialisable dictionary.
    """
    body: dict[str, Any] = {"success": success, "message": message}
    if data is not None:
        body["data"] = data
    if request_id:
        body["requestId"] = request_id
    if trace is not None:
        body["trace"] = _serialise_trace(trace)
    return body


def _serialise_trace(
    trace: TraceContext | Iterable[TraceStep | dict[str, Any]],
) -> list[dict[str, Any]]:
    if isinstance(trace, TraceContext):
        return trace.to_list()
    return [step.to_dict() if isinstance(step, TraceStep) else dict(step) for step in trace]


def send_response(
    *,
    success: bool,
    message: str,
    data: Any = None,
    trace: TraceContext | Iterable[TraceStep | dict[str, Any]] | None = None,
    request_id: str | None = None,
    status: int = 200,
) -> tuple[Response, int]:
    """
    Build the envelope and wrap it in a Flask JSON response.

    Returns:
        A ``(Response, status)`` tuple suitable for returning from a view.
    """
    body = build_envelope(
        success=success,
        message=message,
        data=data,
        trace=trace,
        request_id=request_id,
    )
    return jsonify(body), status
