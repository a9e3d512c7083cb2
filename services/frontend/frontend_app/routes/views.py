"""
HTML view routes for the frontend BFF service.

Implements the user-facing routes of the architecture comparison UI.  Each
route handler calls the selected backend over HTTP, keeps the ``trace`` it
returns, and renders it as a latency diagram next to the task list.  The
module is organised into three logical sections:

1. **Helper functions** -- session accessors, the backend call wrapper and
   the last-action bookkeeping that keep route handlers concise.
2. **Session routes** -- choosing the backend architecture and the acting
   user.
3. **Task routes** -- list, create, edit, update and delete, each recording
   its trace as the "last action".

There are no credentials in this demo: the acting user is picked by id and
looked up through the chosen backend's ``/api/users/<id>`` endpoint.

Key Concepts Demonstrated:
- Backend-for-Frontend (BFF) request proxying
- Decorator-based guard (``user_required``)
- Graceful error handling for downstream service failures
- Flash-message feedback for form submissions
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import wraps
from typing import Any

import requests
from flask import (
    Blueprint,
    current_app,
    flash,
    g,
    jsonify,
    redirect,
    render_template,
    request,
    session,
    url_for,
)

from shared.validation import MAX_TITLE_LENGTH, parse_positive_int

from ..backend import BackendClient, BackendResult
from ..diagram import build_trace_diagram
from ..models import Architecture

logger = logging.getLogger(__name__)

views_bp = Blueprint("views", __name__)

SESSION_ARCHITECTURE = "architecture"
SESSION_USER = "user"
SESSION_LAST_ACTION = "last_action"


# =====================================================================
# Helper Functions
# =====================================================================


def _default_architecture() -> Architecture:
    return Architecture.parse(
        current_app.config["DEFAULT_ARCHITECTURE"], default=Architecture.MICROSERVICES
    )


def current_architecture() -> Architecture:
    """Return the architecture stored in the session, or the configured default."""
    return Architecture.parse(session.get(SESSION_ARCHITECTURE), default=_default_architecture())


def _diagram(trace: list[dict[str, Any]] | None, title: str | None):
    return build_trace_diagram(
        trace,
        title=title,
        spacing=current_app.config["TRACE_NODE_SPACING"],
    )


def _call_backend(operation: Callable[..., BackendResult], *args: Any, **kwargs: Any) -> BackendResult | None:
    """
    Invoke a :class:`BackendClient` method, flashing transport failures.

    Args:
        operation: Bound client method to call.
        *args: Positional arguments for *operation*.
        **kwargs: Keyword arguments for *operation*.

    Returns:
        The decoded result, or ``None`` when the backend timed out or
        could not be reached (a flash message has been queued).
    """
    try:
        return operation(*args, **kwargs)
    except requests.Timeout:
        logger.error("%s backend timed out", current_architecture().label)
        flash(f"{current_architecture().label} backend timed out. Please try again.", "error")
    except requests.RequestException as exc:
        logger.error("%s backend unavailable: %s", current_architecture().label, exc)
        flash(
            f"{current_architecture().label} backend unavailable. Please try again later.",
            "error",
        )
    return None


def _remember_action(title: str, result: BackendResult) -> None:
    """Store *result*'s trace so the next page render can draw it."""
    session[SESSION_LAST_ACTION] = {
        "title": title,
        "success": result.success,
        "message": result.message,
        "trace": result.trace,
    }


def _flash_result(result: BackendResult) -> None:
    flash(result.message, "success" if result.success else "error")


def _form_task_fields() -> tuple[str, str, str | None]:
    """Read title and description from the form and check them."""
    title = request.form.get("title", "").strip()
    description = request.form.get("description", "").strip()
    if not title:
        return title, description, "Title is required"
    if len(title) > MAX_TITLE_LENGTH:
        return title, description, f"Title must be {MAX_TITLE_LENGTH} characters or less"
    return title, description, None


def user_required(view_func):
    """
    Decorator that requires an acting user in the session.

    On success the user, the selected architecture and a client for that
    architecture are stashed on Flask's ``g``.  Without a user the visitor
    is sent to the user selection page.

    Args:
        view_func: The Flask view function to protect.

    Returns:
        The decorated view function.
    """

    @wraps(view_func)
    def wrapper(*args, **kwargs):
        user = session.get(SESSION_USER)
        if not user:
            return redirect(url_for("views.select_user"))

        g.user = user
        g.architecture = current_architecture()
        g.backend = BackendClient.for_architecture(g.architecture)
        return view_func(*args, **kwargs)

    return wrapper


@views_bp.app_context_processor
def inject_architectures() -> dict[str, Any]:
    return {
        "architectures": list(Architecture),
        "current_architecture": current_architecture(),
        "acting_user": session.get(SESSION_USER),
    }


# =====================================================================
# Session Routes
# =====================================================================


@views_bp.route("/health", methods=["GET"])
def health_check():
    """
    Return service health status.

    Returns:
        A 200 JSON response with ``status`` and ``service`` fields.
    """
    return {"status": "healthy", "service": "frontend"}, 200


@views_bp.route("/select-user", methods=["GET"])
def select_user():
    """Render the acting-user selection page."""
    return render_template("select_user.html")


@views_bp.route("/select-user", methods=["POST"])
def select_user_submit():
    """
    Look the requested user up through the selected backend.

    Returns:
        A redirect to the task list when the user exists, otherwise the
        re-rendered selection page with a flash message.
    """
    user_id = parse_positive_int(request.form.get("user_id", ""))
    if user_id is None:
        flash("User id must be a positive integer.", "error")
        return render_template("select_user.html"), 400

    backend = BackendClient.for_architecture(current_architecture())
    result = _call_backend(backend.get_user, user_id)
    if result is None:
        return render_template("select_user.html"), 503

    if result.status_code == 200 and isinstance(result.data, dict):
        session[SESSION_USER] = result.data
        session.pop(SESSION_LAST_ACTION, None)
        flash(f"Acting as {result.data.get('name', user_id)}.", "success")
        return redirect(url_for("views.index"))

    flash(result.message or "User lookup failed.", "error")
    status_code = result.status_code if result.status_code in {404, 502} else 502
    return render_template("select_user.html"), status_code


@views_bp.route("/architecture", methods=["POST"])
def switch_architecture():
    """
    Switch the backend architecture used for subsequent calls.

    The last action's diagram belongs to the previous backend, so it is
    discarded.
    """
    architecture = Architecture.parse(request.form.get("architecture"))
    if architecture is None:
        flash("Unknown architecture.", "error")
    else:
        session[SESSION_ARCHITECTURE] = architecture.value
        session.pop(SESSION_LAST_ACTION, None)
        flash(f"Now using the {architecture.label} backend.", "success")

    if session.get(SESSION_USER):
        return redirect(url_for("views.index"))
    return redirect(url_for("views.select_user"))


@views_bp.route("/switch-user", methods=["POST"])
def switch_user():
    """Forget the acting user and return to the selection page."""
    session.pop(SESSION_USER, None)
    session.pop(SESSION_LAST_ACTION, None)
    return redirect(url_for("views.select_user"))


# =====================================================================
# Task Routes
# =====================================================================


@views_bp.route("/")
@user_required
def index():
    """
    Render the task list with the list call's trace and the last action's.

    Returns:
        The rendered task list page.  A failed list call still renders the
        page (with an empty list) so the partial trace can be inspected.
    """
    last_action = session.get(SESSION_LAST_ACTION)
    action_diagram = (
        _diagram(last_action.get("trace"), last_action.get("title")) if last_action else None
    )

    result = _call_backend(g.backend.list_tasks, g.user["id"])
    if result is None:
        return (
            render_template(
                "index.html",
                tasks=[],
                list_diagram=None,
                last_action=last_action,
                action_diagram=action_diagram,
            ),
            503,
        )

    if not result.success:
        flash(result.message or "Error loading tasks.", "error")

    tasks = result.data if result.success and isinstance(result.data, list) else []
    return render_template(
        "index.html",
        tasks=tasks,
        list_diagram=_diagram(result.trace, f"{g.architecture.label}: list tasks"),
        last_action=last_action,
        action_diagram=action_diagram,
    )


@views_bp.route("/tasks", methods=["POST"])
@user_required
def create_task():
    """
    Handle task creation form submission.

    Returns:
        A redirect to the task list; the outcome is flashed and its trace
        kept as the last action.
    """
    title, description, error = _form_task_fields()
    if error:
        flash(error, "error")
        return redirect(url_for("views.index"))

    result = _call_backend(g.backend.create_task, g.user["id"], title, description)
    if result is not None:
        _remember_action(f"{g.architecture.label}: create task", result)
        _flash_result(result)
    return redirect(url_for("views.index"))


@views_bp.route("/tasks/<int:task_id>/edit")
@user_required
def edit_task(task_id: int):
    """
    Render the task edit form pre-populated from the backend.

    Args:
        task_id: ID of the task to edit.

    Returns:
        The rendered ``task_form.html`` template with the fetch trace, or
        a redirect to the task list when the task cannot be loaded.
    """
    result = _call_backend(g.backend.get_task, task_id)
    if result is None:
        return redirect(url_for("views.index"))
    if not result.success:
        _remember_action(f"{g.architecture.label}: get task", result)
        _flash_result(result)
        return redirect(url_for("views.index"))

    return render_template(
        "task_form.html",
        task=result.data,
        fetch_diagram=_diagram(result.trace, f"{g.architecture.label}: get task"),
    )


@views_bp.route("/tasks/<int:task_id>/update", methods=["POST"])
@user_required
def update_task(task_id: int):
    """
    Handle the task edit form (and the list's completion toggle).

    Args:
        task_id: ID of the task to update.

    Returns:
        A redirect to the task list on success, or back to the edit form
        when the form is invalid.
    """
    title, description, error = _form_task_fields()
    if error or not description:
        flash(error or "Description is required", "error")
        return redirect(url_for("views.edit_task", task_id=task_id))

    completed = request.form.get("completed") in {"on", "true", "1"}
    result = _call_backend(
        g.backend.update_task,
        task_id,
        g.user["id"],
        title=title,
        description=description,
        completed=completed,
    )
    if result is not None:
        _remember_action(f"{g.architecture.label}: update task", result)
        _flash_result(result)
    return redirect(url_for("views.index"))


@views_bp.route("/tasks/<int:task_id>/delete", methods=["POST"])
@user_required
def delete_task(task_id: int):
    """
    Handle task deletion.

    Args:
        task_id: ID of the task to delete.

    Returns:
        A redirect to the task list with the outcome flashed.
    """
    result = _call_backend(g.backend.delete_task, task_id, g.user["id"])
    if result is not None:
        _remember_action(f"{g.architecture.label}: delete task", result)
        _flash_result(result)
    return redirect(url_for("views.index"))


@views_bp.route("/trace/last-action", methods=["GET"])
def last_action_trace():
    """
    Return the last action's diagram as JSON.

    Returns:
        The diagram's ``to_dict`` form; an empty diagram when no action has
        been performed yet.
    """
    last_action = session.get(SESSION_LAST_ACTION) or {}
    diagram = _diagram(last_action.get("trace"), last_action.get("title"))
    return jsonify(diagram.to_dict()), 200
