"""
Input validation for task payloads.

The helpers mirror the request schemas every backend variant accepts.
Each returns a ``(is_valid, error_message)`` tuple; the message is ``None``
when the payload is valid.

Rules:
    create  - title (non-blank, <= 200 chars), description (string),
              userId (positive integer)
    update  - id (positive integer), title and description (non-blank),
              completed (optional boolean), userId (positive integer)
    delete  - taskId (positive integer), userId (positive integer)
    list    - userId (positive integer)
"""

from __future__ import annotations

from typing import Any

INVALID_INPUT = "Invalid input"
MAX_TITLE_LENGTH = 200

# Largest value an SQLite INTEGER primary key can hold.
MAX_ID = 2**63 - 1

# Werkzeug converter for id path segments; larger values do not match a route.
ID_CONVERTER = f"int(max={MAX_ID})"


def _is_positive_int(value: Any) -> bool:
    # bool is an int subclass; True must not pass as user id 1.
    return isinstance(value, int) and not isinstance(value, bool) and 0 < value <= MAX_ID


def _is_non_blank_str(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _invalid(detail: str) -> tuple[bool, str]:
    return False, f"{INVALID_INPUT}: {detail}"


def parse_positive_int(raw: Any) -> int | None:
    """
    Parse a path or query value into a positive integer.

    Returns:
        The integer, or ``None`` if *raw* is not a positive integer that
        fits in a database id.
    """
    if _is_positive_int(raw):
        return raw
    if isinstance(raw, str) and raw.strip().isdecimal():
        value = int(raw.strip())
        return value if 0 < value <= MAX_ID else None
    return None


def validate_create_task(data: Any) -> tuple[bool, str | None]:
    """Validate a create-task payload."""
    if not isinstance(data, dict):
        return _invalid("request body must be a JSON object")
    if not _is_non_blank_str(data.get("title")):
        return _invalid("'title' is required")
    if len(data["title"]) > MAX_TITLE_LENGTH:
        return _invalid(f"'title' must be {MAX_TITLE_LENGTH} characters or less")
    if not isinstance(data.get("description"), str):
        return _invalid("'description' must be a string")
    if not _is_positive_int(data.get("userId")):
        return _invalid("'userId' must be a positive integer")
    return True, None


def validate_update_task(data: Any) -> tuple[bool, str | None]:
    """Validate an update-task payload (path ``id`` merged into the body)."""
    if not isinstance(data, dict):
        return _invalid("request body must be a JSON object")
    if not _is_positive_int(data.get("id")):
        return _invalid("'id' must be a positive integer")
    for field in ("title", "description"):
        if not _is_non_blank_str(data.get(field)):
            return _invalid(f"'{field}' is required")
    if len(data["title"]) > MAX_TITLE_LENGTH:
        return _invalid(f"'title' must be {MAX_TITLE_LENGTH} characters or less")
    if "completed" in data and data["completed"] is not None:
        if not isinstance(data["completed"], bool):
            return _invalid("'completed' must be a boolean")
    if not _is_positive_int(data.get("userId")):
        return _invalid("'userId' must be a positive integer")
    return True, None


def validate_delete_task(data: Any) -> tuple[bool, str | None]:
    """Validate a delete-task payload (path ``taskId`` merged into the body)."""
    if not isinstance(data, dict):
        return _invalid("request body must be a JSON object")
    if not _is_positive_int(data.get("taskId")):
        return _invalid("'taskId' must be a positive integer")
    if not _is_positive_int(data.get("userId")):
        return _invalid("'userId' must be a positive integer")
    return True, None


def update_fields(data: dict[str, Any]) -> dict[str, Any]:
    """Extract the mutable task fields from a validated update payload."""
    fields: dict[str, Any] = {
        "title": data["title"],
        "description": data["description"],
    }
    if isinstance(data.get("completed"), bool):
        fields["completed"] = data["completed"]
    return fields
