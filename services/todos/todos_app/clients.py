"""
HTTP client for the users service.

The todos service never reads user rows directly.  It asks the users
service, using ``requests`` with an explicit timeout and no retry.

Outcomes of :meth:`UsersClient.get_user_by_id`:
    200                       -> the user's ``data`` dictionary
    404                       -> ``None``
    timeout / transport error -> ``AppError`` with status 502
    any other status          -> ``AppError`` with status 502
    malformed 200 body        -> ``AppError`` with status 502
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from shared.errors import AppError

USER_SERVICE_UNAVAILABLE = "User service unavailable"


class UsersClient:
    """
    Remote user directory.

    Args:
        base_url: Base URL of the users service, e.g.
            ``"http://localhost:5001"``.
        timeout: Seconds to wait for each lookup.
        logger: Logger for outbound call diagnostics.
    """

    def __init__(self, base_url: str, timeout: float, logger: logging.Logger) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.logger = logger

    def get_user_by_id(self, user_id: int) -> dict[str, Any] | None:
        """
        Look up a user by id.

        Args:
            user_id: Identifier of the user.

        Returns:
            The user's wire dictionary, or ``None`` if the users service
            reports that the user does not exist.

        Raises:
            AppError: With status 502 when the users service cannot be
                reached, answers with an unexpected status or sends a body
                that is not a JSON object.
        """
        url = f"{self.base_url}/api/users/{user_id}"
        try:
            response = requests.get(url, timeout=self.timeout)
        except requests.exceptions.Timeout as exc:
            self.logger.error("User lookup for %s timed out after %ss", user_id, self.timeout)
            raise AppError.custom(USER_SERVICE_UNAVAILABLE, 502) from exc
        except requests.exceptions.RequestException as exc:
            self.logger.error("User lookup for %s failed: %s", user_id, exc)
            raise AppError.custom(USER_SERVICE_UNAVAILABLE, 502) from exc

        if response.status_code == 404:
            return None
        if response.status_code != 200:
            self.logger.error(
                "User lookup for %s returned unexpected status %s", user_id, response.status_code
            )
            raise AppError.custom(USER_SERVICE_UNAVAILABLE, 502)

        try:
            body = response.json()
        except ValueError as exc:
            self.logger.error("User lookup for %s returned a non-JSON body", user_id)
            raise AppError.custom(USER_SERVICE_UNAVAILABLE, 502) from exc
        if not isinstance(body, dict):
            self.logger.error("User lookup for %s returned a non-object body", user_id)
            raise AppError.custom(USER_SERVICE_UNAVAILABLE, 502)
        return body.get("data")
