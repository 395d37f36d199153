"""Client-side errors and user-facing messages."""

from __future__ import annotations

from typing import Any


class LockInApiError(Exception):
    """Raised when the Lock In API answers with a non-2xx status.

    Attributes:
        status_code: HTTP status of the response.
        details: The ``detail`` field of a JSON object error body; otherwise the
            decoded JSON value, or the raw text when the body is not JSON.
    """

    def __init__(self, status_code: int, details: Any = None) -> None:
        self.status_code = status_code
        self.details = details
        super().__init__(f"Lock In API error {status_code}: {details}")

    @property
    def is_unauthenticated(self) -> bool:
        return self.status_code == 401


def user_message(action: str, entity: str) -> str:
    """``user_message("create", "goal") -> "Couldn't create goal. Please try again."``"""
    return f"Couldn't {action} {entity}. Please try again."
