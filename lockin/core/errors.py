"""Domain error types raised by repositories and services.

Purpose:
- Give every failure surfaced to callers a typed exception carrying the
  user-facing message (e.g. ``"Goal not found"``).
- Expose an HTTP status code so the server layer can translate errors without
  knowing each case.

Usage:
- Raise ``NotFoundError`` / ``NotAuthorizedError`` from ownership checks.
- Catch ``LockInError`` for general failures and inspect ``status_code``.
"""

from __future__ import annotations

from typing import Any, Optional


class LockInError(Exception):
    """Base error for Lock In domain failures.

    Args:
        message: Human-readable error description.
        details: Optional structured payload for diagnosis.
    """

    status_code: int = 400

    def __init__(self, message: str, *, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class NotAuthenticatedError(LockInError):
    """The call requires an identity and none (or an invalid one) was supplied."""

    status_code = 401

    def __init__(self, message: str = "Unauthenticated call", *, details: Optional[Any] = None) -> None:
        super().__init__(message, details=details)


class NotAuthorizedError(LockInError):
    """The caller does not own (or may not see) the requested record."""

    status_code = 403

    def __init__(self, message: str = "Not authorized", *, details: Optional[Any] = None) -> None:
        super().__init__(message, details=details)


class NotFoundError(LockInError):
    """The requested record does not exist."""

    status_code = 404


class InvalidOperationError(LockInError):
    """The request is well-formed but not allowed in the record's current state."""

    status_code = 400
