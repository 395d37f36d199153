"""Core models: domain enums and API I/O schemas."""

from __future__ import annotations

from .enums import (
    GoalStatus,
    GoalTodoType,
    InviteStatus,
    PartnerStatus,
    TodoFrequency,
)

__all__ = [
    "GoalStatus",
    "GoalTodoType",
    "InviteStatus",
    "PartnerStatus",
    "TodoFrequency",
]
