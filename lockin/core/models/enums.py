"""Domain enums shared by entities, I/O schemas and the client cache."""

from __future__ import annotations

from enum import Enum


class GoalStatus(str, Enum):
    """Lifecycle status of a goal."""

    active = "active"
    completed = "completed"
    paused = "paused"


class GoalTodoType(str, Enum):
    """
    How a goal to-do measures completion.

    ``simple`` to-dos are a checkbox; ``hours`` to-dos accumulate study time
    toward an estimate.
    """

    simple = "simple"
    hours = "hours"


class TodoFrequency(str, Enum):
    """Recurrence of a goal to-do."""

    none = "none"  # One-time.
    daily = "daily"  # Reset at the start of each day.
    weekly = "weekly"  # Reset at the start of each week (Sunday).


class PartnerStatus(str, Enum):
    """Status of an accountability partner record."""

    pending = "pending"
    active = "active"
    declined = "declined"


class InviteStatus(str, Enum):
    """Status of a partner invite."""

    pending = "pending"
    accepted = "accepted"
    declined = "declined"
    expired = "expired"
