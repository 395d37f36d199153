"""Display helpers shared by API read models and the client cache."""

from __future__ import annotations

from datetime import datetime
from typing import Optional


def display_name(name: Optional[str], email: str) -> str:
    return name if name else email


def initials(name: Optional[str], email: str) -> str:
    """Two-letter avatar initials from a name, falling back to the email."""
    if name:
        parts = name.split()
        if len(parts) >= 2:
            return (parts[0][:1] + parts[1][:1]).upper()
        return name[:2].upper()
    return email[:2].upper()


def expiry_description(expires_at: datetime, now: datetime) -> str:
    """``"Expired"``, ``"Expires in 3 days"``, ``"Expires in 1 hour"`` or ``"Expires soon"``."""
    remaining = (expires_at - now).total_seconds()
    if remaining <= 0:
        return "Expired"
    days = int(remaining / 86400)
    if days > 0:
        return f"Expires in {days} day{'' if days == 1 else 's'}"
    hours = int(remaining / 3600)
    if hours > 0:
        return f"Expires in {hours} hour{'' if hours == 1 else 's'}"
    return "Expires soon"


def context_description(goal_title: Optional[str], todo_title: Optional[str]) -> str:
    """Where a shared video came from, e.g. ``"Calculus • Chapter 3"``."""
    if goal_title and todo_title:
        return f"{goal_title} • {todo_title}"
    if goal_title:
        return goal_title
    if todo_title:
        return todo_title
    return "Study session"
