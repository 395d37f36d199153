"""Recurring goal to-do reset rules.

A recurring to-do is reset (unchecked, hours cleared) once its last reset, or
its creation when it was never reset, falls before the start of the current
period. Periods are computed in a configurable timezone; all inputs and
outputs are naive UTC datetimes, matching what the database stores.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from lockin.core.models.enums import TodoFrequency


def _to_local(moment: datetime, tz_name: str) -> datetime:
    return moment.replace(tzinfo=timezone.utc).astimezone(ZoneInfo(tz_name))


def _to_naive_utc(moment: datetime) -> datetime:
    return moment.astimezone(timezone.utc).replace(tzinfo=None)


def start_of_day(now: datetime, tz_name: str = "UTC") -> datetime:
    """Return local midnight of ``now``'s day as naive UTC."""
    local = _to_local(now, tz_name)
    midnight = local.replace(hour=0, minute=0, second=0, microsecond=0)
    return _to_naive_utc(midnight)


def start_of_week(now: datetime, tz_name: str = "UTC") -> datetime:
    """Return local midnight of the most recent Sunday as naive UTC."""
    local = _to_local(now, tz_name)
    days_since_sunday = (local.weekday() + 1) % 7
    sunday = (local - timedelta(days=days_since_sunday)).replace(hour=0, minute=0, second=0, microsecond=0)
    return _to_naive_utc(sunday)


def should_reset_todo(
    frequency: TodoFrequency | str,
    last_reset: datetime,
    now: datetime,
    tz_name: str = "UTC",
) -> bool:
    """Decide whether a recurring to-do is due for a reset.

    Args:
        frequency: The to-do's recurrence.
        last_reset: Last reset time, or creation time when never reset.
        now: Current time.
        tz_name: IANA timezone whose calendar defines days and weeks.

    Returns:
        True when ``last_reset`` predates the current day (daily) or week (weekly).
    """
    frequency = TodoFrequency(frequency)
    if frequency is TodoFrequency.daily:
        return last_reset < start_of_day(now, tz_name)
    if frequency is TodoFrequency.weekly:
        return last_reset < start_of_week(now, tz_name)
    return False


def reset_reference(last_reset_at: Optional[datetime], created_at: datetime) -> datetime:
    """Timestamp a reset decision is measured from."""
    return last_reset_at or created_at
