"""Time-lapse conversion and human-readable durations.

Hours formatters take fractional hours; video and session formatters take
minutes.
"""

from __future__ import annotations

from typing import Optional

# Recorded videos play back this many times faster than real time.
TIMELAPSE_SPEED_MULTIPLIER: float = 6.0

# (elapsed-minutes upper bound, seconds between captured frames)
CAPTURE_INTERVAL_SCHEDULE: tuple[tuple[float, float], ...] = (
    (10.0, 0.5),
    (20.0, 1.0),
    (80.0, 2.0),
)
LONG_SESSION_CAPTURE_INTERVAL: float = 30.0


def timelapse_to_real_minutes(video_minutes: float) -> float:
    """Convert time-lapse playback minutes into real study minutes."""
    return video_minutes * TIMELAPSE_SPEED_MULTIPLIER


def real_to_timelapse_minutes(real_minutes: float) -> float:
    """Convert real study minutes into time-lapse playback minutes."""
    return real_minutes / TIMELAPSE_SPEED_MULTIPLIER


def capture_interval_seconds(elapsed_minutes: float) -> float:
    """Seconds between frames for a recording that has run ``elapsed_minutes``."""
    for upper_bound, interval in CAPTURE_INTERVAL_SCHEDULE:
        if elapsed_minutes < upper_bound:
            return interval
    return LONG_SESSION_CAPTURE_INTERVAL


def format_hours(hours: float) -> str:
    """``0.5 -> "30 min"``, ``2.5 -> "2.5h"``, ``0 -> "0 min"``."""
    if hours < 1:
        return f"{int(hours * 60)} min"
    return f"{hours:.1f}h"


def format_hours_compact(hours: float) -> str:
    """``0.5 -> "30m"``, ``2.5 -> "2.5h"``, ``0 -> "0m"``."""
    if hours < 1:
        return f"{int(hours * 60)}m"
    return f"{hours:.1f}h"


def format_progress(completed_hours: float, target_hours: float) -> str:
    """``(0.5, 10) -> "30 min of 10h"``, ``(2.5, 10) -> "2.5h of 10h"``."""
    target = f"{int(target_hours * 60)} min" if target_hours < 1 else f"{int(target_hours)}h"
    return f"{format_hours(completed_hours)} of {target}"


def format_progress_compact(completed_hours: float, target_hours: float) -> str:
    """``(0.5, 10) -> "30m/10h"``, ``(2.5, 10) -> "2h/10h"``."""

    def _part(hours: float) -> str:
        return f"{int(hours * 60)}m" if hours < 1 else f"{int(hours)}h"

    return f"{_part(completed_hours)}/{_part(target_hours)}"


def format_minutes(minutes: float) -> str:
    """Format a clip length as ``"Xh Ym"``, ``"Ym Zs"`` or ``"Zs"``."""
    total_seconds = int(minutes * 60)
    hours, remainder = divmod(total_seconds, 3600)
    mins, secs = divmod(remainder, 60)
    if hours > 0:
        return f"{hours}h {mins}m"
    if mins > 0:
        return f"{mins}m {secs}s"
    return f"{secs}s"


def format_session_duration(minutes: float) -> str:
    """Study session length: ``"1h 5m"`` or ``"45m"``."""
    hours = int(minutes // 60)
    mins = int(minutes % 60)
    if hours > 0:
        return f"{hours}h {mins}m"
    return f"{mins}m"


def format_video_duration(minutes: Optional[float]) -> Optional[str]:
    """Label for a video attached to a to-do; None when nothing is attached.

    ``0.5 -> "30s"``, ``3.5 -> "3m 30s"``, ``3 -> "3m"``, ``65 -> "1h 5m"``,
    ``120 -> "2h"``.
    """
    if minutes is None or minutes <= 0:
        return None
    if minutes < 1:
        return f"{int(minutes * 60)}s"
    if minutes < 60:
        mins = int(minutes)
        secs = int((minutes - mins) * 60)
        return f"{mins}m {secs}s" if secs > 0 else f"{mins}m"
    hours = int(minutes / 60)
    mins = int(minutes % 60)
    return f"{hours}h {mins}m" if mins > 0 else f"{hours}h"
