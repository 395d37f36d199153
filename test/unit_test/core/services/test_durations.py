"""Unit tests for duration formatting and time-lapse conversion."""

from __future__ import annotations

import pytest

from lockin.core.services import durations


class TestTimelapse:
    def test_speed_multiplier(self):
        assert durations.TIMELAPSE_SPEED_MULTIPLIER == 6.0

    def test_conversions(self):
        assert durations.timelapse_to_real_minutes(5) == 30
        assert durations.real_to_timelapse_minutes(30) == 5

    @pytest.mark.parametrize(
        "elapsed, interval",
        [(0, 0.5), (9.9, 0.5), (10, 1.0), (19.5, 1.0), (20, 2.0), (79, 2.0), (80, 30.0), (240, 30.0)],
    )
    def test_capture_interval_schedule(self, elapsed, interval):
        assert durations.capture_interval_seconds(elapsed) == interval


class TestHourFormatting:
    @pytest.mark.parametrize("hours, text", [(0, "0 min"), (0.5, "30 min"), (1, "1.0h"), (2.5, "2.5h")])
    def test_format_hours(self, hours, text):
        assert durations.format_hours(hours) == text

    @pytest.mark.parametrize("hours, text", [(0, "0m"), (0.25, "15m"), (2.5, "2.5h")])
    def test_format_hours_compact(self, hours, text):
        assert durations.format_hours_compact(hours) == text

    def test_format_progress(self):
        assert durations.format_progress(0.5, 10) == "30 min of 10h"
        assert durations.format_progress(2.5, 10) == "2.5h of 10h"
        assert durations.format_progress(0.25, 0.5) == "15 min of 30 min"

    def test_format_progress_compact(self):
        assert durations.format_progress_compact(0.5, 10) == "30m/10h"
        assert durations.format_progress_compact(2.5, 10) == "2h/10h"


class TestMinuteFormatting:
    @pytest.mark.parametrize("minutes, text", [(0.5, "30s"), (3.5, "3m 30s"), (65, "1h 5m"), (0, "0s")])
    def test_format_minutes(self, minutes, text):
        assert durations.format_minutes(minutes) == text

    @pytest.mark.parametrize("minutes, text", [(45, "45m"), (65, "1h 5m"), (120, "2h 0m")])
    def test_format_session_duration(self, minutes, text):
        assert durations.format_session_duration(minutes) == text

    @pytest.mark.parametrize(
        "minutes, text",
        [(None, None), (0, None), (-1, None), (0.5, "30s"), (3.5, "3m 30s"), (3, "3m"), (65, "1h 5m"), (120, "2h")],
    )
    def test_format_video_duration(self, minutes, text):
        assert durations.format_video_duration(minutes) == text
