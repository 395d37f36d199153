"""Unit tests for display helpers."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from lockin.core.services.presentation import context_description, display_name, expiry_description, initials

NOW = datetime(2026, 1, 5, 12, 0, 0)


class TestNames:
    def test_display_name_falls_back_to_email(self):
        assert display_name("Alice Smith", "alice@example.com") == "Alice Smith"
        assert display_name(None, "alice@example.com") == "alice@example.com"
        assert display_name("", "alice@example.com") == "alice@example.com"

    @pytest.mark.parametrize(
        "name, email, expected",
        [
            ("Alice Smith", "a@example.com", "AS"),
            ("alice mary smith", "a@example.com", "AM"),
            ("Carol", "c@example.com", "CA"),
            (None, "bob@example.com", "BO"),
        ],
    )
    def test_initials(self, name, email, expected):
        assert initials(name, email) == expected


class TestExpiryDescription:
    @pytest.mark.parametrize(
        "delta, expected",
        [
            (timedelta(seconds=-1), "Expired"),
            (timedelta(0), "Expired"),
            (timedelta(days=3, hours=2), "Expires in 3 days"),
            (timedelta(days=1, minutes=5), "Expires in 1 day"),
            (timedelta(hours=1, minutes=10), "Expires in 1 hour"),
            (timedelta(hours=5), "Expires in 5 hours"),
            (timedelta(minutes=30), "Expires soon"),
        ],
    )
    def test_expiry_description(self, delta, expected):
        assert expiry_description(NOW + delta, NOW) == expected


class TestContextDescription:
    def test_combinations(self):
        assert context_description("Calculus", "Chapter 3") == "Calculus • Chapter 3"
        assert context_description("Calculus", None) == "Calculus"
        assert context_description(None, "Chapter 3") == "Chapter 3"
        assert context_description(None, None) == "Study session"
