"""Fixtures for client SDK tests."""

from __future__ import annotations

import pytest

from lockin.client import LocalStore


@pytest.fixture
def store() -> LocalStore:
    """In-memory cache."""
    return LocalStore("sqlite://")
