"""Fixtures for repository tests."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Awaitable, Callable

import pytest

from lockin.core.database.entities import Goal
from lockin.core.database.repositories import SqlRepoBundle

USER = "lockin-dev|alice"
OTHER_USER = "lockin-dev|bob"


@pytest.fixture
def base_time() -> datetime:
    return datetime(2026, 1, 5, 12, 0, 0)


@pytest.fixture
def make_goal(repos: SqlRepoBundle, base_time: datetime) -> Callable[..., Awaitable[Goal]]:
    """Insert a goal; ``age`` shifts ``created_at`` back so ordering is deterministic."""

    async def _make(
        title: str = "Calculus",
        *,
        user_id: str = USER,
        target_hours: float = 10.0,
        archived: bool = False,
        age: int = 0,
    ) -> Goal:
        goal = Goal(
            user_id=user_id,
            title=title,
            target_hours=target_hours,
            is_archived=archived,
            created_at=base_time - timedelta(minutes=age),
        )
        return await repos.goals.create(goal)

    return _make
