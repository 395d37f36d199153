"""Fixtures for API endpoint tests."""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict

import pytest
from httpx import AsyncClient

from lockin.server.auth import Identity


@pytest.fixture
def create_goal(client: AsyncClient, auth_headers) -> Callable[..., Awaitable[Dict[str, Any]]]:
    """Create a goal over the API and return its JSON body."""

    async def _create(identity: Identity, title: str = "Calculus", target_hours: float = 10.0) -> Dict[str, Any]:
        response = await client.post(
            "/api/v1/goals", json={"title": title, "target_hours": target_hours}, headers=auth_headers(identity)
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def create_goal_todo(client: AsyncClient, auth_headers) -> Callable[..., Awaitable[Dict[str, Any]]]:
    """Create a goal to-do over the API and return its JSON body."""

    async def _create(identity: Identity, goal_id: str, title: str = "Chapter 3", **fields: Any) -> Dict[str, Any]:
        response = await client.post(
            "/api/v1/goal-todos", json={"goal_id": goal_id, "title": title, **fields}, headers=auth_headers(identity)
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _create
