"""
Goal to-do repository implementation.

This module provides data access operations for goal to-dos, including the
lookup of recurring to-dos used by the reset job.
"""

from __future__ import annotations

from typing import List, Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from lockin.core.models.enums import TodoFrequency

from ..entities.goal_todos import GoalTodo
from .base import AsyncSQLModelRepository


class GoalTodoRepository(AsyncSQLModelRepository[GoalTodo]):
    """Repository for goal to-do data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, GoalTodo)

    async def list_by_goal(self, goal_id: str, *, archived: Optional[bool] = False) -> List[GoalTodo]:
        """List to-dos of a goal, newest first.

        Args:
            goal_id: Parent goal id
            archived: Archived flag to match; None returns both

        Returns:
            List of GoalTodo instances
        """
        stmt = select(GoalTodo).where(GoalTodo.goal_id == goal_id)
        if archived is not None:
            stmt = stmt.where(GoalTodo.is_archived == archived)
        return await self.fetch_all(self.newest_first(stmt))

    async def list_for_user(self, user_id: str, *, archived: bool = False) -> List[GoalTodo]:
        stmt = select(GoalTodo).where(GoalTodo.user_id == user_id, GoalTodo.is_archived == archived)  # noqa: E712
        return await self.fetch_all(self.newest_first(stmt))

    async def list_recurring(self, goal_id: Optional[str] = None) -> List[GoalTodo]:
        """List recurring to-dos, optionally limited to one goal.

        Args:
            goal_id: Restrict to this goal; None scans every user's to-dos

        Returns:
            List of GoalTodo instances whose frequency is daily or weekly
        """
        stmt = select(GoalTodo).where(GoalTodo.frequency != TodoFrequency.none)
        if goal_id is not None:
            stmt = stmt.where(GoalTodo.goal_id == goal_id)
        return await self.fetch_all(stmt)
