"""
Study session repository implementation.

This module provides data access operations for recorded study sessions.
"""

from __future__ import annotations

from typing import List

from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from ..entities.study_sessions import StudySession
from .base import AsyncSQLModelRepository


class StudySessionRepository(AsyncSQLModelRepository[StudySession]):
    """Repository for study session data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, StudySession)

    async def list_by_goal(self, goal_id: str) -> List[StudySession]:
        stmt = select(StudySession).where(StudySession.goal_id == goal_id)
        return await self.fetch_all(self.newest_first(stmt))

    async def list_by_goal_todo(self, goal_todo_id: str) -> List[StudySession]:
        stmt = select(StudySession).where(StudySession.goal_todo_id == goal_todo_id)
        return await self.fetch_all(self.newest_first(stmt))

    async def detach_goal_todo(self, goal_todo_id: str, *, commit: bool = True) -> int:
        """Clear ``goal_todo_id`` on sessions that point at a deleted to-do."""
        result = await self.session.execute(
            update(StudySession).where(StudySession.goal_todo_id == goal_todo_id).values(goal_todo_id=None)
        )
        if commit:
            await self.session.commit()
        return result.rowcount or 0
