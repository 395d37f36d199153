"""
To-do repository implementation.

This module provides data access operations for standalone to-dos.
"""

from __future__ import annotations

from typing import List

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from ..entities.todos import Todo
from .base import AsyncSQLModelRepository


class TodoRepository(AsyncSQLModelRepository[Todo]):
    """Repository for to-do data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Todo)

    async def list_for_user(self, user_id: str, *, archived: bool = False) -> List[Todo]:
        """List a user's to-dos, newest first.

        Args:
            user_id: Owner token identifier
            archived: Return archived to-dos instead of active ones

        Returns:
            List of Todo instances
        """
        stmt = select(Todo).where(Todo.user_id == user_id, Todo.is_archived == archived)  # noqa: E712
        return await self.fetch_all(self.newest_first(stmt))
