"""
Goal repository implementation.

This module provides data access operations for study goals, including the
cursor-paginated archive listing.
"""

from __future__ import annotations

import base64
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import and_, or_
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from lockin.core.errors import InvalidOperationError

from ..entities.goals import Goal
from .base import AsyncSQLModelRepository


CURSOR_SEPARATOR = "|"


def encode_cursor(goal: Goal) -> str:
    """Opaque continue cursor holding the goal's ``(created_at, id)`` sort key."""
    raw = f"{goal.created_at.isoformat()}{CURSOR_SEPARATOR}{goal.id}"
    return base64.urlsafe_b64encode(raw.encode()).decode()


def decode_cursor(cursor: str) -> Tuple[datetime, str]:
    """Recover the sort key from a cursor.

    Raises:
        InvalidOperationError: If the cursor was not produced by :func:`encode_cursor`
    """
    try:
        raw = base64.b64decode(cursor.encode(), altchars=b"-_", validate=True).decode()
        created_at, goal_id = raw.rsplit(CURSOR_SEPARATOR, 1)
        if not goal_id:
            raise ValueError("empty goal id")
        return datetime.fromisoformat(created_at), goal_id
    except ValueError as exc:
        raise InvalidOperationError("Invalid cursor") from exc


class GoalRepository(AsyncSQLModelRepository[Goal]):
    """Repository for goal data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Goal)

    async def list_for_user(self, user_id: str, *, archived: bool = False) -> List[Goal]:
        """List a user's goals, newest first.

        Args:
            user_id: Owner token identifier
            archived: Return archived goals instead of active ones

        Returns:
            List of Goal instances
        """
        stmt = (
            select(Goal)
            .where(Goal.user_id == user_id, Goal.is_archived == archived)  # noqa: E712
            .order_by(Goal.created_at.desc(), Goal.id.desc())  # type: ignore[union-attr]
        )
        return await self.fetch_all(stmt)

    async def page_archived(
        self, user_id: str, *, limit: int, cursor: Optional[str] = None
    ) -> Tuple[List[Goal], Optional[str], bool]:
        """Fetch one page of a user's archived goals, newest first.

        The cursor carries the ``(created_at, id)`` key of the last goal on the
        previous page, so it stays valid when that goal is deleted or restored
        and rows added between calls do not shift the window.

        Args:
            user_id: Owner token identifier
            limit: Maximum number of goals on the page
            cursor: Continue cursor returned by the previous call

        Returns:
            Tuple of (goals, continue cursor, whether this is the last page)

        Raises:
            InvalidOperationError: If the cursor cannot be decoded
        """
        stmt = select(Goal).where(Goal.user_id == user_id, Goal.is_archived == True)  # noqa: E712

        if cursor:
            anchor_created_at, anchor_id = decode_cursor(cursor)
            stmt = stmt.where(
                or_(
                    Goal.created_at < anchor_created_at,
                    and_(Goal.created_at == anchor_created_at, Goal.id < anchor_id),
                )
            )

        stmt = stmt.order_by(Goal.created_at.desc(), Goal.id.desc()).limit(limit + 1)  # type: ignore[union-attr]
        result = await self.session.exec(stmt)
        rows = list(result.all())

        is_done = len(rows) <= limit
        page = rows[:limit]
        continue_cursor = encode_cursor(page[-1]) if page else cursor
        return page, continue_cursor, is_done
