"""
Repository bundle for dependency injection.

This module provides a convenience bundle of all repository instances
for easy dependency injection in services and application components.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlmodel.ext.asyncio.session import AsyncSession

from .goal_todos import GoalTodoRepository
from .goals import GoalRepository
from .partners import PartnerInviteRepository, PartnerRepository
from .shared_videos import SharedVideoRepository
from .study_sessions import StudySessionRepository
from .todos import TodoRepository
from .users import UserRepository


@dataclass(frozen=True)
class SqlRepoBundle:
    """Convenience bundle of all SQL repositories sharing one session."""

    session: AsyncSession
    users: UserRepository
    goals: GoalRepository
    goal_todos: GoalTodoRepository
    study_sessions: StudySessionRepository
    todos: TodoRepository
    partners: PartnerRepository
    invites: PartnerInviteRepository
    shared_videos: SharedVideoRepository

    async def commit(self) -> None:
        """Commit writes staged with ``commit=False``."""
        await self.session.commit()


def build_sql_repos_from_session(*, session: AsyncSession) -> SqlRepoBundle:
    """Build a SqlRepoBundle from an existing session.

    Args:
        session: Existing async session

    Returns:
        Bundle containing all repository instances
    """
    return SqlRepoBundle(
        session=session,
        users=UserRepository(session),
        goals=GoalRepository(session),
        goal_todos=GoalTodoRepository(session),
        study_sessions=StudySessionRepository(session),
        todos=TodoRepository(session),
        partners=PartnerRepository(session),
        invites=PartnerInviteRepository(session),
        shared_videos=SharedVideoRepository(session),
    )
