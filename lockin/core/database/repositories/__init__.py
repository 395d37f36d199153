"""
Database repositories.

Each module provides the data access operations for one table (or a pair of
closely related tables), built on ``AsyncSQLModelRepository``.
"""

from .base import AsyncBaseRepository, AsyncSQLModelRepository
from .bundle import SqlRepoBundle, build_sql_repos_from_session
from .goal_todos import GoalTodoRepository
from .goals import GoalRepository
from .partners import PartnerInviteRepository, PartnerRepository
from .shared_videos import SharedVideoRepository
from .study_sessions import StudySessionRepository
from .todos import TodoRepository
from .users import UserRepository

__all__ = [
    "AsyncBaseRepository",
    "AsyncSQLModelRepository",
    "GoalRepository",
    "GoalTodoRepository",
    "PartnerInviteRepository",
    "PartnerRepository",
    "SharedVideoRepository",
    "SqlRepoBundle",
    "StudySessionRepository",
    "TodoRepository",
    "UserRepository",
    "build_sql_repos_from_session",
]
