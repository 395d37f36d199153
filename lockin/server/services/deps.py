"""
Service Dependencies.

Provides request-scoped repository bundles and domain services for API
endpoints.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from lockin.core.database.repositories.bundle import SqlRepoBundle, build_sql_repos_from_session
from lockin.core.database.session import get_session
from lockin.server.core.config import settings

from .goal_todos import GoalTodoService
from .goals import GoalService
from .partners import PartnerService
from .shared_videos import SharedVideoService
from .storage import ObjectStorage, get_object_storage
from .study_sessions import StudySessionService
from .todos import TodoService
from .users import UserService


def get_repos(session: AsyncSession = Depends(get_session)) -> SqlRepoBundle:
    return build_sql_repos_from_session(session=session)


ReposDep = Annotated[SqlRepoBundle, Depends(get_repos)]
StorageDep = Annotated[ObjectStorage, Depends(get_object_storage)]


def get_goal_service(repos: ReposDep) -> GoalService:
    return GoalService(repos)


def get_goal_todo_service(repos: ReposDep) -> GoalTodoService:
    return GoalTodoService(repos, reset_timezone=settings.scheduler.reset_timezone)


def get_study_session_service(repos: ReposDep) -> StudySessionService:
    return StudySessionService(repos)


def get_todo_service(repos: ReposDep) -> TodoService:
    return TodoService(repos)


def get_partner_service(repos: ReposDep) -> PartnerService:
    return PartnerService(repos)


def get_shared_video_service(repos: ReposDep, storage: StorageDep) -> SharedVideoService:
    return SharedVideoService(repos, storage)


def get_user_service(repos: ReposDep) -> UserService:
    return UserService(repos)


GoalServiceDep = Annotated[GoalService, Depends(get_goal_service)]
GoalTodoServiceDep = Annotated[GoalTodoService, Depends(get_goal_todo_service)]
StudySessionServiceDep = Annotated[StudySessionService, Depends(get_study_session_service)]
TodoServiceDep = Annotated[TodoService, Depends(get_todo_service)]
PartnerServiceDep = Annotated[PartnerService, Depends(get_partner_service)]
SharedVideoServiceDep = Annotated[SharedVideoService, Depends(get_shared_video_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
