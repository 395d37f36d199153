"""
Service for user profiles and account deletion.
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import or_

from lockin.core.database.entities.goal_todos import GoalTodo
from lockin.core.database.entities.goals import Goal
from lockin.core.database.entities.partners import AccountabilityPartner, PartnerInvite
from lockin.core.database.entities.shared_videos import SharedVideo
from lockin.core.database.entities.study_sessions import StudySession
from lockin.core.database.entities.todos import Todo
from lockin.core.database.entities.users import User
from lockin.core.database.repositories.bundle import SqlRepoBundle
from lockin.server.auth.identity import Identity

logger = logging.getLogger(__name__)

DELETE_ALL_MESSAGE = "All user data deleted successfully"


class UserService:
    """Service for the caller's own profile."""

    def __init__(self, repos: SqlRepoBundle) -> None:
        self.repos = repos

    async def store_current_user(self, identity: Identity) -> User:
        """Insert or refresh the caller's profile from their identity token."""
        user = await self.repos.users.get_by_token(identity.token_identifier)
        if user is None:
            user = User(token_identifier=identity.token_identifier)
            logger.info(f"Registering user {identity.token_identifier}")
        user.email = identity.normalized_email
        user.name = identity.name
        user.picture_url = identity.picture_url
        return await self.repos.users.update(user)

    async def get_current_user(self, identity: Identity) -> Optional[User]:
        return await self.repos.users.get_by_token(identity.token_identifier)

    async def delete_all_data(self, identity: Identity) -> str:
        """Delete every record the caller owns or participates in, keeping the profile row."""
        user_id = identity.token_identifier
        repos = self.repos
        counts = {
            "study_sessions": await repos.study_sessions.delete_where(StudySession.user_id == user_id, commit=False),
            "goal_todos": await repos.goal_todos.delete_where(GoalTodo.user_id == user_id, commit=False),
            "goals": await repos.goals.delete_where(Goal.user_id == user_id, commit=False),
            "todos": await repos.todos.delete_where(Todo.user_id == user_id, commit=False),
            "shared_videos": await repos.shared_videos.delete_where(SharedVideo.user_id == user_id, commit=False),
            "partners": await repos.partners.delete_where(
                or_(AccountabilityPartner.user_id == user_id, AccountabilityPartner.partner_id == user_id),
                commit=False,
            ),
            "invites": await repos.invites.delete_where(PartnerInvite.from_user_id == user_id, commit=False),
        }
        await repos.commit()
        logger.info(f"Deleted all data for {user_id}: {counts}")
        return DELETE_ALL_MESSAGE
