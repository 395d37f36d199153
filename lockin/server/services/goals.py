"""
Service for study goals.

Owns the goal rules: progress rolls the status between ``active`` and
``completed``, and deleting a goal removes its to-dos and study sessions.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from lockin.core.database.entities.goal_todos import GoalTodo
from lockin.core.database.entities.goals import Goal
from lockin.core.database.entities.study_sessions import StudySession
from lockin.core.database.repositories.bundle import SqlRepoBundle
from lockin.core.errors import NotAuthorizedError, NotFoundError
from lockin.core.models.enums import GoalStatus
from lockin.core.models.io.common import CursorPage
from lockin.core.models.io.goals import GoalCreate, GoalRead, GoalUpdate

logger = logging.getLogger(__name__)


async def get_owned_goal(repos: SqlRepoBundle, goal_id: str, user_id: str) -> Goal:
    """Load a goal and check the caller owns it.

    Raises:
        NotFoundError: If the goal does not exist
        NotAuthorizedError: If another user owns it
    """
    goal = await repos.goals.get_by_id(goal_id)
    if goal is None:
        raise NotFoundError("Goal not found")
    if goal.user_id != user_id:
        raise NotAuthorizedError()
    return goal


def status_for_progress(completed_hours: float, target_hours: float) -> GoalStatus:
    return GoalStatus.completed if completed_hours >= target_hours else GoalStatus.active


class GoalService:
    """Service for goal queries and mutations."""

    def __init__(self, repos: SqlRepoBundle) -> None:
        self.repos = repos

    async def list_goals(self, user_id: str) -> List[Goal]:
        return await self.repos.goals.list_for_user(user_id, archived=False)

    async def list_archived(
        self, user_id: str, *, limit: int = 20, cursor: Optional[str] = None
    ) -> CursorPage[GoalRead]:
        """Page through archived goals, newest first."""
        page, continue_cursor, is_done = await self.repos.goals.page_archived(user_id, limit=limit, cursor=cursor)
        return CursorPage[GoalRead](
            page=[GoalRead.model_validate(goal) for goal in page],
            continue_cursor=continue_cursor,
            is_done=is_done,
        )

    async def get_goal(self, user_id: str, goal_id: str) -> Optional[Goal]:
        """Return the goal, or None when it is missing or owned by someone else."""
        goal = await self.repos.goals.get_by_id(goal_id)
        if goal is None or goal.user_id != user_id:
            return None
        return goal

    async def create_goal(self, user_id: str, data: GoalCreate) -> Goal:
        goal = Goal(
            user_id=user_id,
            title=data.title,
            description=data.description,
            target_hours=data.target_hours,
            completed_hours=0.0,
            status=GoalStatus.active,
        )
        goal = await self.repos.goals.create(goal)
        logger.info(f"Created goal {goal.id} for {user_id}")
        return goal

    async def update_progress(self, user_id: str, goal_id: str, additional_hours: float) -> Goal:
        """Add hours to a goal and recompute its status.

        Args:
            user_id: Caller token identifier
            goal_id: Goal to update
            additional_hours: Hours to add

        Returns:
            The updated goal
        """
        goal = await get_owned_goal(self.repos, goal_id, user_id)
        goal.completed_hours = goal.completed_hours + additional_hours
        goal.status = status_for_progress(goal.completed_hours, goal.target_hours)
        return await self.repos.goals.update(goal)

    async def update_goal(self, user_id: str, goal_id: str, data: GoalUpdate) -> Goal:
        goal = await get_owned_goal(self.repos, goal_id, user_id)
        if data.title is not None:
            goal.title = data.title
        if data.status is not None:
            goal.status = data.status
        return await self.repos.goals.update(goal)

    async def set_archived(self, user_id: str, goal_id: str, archived: bool) -> Goal:
        goal = await get_owned_goal(self.repos, goal_id, user_id)
        goal.is_archived = archived
        return await self.repos.goals.update(goal)

    async def delete_goal(self, user_id: str, goal_id: str) -> None:
        """Delete a goal together with its goal to-dos and study sessions."""
        goal = await get_owned_goal(self.repos, goal_id, user_id)
        sessions = await self.repos.study_sessions.delete_where(StudySession.goal_id == goal.id, commit=False)
        todos = await self.repos.goal_todos.delete_where(GoalTodo.goal_id == goal.id, commit=False)
        await self.repos.goals.delete(goal.id, commit=False)
        await self.repos.commit()
        logger.info(f"Deleted goal {goal.id} with {todos} to-dos and {sessions} sessions")
