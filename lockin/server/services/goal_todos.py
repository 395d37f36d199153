"""
Service for goal to-dos.

Covers CRUD, hours tracking, video attachments and the recurring reset used
both on demand and by the hourly scheduler job.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional, Tuple

from lockin.core.database.entities.goal_todos import GoalTodo
from lockin.core.database.repositories.bundle import SqlRepoBundle
from lockin.core.errors import InvalidOperationError, NotAuthorizedError, NotFoundError
from lockin.core.models.enums import GoalTodoType
from lockin.core.models.io.goal_todos import GoalTodoCreate, GoalTodoVideoAttach
from lockin.core.services.recurrence import reset_reference, should_reset_todo
from lockin.core.utils import utc_now

from .goals import get_owned_goal

logger = logging.getLogger(__name__)

UNKNOWN_GOAL_TITLE = "Unknown Goal"


async def get_owned_goal_todo(repos: SqlRepoBundle, todo_id: str, user_id: str) -> GoalTodo:
    todo = await repos.goal_todos.get_by_id(todo_id)
    if todo is None:
        raise NotFoundError("Goal todo not found")
    if todo.user_id != user_id:
        raise NotAuthorizedError()
    return todo


def reset_if_due(todo: GoalTodo, now: datetime, tz_name: str = "UTC") -> bool:
    """Reset ``todo`` in place when its recurrence period has rolled over.

    Returns:
        True if the to-do was reset
    """
    if not should_reset_todo(todo.frequency, reset_reference(todo.last_reset_at, todo.created_at), now, tz_name):
        return False
    todo.is_completed = False
    todo.last_reset_at = now
    if todo.todo_type == GoalTodoType.hours:
        todo.completed_hours = 0.0
    return True


class GoalTodoService:
    """Service for goal to-do queries and mutations.

    Args:
        repos: Repository bundle bound to the request session
        reset_timezone: Timezone whose calendar defines recurring periods
    """

    def __init__(self, repos: SqlRepoBundle, *, reset_timezone: str = "UTC") -> None:
        self.repos = repos
        self.reset_timezone = reset_timezone

    async def list_by_goal(self, user_id: str, goal_id: str) -> List[GoalTodo]:
        """Active to-dos of a goal; empty when the goal is missing or not owned."""
        goal = await self.repos.goals.get_by_id(goal_id)
        if goal is None or goal.user_id != user_id:
            return []
        return await self.repos.goal_todos.list_by_goal(goal_id, archived=False)

    async def list_all(self, user_id: str) -> List[Tuple[GoalTodo, str]]:
        """Every active to-do of the user paired with its goal title."""
        todos = await self.repos.goal_todos.list_for_user(user_id, archived=False)
        titles = {goal.id: goal.title for goal in await self.repos.goals.list(filters={"user_id": user_id})}
        return [(todo, titles.get(todo.goal_id, UNKNOWN_GOAL_TITLE)) for todo in todos]

    async def list_archived(self, user_id: str) -> List[GoalTodo]:
        return await self.repos.goal_todos.list_for_user(user_id, archived=True)

    async def create(self, user_id: str, data: GoalTodoCreate) -> GoalTodo:
        await get_owned_goal(self.repos, data.goal_id, user_id)
        is_hours = data.todo_type == GoalTodoType.hours
        todo = GoalTodo(
            user_id=user_id,
            goal_id=data.goal_id,
            title=data.title,
            description=data.description,
            todo_type=data.todo_type,
            estimated_hours=data.estimated_hours if is_hours else None,
            completed_hours=0.0 if is_hours else None,
            is_completed=False,
            frequency=data.frequency,
        )
        return await self.repos.goal_todos.create(todo)

    async def toggle(self, user_id: str, todo_id: str, is_completed: bool) -> GoalTodo:
        todo = await get_owned_goal_todo(self.repos, todo_id, user_id)
        todo.is_completed = is_completed
        return await self.repos.goal_todos.update(todo)

    async def update_progress(self, user_id: str, todo_id: str, additional_hours: float) -> GoalTodo:
        """Add hours to an hours-type to-do.

        Raises:
            InvalidOperationError: If the to-do is a simple checkbox
        """
        todo = await get_owned_goal_todo(self.repos, todo_id, user_id)
        if todo.todo_type != GoalTodoType.hours:
            raise InvalidOperationError("Cannot update hours on simple todo")
        todo.completed_hours = (todo.completed_hours or 0.0) + additional_hours
        todo.is_completed = bool(todo.estimated_hours) and todo.completed_hours >= todo.estimated_hours
        return await self.repos.goal_todos.update(todo)

    async def attach_video(self, user_id: str, todo_id: str, data: GoalTodoVideoAttach) -> GoalTodo:
        todo = await get_owned_goal_todo(self.repos, todo_id, user_id)
        todo.local_video_path = data.local_video_path
        todo.local_thumbnail_path = data.local_thumbnail_path
        todo.video_duration_minutes = data.video_duration_minutes
        todo.video_notes = data.video_notes
        return await self.repos.goal_todos.update(todo)

    async def update_video_notes(self, user_id: str, todo_id: str, notes: Optional[str]) -> GoalTodo:
        todo = await get_owned_goal_todo(self.repos, todo_id, user_id)
        todo.video_notes = notes
        return await self.repos.goal_todos.update(todo)

    async def remove_video(self, user_id: str, todo_id: str) -> GoalTodo:
        todo = await get_owned_goal_todo(self.repos, todo_id, user_id)
        todo.local_video_path = None
        todo.local_thumbnail_path = None
        todo.video_duration_minutes = None
        todo.video_notes = None
        return await self.repos.goal_todos.update(todo)

    async def set_archived(self, user_id: str, todo_id: str, archived: bool) -> GoalTodo:
        todo = await get_owned_goal_todo(self.repos, todo_id, user_id)
        todo.is_archived = archived
        return await self.repos.goal_todos.update(todo)

    async def delete(self, user_id: str, todo_id: str) -> None:
        todo = await get_owned_goal_todo(self.repos, todo_id, user_id)
        await self.repos.study_sessions.detach_goal_todo(todo.id, commit=False)
        await self.repos.goal_todos.delete(todo.id, commit=False)
        await self.repos.commit()

    async def check_and_reset_recurring(self, user_id: str, goal_id: str, *, now: Optional[datetime] = None) -> int:
        """Reset the goal's recurring to-dos whose period has rolled over.

        Returns:
            Number of to-dos reset
        """
        await get_owned_goal(self.repos, goal_id, user_id)
        return await self._reset(await self.repos.goal_todos.list_recurring(goal_id), now or utc_now())

    async def reset_all_recurring(self, *, now: Optional[datetime] = None) -> int:
        """Reset every user's due recurring to-dos; run by the scheduler."""
        return await self._reset(await self.repos.goal_todos.list_recurring(), now or utc_now())

    async def _reset(self, todos: List[GoalTodo], now: datetime) -> int:
        reset_count = 0
        for todo in todos:
            if reset_if_due(todo, now, self.reset_timezone):
                await self.repos.goal_todos.update(todo, commit=False)
                reset_count += 1
        if reset_count:
            await self.repos.commit()
            logger.info(f"Reset {reset_count} recurring goal to-dos")
        return reset_count
