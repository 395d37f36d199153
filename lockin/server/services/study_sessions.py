"""
Service for study sessions.

Recording a session credits its minutes to the goal and, for hours-type
to-dos, to the goal to-do; deleting it takes them back.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from lockin.core.database.entities.goal_todos import GoalTodo
from lockin.core.database.entities.goals import Goal
from lockin.core.database.entities.study_sessions import StudySession
from lockin.core.database.repositories.bundle import SqlRepoBundle
from lockin.core.errors import NotAuthorizedError, NotFoundError
from lockin.core.models.enums import GoalStatus, GoalTodoType
from lockin.core.models.io.study_sessions import StudySessionCreate

from .goal_todos import get_owned_goal_todo
from .goals import get_owned_goal

logger = logging.getLogger(__name__)


def _credit_goal(goal: Goal, hours: float) -> None:
    goal.completed_hours = goal.completed_hours + hours
    if goal.completed_hours >= goal.target_hours:
        goal.status = GoalStatus.completed


def _credit_goal_todo(todo: GoalTodo, hours: float) -> None:
    todo.completed_hours = (todo.completed_hours or 0.0) + hours
    if todo.estimated_hours and todo.completed_hours >= todo.estimated_hours:
        todo.is_completed = True


class StudySessionService:
    """Service for study session queries and mutations."""

    def __init__(self, repos: SqlRepoBundle) -> None:
        self.repos = repos

    async def _get_owned(self, user_id: str, session_id: str) -> StudySession:
        session = await self.repos.study_sessions.get_by_id(session_id)
        if session is None:
            raise NotFoundError("Study session not found")
        if session.user_id != user_id:
            raise NotAuthorizedError()
        return session

    async def create(self, user_id: str, data: StudySessionCreate) -> StudySession:
        """Record a session and credit its hours.

        Args:
            user_id: Caller token identifier
            data: Session payload; ``duration_minutes`` is real study time

        Returns:
            The persisted session
        """
        goal = await get_owned_goal(self.repos, data.goal_id, user_id)
        goal_todo: Optional[GoalTodo] = None
        if data.goal_todo_id is not None:
            goal_todo = await get_owned_goal_todo(self.repos, data.goal_todo_id, user_id)
            if goal_todo.goal_id != goal.id:
                raise NotAuthorizedError("Goal todo does not belong to this goal")

        hours = data.duration_minutes / 60
        session = StudySession(user_id=user_id, **data.model_dump())
        await self.repos.study_sessions.create(session, commit=False)

        _credit_goal(goal, hours)
        await self.repos.goals.update(goal, commit=False)
        if goal_todo is not None and goal_todo.todo_type == GoalTodoType.hours:
            _credit_goal_todo(goal_todo, hours)
            await self.repos.goal_todos.update(goal_todo, commit=False)

        await self.repos.commit()
        await self.repos.session.refresh(session)
        logger.info(f"Recorded {data.duration_minutes:.1f} min session {session.id} on goal {goal.id}")
        return session

    async def list_by_goal(self, user_id: str, goal_id: str) -> List[StudySession]:
        goal = await self.repos.goals.get_by_id(goal_id)
        if goal is None or goal.user_id != user_id:
            return []
        return await self.repos.study_sessions.list_by_goal(goal_id)

    async def list_by_goal_todo(self, user_id: str, goal_todo_id: str) -> List[StudySession]:
        todo = await self.repos.goal_todos.get_by_id(goal_todo_id)
        if todo is None or todo.user_id != user_id:
            return []
        return await self.repos.study_sessions.list_by_goal_todo(goal_todo_id)

    async def update_notes(self, user_id: str, session_id: str, notes: Optional[str]) -> StudySession:
        session = await self._get_owned(user_id, session_id)
        session.notes = notes
        return await self.repos.study_sessions.update(session)

    async def delete(self, user_id: str, session_id: str) -> None:
        """Delete a session and subtract its hours, never going below zero."""
        session = await self._get_owned(user_id, session_id)
        hours = session.duration_minutes / 60

        goal = await self.repos.goals.get_by_id(session.goal_id)
        if goal is not None:
            goal.completed_hours = max(0.0, goal.completed_hours - hours)
            await self.repos.goals.update(goal, commit=False)

        if session.goal_todo_id is not None:
            todo = await self.repos.goal_todos.get_by_id(session.goal_todo_id)
            if todo is not None and todo.todo_type == GoalTodoType.hours:
                todo.completed_hours = max(0.0, (todo.completed_hours or 0.0) - hours)
                await self.repos.goal_todos.update(todo, commit=False)

        await self.repos.study_sessions.delete(session.id, commit=False)
        await self.repos.commit()
