"""
Service for standalone to-dos.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from lockin.core.database.entities.todos import Todo
from lockin.core.database.repositories.bundle import SqlRepoBundle
from lockin.core.errors import NotAuthorizedError, NotFoundError
from lockin.core.models.io.todos import TodoCreate, TodoUpdate, TodoVideoAttach

logger = logging.getLogger(__name__)


def _apply_video(todo: Todo, data: TodoVideoAttach) -> None:
    todo.local_video_path = data.local_video_path
    todo.local_thumbnail_path = data.local_thumbnail_path
    todo.video_notes = data.video_notes
    todo.speed_segments_json = data.speed_segments_json
    todo.is_completed = True


class TodoService:
    """Service for to-do queries and mutations."""

    def __init__(self, repos: SqlRepoBundle) -> None:
        self.repos = repos

    async def _get_owned(self, user_id: str, todo_id: str) -> Todo:
        todo = await self.repos.todos.get_by_id(todo_id)
        if todo is None:
            raise NotFoundError("Todo not found")
        if todo.user_id != user_id:
            raise NotAuthorizedError()
        return todo

    async def list_todos(self, user_id: str) -> List[Todo]:
        return await self.repos.todos.list_for_user(user_id, archived=False)

    async def list_archived(self, user_id: str) -> List[Todo]:
        return await self.repos.todos.list_for_user(user_id, archived=True)

    async def get_todo(self, user_id: str, todo_id: str) -> Optional[Todo]:
        """Return the to-do, None when missing.

        Raises:
            NotAuthorizedError: If another user owns it
        """
        todo = await self.repos.todos.get_by_id(todo_id)
        if todo is None:
            return None
        if todo.user_id != user_id:
            raise NotAuthorizedError()
        return todo

    async def create(self, user_id: str, data: TodoCreate) -> Todo:
        todo = Todo(user_id=user_id, title=data.title, description=data.description, is_completed=False)
        return await self.repos.todos.create(todo)

    async def toggle(self, user_id: str, todo_id: str, is_completed: bool) -> Todo:
        todo = await self._get_owned(user_id, todo_id)
        todo.is_completed = is_completed
        return await self.repos.todos.update(todo)

    async def update(self, user_id: str, todo_id: str, data: TodoUpdate) -> Todo:
        todo = await self._get_owned(user_id, todo_id)
        todo.title = data.title
        todo.description = data.description
        return await self.repos.todos.update(todo)

    async def attach_video(self, user_id: str, todo_id: str, data: TodoVideoAttach) -> Todo:
        """Attach a recording; the to-do counts as done once it has one."""
        todo = await self._get_owned(user_id, todo_id)
        _apply_video(todo, data)
        return await self.repos.todos.update(todo)

    async def attach_video_to_multiple(self, user_id: str, todo_ids: List[str], data: TodoVideoAttach) -> List[Todo]:
        """Attach one recording to several to-dos.

        Ids that do not exist or belong to someone else are skipped.

        Returns:
            The to-dos that were updated
        """
        updated: List[Todo] = []
        for todo_id in todo_ids:
            todo = await self.repos.todos.get_by_id(todo_id)
            if todo is None or todo.user_id != user_id:
                logger.debug(f"Skipping to-do {todo_id} while attaching video")
                continue
            _apply_video(todo, data)
            await self.repos.todos.update(todo, commit=False)
            updated.append(todo)
        if updated:
            await self.repos.commit()
        return updated

    async def set_archived(self, user_id: str, todo_id: str, archived: bool) -> Todo:
        todo = await self._get_owned(user_id, todo_id)
        todo.is_archived = archived
        return await self.repos.todos.update(todo)

    async def delete(self, user_id: str, todo_id: str) -> None:
        todo = await self._get_owned(user_id, todo_id)
        await self.repos.todos.delete(todo.id)
