"""
API endpoints for standalone to-dos.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, status

from lockin.core.models.io.todos import (
    TodoCreate,
    TodoRead,
    TodoToggle,
    TodoUpdate,
    TodoVideoAttach,
    TodoVideoAttachMany,
)
from lockin.server.auth import IdentityDep, OptionalIdentityDep
from lockin.server.services.deps import TodoServiceDep

router = APIRouter(tags=["todos"])

_OWNED_RESPONSES = {
    401: {"description": "Unauthenticated call"},
    403: {"description": "To-do belongs to another user"},
    404: {"description": "Todo not found"},
}


@router.get("", response_model=List[TodoRead], summary="List To-dos")
async def list_todos(identity: OptionalIdentityDep, service: TodoServiceDep) -> List[TodoRead]:
    if identity is None:
        return []
    return [TodoRead.model_validate(todo) for todo in await service.list_todos(identity.token_identifier)]


@router.get("/archived", response_model=List[TodoRead], summary="List Archived To-dos")
async def list_archived_todos(identity: OptionalIdentityDep, service: TodoServiceDep) -> List[TodoRead]:
    if identity is None:
        return []
    return [TodoRead.model_validate(todo) for todo in await service.list_archived(identity.token_identifier)]


@router.post(
    "/attach-video",
    response_model=List[TodoRead],
    summary="Attach Video To Many",
    description="Attach one recording to several to-dos. Missing or foreign ids are skipped.",
    responses={401: {"description": "Unauthenticated call"}},
)
async def attach_video_to_multiple_todos(
    data: TodoVideoAttachMany, identity: IdentityDep, service: TodoServiceDep
) -> List[TodoRead]:
    video = TodoVideoAttach.model_validate(data.model_dump(exclude={"todo_ids"}))
    todos = await service.attach_video_to_multiple(identity.token_identifier, data.todo_ids, video)
    return [TodoRead.model_validate(todo) for todo in todos]


@router.get(
    "/{todo_id}",
    response_model=Optional[TodoRead],
    summary="Get To-do",
    description="Retrieve one to-do. Returns null when it does not exist.",
    responses={403: {"description": "To-do belongs to another user"}},
)
async def get_todo(todo_id: str, identity: OptionalIdentityDep, service: TodoServiceDep) -> Optional[TodoRead]:
    if identity is None:
        return None
    todo = await service.get_todo(identity.token_identifier, todo_id)
    return TodoRead.model_validate(todo) if todo else None


@router.post(
    "",
    response_model=TodoRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create To-do",
    responses={401: {"description": "Unauthenticated call"}},
)
async def create_todo(data: TodoCreate, identity: IdentityDep, service: TodoServiceDep) -> TodoRead:
    return TodoRead.model_validate(await service.create(identity.token_identifier, data))


@router.post("/{todo_id}/toggle", response_model=TodoRead, summary="Toggle To-do", responses=_OWNED_RESPONSES)
async def toggle_todo(todo_id: str, data: TodoToggle, identity: IdentityDep, service: TodoServiceDep) -> TodoRead:
    return TodoRead.model_validate(await service.toggle(identity.token_identifier, todo_id, data.is_completed))


@router.patch("/{todo_id}", response_model=TodoRead, summary="Update To-do", responses=_OWNED_RESPONSES)
async def update_todo(todo_id: str, data: TodoUpdate, identity: IdentityDep, service: TodoServiceDep) -> TodoRead:
    return TodoRead.model_validate(await service.update(identity.token_identifier, todo_id, data))


@router.put(
    "/{todo_id}/video",
    response_model=TodoRead,
    summary="Attach Video",
    description="Attach a recording to a to-do and mark it completed.",
    responses=_OWNED_RESPONSES,
)
async def attach_todo_video(
    todo_id: str, data: TodoVideoAttach, identity: IdentityDep, service: TodoServiceDep
) -> TodoRead:
    return TodoRead.model_validate(await service.attach_video(identity.token_identifier, todo_id, data))


@router.post("/{todo_id}/archive", response_model=TodoRead, summary="Archive To-do", responses=_OWNED_RESPONSES)
async def archive_todo(todo_id: str, identity: IdentityDep, service: TodoServiceDep) -> TodoRead:
    return TodoRead.model_validate(await service.set_archived(identity.token_identifier, todo_id, True))


@router.post("/{todo_id}/unarchive", response_model=TodoRead, summary="Unarchive To-do", responses=_OWNED_RESPONSES)
async def unarchive_todo(todo_id: str, identity: IdentityDep, service: TodoServiceDep) -> TodoRead:
    return TodoRead.model_validate(await service.set_archived(identity.token_identifier, todo_id, False))


@router.delete(
    "/{todo_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete To-do",
    responses=_OWNED_RESPONSES,
)
async def delete_todo(todo_id: str, identity: IdentityDep, service: TodoServiceDep) -> None:
    await service.delete(identity.token_identifier, todo_id)
