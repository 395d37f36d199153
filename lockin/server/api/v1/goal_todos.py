"""
API endpoints for goal to-dos.

Goal to-dos are tasks inside a goal: simple checkboxes or hours-tracked
items, optionally recurring daily or weekly.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Query, status

from lockin.core.models.io.goal_todos import (
    GoalTodoCreate,
    GoalTodoProgressRead,
    GoalTodoProgressUpdate,
    GoalTodoRead,
    GoalTodoToggle,
    GoalTodoVideoAttach,
    GoalTodoWithGoalRead,
    RecurringResetResult,
    VideoNotesUpdate,
)
from lockin.server.auth import IdentityDep, OptionalIdentityDep
from lockin.server.services.deps import GoalTodoServiceDep

router = APIRouter(tags=["goal-todos"])

_OWNED_RESPONSES = {
    401: {"description": "Unauthenticated call"},
    403: {"description": "To-do belongs to another user"},
    404: {"description": "Goal todo not found"},
}


@router.get(
    "",
    response_model=List[GoalTodoRead],
    summary="List Goal To-dos",
    description="List the active to-dos of one of the caller's goals. Empty when the goal is missing or not owned.",
)
async def list_goal_todos(
    identity: OptionalIdentityDep,
    service: GoalTodoServiceDep,
    goal_id: str = Query(description="Goal whose to-dos to list"),
) -> List[GoalTodoRead]:
    if identity is None:
        return []
    todos = await service.list_by_goal(identity.token_identifier, goal_id)
    return [GoalTodoRead.model_validate(todo) for todo in todos]


@router.get(
    "/all",
    response_model=List[GoalTodoWithGoalRead],
    summary="List All Goal To-dos",
    description="List every active goal to-do of the caller, each annotated with its goal title.",
)
async def list_all_goal_todos(identity: OptionalIdentityDep, service: GoalTodoServiceDep) -> List[GoalTodoWithGoalRead]:
    if identity is None:
        return []
    rows = await service.list_all(identity.token_identifier)
    return [
        GoalTodoWithGoalRead.model_validate({**GoalTodoRead.model_validate(todo).model_dump(), "goal_title": title})
        for todo, title in rows
    ]


@router.get(
    "/archived",
    response_model=List[GoalTodoRead],
    summary="List Archived Goal To-dos",
    description="List the caller's archived goal to-dos, newest first.",
)
async def list_archived_goal_todos(identity: OptionalIdentityDep, service: GoalTodoServiceDep) -> List[GoalTodoRead]:
    if identity is None:
        return []
    return [GoalTodoRead.model_validate(todo) for todo in await service.list_archived(identity.token_identifier)]


@router.post(
    "",
    response_model=GoalTodoRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Goal To-do",
    description="Add a to-do to one of the caller's goals.",
    responses={401: {"description": "Unauthenticated call"}, 404: {"description": "Goal not found"}},
)
async def create_goal_todo(data: GoalTodoCreate, identity: IdentityDep, service: GoalTodoServiceDep) -> GoalTodoRead:
    """
    Create a goal to-do.

    - **todo_type**: ``simple`` (checkbox) or ``hours`` (tracks study time).
    - **estimated_hours**: Only kept for ``hours`` to-dos; their completed hours start at zero.
    - **frequency**: ``none``, ``daily`` or ``weekly``.
    """
    return GoalTodoRead.model_validate(await service.create(identity.token_identifier, data))


@router.post(
    "/{todo_id}/toggle",
    response_model=GoalTodoRead,
    summary="Toggle Goal To-do",
    responses=_OWNED_RESPONSES,
)
async def toggle_goal_todo(
    todo_id: str, data: GoalTodoToggle, identity: IdentityDep, service: GoalTodoServiceDep
) -> GoalTodoRead:
    return GoalTodoRead.model_validate(await service.toggle(identity.token_identifier, todo_id, data.is_completed))


@router.post(
    "/{todo_id}/progress",
    response_model=GoalTodoProgressRead,
    summary="Add Goal To-do Hours",
    description="Add hours to an hours-type to-do; it completes once its estimate is reached.",
    responses={**_OWNED_RESPONSES, 400: {"description": "Cannot update hours on simple todo"}},
)
async def update_goal_todo_progress(
    todo_id: str, data: GoalTodoProgressUpdate, identity: IdentityDep, service: GoalTodoServiceDep
) -> GoalTodoProgressRead:
    todo = await service.update_progress(identity.token_identifier, todo_id, data.additional_hours)
    return GoalTodoProgressRead(completed_hours=todo.completed_hours or 0.0, is_completed=todo.is_completed)


@router.put(
    "/{todo_id}/video",
    response_model=GoalTodoRead,
    summary="Attach Video",
    description="Attach a recorded video (device paths) to a goal to-do.",
    responses=_OWNED_RESPONSES,
)
async def attach_goal_todo_video(
    todo_id: str, data: GoalTodoVideoAttach, identity: IdentityDep, service: GoalTodoServiceDep
) -> GoalTodoRead:
    return GoalTodoRead.model_validate(await service.attach_video(identity.token_identifier, todo_id, data))


@router.patch(
    "/{todo_id}/video",
    response_model=GoalTodoRead,
    summary="Update Video Notes",
    responses=_OWNED_RESPONSES,
)
async def update_goal_todo_video_notes(
    todo_id: str, data: VideoNotesUpdate, identity: IdentityDep, service: GoalTodoServiceDep
) -> GoalTodoRead:
    todo = await service.update_video_notes(identity.token_identifier, todo_id, data.video_notes)
    return GoalTodoRead.model_validate(todo)


@router.delete(
    "/{todo_id}/video",
    response_model=GoalTodoRead,
    summary="Remove Video",
    description="Detach the video and its notes from a goal to-do.",
    responses=_OWNED_RESPONSES,
)
async def remove_goal_todo_video(todo_id: str, identity: IdentityDep, service: GoalTodoServiceDep) -> GoalTodoRead:
    return GoalTodoRead.model_validate(await service.remove_video(identity.token_identifier, todo_id))


@router.post("/{todo_id}/archive", response_model=GoalTodoRead, summary="Archive Goal To-do", responses=_OWNED_RESPONSES)
async def archive_goal_todo(todo_id: str, identity: IdentityDep, service: GoalTodoServiceDep) -> GoalTodoRead:
    return GoalTodoRead.model_validate(await service.set_archived(identity.token_identifier, todo_id, True))


@router.post(
    "/{todo_id}/unarchive", response_model=GoalTodoRead, summary="Unarchive Goal To-do", responses=_OWNED_RESPONSES
)
async def unarchive_goal_todo(todo_id: str, identity: IdentityDep, service: GoalTodoServiceDep) -> GoalTodoRead:
    return GoalTodoRead.model_validate(await service.set_archived(identity.token_identifier, todo_id, False))


@router.delete(
    "/{todo_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Goal To-do",
    responses=_OWNED_RESPONSES,
)
async def delete_goal_todo(todo_id: str, identity: IdentityDep, service: GoalTodoServiceDep) -> None:
    await service.delete(identity.token_identifier, todo_id)


@router.post(
    "/reset-recurring",
    response_model=RecurringResetResult,
    summary="Reset Recurring To-dos",
    description="Reset the goal's recurring to-dos whose day or week has rolled over since their last reset.",
    responses={401: {"description": "Unauthenticated call"}, 404: {"description": "Goal not found"}},
)
async def check_and_reset_recurring(
    identity: IdentityDep,
    service: GoalTodoServiceDep,
    goal_id: str = Query(description="Goal whose recurring to-dos to check"),
) -> RecurringResetResult:
    """
    Check and reset recurring to-dos for one goal.

    The app calls this when a goal is opened so resets show up without waiting
    for the hourly job.
    """
    count = await service.check_and_reset_recurring(identity.token_identifier, goal_id)
    return RecurringResetResult(reset_count=count)
