"""
API endpoints for study goals.

Queries answer anonymous callers with empty results; mutations require an
identity and operate only on the caller's own goals.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Query, status

from lockin.core.models.io.common import CursorPage
from lockin.core.models.io.goals import GoalCreate, GoalProgressRead, GoalProgressUpdate, GoalRead, GoalUpdate
from lockin.server.auth import IdentityDep, OptionalIdentityDep
from lockin.server.services.deps import GoalServiceDep

router = APIRouter(tags=["goals"])

_OWNED_RESPONSES = {
    401: {"description": "Unauthenticated call"},
    403: {"description": "Goal belongs to another user"},
    404: {"description": "Goal not found"},
}


@router.get(
    "",
    response_model=List[GoalRead],
    summary="List Goals",
    description="List the caller's active (non-archived) goals, newest first.",
    response_description="A list of goals; empty for anonymous callers.",
)
async def list_goals(identity: OptionalIdentityDep, service: GoalServiceDep) -> List[GoalRead]:
    if identity is None:
        return []
    goals = await service.list_goals(identity.token_identifier)
    return [GoalRead.model_validate(goal) for goal in goals]


@router.get(
    "/archived",
    response_model=CursorPage[GoalRead],
    summary="List Archived Goals",
    description="Page through the caller's archived goals, newest first.",
    response_description="One page of archived goals with a continue cursor.",
)
async def list_archived_goals(
    identity: OptionalIdentityDep,
    service: GoalServiceDep,
    limit: int = Query(default=20, ge=1, le=100, description="Page size"),
    cursor: Optional[str] = Query(default=None, description="Continue cursor from the previous page"),
) -> CursorPage[GoalRead]:
    """
    List archived goals.

    - **limit**: Maximum number of goals on the page.
    - **cursor**: The ``continue_cursor`` of the previous page; omit for the first page.
    """
    if identity is None:
        return CursorPage[GoalRead]()
    return await service.list_archived(identity.token_identifier, limit=limit, cursor=cursor)


@router.get(
    "/{goal_id}",
    response_model=Optional[GoalRead],
    summary="Get Goal",
    description="Retrieve one of the caller's goals. Returns null when it is missing or not owned.",
    response_description="The goal or null.",
)
async def get_goal(goal_id: str, identity: OptionalIdentityDep, service: GoalServiceDep) -> Optional[GoalRead]:
    if identity is None:
        return None
    goal = await service.get_goal(identity.token_identifier, goal_id)
    return GoalRead.model_validate(goal) if goal else None


@router.post(
    "",
    response_model=GoalRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Goal",
    description="Create a new study goal with zero completed hours.",
    response_description="The created goal.",
    responses={401: {"description": "Unauthenticated call"}},
)
async def create_goal(data: GoalCreate, identity: IdentityDep, service: GoalServiceDep) -> GoalRead:
    """
    Create a goal.

    - **title**: Goal title.
    - **description**: Free-form description.
    - **target_hours**: Hours needed to complete the goal.
    """
    goal = await service.create_goal(identity.token_identifier, data)
    return GoalRead.model_validate(goal)


@router.post(
    "/{goal_id}/progress",
    response_model=GoalProgressRead,
    summary="Add Goal Progress",
    description="Add hours to a goal. The goal becomes completed once the target is reached, active otherwise.",
    responses=_OWNED_RESPONSES,
)
async def update_goal_progress(
    goal_id: str, data: GoalProgressUpdate, identity: IdentityDep, service: GoalServiceDep
) -> GoalProgressRead:
    goal = await service.update_progress(identity.token_identifier, goal_id, data.additional_hours)
    return GoalProgressRead(completed_hours=goal.completed_hours, status=goal.status)


@router.patch(
    "/{goal_id}",
    response_model=GoalRead,
    summary="Update Goal",
    description="Change a goal's title and/or status.",
    responses=_OWNED_RESPONSES,
)
async def update_goal(goal_id: str, data: GoalUpdate, identity: IdentityDep, service: GoalServiceDep) -> GoalRead:
    goal = await service.update_goal(identity.token_identifier, goal_id, data)
    return GoalRead.model_validate(goal)


@router.post(
    "/{goal_id}/archive",
    response_model=GoalRead,
    summary="Archive Goal",
    description="Hide a goal from the active list.",
    responses=_OWNED_RESPONSES,
)
async def archive_goal(goal_id: str, identity: IdentityDep, service: GoalServiceDep) -> GoalRead:
    return GoalRead.model_validate(await service.set_archived(identity.token_identifier, goal_id, True))


@router.post(
    "/{goal_id}/unarchive",
    response_model=GoalRead,
    summary="Unarchive Goal",
    description="Return an archived goal to the active list.",
    responses=_OWNED_RESPONSES,
)
async def unarchive_goal(goal_id: str, identity: IdentityDep, service: GoalServiceDep) -> GoalRead:
    return GoalRead.model_validate(await service.set_archived(identity.token_identifier, goal_id, False))


@router.delete(
    "/{goal_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Goal",
    description="Delete a goal together with its goal to-dos and study sessions.",
    responses=_OWNED_RESPONSES,
)
async def delete_goal(goal_id: str, identity: IdentityDep, service: GoalServiceDep) -> None:
    """
    Delete a goal.

    Removes the goal and cascades to every goal to-do and study session that
    belongs to it. This cannot be undone.
    """
    await service.delete_goal(identity.token_identifier, goal_id)
