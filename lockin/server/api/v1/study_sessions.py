"""
API endpoints for study sessions.

Recording a session credits its minutes to the goal and, when linked, to an
hours-type goal to-do. Deleting a session takes the minutes back.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Query, status

from lockin.core.models.io.study_sessions import StudySessionCreate, StudySessionNotesUpdate, StudySessionRead
from lockin.server.auth import IdentityDep, OptionalIdentityDep
from lockin.server.services.deps import StudySessionServiceDep

router = APIRouter(tags=["study-sessions"])

_OWNED_RESPONSES = {
    401: {"description": "Unauthenticated call"},
    403: {"description": "Session belongs to another user"},
    404: {"description": "Study session not found"},
}


@router.get(
    "",
    response_model=List[StudySessionRead],
    summary="List Study Sessions",
    description="List the sessions recorded for a goal, or for a single goal to-do when `goal_todo_id` is given.",
)
async def list_study_sessions(
    identity: OptionalIdentityDep,
    service: StudySessionServiceDep,
    goal_id: Optional[str] = Query(default=None),
    goal_todo_id: Optional[str] = Query(default=None),
) -> List[StudySessionRead]:
    if identity is None:
        return []
    if goal_todo_id is not None:
        sessions = await service.list_by_goal_todo(identity.token_identifier, goal_todo_id)
    elif goal_id is not None:
        sessions = await service.list_by_goal(identity.token_identifier, goal_id)
    else:
        return []
    return [StudySessionRead.model_validate(session) for session in sessions]


@router.post(
    "",
    response_model=StudySessionRead,
    status_code=status.HTTP_201_CREATED,
    summary="Record Study Session",
    responses={
        401: {"description": "Unauthenticated call"},
        403: {"description": "Goal or goal to-do belongs to another user"},
        404: {"description": "Goal not found"},
    },
)
async def create_study_session(
    data: StudySessionCreate, identity: IdentityDep, service: StudySessionServiceDep
) -> StudySessionRead:
    """
    Record a study session.

    - **duration_minutes**: Real study time; added to the goal as hours.
    - **goal_todo_id**: Optional goal to-do of the same goal to credit as well.
    """
    return StudySessionRead.model_validate(await service.create(identity.token_identifier, data))


@router.patch(
    "/{session_id}",
    response_model=StudySessionRead,
    summary="Update Session Notes",
    responses=_OWNED_RESPONSES,
)
async def update_study_session_notes(
    session_id: str, data: StudySessionNotesUpdate, identity: IdentityDep, service: StudySessionServiceDep
) -> StudySessionRead:
    session = await service.update_notes(identity.token_identifier, session_id, data.notes)
    return StudySessionRead.model_validate(session)


@router.delete(
    "/{session_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Study Session",
    description="Delete a session and subtract its hours from the goal and goal to-do.",
    responses=_OWNED_RESPONSES,
)
async def delete_study_session(session_id: str, identity: IdentityDep, service: StudySessionServiceDep) -> None:
    await service.delete(identity.token_identifier, session_id)
