"""
API endpoints for the caller's profile.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter

from lockin.core.models.io.common import MessageResult
from lockin.core.models.io.users import UserRead
from lockin.server.auth import IdentityDep, OptionalIdentityDep
from lockin.server.services.deps import UserServiceDep

router = APIRouter(tags=["users"])


@router.post(
    "/me",
    response_model=UserRead,
    summary="Store Current User",
    description="Create or refresh the caller's profile from the identity token's claims.",
    responses={401: {"description": "Unauthenticated call"}},
)
async def store_current_user(identity: IdentityDep, service: UserServiceDep) -> UserRead:
    return UserRead.model_validate(await service.store_current_user(identity))


@router.get(
    "/me",
    response_model=Optional[UserRead],
    summary="Get Current User",
    description="The caller's stored profile, or null when anonymous or not yet stored.",
)
async def get_current_user(identity: OptionalIdentityDep, service: UserServiceDep) -> Optional[UserRead]:
    if identity is None:
        return None
    user = await service.get_current_user(identity)
    return UserRead.model_validate(user) if user else None


@router.delete(
    "/me/data",
    response_model=MessageResult,
    summary="Delete All My Data",
    description="Permanently delete every goal, to-do, session, partnership, invite and shared video of the caller.",
    responses={401: {"description": "Unauthenticated call"}},
)
async def delete_all_data(identity: IdentityDep, service: UserServiceDep) -> MessageResult:
    return MessageResult(message=await service.delete_all_data(identity))
