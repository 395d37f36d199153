"""
API endpoints for videos shared with accountability partners.

Video bytes live in object storage; these endpoints manage the metadata and
hand out presigned URLs to the owner and the partners it was shared with.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter

from lockin.core.models.io.common import StatusResult
from lockin.core.models.io.shared_videos import (
    PresignedUrlRead,
    SharedVideoRead,
    SharedVideoWithSenderRead,
    ShareVideoRequest,
)
from lockin.server.auth import IdentityDep, OptionalIdentityDep
from lockin.server.services.deps import SharedVideoServiceDep

router = APIRouter(tags=["shared-videos"])

_VIEW_RESPONSES = {
    401: {"description": "Unauthenticated call"},
    403: {"description": "Not authorized to view this video"},
    404: {"description": "Video not found"},
}


@router.post(
    "",
    response_model=SharedVideoRead,
    summary="Share Video",
    description="Share an uploaded video with some of the caller's active partners.",
    responses={400: {"description": "No valid partners to share with"}, 401: {"description": "Unauthenticated call"}},
)
async def share_video(data: ShareVideoRequest, identity: IdentityDep, service: SharedVideoServiceDep) -> SharedVideoRead:
    """
    Share a video.

    Partner ids that are not active partners of the caller are dropped; the
    request fails when none remain.
    """
    return SharedVideoRead.model_validate(await service.share(identity.token_identifier, data))


@router.get(
    "/shared-with-me",
    response_model=List[SharedVideoWithSenderRead],
    summary="Videos Shared With Me",
    description="Videos active partners shared with the caller, newest first, with the sender's name and email.",
)
async def list_shared_with_me(
    identity: OptionalIdentityDep, service: SharedVideoServiceDep
) -> List[SharedVideoWithSenderRead]:
    if identity is None:
        return []
    rows = await service.list_shared_with_me(identity.token_identifier)
    return [
        SharedVideoWithSenderRead.model_validate(
            {
                **SharedVideoRead.model_validate(video).model_dump(),
                "sender_name": partner.partner_name,
                "sender_email": partner.partner_email,
            }
        )
        for video, partner in rows
    ]


@router.get("/mine", response_model=List[SharedVideoRead], summary="My Shared Videos")
async def list_my_shared(identity: OptionalIdentityDep, service: SharedVideoServiceDep) -> List[SharedVideoRead]:
    if identity is None:
        return []
    return [SharedVideoRead.model_validate(video) for video in await service.list_my_shared(identity.token_identifier)]


@router.get("/{video_id}", response_model=SharedVideoRead, summary="Get Shared Video", responses=_VIEW_RESPONSES)
async def get_shared_video(video_id: str, identity: IdentityDep, service: SharedVideoServiceDep) -> SharedVideoRead:
    return SharedVideoRead.model_validate(await service.get(identity.token_identifier, video_id))


@router.get(
    "/{video_id}/url",
    response_model=PresignedUrlRead,
    summary="Video URL",
    description="Presigned download URL for the video, valid for `expires_in` seconds.",
    responses=_VIEW_RESPONSES,
)
async def get_video_url(video_id: str, identity: IdentityDep, service: SharedVideoServiceDep) -> PresignedUrlRead:
    return await service.view_url(identity.token_identifier, video_id)


@router.get(
    "/{video_id}/thumbnail-url",
    response_model=PresignedUrlRead,
    summary="Thumbnail URL",
    description="Presigned download URL for the thumbnail; `url` is null when the video has none.",
    responses=_VIEW_RESPONSES,
)
async def get_thumbnail_url(video_id: str, identity: IdentityDep, service: SharedVideoServiceDep) -> PresignedUrlRead:
    return await service.thumbnail_url(identity.token_identifier, video_id)


@router.delete(
    "/{video_id}",
    response_model=StatusResult,
    summary="Delete Shared Video",
    description="Delete a video the caller shared.",
    responses=_VIEW_RESPONSES,
)
async def delete_shared_video(video_id: str, identity: IdentityDep, service: SharedVideoServiceDep) -> StatusResult:
    return StatusResult(status=await service.delete(identity.token_identifier, video_id))
