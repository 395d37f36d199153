"""
Service for videos shared with accountability partners.
"""

from __future__ import annotations

import logging
from typing import List, Tuple

from lockin.core.database.entities.partners import AccountabilityPartner
from lockin.core.database.entities.shared_videos import SharedVideo
from lockin.core.database.repositories.bundle import SqlRepoBundle
from lockin.core.errors import InvalidOperationError, NotAuthorizedError, NotFoundError
from lockin.core.models.enums import PartnerStatus
from lockin.core.models.io.shared_videos import PresignedUrlRead, ShareVideoRequest

from .storage import ObjectStorage

logger = logging.getLogger(__name__)

DELETED = "deleted"


def can_view(video: SharedVideo, user_id: str) -> bool:
    return video.user_id == user_id or user_id in (video.shared_with_partner_ids or [])


class SharedVideoService:
    """Service for shared video queries and mutations."""

    def __init__(self, repos: SqlRepoBundle, storage: ObjectStorage) -> None:
        self.repos = repos
        self.storage = storage

    async def share(self, user_id: str, data: ShareVideoRequest) -> SharedVideo:
        """Share an uploaded video with some of the caller's partners.

        Partner ids that are not active partners are dropped.

        Raises:
            InvalidOperationError: If no valid partner remains
        """
        partners = await self.repos.partners.list_for_user(user_id, status=PartnerStatus.active)
        active_ids = {partner.partner_id for partner in partners}
        valid_ids = [partner_id for partner_id in dict.fromkeys(data.partner_ids) if partner_id in active_ids]
        if not valid_ids:
            raise InvalidOperationError("No valid partners to share with")

        video = SharedVideo(
            user_id=user_id,
            r2_key=data.r2_key,
            thumbnail_r2_key=data.thumbnail_r2_key,
            duration_minutes=data.duration_minutes,
            goal_title=data.goal_title,
            todo_title=data.todo_title,
            notes=data.notes,
            shared_with_partner_ids=valid_ids,
        )
        video = await self.repos.shared_videos.create(video)
        logger.info(f"Video {video.id} shared by {user_id} with {len(valid_ids)} partner(s)")
        return video

    async def list_shared_with_me(self, user_id: str) -> List[Tuple[SharedVideo, AccountabilityPartner]]:
        """Videos active partners shared with the caller, newest first, with the sharer's record."""
        partners = {
            partner.partner_id: partner
            for partner in await self.repos.partners.list_for_user(user_id, status=PartnerStatus.active)
        }
        videos = await self.repos.shared_videos.list_shared_with(user_id, partners.keys())
        return [(video, partners[video.user_id]) for video in videos]

    async def list_my_shared(self, user_id: str) -> List[SharedVideo]:
        return await self.repos.shared_videos.list_by_owner(user_id)

    async def _get_viewable(self, user_id: str, video_id: str) -> SharedVideo:
        video = await self.repos.shared_videos.get_by_id(video_id)
        if video is None:
            raise NotFoundError("Video not found")
        if not can_view(video, user_id):
            raise NotAuthorizedError("Not authorized to view this video")
        return video

    async def get(self, user_id: str, video_id: str) -> SharedVideo:
        return await self._get_viewable(user_id, video_id)

    async def view_url(self, user_id: str, video_id: str) -> PresignedUrlRead:
        video = await self._get_viewable(user_id, video_id)
        return PresignedUrlRead(url=self.storage.presigned_get_url(video.r2_key), expires_in=self.storage.expires_in)

    async def thumbnail_url(self, user_id: str, video_id: str) -> PresignedUrlRead:
        video = await self._get_viewable(user_id, video_id)
        return PresignedUrlRead(
            url=self.storage.presigned_get_url(video.thumbnail_r2_key), expires_in=self.storage.expires_in
        )

    async def delete(self, user_id: str, video_id: str) -> str:
        video = await self.repos.shared_videos.get_by_id(video_id)
        if video is None:
            raise NotFoundError("Video not found")
        if video.user_id != user_id:
            raise NotAuthorizedError()
        await self.repos.shared_videos.delete(video.id)
        return DELETED
