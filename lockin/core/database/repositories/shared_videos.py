"""
Shared video repository implementation.

Recipient lists are stored as JSON, so recipient filtering happens after the
rows are loaded.
"""

from __future__ import annotations

from typing import Iterable, List

from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from ..entities.shared_videos import SharedVideo
from .base import AsyncSQLModelRepository


class SharedVideoRepository(AsyncSQLModelRepository[SharedVideo]):
    """Repository for shared video data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, SharedVideo)

    async def list_by_owner(self, user_id: str) -> List[SharedVideo]:
        stmt = select(SharedVideo).where(SharedVideo.user_id == user_id)
        return await self.fetch_all(self.newest_first(stmt))

    async def list_shared_with(self, viewer_id: str, owner_ids: Iterable[str]) -> List[SharedVideo]:
        """List videos that any of ``owner_ids`` shared with ``viewer_id``.

        Args:
            viewer_id: Token identifier of the recipient
            owner_ids: Token identifiers of candidate sharers

        Returns:
            List of SharedVideo instances, newest first
        """
        owner_ids = list(owner_ids)
        if not owner_ids:
            return []
        stmt = self.newest_first(select(SharedVideo).where(col(SharedVideo.user_id).in_(owner_ids)))
        return [video for video in await self.fetch_all(stmt) if viewer_id in (video.shared_with_partner_ids or [])]
