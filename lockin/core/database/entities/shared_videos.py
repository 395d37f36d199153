"""Shared video entity model."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlmodel import JSON, Field

from ..base import Base, new_id, utc_now


class SharedVideoBase(Base):
    """Base fields for shared video entity."""

    r2_key: str = Field(description="Object key of the uploaded video")
    thumbnail_r2_key: Optional[str] = Field(default=None, description="Object key of the uploaded thumbnail")
    duration_minutes: float = Field(description="Real study time represented by the video")
    goal_title: Optional[str] = Field(default=None)
    todo_title: Optional[str] = Field(default=None)
    notes: Optional[str] = Field(default=None)
    shared_with_partner_ids: List[str] = Field(default_factory=list, sa_type=JSON)


class SharedVideo(SharedVideoBase, table=True):
    """Entity for videos shared with accountability partners.

    Table: shared_videos
    """

    __tablename__ = "shared_videos"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    user_id: str = Field(max_length=512, index=True, description="Token identifier of the sharer")
    created_at: datetime = Field(default_factory=utc_now, index=True)

    def __repr__(self) -> str:
        return f"SharedVideo(id={self.id}, user_id={self.user_id}, r2_key={self.r2_key})"
