"""
Shared video I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from lockin.core.services.durations import format_minutes
from lockin.core.services.presentation import context_description


class SharedVideoRead(BaseModel):
    """Schema for reading a shared video from API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    r2_key: str
    thumbnail_r2_key: Optional[str] = None
    duration_minutes: float
    goal_title: Optional[str] = None
    todo_title: Optional[str] = None
    notes: Optional[str] = None
    shared_with_partner_ids: List[str] = Field(default_factory=list)
    created_at: datetime

    @computed_field  # type: ignore[prop-decorator]
    @property
    def formatted_duration(self) -> str:
        return format_minutes(self.duration_minutes)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def context_description(self) -> str:
        return context_description(self.goal_title, self.todo_title)


class SharedVideoWithSenderRead(SharedVideoRead):
    """Shared video annotated with the sharer's profile."""

    sender_name: Optional[str] = None
    sender_email: Optional[str] = None


class ShareVideoRequest(BaseModel):
    """Schema for sharing an uploaded video with partners."""

    r2_key: str
    thumbnail_r2_key: Optional[str] = None
    duration_minutes: float = Field(ge=0)
    goal_title: Optional[str] = None
    todo_title: Optional[str] = None
    notes: Optional[str] = None
    partner_ids: List[str] = Field(default_factory=list)


class PresignedUrlRead(BaseModel):
    """A time-limited URL; ``url`` is None when there is no object to sign."""

    url: Optional[str] = None
    expires_in: int


class UploadUrlRead(BaseModel):
    """Presigned PUT URL for a new object."""

    url: str
    key: str
    expires_in: int


class UploadUrlRequest(BaseModel):
    content_type: str = Field(default="video/mp4")
    kind: str = Field(default="video", pattern="^(video|thumbnail)$")
