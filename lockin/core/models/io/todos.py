"""
To-do I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class TodoRead(BaseModel):
    """Schema for reading a to-do from API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    title: str
    description: Optional[str] = None
    is_completed: bool
    is_archived: bool = False
    local_video_path: Optional[str] = None
    local_thumbnail_path: Optional[str] = None
    video_notes: Optional[str] = None
    speed_segments_json: Optional[str] = None
    created_at: datetime


class TodoCreate(BaseModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None


class TodoUpdate(BaseModel):
    """Schema for editing a to-do's text."""

    title: str = Field(min_length=1)
    description: Optional[str] = None


class TodoToggle(BaseModel):
    is_completed: bool


class TodoVideoAttach(BaseModel):
    """Schema for attaching a recording to a to-do; attaching completes it."""

    local_video_path: str
    local_thumbnail_path: Optional[str] = None
    video_notes: Optional[str] = None
    speed_segments_json: Optional[str] = None


class TodoVideoAttachMany(TodoVideoAttach):
    """Attach one recording to several to-dos at once."""

    todo_ids: List[str] = Field(default_factory=list)
