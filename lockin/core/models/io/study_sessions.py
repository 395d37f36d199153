"""
Study session I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from lockin.core.services.durations import format_session_duration


class StudySessionRead(BaseModel):
    """Schema for reading a study session from API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    goal_id: str
    goal_todo_id: Optional[str] = None
    local_video_path: str
    local_thumbnail_path: Optional[str] = None
    duration_minutes: float
    notes: Optional[str] = None
    created_at: datetime

    @computed_field  # type: ignore[prop-decorator]
    @property
    def duration_hours(self) -> float:
        return self.duration_minutes / 60

    @computed_field  # type: ignore[prop-decorator]
    @property
    def formatted_duration(self) -> str:
        return format_session_duration(self.duration_minutes)


class StudySessionCreate(BaseModel):
    """Schema for recording a study session via API."""

    goal_id: str
    goal_todo_id: Optional[str] = None
    local_video_path: str
    local_thumbnail_path: Optional[str] = None
    duration_minutes: float = Field(ge=0, description="Real study time in minutes")
    notes: Optional[str] = None


class StudySessionNotesUpdate(BaseModel):
    notes: Optional[str] = None
