"""
Goal to-do I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from lockin.core.models.enums import GoalTodoType, TodoFrequency
from lockin.core.services.durations import format_video_duration


class GoalTodoRead(BaseModel):
    """Schema for reading a goal to-do from API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    goal_id: str
    title: str
    description: Optional[str] = None
    todo_type: GoalTodoType
    estimated_hours: Optional[float] = None
    completed_hours: Optional[float] = None
    is_completed: bool
    is_archived: bool = False
    frequency: TodoFrequency = TodoFrequency.none
    last_reset_at: Optional[datetime] = None
    local_video_path: Optional[str] = None
    local_thumbnail_path: Optional[str] = None
    video_duration_minutes: Optional[float] = None
    video_notes: Optional[str] = None
    created_at: datetime

    @computed_field  # type: ignore[prop-decorator]
    @property
    def progress_percentage(self) -> float:
        if self.todo_type != GoalTodoType.hours or not self.estimated_hours or self.completed_hours is None:
            return 0.0
        return min(self.completed_hours / self.estimated_hours * 100, 100.0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def hours_remaining(self) -> float:
        if self.estimated_hours is None or self.completed_hours is None:
            return 0.0
        return max(self.estimated_hours - self.completed_hours, 0.0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_recurring(self) -> bool:
        return self.frequency != TodoFrequency.none

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_video(self) -> bool:
        return self.local_video_path is not None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def formatted_video_duration(self) -> Optional[str]:
        return format_video_duration(self.video_duration_minutes)


class GoalTodoWithGoalRead(GoalTodoRead):
    """Goal to-do annotated with its goal's title."""

    goal_title: str = "Unknown Goal"


class GoalTodoCreate(BaseModel):
    """Schema for creating a goal to-do via API."""

    goal_id: str
    title: str = Field(min_length=1)
    description: Optional[str] = None
    todo_type: GoalTodoType = GoalTodoType.simple
    estimated_hours: Optional[float] = Field(default=None, ge=0, description="Only kept for hours to-dos")
    frequency: TodoFrequency = TodoFrequency.none


class GoalTodoToggle(BaseModel):
    is_completed: bool


class GoalTodoProgressUpdate(BaseModel):
    additional_hours: float


class GoalTodoProgressRead(BaseModel):
    completed_hours: float
    is_completed: bool


class GoalTodoVideoAttach(BaseModel):
    """Schema for attaching a recorded video to a goal to-do."""

    local_video_path: str
    local_thumbnail_path: Optional[str] = None
    video_duration_minutes: Optional[float] = None
    video_notes: Optional[str] = None


class VideoNotesUpdate(BaseModel):
    video_notes: Optional[str] = None


class RecurringResetResult(BaseModel):
    """Number of to-dos a reset pass unchecked."""

    reset_count: int
