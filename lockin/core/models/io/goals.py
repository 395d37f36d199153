"""
Goal I/O models for API requests and responses.

This module contains Pydantic-based I/O schemas for goal endpoints, including
the derived progress fields clients display.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from lockin.core.models.enums import GoalStatus
from lockin.core.services.durations import format_progress


class GoalRead(BaseModel):
    """Schema for reading a goal from API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    title: str
    description: str = ""
    target_hours: float
    completed_hours: float
    status: GoalStatus
    is_archived: bool = False
    created_at: datetime

    @computed_field  # type: ignore[prop-decorator]
    @property
    def progress_percentage(self) -> float:
        if self.target_hours <= 0:
            return 0.0
        return min(self.completed_hours / self.target_hours * 100, 100.0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def hours_remaining(self) -> float:
        return max(self.target_hours - self.completed_hours, 0.0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def formatted_progress(self) -> str:
        return format_progress(self.completed_hours, self.target_hours)


class GoalCreate(BaseModel):
    """Schema for creating a goal via API."""

    title: str = Field(min_length=1, description="Goal title")
    description: str = Field(default="", description="Goal description")
    target_hours: float = Field(gt=0, description="Hours needed to complete the goal")


class GoalUpdate(BaseModel):
    """Schema for patching a goal's title and/or status."""

    title: Optional[str] = Field(default=None, min_length=1)
    status: Optional[GoalStatus] = None


class GoalProgressUpdate(BaseModel):
    additional_hours: float = Field(description="Hours to add; negative values correct mistakes")


class GoalProgressRead(BaseModel):
    """Goal progress after an update."""

    completed_hours: float
    status: GoalStatus
