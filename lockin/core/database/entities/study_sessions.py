"""Study session entity model."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, new_id, utc_now


class StudySessionBase(Base):
    """Base fields for study session entity."""

    local_video_path: str = Field(description="Path of the recording on the device")
    local_thumbnail_path: Optional[str] = Field(default=None)
    duration_minutes: float = Field(description="Real study time in minutes")
    notes: Optional[str] = Field(default=None)


class StudySession(StudySessionBase, table=True):
    """Entity for recorded study sessions.

    Table: study_sessions
    """

    __tablename__ = "study_sessions"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    user_id: str = Field(max_length=512, index=True, description="Owner token identifier")
    goal_id: str = Field(foreign_key="goals.id", max_length=32, index=True)
    goal_todo_id: Optional[str] = Field(default=None, foreign_key="goal_todos.id", max_length=32, index=True)
    created_at: datetime = Field(default_factory=utc_now, index=True)

    def __repr__(self) -> str:
        return f"StudySession(id={self.id}, goal_id={self.goal_id}, minutes={self.duration_minutes})"
