"""
Standalone to-do entity model.

Speed segments are stored as the raw JSON text the recorder produced; the
server never interprets them.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Index
from sqlmodel import Field

from ..base import Base, new_id, utc_now


class TodoBase(Base):
    """Base fields for to-do entity."""

    title: str = Field(max_length=256)
    description: Optional[str] = Field(default=None)
    is_completed: bool = Field(default=False)
    is_archived: bool = Field(default=False)
    local_video_path: Optional[str] = Field(default=None)
    local_thumbnail_path: Optional[str] = Field(default=None)
    video_notes: Optional[str] = Field(default=None)
    speed_segments_json: Optional[str] = Field(default=None, description="JSON array of playback speed segments")


class Todo(TodoBase, table=True):
    """Entity for standalone to-dos.

    Table: todos
    """

    __tablename__ = "todos"
    __table_args__ = (
        Index("ix_todos_user_completed", "user_id", "is_completed"),
        Index("ix_todos_user_archived", "user_id", "is_archived"),
        {"extend_existing": True},
    )

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    user_id: str = Field(max_length=512, index=True, description="Owner token identifier")
    created_at: datetime = Field(default_factory=utc_now, index=True)

    def __repr__(self) -> str:
        return f"Todo(id={self.id}, title={self.title}, completed={self.is_completed})"
