"""
Goal to-do entity model.

Goal to-dos are tasks inside a goal. ``hours`` to-dos accumulate study time
toward an estimate; recurring to-dos are reset daily or weekly by the
scheduler.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from lockin.core.models.enums import GoalTodoType, TodoFrequency

from ..base import Base, new_id, utc_now


class GoalTodoBase(Base):
    """Base fields for goal to-do entity."""

    title: str = Field(max_length=256, description="To-do title")
    description: Optional[str] = Field(default=None, description="To-do description")
    todo_type: GoalTodoType = Field(default=GoalTodoType.simple, description="Checkbox or hours-tracked")

    # Hours-based to-dos only
    estimated_hours: Optional[float] = Field(default=None, description="Hours expected for this to-do")
    completed_hours: Optional[float] = Field(default=None, description="Hours studied on this to-do")

    is_completed: bool = Field(default=False)
    is_archived: bool = Field(default=False)

    # Recurrence
    frequency: TodoFrequency = Field(default=TodoFrequency.none, description="Reset cadence")
    last_reset_at: Optional[datetime] = Field(default=None, description="Last automatic reset")

    # Video attachment
    local_video_path: Optional[str] = Field(default=None)
    local_thumbnail_path: Optional[str] = Field(default=None)
    video_duration_minutes: Optional[float] = Field(default=None)
    video_notes: Optional[str] = Field(default=None)


class GoalTodo(GoalTodoBase, table=True):
    """Entity for goal to-dos.

    Table: goal_todos
    """

    __tablename__ = "goal_todos"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    user_id: str = Field(max_length=512, index=True, description="Owner token identifier")
    goal_id: str = Field(foreign_key="goals.id", max_length=32, index=True)
    created_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"GoalTodo(id={self.id}, goal_id={self.goal_id}, title={self.title})"
