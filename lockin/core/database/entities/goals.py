"""
Goal entity model.

A goal is a study target measured in hours. Progress is accumulated from
study sessions and manual updates.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Index
from sqlmodel import Field

from lockin.core.models.enums import GoalStatus

from ..base import Base, new_id, utc_now


class GoalBase(Base):
    """Base fields for goal entity."""

    title: str = Field(max_length=256, description="Goal title")
    description: str = Field(default="", description="Goal description")
    target_hours: float = Field(description="Hours needed to complete the goal")
    completed_hours: float = Field(default=0.0, description="Hours studied so far")
    status: GoalStatus = Field(default=GoalStatus.active, description="Lifecycle status")
    is_archived: bool = Field(default=False, description="Hidden from the active list")


class Goal(GoalBase, table=True):
    """Entity for study goals.

    Table: goals
    """

    __tablename__ = "goals"
    __table_args__ = (
        Index("ix_goals_user_status", "user_id", "status"),
        Index("ix_goals_user_archived", "user_id", "is_archived"),
        {"extend_existing": True},
    )

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    user_id: str = Field(max_length=512, index=True, description="Owner token identifier")
    created_at: datetime = Field(default_factory=utc_now, index=True)

    def __repr__(self) -> str:
        return f"Goal(id={self.id}, title={self.title}, status={self.status})"
