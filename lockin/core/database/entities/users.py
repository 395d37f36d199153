"""
User entity model.

A user row mirrors the profile carried by the caller's identity token and is
upserted whenever the client signs in.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, new_id, utc_now


class UserBase(Base):
    """Base fields for user entity."""

    token_identifier: str = Field(
        max_length=512, unique=True, index=True, description="Identity token issuer and subject"
    )
    email: Optional[str] = Field(default=None, max_length=320, index=True, description="Lower-cased email")
    name: Optional[str] = Field(default=None, max_length=256, description="Display name")
    picture_url: Optional[str] = Field(default=None, description="Avatar URL")


class User(UserBase, table=True):
    """Entity for user profiles.

    Table: users
    """

    __tablename__ = "users"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    created_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"User(id={self.id}, token_identifier={self.token_identifier})"
