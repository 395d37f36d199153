"""
User I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class UserRead(BaseModel):
    """Schema for reading a user profile from API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    token_identifier: str
    email: Optional[str] = None
    name: Optional[str] = None
    picture_url: Optional[str] = None
    created_at: datetime
