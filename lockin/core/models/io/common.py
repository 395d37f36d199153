"""Shared I/O models for API responses."""

from __future__ import annotations

from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

ItemType = TypeVar("ItemType")


class CursorPage(BaseModel, Generic[ItemType]):
    """One page of a cursor-paginated listing."""

    page: List[ItemType] = Field(default_factory=list)
    continue_cursor: Optional[str] = Field(default=None, description="Pass back as ``cursor`` for the next page")
    is_done: bool = Field(default=True, description="True when no further pages exist")


class StatusResult(BaseModel):
    """Outcome of a mutation that reports a status word (e.g. ``"accepted"``)."""

    status: str


class MessageResult(BaseModel):
    message: str
