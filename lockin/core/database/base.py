"""
Common base for the Lock In SQLModel entities.

Entity modules import ``new_id`` and ``utc_now`` from here for their primary
key and timestamp defaults.
"""

from __future__ import annotations

from pydantic import ConfigDict
from sqlmodel import SQLModel

from lockin.core.utils import new_id, utc_now

__all__ = ["Base", "new_id", "utc_now"]


class Base(SQLModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)
