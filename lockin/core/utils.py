"""Small helpers shared by every layer."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current UTC time as a naive datetime, the form every table stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def new_id() -> str:
    """Opaque 32-character hex identifier."""
    return uuid.uuid4().hex
