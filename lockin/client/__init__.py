"""
Client SDK for the Lock In API.

- api: async httpx client returning the API read models
- local_store: on-device SQLite mirror
- thumbnails: in-memory thumbnail cache with single-flight loading
- sync: auth-gated polling that keeps the mirror fresh
- deep_links: invite link parsing
- errors: API errors and user-facing messages
"""

from .api import LockInClient
from .deep_links import parse_invite_code
from .errors import LockInApiError, user_message
from .local_store import LocalStore
from .sync import SyncCoordinator
from .thumbnails import ThumbnailCache

__all__ = [
    "LocalStore",
    "LockInApiError",
    "LockInClient",
    "SyncCoordinator",
    "ThumbnailCache",
    "parse_invite_code",
    "user_message",
]
