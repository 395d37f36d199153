"""Partner invite codes and referral links."""

from __future__ import annotations

import secrets
from typing import Optional

# No 0/O or 1/I so codes survive being read aloud or retyped.
CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
CODE_LENGTH = 8

INVITE_SCHEME = "lockin"


def generate_invite_code(length: int = CODE_LENGTH) -> str:
    return "".join(secrets.choice(CODE_ALPHABET) for _ in range(length))


def normalize_invite_code(raw: str) -> str:
    """Trim and upper-case a user-supplied code."""
    return raw.strip().upper()


def build_invite_link(code: str, base_url: Optional[str] = None) -> str:
    """Return the web link for ``code``, or the app deep link without a base URL."""
    if base_url:
        return f"{base_url.rstrip('/')}/invite/{code}"
    return f"{INVITE_SCHEME}://invite/{code}"
