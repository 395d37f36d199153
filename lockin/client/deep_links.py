"""Invite deep-link parsing.

Recognised forms::

    lockin://invite/<code>
    lockin://invite?code=<code>
    https://<host>/invite/<code>
    https://<host>/<anything>?code=<code>   (or ?ref=<code>)
"""

from __future__ import annotations

from typing import Optional
from urllib.parse import parse_qs, urlparse

from lockin.core.services.invite_codes import normalize_invite_code

APP_SCHEME = "lockin"
_QUERY_KEYS = ("code", "ref")


def parse_invite_code(url: str) -> Optional[str]:
    """Extract the normalised invite code from a deep link, or None."""
    if not url:
        return None
    parsed = urlparse(url.strip())
    scheme = parsed.scheme.lower()
    if scheme == APP_SCHEME:
        # lockin://invite/ABC puts "invite" in the netloc
        segments = [parsed.netloc, *parsed.path.split("/")]
    elif scheme in ("http", "https"):
        segments = parsed.path.split("/")
    else:
        return None
    segments = [segment for segment in segments if segment]

    if len(segments) >= 2 and segments[0].lower() == "invite":
        return normalize_invite_code(segments[1]) or None

    query = parse_qs(parsed.query)
    for key in _QUERY_KEYS:
        values = query.get(key)
        if values and values[0].strip():
            if scheme == APP_SCHEME and (not segments or segments[0].lower() != "invite"):
                return None
            return normalize_invite_code(values[0])
    return None
