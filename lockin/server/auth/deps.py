"""
Identity dependencies for API endpoints.

Queries use ``OptionalIdentityDep`` and answer with empty results for anonymous
callers; mutations use ``IdentityDep`` and fail with 401. A token that is
present but invalid is rejected in both cases.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from lockin.core.errors import NotAuthenticatedError
from lockin.server.core.config import settings

from .identity import Identity
from .verifiers import TokenVerifier, build_token_verifier

bearer_scheme = HTTPBearer(auto_error=False, description="Identity provider ID token")


@lru_cache(maxsize=1)
def get_token_verifier() -> TokenVerifier:
    """Process-wide verifier built from settings."""
    return build_token_verifier(settings.auth)


async def get_optional_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    verifier: TokenVerifier = Depends(get_token_verifier),
) -> Optional[Identity]:
    """Resolve the caller, or None when no bearer token was sent."""
    if credentials is None or not credentials.credentials:
        return None
    return await verifier.verify(credentials.credentials)


async def require_identity(identity: Optional[Identity] = Depends(get_optional_identity)) -> Identity:
    """Resolve the caller or fail with ``NotAuthenticatedError``."""
    if identity is None:
        raise NotAuthenticatedError()
    return identity


OptionalIdentityDep = Annotated[Optional[Identity], Depends(get_optional_identity)]
IdentityDep = Annotated[Identity, Depends(require_identity)]
