"""
Caller identity for API requests.

Bearer tokens are verified by a pluggable ``TokenVerifier``; endpoints depend on
``get_optional_identity`` (queries) or ``require_identity`` (mutations).
"""

from .deps import (
    IdentityDep,
    OptionalIdentityDep,
    get_optional_identity,
    get_token_verifier,
    require_identity,
)
from .identity import Identity
from .verifiers import (
    FirebaseTokenVerifier,
    SharedSecretTokenVerifier,
    TokenVerifier,
    build_token_verifier,
)

__all__ = [
    "FirebaseTokenVerifier",
    "Identity",
    "IdentityDep",
    "OptionalIdentityDep",
    "SharedSecretTokenVerifier",
    "TokenVerifier",
    "build_token_verifier",
    "get_optional_identity",
    "get_token_verifier",
    "require_identity",
]
