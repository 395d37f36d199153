"""
Identity token verifiers.

Two verifiers are provided:

- ``FirebaseTokenVerifier`` checks RS256 Firebase ID tokens against Google's
  published signing keys.
- ``SharedSecretTokenVerifier`` checks HS256 tokens signed with a configured
  secret. It is meant for local development and tests, and can also mint
  tokens.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Optional

import jwt
from jwt import PyJWKClient

from lockin.core.errors import NotAuthenticatedError
from lockin.core.logging_config import get_logger
from lockin.core.utils import utc_now
from lockin.server.core.config import AuthConfig

from .identity import Identity

logger = get_logger(__name__)

FIREBASE_JWKS_URL = "https://www.googleapis.com/service_accounts/v1/jwk/securetoken@system.gserviceaccount.com"
FIREBASE_ISSUER_PREFIX = "https://securetoken.google.com/"


class TokenVerifier(ABC):
    """Turns a bearer token into an ``Identity`` or raises ``NotAuthenticatedError``."""

    @abstractmethod
    async def verify(self, token: str) -> Identity:
        """Verify ``token`` and return the caller identity."""


class FirebaseTokenVerifier(TokenVerifier):
    """Verifier for Firebase Authentication ID tokens.

    Args:
        project_id: Firebase project id; tokens must carry it as audience
        jwks_url: Override for the signing key set URL
    """

    def __init__(self, project_id: str, *, jwks_url: str = FIREBASE_JWKS_URL) -> None:
        self.project_id = project_id
        self.issuer = f"{FIREBASE_ISSUER_PREFIX}{project_id}"
        self._jwks_client = PyJWKClient(jwks_url, cache_keys=True)

    def _decode(self, token: str) -> dict:
        signing_key = self._jwks_client.get_signing_key_from_jwt(token)
        return jwt.decode(
            token,
            signing_key.key,
            algorithms=["RS256"],
            audience=self.project_id,
            issuer=self.issuer,
            options={"require": ["exp", "iat", "sub", "iss", "aud"]},
        )

    async def verify(self, token: str) -> Identity:
        try:
            # PyJWKClient fetches keys over blocking HTTP.
            claims = await asyncio.to_thread(self._decode, token)
        except jwt.PyJWTError as exc:
            logger.info(f"Rejected Firebase token: {exc}")
            raise NotAuthenticatedError("Invalid identity token") from exc
        return Identity.from_claims(claims)


class SharedSecretTokenVerifier(TokenVerifier):
    """HS256 verifier for development and tests.

    Args:
        secret: Shared signing secret
        issuer: Expected ``iss`` claim
    """

    algorithm = "HS256"

    def __init__(self, secret: str, *, issuer: str = "lockin-dev") -> None:
        if not secret:
            raise ValueError("SharedSecretTokenVerifier requires a non-empty secret")
        self.secret = secret
        self.issuer = issuer

    async def verify(self, token: str) -> Identity:
        try:
            claims = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                issuer=self.issuer,
                options={"require": ["sub", "iss"], "verify_aud": False},
            )
        except jwt.PyJWTError as exc:
            logger.info(f"Rejected shared-secret token: {exc}")
            raise NotAuthenticatedError("Invalid identity token") from exc
        return Identity.from_claims(claims)

    def issue(
        self,
        subject: str,
        *,
        email: Optional[str] = None,
        name: Optional[str] = None,
        picture_url: Optional[str] = None,
        expires_in: timedelta = timedelta(hours=1),
    ) -> str:
        """Mint a token this verifier accepts."""
        now = utc_now()
        claims = {"iss": self.issuer, "sub": subject, "iat": now, "exp": now + expires_in}
        if email is not None:
            claims["email"] = email
        if name is not None:
            claims["name"] = name
        if picture_url is not None:
            claims["picture"] = picture_url
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)


def build_token_verifier(config: AuthConfig) -> TokenVerifier:
    """Create the verifier selected by ``config.mode``.

    Raises:
        ValueError: If the mode is unknown or its settings are missing
    """
    if config.mode == "firebase":
        if not config.firebase_project_id:
            raise ValueError("FIREBASE_PROJECT_ID must be set when LOCKIN_AUTH_MODE=firebase")
        return FirebaseTokenVerifier(config.firebase_project_id)
    if config.mode == "shared_secret":
        if not config.shared_secret:
            raise ValueError("LOCKIN_AUTH_SHARED_SECRET must be set when LOCKIN_AUTH_MODE=shared_secret")
        return SharedSecretTokenVerifier(config.shared_secret, issuer=config.shared_secret_issuer)
    raise ValueError(f"Unknown auth mode: {config.mode}")
