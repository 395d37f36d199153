"""Verified caller identity."""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel


class Identity(BaseModel):
    """Claims extracted from a verified identity token.

    ``token_identifier`` (``"{issuer}|{subject}"``) is the stable user key every
    table stores as ``user_id``.
    """

    issuer: str
    subject: str
    email: Optional[str] = None
    name: Optional[str] = None
    picture_url: Optional[str] = None

    @property
    def token_identifier(self) -> str:
        return f"{self.issuer}|{self.subject}"

    @property
    def normalized_email(self) -> Optional[str]:
        return self.email.strip().lower() if self.email else None

    @classmethod
    def from_claims(cls, claims: Dict[str, Any]) -> "Identity":
        """Build an identity from decoded JWT claims."""
        return cls(
            issuer=claims["iss"],
            subject=claims["sub"],
            email=claims.get("email"),
            name=claims.get("name"),
            picture_url=claims.get("picture"),
        )
