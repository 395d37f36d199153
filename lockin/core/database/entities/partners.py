"""
Accountability partner entity models.

This module contains the partner relationship records and the invites that
create them. An accepted invite produces two mirrored partner rows, one per
side of the relationship.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from lockin.core.models.enums import InviteStatus, PartnerStatus

from ..base import Base, new_id, utc_now


class AccountabilityPartnerBase(Base):
    """Base fields for a partner relationship as seen by ``user_id``."""

    partner_email: str = Field(max_length=320)
    partner_name: Optional[str] = Field(default=None, max_length=256)
    status: PartnerStatus = Field(default=PartnerStatus.pending)


class AccountabilityPartner(AccountabilityPartnerBase, table=True):
    """Entity for accountability partners.

    Table: accountability_partners
    """

    __tablename__ = "accountability_partners"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    user_id: str = Field(max_length=512, index=True, description="Token identifier of the record owner")
    partner_id: str = Field(max_length=512, index=True, description="Token identifier of the partner")
    created_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"AccountabilityPartner(user_id={self.user_id}, partner_id={self.partner_id}, status={self.status})"


class PartnerInviteBase(Base):
    """Base fields for partner invite entity."""

    from_user_email: str = Field(max_length=320)
    from_user_name: Optional[str] = Field(default=None, max_length=256)
    to_email: Optional[str] = Field(
        default=None, max_length=320, index=True, description="Target email; empty for open referral invites"
    )
    status: InviteStatus = Field(default=InviteStatus.pending)


class PartnerInvite(PartnerInviteBase, table=True):
    """Entity for partner invites.

    Table: partner_invites
    """

    __tablename__ = "partner_invites"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    code: str = Field(max_length=16, unique=True, index=True, description="Short shareable invite code")
    from_user_id: str = Field(max_length=512, index=True)
    to_user_id: Optional[str] = Field(default=None, max_length=512)
    created_at: datetime = Field(default_factory=utc_now)
    expires_at: datetime = Field(description="Invite can no longer be accepted after this time")

    def __repr__(self) -> str:
        return f"PartnerInvite(id={self.id}, code={self.code}, status={self.status})"
