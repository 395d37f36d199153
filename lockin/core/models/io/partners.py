"""
Accountability partner I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from lockin.core.models.enums import InviteStatus, PartnerStatus
from lockin.core.services import presentation
from lockin.core.utils import utc_now


class PartnerRead(BaseModel):
    """Schema for reading a partner record from API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    partner_id: str
    partner_email: str
    partner_name: Optional[str] = None
    status: PartnerStatus
    created_at: datetime

    @computed_field  # type: ignore[prop-decorator]
    @property
    def display_name(self) -> str:
        return presentation.display_name(self.partner_name, self.partner_email)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def initials(self) -> str:
        return presentation.initials(self.partner_name, self.partner_email)


class PartnerInviteRead(BaseModel):
    """Schema for reading a partner invite from API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    code: str
    from_user_id: str
    from_user_email: str
    from_user_name: Optional[str] = None
    to_email: Optional[str] = None
    to_user_id: Optional[str] = None
    status: InviteStatus
    created_at: datetime
    expires_at: datetime

    @computed_field  # type: ignore[prop-decorator]
    @property
    def sender_display_name(self) -> str:
        return presentation.display_name(self.from_user_name, self.from_user_email)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_expired(self) -> bool:
        return utc_now() > self.expires_at

    @computed_field  # type: ignore[prop-decorator]
    @property
    def expiry_description(self) -> str:
        return presentation.expiry_description(self.expires_at, utc_now())


class InviteLinkRead(PartnerInviteRead):
    """Open referral invite together with its shareable link."""

    link: str


class SendInviteRequest(BaseModel):
    email: str = Field(min_length=3, description="Email of the person to invite")


class AcceptInviteByCodeRequest(BaseModel):
    code: str = Field(min_length=1)


class PendingInviteCount(BaseModel):
    count: int
