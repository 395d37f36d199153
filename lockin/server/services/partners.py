"""
Service for accountability partners and invites.

An invite either targets an email address or is an open referral invite that
anyone holding its code can redeem. Accepting an invite creates two mirrored
partner records so each side can list the other.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import List, Optional

from lockin.core.database.entities.partners import AccountabilityPartner, PartnerInvite
from lockin.core.database.entities.shared_videos import SharedVideo
from lockin.core.database.repositories.bundle import SqlRepoBundle
from lockin.core.errors import InvalidOperationError, NotAuthorizedError, NotFoundError
from lockin.core.models.enums import InviteStatus, PartnerStatus
from lockin.core.services.invite_codes import generate_invite_code, normalize_invite_code
from lockin.core.utils import utc_now
from lockin.server.auth.identity import Identity

logger = logging.getLogger(__name__)

INVITE_EXPIRY_DAYS = 7
MAX_CODE_ATTEMPTS = 10

ACCEPTED = "accepted"
ALREADY_ACCEPTED = "already_accepted"
DECLINED = "declined"
ALREADY_DECLINED = "already_declined"
CANCELLED = "cancelled"
REMOVED = "removed"


class PartnerService:
    """Service for partner and invite queries and mutations."""

    def __init__(self, repos: SqlRepoBundle) -> None:
        self.repos = repos

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def list_partners(self, user_id: str) -> List[AccountabilityPartner]:
        return await self.repos.partners.list_for_user(user_id, status=PartnerStatus.active)

    async def list_sent_invites(self, user_id: str) -> List[PartnerInvite]:
        return await self.repos.invites.list_sent_pending(user_id)

    async def list_received_invites(self, identity: Identity) -> List[PartnerInvite]:
        email = identity.normalized_email
        if not email:
            return []
        return await self.repos.invites.list_received_pending(email, exclude_user_id=identity.token_identifier)

    async def pending_invite_count(self, identity: Identity) -> int:
        email = identity.normalized_email
        if not email:
            return 0
        return await self.repos.invites.count_received_pending(email, exclude_user_id=identity.token_identifier)

    async def partner_activity(self, user_id: str, partner_id: str) -> List[SharedVideo]:
        """Videos ``partner_id`` shared with the caller, newest first.

        Raises:
            InvalidOperationError: If the two users are not active partners
        """
        if not await self.repos.partners.is_active_pair(user_id, partner_id):
            raise InvalidOperationError("Not partners with this user")
        return await self.repos.shared_videos.list_shared_with(user_id, [partner_id])

    # ------------------------------------------------------------------
    # Invites
    # ------------------------------------------------------------------

    async def _new_code(self) -> str:
        for _ in range(MAX_CODE_ATTEMPTS):
            code = generate_invite_code()
            if await self.repos.invites.get_by_code(code) is None:
                return code
        raise RuntimeError("Could not allocate a unique invite code")

    async def _new_invite(
        self, identity: Identity, *, to_email: Optional[str], to_user_id: Optional[str]
    ) -> PartnerInvite:
        now = utc_now()
        invite = PartnerInvite(
            code=await self._new_code(),
            from_user_id=identity.token_identifier,
            from_user_email=identity.normalized_email or "",
            from_user_name=identity.name,
            to_email=to_email,
            to_user_id=to_user_id,
            status=InviteStatus.pending,
            created_at=now,
            expires_at=now + timedelta(days=INVITE_EXPIRY_DAYS),
        )
        return await self.repos.invites.create(invite)

    async def send_invite(self, identity: Identity, email: str) -> PartnerInvite:
        """Invite a user by email.

        Args:
            identity: The sender
            email: Target email; trimmed and lower-cased before use

        Returns:
            The pending invite

        Raises:
            InvalidOperationError: If the sender has no email, invites
                themselves, already has a pending invite to that email, or is
                already partners with that user
        """
        user_id = identity.token_identifier
        sender_email = identity.normalized_email
        target_email = email.strip().lower()

        if not sender_email:
            raise InvalidOperationError("Your account doesn't have an email")
        if target_email == sender_email:
            raise InvalidOperationError("You can't invite yourself")
        if await self.repos.invites.find_pending(user_id, target_email) is not None:
            raise InvalidOperationError("You already have a pending invite to this email")

        partners = await self.repos.partners.list_for_user(user_id, status=PartnerStatus.active)
        if any(partner.partner_email.lower() == target_email for partner in partners):
            raise InvalidOperationError("You're already partners with this user")

        target_user = await self.repos.users.get_by_email(target_email)
        invite = await self._new_invite(
            identity,
            to_email=target_email,
            to_user_id=target_user.token_identifier if target_user else None,
        )
        logger.info(f"Invite {invite.id} sent by {user_id}")
        return invite

    async def create_invite_link(self, identity: Identity) -> PartnerInvite:
        """Create an open referral invite redeemable by anyone with its code."""
        invite = await self._new_invite(identity, to_email=None, to_user_id=None)
        logger.info(f"Open invite {invite.id} created by {identity.token_identifier}")
        return invite

    async def _get_invite(self, invite_id: str) -> PartnerInvite:
        invite = await self.repos.invites.get_by_id(invite_id)
        if invite is None:
            raise NotFoundError("Invite not found")
        return invite

    async def find_invite_by_code(self, code: str) -> Optional[PartnerInvite]:
        """Look a code up as typed, then retry with its normalised form."""
        invite = await self.repos.invites.get_by_code(code)
        if invite is None:
            normalized = normalize_invite_code(code)
            if normalized != code:
                invite = await self.repos.invites.get_by_code(normalized)
        return invite

    async def accept_invite(self, identity: Identity, invite_id: str, *, now: Optional[datetime] = None) -> str:
        return await self._accept(identity, await self._get_invite(invite_id), now or utc_now())

    async def accept_invite_by_code(self, identity: Identity, code: str, *, now: Optional[datetime] = None) -> str:
        invite = await self.find_invite_by_code(code)
        if invite is None:
            raise NotFoundError("Invite not found")
        return await self._accept(identity, invite, now or utc_now())

    async def _accept(self, identity: Identity, invite: PartnerInvite, now: datetime) -> str:
        user_id = identity.token_identifier
        user_email = identity.normalized_email

        if invite.to_email is not None:
            if user_email != invite.to_email.lower():
                raise NotAuthorizedError("This invite is not for you")
        elif invite.from_user_id == user_id:
            raise InvalidOperationError("You can't accept your own invite")

        if invite.status != InviteStatus.pending:
            if invite.status == InviteStatus.accepted:
                return ALREADY_ACCEPTED
            raise InvalidOperationError(f"This invite was {InviteStatus(invite.status).value}")

        if now > invite.expires_at:
            invite.status = InviteStatus.expired
            await self.repos.invites.update(invite)
            raise InvalidOperationError("Invite has expired")

        if invite.to_email is None and await self.repos.partners.is_active_pair(user_id, invite.from_user_id):
            raise InvalidOperationError("You're already partners with this user")

        invite.status = InviteStatus.accepted
        invite.to_user_id = user_id
        await self.repos.invites.update(invite, commit=False)

        await self.repos.partners.create(
            AccountabilityPartner(
                user_id=invite.from_user_id,
                partner_id=user_id,
                partner_email=user_email or "",
                partner_name=identity.name,
                status=PartnerStatus.active,
                created_at=now,
            ),
            commit=False,
        )
        await self.repos.partners.create(
            AccountabilityPartner(
                user_id=user_id,
                partner_id=invite.from_user_id,
                partner_email=invite.from_user_email,
                partner_name=invite.from_user_name,
                status=PartnerStatus.active,
                created_at=now,
            ),
            commit=False,
        )
        await self.repos.commit()
        logger.info(f"Invite {invite.id} accepted; {invite.from_user_id} and {user_id} are partners")
        return ACCEPTED

    async def decline_invite(self, identity: Identity, invite_id: str) -> str:
        invite = await self._get_invite(invite_id)
        if invite.to_email is None or identity.normalized_email != invite.to_email.lower():
            raise NotAuthorizedError("This invite is not for you")
        if invite.status != InviteStatus.pending:
            if invite.status == InviteStatus.declined:
                return ALREADY_DECLINED
            raise InvalidOperationError(f"This invite was {InviteStatus(invite.status).value}")
        invite.status = InviteStatus.declined
        await self.repos.invites.update(invite)
        return DECLINED

    async def cancel_invite(self, user_id: str, invite_id: str) -> str:
        invite = await self._get_invite(invite_id)
        if invite.from_user_id != user_id:
            raise NotAuthorizedError("This is not your invite")
        if invite.status != InviteStatus.pending:
            raise InvalidOperationError("Can only cancel pending invites")
        await self.repos.invites.delete(invite.id)
        return CANCELLED

    # ------------------------------------------------------------------
    # Partners
    # ------------------------------------------------------------------

    async def remove_partner(self, user_id: str, record_id: str) -> str:
        """Delete a partner record and its mirror on the other side."""
        record = await self.repos.partners.get_by_id(record_id)
        if record is None:
            raise NotFoundError("Partner record not found")
        if record.user_id != user_id:
            raise NotAuthorizedError()

        await self.repos.partners.delete(record.id, commit=False)
        reverse = await self.repos.partners.get_pair(record.partner_id, user_id)
        if reverse is not None and reverse.status == PartnerStatus.active:
            await self.repos.partners.delete(reverse.id, commit=False)
        await self.repos.commit()
        return REMOVED
