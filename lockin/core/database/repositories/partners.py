"""
Accountability partner repository implementations.

This module provides data access operations for partner records and partner
invites.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from lockin.core.models.enums import InviteStatus, PartnerStatus

from ..entities.partners import AccountabilityPartner, PartnerInvite
from .base import AsyncSQLModelRepository


class PartnerRepository(AsyncSQLModelRepository[AccountabilityPartner]):
    """Repository for accountability partner records using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, AccountabilityPartner)

    async def list_for_user(
        self, user_id: str, *, status: Optional[PartnerStatus] = None
    ) -> List[AccountabilityPartner]:
        """List partner records owned by ``user_id``.

        Args:
            user_id: Token identifier of the record owner
            status: Only return records with this status

        Returns:
            List of AccountabilityPartner instances, newest first
        """
        stmt = select(AccountabilityPartner).where(AccountabilityPartner.user_id == user_id)
        if status is not None:
            stmt = stmt.where(AccountabilityPartner.status == status)
        return await self.fetch_all(self.newest_first(stmt))

    async def get_pair(self, user_id: str, partner_id: str) -> Optional[AccountabilityPartner]:
        """Get the record ``user_id`` holds for ``partner_id``."""
        stmt = select(AccountabilityPartner).where(
            AccountabilityPartner.user_id == user_id,
            AccountabilityPartner.partner_id == partner_id,
        )
        return await self.fetch_first(stmt)

    async def is_active_pair(self, user_id: str, partner_id: str) -> bool:
        record = await self.get_pair(user_id, partner_id)
        return record is not None and record.status == PartnerStatus.active


class PartnerInviteRepository(AsyncSQLModelRepository[PartnerInvite]):
    """Repository for partner invites using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, PartnerInvite)

    async def get_by_code(self, code: str) -> Optional[PartnerInvite]:
        stmt = select(PartnerInvite).where(PartnerInvite.code == code)
        return await self.fetch_first(stmt)

    async def find_pending(self, from_user_id: str, to_email: str) -> Optional[PartnerInvite]:
        """Find a pending invite from ``from_user_id`` to ``to_email``."""
        stmt = select(PartnerInvite).where(
            PartnerInvite.from_user_id == from_user_id,
            PartnerInvite.to_email == to_email,
            PartnerInvite.status == InviteStatus.pending,
        )
        return await self.fetch_first(stmt)

    async def list_sent_pending(self, from_user_id: str) -> List[PartnerInvite]:
        stmt = select(PartnerInvite).where(
            PartnerInvite.from_user_id == from_user_id, PartnerInvite.status == InviteStatus.pending
        )
        return await self.fetch_all(self.newest_first(stmt))

    async def list_received_pending(self, email: str, *, exclude_user_id: str) -> List[PartnerInvite]:
        """List pending invites addressed to ``email`` that someone else sent.

        Args:
            email: Lower-cased recipient email
            exclude_user_id: Caller's token identifier; their own invites are skipped

        Returns:
            List of PartnerInvite instances, newest first
        """
        stmt = select(PartnerInvite).where(
            PartnerInvite.to_email == email,
            PartnerInvite.status == InviteStatus.pending,
            PartnerInvite.from_user_id != exclude_user_id,
        )
        return await self.fetch_all(self.newest_first(stmt))

    async def count_received_pending(self, email: str, *, exclude_user_id: str) -> int:
        stmt = select(func.count()).select_from(PartnerInvite).where(
            PartnerInvite.to_email == email,
            PartnerInvite.status == InviteStatus.pending,
            PartnerInvite.from_user_id != exclude_user_id,
        )
        result = await self.session.exec(stmt)
        return int(result.one())
