"""
User repository implementation.

This module provides data access operations for user profiles, looked up by
identity token or by email when matching invites.
"""

from __future__ import annotations

from typing import Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from ..entities.users import User
from .base import AsyncSQLModelRepository


class UserRepository(AsyncSQLModelRepository[User]):
    """Repository for user data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, User)

    async def get_by_token(self, token_identifier: str) -> Optional[User]:
        """Get a user by identity token identifier."""
        stmt = select(User).where(User.token_identifier == token_identifier)
        return await self.fetch_first(stmt)

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get a user by lower-cased email.

        Args:
            email: Email address, already normalised by the caller

        Returns:
            The first user registered with the email, or None
        """
        stmt = select(User).where(User.email == email)
        return await self.fetch_first(stmt)
