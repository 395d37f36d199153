"""
Base repository for the Lock In tables.

Every table repository wraps one ``AsyncSession`` and one SQLModel entity.
Writes commit by default; services that touch several rows in one operation
(cascading deletes, partner mirroring, hour credits) pass ``commit=False`` and
commit once through the repository bundle.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy import delete as sa_delete
from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlmodel.sql.expression import SelectOfScalar

# Generic type for SQLModel entities
EntityType = TypeVar("EntityType", bound=SQLModel)


class AsyncBaseRepository(ABC, Generic[EntityType]):
    """Async CRUD interface shared by the table repositories."""

    def __init__(self, session: AsyncSession, model: Type[EntityType]) -> None:
        self.session = session
        self.model = model

    @abstractmethod
    async def create(self, entity: EntityType, *, commit: bool = True) -> EntityType:
        """Persist a new row and return it with generated fields populated."""

    @abstractmethod
    async def get_by_id(self, entity_id: str) -> Optional[EntityType]:
        """Return the row with this primary key, or None."""

    @abstractmethod
    async def update(self, entity: EntityType, *, commit: bool = True) -> EntityType:
        """Write back a modified row."""

    @abstractmethod
    async def delete(self, entity_id: str, *, commit: bool = True) -> bool:
        """Delete by primary key; False when no such row exists."""

    @abstractmethod
    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[EntityType]:
        """List rows newest first, optionally filtered by column equality and paginated."""


class AsyncSQLModelRepository(AsyncBaseRepository[EntityType]):
    """SQLModel implementation of :class:`AsyncBaseRepository`.

    Listings are ordered newest first by ``created_at`` unless a repository
    needs a stricter key (see the goal archive pages).
    """

    def newest_first(self, stmt: SelectOfScalar[EntityType]) -> SelectOfScalar[EntityType]:
        return stmt.order_by(self.model.created_at.desc())  # type: ignore[attr-defined]

    async def fetch_all(self, stmt: SelectOfScalar[EntityType]) -> List[EntityType]:
        result = await self.session.exec(stmt)
        return list(result.all())

    async def fetch_first(self, stmt: SelectOfScalar[EntityType]) -> Optional[EntityType]:
        result = await self.session.exec(stmt)
        return result.first()

    async def _save(self, entity: EntityType, commit: bool) -> EntityType:
        self.session.add(entity)
        if commit:
            await self.session.commit()
            await self.session.refresh(entity)
        return entity

    async def create(self, entity: EntityType, *, commit: bool = True) -> EntityType:
        return await self._save(entity, commit)

    async def get_by_id(self, entity_id: str) -> Optional[EntityType]:
        return await self.session.get(self.model, entity_id)

    async def update(self, entity: EntityType, *, commit: bool = True) -> EntityType:
        return await self._save(entity, commit)

    async def delete(self, entity_id: str, *, commit: bool = True) -> bool:
        entity = await self.get_by_id(entity_id)
        if entity is None:
            return False
        await self.session.delete(entity)
        if commit:
            await self.session.commit()
        return True

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[EntityType]:
        stmt = select(self.model)
        for column, value in (filters or {}).items():
            # Unknown columns and None values are ignored rather than matched
            if value is not None and hasattr(self.model, column):
                stmt = stmt.where(getattr(self.model, column) == value)

        stmt = self.newest_first(stmt)
        if limit is not None:
            stmt = stmt.limit(limit)
        if offset is not None:
            stmt = stmt.offset(offset)
        return await self.fetch_all(stmt)

    async def delete_where(self, *conditions: Any, commit: bool = True) -> int:
        """Bulk delete the rows matching ``conditions`` and return how many went."""
        result = await self.session.execute(sa_delete(self.model).where(*conditions))
        if commit:
            await self.session.commit()
        return result.rowcount or 0
