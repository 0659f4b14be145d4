"""
Generic async CRUD helpers keyed by a string primary key.

Methods flush but never commit; the caller owns the transaction.

Dependencies: sqlalchemy
System role: Foundation for all database CRUD operations
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from pdfchat.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """Primary-key CRUD for one mapped model."""

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    async def create(self, session: AsyncSession, **fields: Any) -> ModelT:
        """
        Insert a row and return it with server defaults loaded.

        Args:
            session: Async database session
            **fields: Column values

        Returns:
            The flushed, refreshed instance
        """
        instance = self.model(**fields)
        session.add(instance)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def get_by_id(self, session: AsyncSession, id: str) -> ModelT | None:
        result = await session.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def update_by_id(self, session: AsyncSession, id: str, **fields: Any) -> ModelT | None:
        """Apply column values to one row; None when the id is unknown."""
        result = await session.execute(
            update(self.model).where(self.model.id == id).values(**fields).returning(self.model)
        )
        return result.scalar_one_or_none()

    async def delete_by_id(self, session: AsyncSession, id: str) -> bool:
        """True if a row was removed."""
        result = await session.execute(delete(self.model).where(self.model.id == id))
        return result.rowcount > 0

    async def exists(self, session: AsyncSession, id: str) -> bool:
        result = await session.execute(select(self.model.id).where(self.model.id == id))
        return result.scalar_one_or_none() is not None
