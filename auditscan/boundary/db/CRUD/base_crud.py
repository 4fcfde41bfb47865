"""
Shared persistence primitives for the audit tables.

Every model-specific CRUD class (users, projects, scans, findings) builds
on these: insert, primary-key lookup, guarded update and delete.

Dependencies: sqlalchemy, uuid
System role: Foundation for all database CRUD operations
"""

from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import ColumnElement, delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from auditscan.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """
    Primary-key operations shared by the audit CRUD classes.

    Methods flush but never commit; transaction boundaries belong to the
    calling service or the analysis engine.

    Attributes:
        model: The SQLAlchemy model class to operate on
    """

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    async def create(self, session: AsyncSession, **values: Any) -> ModelT:
        """
        Insert a row and return it with server defaults loaded.

        Args:
            session: Async database session
            **values: Column values

        Returns:
            Created model instance with generated id and timestamps
        """
        instance = self.model(**values)
        session.add(instance)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def get_by_id(self, session: AsyncSession, id: UUID) -> ModelT | None:
        stmt = select(self.model).where(self.model.id == id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def update_by_id(
        self,
        session: AsyncSession,
        id: UUID,
        *guards: ColumnElement[bool],
        **values: Any,
    ) -> ModelT | None:
        """
        Update a row by primary key, optionally only while guards hold.

        The guards are part of the UPDATE's WHERE clause, so a row that no
        longer satisfies them (a scan cancelled by its owner, say) is not
        written. Objects already in the session are refreshed from the
        returned row.

        Args:
            session: Async database session
            id: UUID primary key
            *guards: Extra conditions the row must currently meet
            **values: Columns to set

        Returns:
            Updated model instance, None if missing or a guard failed
        """
        stmt = (
            update(self.model)
            .where(self.model.id == id, *guards)
            .values(**values)
            .returning(self.model)
            .execution_options(synchronize_session="fetch")
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete_by_id(self, session: AsyncSession, id: UUID) -> bool:
        """Delete a row by primary key; False if nothing matched."""
        stmt = delete(self.model).where(self.model.id == id)
        result = await session.execute(stmt)
        return result.rowcount > 0
