"""
Base CRUD operations for SQLAlchemy models.

Provides generic Create, Read, Update, Delete operations that can be
inherited and extended by collection-specific CRUD classes.

Dependencies: sqlalchemy, uuid
System role: Foundation for all record store operations
"""

from typing import Any, Generic, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import Select, delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from backend.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """
    Generic base class for CRUD operations.

    Provides standard record operations that work with any SQLAlchemy model.
    Subclasses specify the model class and a default ordering, and add
    collection-specific queries.

    Type Parameters:
        ModelT: SQLAlchemy model class inheriting from Base

    Attributes:
        model: The SQLAlchemy model class to operate on
        default_order: Column name used when no order_by is given
        default_descending: Direction of the default ordering
    """

    default_order: str | None = None
    default_descending: bool = False

    def __init__(self, model: type[ModelT]) -> None:
        """
        Initialize CRUD with target model.

        Args:
            model: SQLAlchemy model class for database operations
        """
        self.model = model

    def _ordered(
        self,
        stmt: Select,
        order_by: str | None,
        descending: bool | None,
    ) -> Select:
        column_name = order_by or self.default_order
        if column_name is None:
            return stmt
        if descending is None:
            descending = self.default_descending if order_by is None else False
        column = getattr(self.model, column_name)
        return stmt.order_by(column.desc() if descending else column.asc())

    def _filtered(self, stmt: Select, filters: dict[str, Any]) -> Select:
        for field, value in filters.items():
            column = getattr(self.model, field)
            stmt = stmt.where(column.is_(None) if value is None else column == value)
        return stmt

    async def create(self, session: AsyncSession, **kwargs) -> ModelT:
        """Insert a record and return it with its generated id and timestamps."""
        instance = self.model(**kwargs)
        session.add(instance)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def get_by_id(self, session: AsyncSession, id: UUID) -> ModelT | None:
        result = await session.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def get_all(
        self,
        session: AsyncSession,
        limit: int | None = None,
        offset: int = 0,
        order_by: str | None = None,
        descending: bool | None = None,
    ) -> Sequence[ModelT]:
        """
        Retrieve all records with optional pagination and ordering.

        Args:
            session: Async database session
            limit: Maximum number of records to return (None for all)
            offset: Number of records to skip
            order_by: Column name to sort on (collection default when None)
            descending: Sort direction

        Returns:
            Sequence of model instances
        """
        stmt = self._ordered(select(self.model), order_by, descending).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def find_by(
        self,
        session: AsyncSession,
        order_by: str | None = None,
        descending: bool | None = None,
        limit: int | None = None,
        offset: int = 0,
        **filters,
    ) -> Sequence[ModelT]:
        """
        Retrieve records matching every equality filter.

        Args:
            session: Async database session
            order_by: Column name to sort on (collection default when None)
            descending: Sort direction
            limit: Maximum number of records to return
            offset: Number of records to skip
            **filters: column=value pairs; None matches NULL

        Returns:
            Sequence of matching model instances
        """
        stmt = self._filtered(select(self.model), filters)
        stmt = self._ordered(stmt, order_by, descending).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count(self, session: AsyncSession, **filters) -> int:
        """
        Count records matching every equality filter.

        Args:
            session: Async database session
            **filters: column=value pairs

        Returns:
            Number of matching records
        """
        stmt = self._filtered(select(func.count()).select_from(self.model), filters)
        result = await session.execute(stmt)
        return int(result.scalar_one())

    async def update_by_id(
        self,
        session: AsyncSession,
        id: UUID,
        **kwargs,
    ) -> ModelT | None:
        """
        Apply column values to one record and return it refreshed.

        The identity map copy is overwritten so callers holding the instance
        see the new values. Returns None when no record has that id.
        """
        stmt = (
            update(self.model)
            .where(self.model.id == id)
            .values(**kwargs)
            .returning(self.model)
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete_by_id(self, session: AsyncSession, id: UUID) -> bool:
        """False when nothing was deleted."""
        result = await session.execute(delete(self.model).where(self.model.id == id))
        return result.rowcount > 0

    async def exists(self, session: AsyncSession, id: UUID) -> bool:
        result = await session.execute(select(self.model.id).where(self.model.id == id))
        return result.scalar_one_or_none() is not None
