"""
Base Repository.

Base class for all repositories with common CRUD operations.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.core.exceptions import NotFoundError
from notekeeper.models.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository with common CRUD operations.

    Subclasses should set the model class:

        class NoteRepository(BaseRepository[Note]):
            model = Note

    Writes are issued as UPDATE/DELETE statements and report the number
    of affected rows, so callers can tell a concurrent delete apart from
    a successful write.
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_id(self, id: int) -> ModelType:
        """
        Get a single record by ID.

        Raises:
            NotFoundError: If record not found
        """
        instance = await self.get_by_id_or_none(id)

        if instance is None:
            raise NotFoundError(f"{self.model.__name__} not found")

        return instance

    async def get_by_id_or_none(self, id: int) -> ModelType | None:
        """Get a single record by ID, reloading it from the database."""
        return await self.session.get(self.model, id, populate_existing=True)

    async def get_many(self, ids: list[int]) -> list[ModelType]:
        """Get every record whose ID is in ids. Missing IDs are skipped."""
        if not ids:
            return []
        result = await self.session.execute(
            select(self.model).where(self.model.id.in_(ids)).order_by(self.model.id)
        )
        return list(result.scalars().all())

    async def create(self, **kwargs: Any) -> ModelType:
        """Create a new record."""
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def update_fields(self, id: int, **values: Any) -> int:
        """
        Write values to one record.

        Returns:
            Number of rows matched (0 if the record no longer exists)
        """
        result = await self.session.execute(
            update(self.model)
            .where(self.model.id == id)
            .values(**values)
            .execution_options(synchronize_session="evaluate")
        )
        return result.rowcount

    async def delete_by_id(self, id: int) -> int:
        """
        Delete one record.

        Returns:
            Number of rows deleted
        """
        result = await self.session.execute(
            delete(self.model)
            .where(self.model.id == id)
            .execution_options(synchronize_session="evaluate")
        )
        return result.rowcount

    async def delete_many(self, ids: list[int]) -> list[int]:
        """
        Delete every record whose ID is in ids with one statement.

        Returns:
            IDs of the rows this statement deleted, ascending
        """
        result = await self.session.execute(
            delete(self.model)
            .where(self.model.id.in_(ids))
            .returning(self.model.id)
            .execution_options(synchronize_session="evaluate")
        )
        return sorted(result.scalars().all())
