"""
Base Repository.

Base class for all repositories with common CRUD operations.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.backend.core.exceptions import NotFoundError
from notekeeper.backend.models.base import Base

ModelType = TypeVar("ModelType", bound=Base)

# Largest value a 64-bit INTEGER primary key can hold.
MAX_ID = 2**63 - 1


class BaseRepository(Generic[ModelType]):
    """
    Base repository with common CRUD operations.

    Subclasses should set the model class:

        class CategoryRepository(BaseRepository[Category]):
            model = Category
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
            raise NotFoundError(f"{self.model.__name__} with id {id} not found")

        return instance

    async def get_by_id_or_none(self, id: int) -> ModelType | None:
        """
        Get a single record by ID, returning None if not found.

        Ids outside the 64-bit key range cannot be stored, so they
        are not found without querying.
        """
        if not -MAX_ID <= id <= MAX_ID:
            return None

        result = await self.session.execute(
            select(self.model).where(self.model.id == id)
        )
        return result.scalar_one_or_none()

    async def get_all(self) -> list[ModelType]:
        """Get all records ordered by ID."""
        result = await self.session.execute(
            select(self.model).order_by(self.model.id)
        )
        return list(result.scalars().all())

    async def create(self, **kwargs: Any) -> ModelType:
        """Create a new record."""
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def update(self, id: int, **kwargs: Any) -> ModelType:
        """
        Update an existing record. Only the given fields are written.

        Raises:
            NotFoundError: If record not found
        """
        instance = await self.get_by_id(id)

        for key, value in kwargs.items():
            if hasattr(instance, key):
                setattr(instance, key, value)

        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def delete(self, id: int) -> None:
        """
        Delete a record by ID.

        Raises:
            NotFoundError: If record not found
        """
        instance = await self.get_by_id(id)
        await self.session.delete(instance)
        await self.session.flush()


    async def exists(self, id: int) -> bool:
        """Check if a record exists by ID."""
        if not -MAX_ID <= id <= MAX_ID:
            return False

        result = await self.session.execute(
            select(self.model.id).where(self.model.id == id)
        )
        return result.scalar_one_or_none() is not None
