"""
Category Repository.

Data access layer for categories.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.backend.models.category import Category
from notekeeper.backend.repositories.base import BaseRepository


class CategoryRepository(BaseRepository[Category]):
    """Repository for Category model. Categories are never updated or deleted."""

    model = Category

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
