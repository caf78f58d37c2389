"""
Note Repository.

Data access layer for notes. Handles all database operations
for the Note model, including its category links.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.backend.models.category import Category
from notekeeper.backend.models.note import Note
from notekeeper.backend.repositories.base import BaseRepository


class NoteRepository(BaseRepository[Note]):
    """
    Repository for Note model.

    Inherits standard CRUD operations from BaseRepository
    and adds note-specific queries.
    """

    model = Note

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def find(
        self,
        archived: bool | None = None,
        category_name: str | None = None,
    ) -> list[Note]:
        """
        Find notes matching the optional filters, newest first.

        Args:
            archived: Only notes with this archive flag (None: any)
            category_name: Only notes tagged with a category of this name (None: any)

        Returns:
            Notes ordered by creation time descending
        """
        stmt = select(Note)

        if archived is not None:
            stmt = stmt.where(Note.archived == archived)

        if category_name is not None:
            # EXISTS keeps a note tagged with two same-named categories from appearing twice
            stmt = stmt.where(Note.categories.any(Category.name == category_name))

        stmt = stmt.order_by(Note.created_at.desc(), Note.id.desc())

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def add_category(self, note: Note, category: Category) -> Note:
        """Attach a category to a loaded note and persist the link."""
        note.categories.append(category)
        await self.session.flush()
        await self.session.refresh(note)
        return note

    async def remove_category(self, note: Note, category_id: int) -> Note:
        """Detach every link to category_id from a loaded note."""
        note.categories = [
            category for category in note.categories if category.id != category_id
        ]
        await self.session.flush()
        await self.session.refresh(note)
        return note

    async def set_archived(self, note: Note, archived: bool) -> Note:
        """Write the archive flag of a loaded note."""
        note.archived = archived
        await self.session.flush()
        await self.session.refresh(note)
        return note
