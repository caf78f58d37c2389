"""
Note Service.

Business logic layer for notes and categories. Orchestrates repositories,
handles validation, and implements the archive and tagging rules.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.backend.core.exceptions import NotFoundError
from notekeeper.backend.models.category import Category
from notekeeper.backend.models.note import Note
from notekeeper.backend.repositories.category import CategoryRepository
from notekeeper.backend.repositories.note import NoteRepository
from notekeeper.backend.schemas.note import CategoryCreate, NoteCreate, NoteUpdate
from notekeeper.backend.services.base import BaseService


class NoteService(BaseService):
    """
    Service for note business logic.

    Stateless: one instance per request, bound to the request session.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = NoteRepository(session)
        self.category_repo = CategoryRepository(session)

    # -------------------------------------------------------------------------
    # Notes
    # -------------------------------------------------------------------------

    async def list_notes(
        self,
        archived: bool | None = None,
        category_name: str | None = None,
    ) -> list[Note]:
        """
        List notes, newest first.

        Args:
            archived: Filter on the archive flag; None lists both
            category_name: Only notes tagged with a category of this name

        Returns:
            Matching notes
        """
        self._log_debug("Listing notes", archived=archived, category=category_name)
        return await self.repo.find(archived=archived, category_name=category_name)

    async def get_note(self, note_id: int) -> Note:
        """
        Get a note by ID.

        Raises:
            NotFoundError: If note not found
        """
        return await self.repo.get_by_id(note_id)

    async def create_note(self, data: NoteCreate) -> Note:
        """
        Create a new note. It starts active and without categories.

        Raises:
            ValidationError: If title or content is blank
        """
        self._validate_required(
            {"title": data.title, "content": data.content},
            ["title", "content"],
        )
        self._log_operation("Creating note", title=data.title)

        note = await self._execute_db_operation(
            "create_note",
            self.repo.create(title=data.title, content=data.content),
        )

        self._log_debug("Note created", note_id=note.id)
        return note

    async def update_note(self, note_id: int, data: NoteUpdate) -> Note:
        """
        Update an existing note.

        Only fields present in the payload are written.

        Raises:
            NotFoundError: If note not found
            ValidationError: If a present field is null or blank
        """
        update_data = data.model_dump(exclude_unset=True)

        if not update_data:
            return await self.repo.get_by_id(note_id)

        self._validate_required(update_data, list(update_data))

        self._log_operation(
            "Updating note",
            note_id=note_id,
            fields=list(update_data.keys()),
        )

        return await self._execute_db_operation(
            "update_note",
            self.repo.update(note_id, **update_data),
        )

    async def delete_note(self, note_id: int) -> None:
        """
        Delete a note and its category links.

        Raises:
            NotFoundError: If note not found
        """
        self._log_operation("Deleting note", note_id=note_id)

        await self._execute_db_operation(
            "delete_note",
            self.repo.delete(note_id),
        )

    async def toggle_archive(self, note_id: int) -> Note:
        """
        Flip the archive flag of a note.

        Raises:
            NotFoundError: If note not found
        """
        note = await self.repo.get_by_id(note_id)
        archived = not note.archived

        self._log_operation("Toggling archive", note_id=note_id, archived=archived)

        return await self._execute_db_operation(
            "toggle_archive",
            self.repo.set_archived(note, archived),
        )

    # -------------------------------------------------------------------------
    # Categories
    # -------------------------------------------------------------------------

    async def create_category(self, data: CategoryCreate) -> Category:
        """
        Create a category. Names are not checked for duplicates.

        Raises:
            ValidationError: If name is blank
        """
        self._validate_required({"name": data.name}, ["name"])
        self._log_operation("Creating category", name=data.name)

        return await self._execute_db_operation(
            "create_category",
            self.category_repo.create(name=data.name),
        )

    async def list_categories(self) -> list[Category]:
        """List all categories ordered by ID."""
        return await self.category_repo.get_all()

    async def assign_category(self, note_id: int, category_id: int) -> Note:
        """
        Attach a category to a note.

        Attaching a category that is already attached returns the
        note unchanged.

        Raises:
            NotFoundError: If the note or the category does not exist
        """
        note = await self.repo.get_by_id(note_id)
        category = await self.category_repo.get_by_id(category_id)

        if note.has_category(category_id):
            self._log_debug(
                "Category already assigned",
                note_id=note_id,
                category_id=category_id,
            )
            return note

        self._log_operation("Assigning category", note_id=note_id, category_id=category_id)

        return await self._execute_db_operation(
            "assign_category",
            self.repo.add_category(note, category),
        )

    async def remove_category(self, note_id: int, category_id: int) -> Note:
        """
        Detach a category from a note.

        The category must exist, but it need not be attached: detaching
        an unattached category returns the note unchanged.

        Raises:
            NotFoundError: If the note or the category does not exist
        """
        note = await self.repo.get_by_id(note_id)
        if not await self.category_repo.exists(category_id):
            raise NotFoundError(f"Category with id {category_id} not found")

        if not note.has_category(category_id):
            self._log_debug(
                "Category not assigned",
                note_id=note_id,
                category_id=category_id,
            )
            return note

        self._log_operation("Removing category", note_id=note_id, category_id=category_id)

        return await self._execute_db_operation(
            "remove_category",
            self.repo.remove_category(note, category_id),
        )
