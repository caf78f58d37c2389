"""
Client-side Note State.

NoteBoard keeps an in-memory mirror of the notes shown in the current
view (active or archived, optionally narrowed to one category name)
together with the full category list. The mirror is a cache keyed by
(view_mode, selected_category): changing either refetches it.

After a mutation the board either reloads the view from the server
(SyncStrategy.RELOAD) or applies the note returned by the server to the
cached list (SyncStrategy.PATCH): the note is kept, in newest-first
position, only if it still belongs to the current view.

On failure the board records a user-facing message in `error`, keeps
the previous lists, and re-raises.
"""

from collections.abc import Awaitable, Iterable
from enum import Enum
from typing import TypeVar

from notekeeper.backend.core.exceptions import ApplicationError
from notekeeper.backend.core.logging import get_logger, log_with_source
from notekeeper.backend.schemas.note import CategoryResponse, NoteResponse
from notekeeper.cli.notes_api import NotesClient
from notekeeper.cli.reconcile import apply_category_plan, plan_category_changes

logger = get_logger(__name__)

T = TypeVar("T")


class ViewMode(str, Enum):
    ACTIVE = "active"
    ARCHIVED = "archived"


class SyncStrategy(str, Enum):
    RELOAD = "reload"
    PATCH = "patch"


class NoteBoard:
    """
    In-memory view of notes and categories.

    Usage:
        board = NoteBoard(NotesClient())
        await board.refresh()
        await board.set_view_mode(ViewMode.ARCHIVED)
        await board.toggle_archive(note_id)
    """

    def __init__(
        self,
        client: NotesClient,
        strategy: SyncStrategy = SyncStrategy.RELOAD,
    ) -> None:
        self.client = client
        self.strategy = strategy
        self.notes: list[NoteResponse] = []
        self.categories: list[CategoryResponse] = []
        self.view_mode = ViewMode.ACTIVE
        self.selected_category: str | None = None
        self.error: str | None = None

    # -------------------------------------------------------------------------
    # View
    # -------------------------------------------------------------------------

    async def refresh(self) -> None:
        """Refetch the notes of the current view and all categories."""
        notes = await self._guard(
            "load the notes",
            self.client.list_notes(
                archived=self.view_mode is ViewMode.ARCHIVED,
                category=self.selected_category,
            ),
        )
        categories = await self._guard("load the categories", self.client.list_categories())
        self.notes = notes
        self.categories = categories

    async def set_view_mode(self, mode: ViewMode) -> None:
        self.view_mode = mode
        await self.refresh()

    async def select_category(self, name: str | None) -> None:
        """Narrow the view to one category name, or widen it again with None."""
        self.selected_category = name
        await self.refresh()

    def matches(self, note: NoteResponse) -> bool:
        """Return True if the note belongs to the current view."""
        if note.archived != (self.view_mode is ViewMode.ARCHIVED):
            return False
        if self.selected_category is None:
            return True
        return any(category.name == self.selected_category for category in note.categories)

    def find(self, note_id: int) -> NoteResponse | None:
        """Return the cached note with this id, if it is in view."""
        return next((note for note in self.notes if note.id == note_id), None)

    async def get_note(self, note_id: int) -> NoteResponse:
        """Return the cached note when it is in view, otherwise fetch it."""
        note = self.find(note_id)
        if note is None:
            note = await self._guard("load the note", self.client.get_note(note_id))
        return note

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    async def create_note(self, title: str, content: str) -> NoteResponse:
        note = await self._guard("create the note", self.client.create_note(title, content))
        await self._sync(note)
        return note

    async def update_note(
        self,
        note_id: int,
        title: str | None = None,
        content: str | None = None,
    ) -> NoteResponse:
        note = await self._guard(
            "update the note",
            self.client.update_note(note_id, title=title, content=content),
        )
        await self._sync(note)
        return note

    async def toggle_archive(self, note_id: int) -> NoteResponse:
        note = await self._guard("archive the note", self.client.toggle_archive(note_id))
        await self._sync(note)
        return note

    async def delete_note(self, note_id: int) -> None:
        await self._guard("delete the note", self.client.delete_note(note_id))
        if self.strategy is SyncStrategy.RELOAD:
            await self.refresh()
        else:
            self.notes = [note for note in self.notes if note.id != note_id]

    async def create_category(self, name: str) -> CategoryResponse:
        category = await self._guard("create the category", self.client.create_category(name))
        if self.strategy is SyncStrategy.RELOAD:
            await self.refresh()
        else:
            self.categories = [*self.categories, category]
        return category

    async def set_note_categories(self, note_id: int, target: Iterable[int]) -> NoteResponse:
        """
        Make the note's categories exactly `target`.

        Uses the cached note when it is in view, otherwise fetches it.
        """
        note = await self.get_note(note_id)
        plan = plan_category_changes(note.category_ids(), target)
        updated = await self._guard(
            "update the note categories",
            apply_category_plan(self.client, note_id, plan),
        )
        if updated is None:
            return note

        await self._sync(updated)
        return updated

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    async def _guard(self, action: str, call: Awaitable[T]) -> T:
        """Await an API call, recording a message in `error` on failure."""
        try:
            result = await call
        except ApplicationError as e:
            self.error = f"Could not {action}: {e.message}"
            log_with_source(logger, "cli", "warning", "Board action failed", action=action, error=e.message)
            raise
        self.error = None
        return result

    async def _sync(self, note: NoteResponse) -> None:
        if self.strategy is SyncStrategy.RELOAD:
            await self.refresh()
        else:
            self._patch(note)

    def _patch(self, note: NoteResponse) -> None:
        """Replace or drop the cached copy of `note` according to the view filter."""
        notes = [cached for cached in self.notes if cached.id != note.id]
        if self.matches(note):
            notes.append(note)
            notes.sort(key=lambda item: (item.created_at, item.id), reverse=True)
        self.notes = notes
