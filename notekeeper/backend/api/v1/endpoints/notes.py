"""
Notes API Endpoints.

REST API endpoints for notes, their archive flag and their categories.
Category routes are declared before /{note_id} routes so that
/notes/category is never read as a note id.
"""

from fastapi import APIRouter, Query

from notekeeper.backend.core.dependencies import DbSession, RequestId
from notekeeper.backend.schemas.note import (
    CategoryAssign,
    CategoryCreate,
    CategoryResponse,
    NoteCreate,
    NoteResponse,
    NoteUpdate,
)
from notekeeper.backend.services.note import NoteService

router = APIRouter()


def parse_archived_flag(value: str | None) -> bool | None:
    """
    Interpret the `archived` query parameter.

    Omitted means no filter. Only the literal "true" selects archived
    notes; "false" and anything else select active ones.
    """
    if value is None:
        return None
    return value == "true"


@router.get(
    "",
    response_model=list[NoteResponse],
    summary="List notes",
    description="List notes newest first, optionally filtered by archive flag and category name.",
)
async def list_notes(
    db: DbSession,
    request_id: RequestId,
    archived: str | None = Query(
        default=None,
        description='"true" for archived notes, any other value for active notes',
    ),
    category: str | None = Query(
        default=None,
        description="Only notes tagged with a category of this name",
    ),
) -> list[NoteResponse]:
    """List notes."""
    service = NoteService(db)
    notes = await service.list_notes(
        archived=parse_archived_flag(archived),
        category_name=category,
    )
    return [NoteResponse.model_validate(note) for note in notes]


@router.post(
    "",
    response_model=NoteResponse,
    status_code=201,
    summary="Create a note",
    description="Create a new note with title and content.",
)
async def create_note(
    data: NoteCreate,
    db: DbSession,
    request_id: RequestId,
) -> NoteResponse:
    """Create a new note."""
    service = NoteService(db)
    note = await service.create_note(data)
    return NoteResponse.model_validate(note)


@router.get(
    "/category",
    response_model=list[CategoryResponse],
    summary="List categories",
)
async def list_categories(
    db: DbSession,
    request_id: RequestId,
) -> list[CategoryResponse]:
    """List all categories."""
    service = NoteService(db)
    categories = await service.list_categories()
    return [CategoryResponse.model_validate(category) for category in categories]


@router.post(
    "/category",
    response_model=CategoryResponse,
    status_code=201,
    summary="Create a category",
    description="Create a category. Duplicate names are allowed.",
)
async def create_category(
    data: CategoryCreate,
    db: DbSession,
    request_id: RequestId,
) -> CategoryResponse:
    """Create a category."""
    service = NoteService(db)
    category = await service.create_category(data)
    return CategoryResponse.model_validate(category)


@router.get(
    "/{note_id}",
    response_model=NoteResponse,
    summary="Get a note",
)
async def get_note(
    note_id: int,
    db: DbSession,
    request_id: RequestId,
) -> NoteResponse:
    """Get a note by ID."""
    service = NoteService(db)
    note = await service.get_note(note_id)
    return NoteResponse.model_validate(note)


@router.put(
    "/{note_id}",
    response_model=NoteResponse,
    summary="Update a note",
    description="Update title and/or content. Only provided fields are updated.",
)
async def update_note(
    note_id: int,
    data: NoteUpdate,
    db: DbSession,
    request_id: RequestId,
) -> NoteResponse:
    """Update a note."""
    service = NoteService(db)
    note = await service.update_note(note_id, data)
    return NoteResponse.model_validate(note)


@router.delete(
    "/{note_id}",
    status_code=204,
    summary="Delete a note",
    description="Permanently delete a note. Its categories are kept.",
)
async def delete_note(
    note_id: int,
    db: DbSession,
    request_id: RequestId,
) -> None:
    """Delete a note."""
    service = NoteService(db)
    await service.delete_note(note_id)


@router.put(
    "/{note_id}/archive",
    response_model=NoteResponse,
    summary="Toggle archive",
    description="Archive an active note or restore an archived one.",
)
async def toggle_archive(
    note_id: int,
    db: DbSession,
    request_id: RequestId,
) -> NoteResponse:
    """Toggle the archive flag of a note."""
    service = NoteService(db)
    note = await service.toggle_archive(note_id)
    return NoteResponse.model_validate(note)


@router.post(
    "/{note_id}/category",
    response_model=NoteResponse,
    summary="Assign a category",
    description="Attach a category to a note. Attaching it twice changes nothing.",
)
async def assign_category(
    note_id: int,
    data: CategoryAssign,
    db: DbSession,
    request_id: RequestId,
) -> NoteResponse:
    """Assign a category to a note."""
    service = NoteService(db)
    note = await service.assign_category(note_id, data.category_id)
    return NoteResponse.model_validate(note)


@router.delete(
    "/{note_id}/category/{category_id}",
    response_model=NoteResponse,
    summary="Remove a category",
    description="Detach a category from a note. The category must exist.",
)
async def remove_category(
    note_id: int,
    category_id: int,
    db: DbSession,
    request_id: RequestId,
) -> NoteResponse:
    """Remove a category from a note."""
    service = NoteService(db)
    note = await service.remove_category(note_id, category_id)
    return NoteResponse.model_validate(note)
