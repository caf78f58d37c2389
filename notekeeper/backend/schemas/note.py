"""
Note Schemas.

Pydantic schemas for note and category request/response validation.
"""

from datetime import datetime

from pydantic import Field

from notekeeper.backend.schemas.base import ApiModel


class CategoryCreate(ApiModel):
    """Schema for creating a category."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Category name (duplicates allowed)",
        examples=["Work"],
    )


class CategoryResponse(ApiModel):
    """Schema for a category in API responses."""

    id: int = Field(description="Category unique identifier")
    name: str = Field(description="Category name")


class CategoryAssign(ApiModel):
    """Body of POST /notes/{id}/category."""

    category_id: int = Field(..., description="Category to attach", examples=[1])


class NoteCreate(ApiModel):
    """Schema for creating a new note."""

    title: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Note title",
        examples=["Groceries"],
    )
    content: str = Field(
        ...,
        min_length=1,
        description="Note content",
        examples=["Milk, eggs, coffee"],
    )


class NoteUpdate(ApiModel):
    """
    Schema for updating an existing note.

    A field left out of the body is unset and keeps its stored value.
    A field that is present must carry a non-blank value; the service
    rejects present-but-null or blank values. Use `model_fields_set`
    (or `model_dump(exclude_unset=True)`) to tell the two apart.
    """

    title: str | None = Field(
        default=None,
        max_length=255,
        description="Note title",
    )
    content: str | None = Field(
        default=None,
        description="Note content",
    )


class NoteResponse(ApiModel):
    """Schema for a note in API responses."""

    id: int = Field(description="Note unique identifier")
    title: str = Field(description="Note title")
    content: str = Field(description="Note content")
    archived: bool = Field(description="Whether the note is archived")
    created_at: datetime = Field(description="Creation timestamp (UTC)")
    categories: list[CategoryResponse] = Field(
        default_factory=list,
        description="Attached categories",
    )

    def category_ids(self) -> set[int]:
        """Ids of the attached categories."""
        return {category.id for category in self.categories}
