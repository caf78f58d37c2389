"""
Note Model.

Database model for notes and their many-to-many link to categories.
"""

from sqlalchemy import Column, ForeignKey, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from notekeeper.backend.models.base import Base, CreatedAtMixin, IntegerIdMixin
from notekeeper.backend.models.category import Category

# Composite primary key keeps a category attached to a note at most once.
note_categories = Table(
    "note_categories",
    Base.metadata,
    Column("note_id", ForeignKey("notes.id", ondelete="CASCADE"), primary_key=True),
    Column("category_id", ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True),
)


class Note(IntegerIdMixin, CreatedAtMixin, Base):
    """
    Note database model.

    Deleting a note removes its rows in note_categories; the
    categories themselves are left alone.
    """

    __tablename__ = "notes"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    archived: Mapped[bool] = mapped_column(default=False, nullable=False, index=True)

    categories: Mapped[list[Category]] = relationship(
        secondary=note_categories,
        lazy="selectin",
        order_by=Category.id,
    )

    def has_category(self, category_id: int) -> bool:
        """Return True if the category is attached to this note."""
        return any(category.id == category_id for category in self.categories)

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r}, archived={self.archived})>"
