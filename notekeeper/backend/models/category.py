"""
Category Model.

A user-defined label that can be attached to any number of notes.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from notekeeper.backend.models.base import Base, IntegerIdMixin


class Category(IntegerIdMixin, Base):
    """
    Category database model.

    Names are not unique: two categories may share a name and are
    still distinct records.
    """

    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name={self.name!r})>"
