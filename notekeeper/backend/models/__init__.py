# Importing the models registers their tables on Base.metadata
from notekeeper.backend.models.base import Base
from notekeeper.backend.models.category import Category
from notekeeper.backend.models.note import Note, note_categories

__all__ = ["Base", "Category", "Note", "note_categories"]
