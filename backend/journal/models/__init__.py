"""Models package - Import all models for SQLAlchemy registration."""
from journal.models.user import User
from journal.models.diary import DiaryEntry, diary_tags
from journal.models.tag import Tag
from journal.models.image import Image
from journal.models.todo import Todo

__all__ = [
    "User",
    "DiaryEntry",
    "diary_tags",
    "Tag",
    "Image",
    "Todo",
]
