"""
Tag model, shared across users.
"""
from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from journal.db.base import BaseModel, SoftDeleteMixin
from journal.models.diary import diary_tags


class Tag(SoftDeleteMixin, BaseModel):
    """Tag with a case-sensitive unique name."""
    __tablename__ = "tags"

    name = Column(String(100), unique=True, nullable=False, index=True)

    diaries = relationship("DiaryEntry", secondary=diary_tags, back_populates="tags")
