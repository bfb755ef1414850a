"""
Image model for uploaded pictures.
"""
from sqlalchemy import Column, String, ForeignKey, Integer
from sqlalchemy.orm import relationship
from journal.db.base import BaseModel, SoftDeleteMixin


class Image(SoftDeleteMixin, BaseModel):
    """Image owned by a user, optionally attached to one diary."""
    __tablename__ = "images"

    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    diary_id = Column(Integer, ForeignKey("diaries.id"), nullable=True, index=True)
    path = Column(String(1024), nullable=False)
    file_name = Column(String(255), nullable=False, default="")

    # Relationships
    user = relationship("User", back_populates="images")
    diary = relationship("DiaryEntry", back_populates="images")
