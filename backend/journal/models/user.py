"""
User model for authentication and user management.
"""
from sqlalchemy import Column, String, Boolean
from sqlalchemy.orm import relationship
from journal.db.base import BaseModel, SoftDeleteMixin


class User(SoftDeleteMixin, BaseModel):
    """User account."""
    __tablename__ = "users"

    username = Column(String(50), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    # Relationships
    diaries = relationship("DiaryEntry", back_populates="user")
    images = relationship("Image", back_populates="user")
    todos = relationship("Todo", back_populates="user")
