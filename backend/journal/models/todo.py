"""
Todo model.
"""
from sqlalchemy import Column, String, Text, ForeignKey, Integer, Boolean, DateTime
from sqlalchemy.orm import relationship
from journal.db.base import BaseModel, SoftDeleteMixin


class Todo(SoftDeleteMixin, BaseModel):
    """Todo item owned by a user."""
    __tablename__ = "todos"

    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    done = Column(Boolean, default=False, nullable=False)
    due_date = Column(DateTime, nullable=True, index=True)

    user = relationship("User", back_populates="todos")
