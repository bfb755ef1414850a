"""
Pydantic schemas for Todo entity.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime


class TodoBase(BaseModel):
    """Base todo schema."""
    title: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    due_date: Optional[datetime] = None


class TodoCreate(TodoBase):
    pass


class TodoUpdate(TodoBase):
    pass


class TodoResponse(TodoBase):
    """Schema for todo response."""
    id: int
    done: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class TodoListResponse(BaseModel):
    todos: List[TodoResponse]
    total: int
    page: int
    page_size: int


class TodoStatsResponse(BaseModel):
    total: int
    pending: int
