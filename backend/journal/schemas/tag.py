"""
Pydantic schemas for Tag entity.
"""
from pydantic import BaseModel, Field
from typing import List


class TagCreate(BaseModel):
    """Schema for tag creation and rename."""
    name: str = Field(..., min_length=1, max_length=100)


class TagResponse(BaseModel):
    """Schema for tag response."""
    id: int
    name: str

    class Config:
        from_attributes = True


class TagListResponse(BaseModel):
    tags: List[TagResponse]
    total: int
    page: int
    page_size: int
