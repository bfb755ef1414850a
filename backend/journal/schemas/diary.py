"""
Pydantic schemas for Diary entity.
"""
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
from datetime import date, datetime
from journal.schemas.image import ImageResponse
from journal.schemas.tag import TagResponse


class DiaryBase(BaseModel):
    """Base diary schema."""
    title: str = Field(..., max_length=255)
    content: str = ""
    weather: str = ""
    mood: str = ""
    location: str = ""
    music: str = ""
    date: date
    is_public: bool = False
    tags: List[str] = []
    properties: Optional[Dict[str, Any]] = None


class DiaryCreate(DiaryBase):
    """Schema for diary creation."""
    image_ids: List[int] = []


class DiaryUpdate(DiaryBase):
    """Schema for diary update (full replacement of editable fields)."""
    pass


class DiaryResponse(BaseModel):
    """Schema for diary response with revealed fields."""
    id: int
    user_id: int
    title: str
    content: Optional[str] = None  # only filled for detail views
    summary: str = ""
    weather: str = ""
    mood: str = ""
    location: str = ""
    music: str = ""
    date: date
    is_public: bool
    is_pinned: bool
    properties: Optional[Dict[str, Any]] = None
    tags: List[TagResponse] = []
    images: List[ImageResponse] = []
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class DiaryListResponse(BaseModel):
    """Schema for a page of diaries."""
    diaries: List[DiaryResponse]
    total: int
    page: int
    page_size: int


class PinResponse(BaseModel):
    """Schema for pin toggle result."""
    is_pinned: bool
    message: str
