"""
Pydantic schemas for Image entity.
"""
from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime


class ImageResponse(BaseModel):
    """Schema for image response."""
    id: int
    path: str
    file_name: str = ""
    diary_id: Optional[int] = None
    created_at: datetime

    class Config:
        from_attributes = True


class ImageListResponse(BaseModel):
    images: List[ImageResponse]
    total: int
    page: int
    page_size: int


class AttachImageRequest(BaseModel):
    """Schema for attaching an image to a diary."""
    diary_id: int
