"""
Tag routes. Tags are shared by all users.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from journal.api.dependencies import get_current_user
from journal.db.session import get_db
from journal.models.user import User
from journal.schemas.tag import TagCreate, TagResponse, TagListResponse
from journal.services.tag_service import TagService

router = APIRouter(prefix="/tags", tags=["tags"])


@router.get("", response_model=TagListResponse)
async def list_tags(
    page: int = 1,
    page_size: int = 20,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List tags alphabetically."""
    items, total, page, page_size = TagService(db).list(page, page_size)
    return TagListResponse(tags=items, total=total, page=page, page_size=page_size)


@router.get("/popular", response_model=List[TagResponse])
async def popular_tags(
    limit: int = 10,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Most used tags first."""
    return TagService(db).get_popular(limit)


@router.post("", response_model=TagResponse, status_code=status.HTTP_201_CREATED)
async def create_tag(
    tag_data: TagCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return TagService(db).create(tag_data.name)


@router.get("/{tag_id}", response_model=TagResponse)
async def get_tag(
    tag_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return TagService(db).get_by_id(tag_id)


@router.put("/{tag_id}", response_model=TagResponse)
async def rename_tag(
    tag_id: int,
    tag_data: TagCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return TagService(db).update(tag_id, tag_data.name)


@router.delete("/{tag_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tag(
    tag_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    TagService(db).delete(tag_id)
