"""
Image upload and attachment routes.
"""
from fastapi import APIRouter, Depends, status, UploadFile, File
from sqlalchemy.orm import Session
from typing import List
from journal.api.dependencies import get_current_user
from journal.db.session import get_db
from journal.models.user import User
from journal.schemas.image import ImageResponse, ImageListResponse, AttachImageRequest
from journal.services import image_service

router = APIRouter(prefix="/images", tags=["images"])


@router.post("", response_model=ImageResponse, status_code=status.HTTP_201_CREATED)
async def upload_image(
    file: UploadFile = File(...),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Upload an image; attach it to a diary later or via diary creation."""
    data = await file.read()
    return image_service.save_upload(current_user.id, file.filename, file.content_type, data, db)


@router.get("", response_model=ImageListResponse)
async def list_images(
    page: int = 1,
    page_size: int = 20,
    unattached: bool = False,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List the user's images, optionally only those not attached to a diary."""
    items, total, page, page_size = image_service.list_images(
        current_user.id, page, page_size, db, unattached=unattached
    )
    return ImageListResponse(images=items, total=total, page=page, page_size=page_size)


@router.get("/by-diary/{diary_id}", response_model=List[ImageResponse])
async def list_diary_images(
    diary_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Images attached to one of the user's diaries."""
    return image_service.list_diary_images(diary_id, current_user.id, db)


@router.get("/{image_id}", response_model=ImageResponse)
async def get_image(
    image_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return image_service.get_owned_image(image_id, current_user.id, db)


@router.post("/{image_id}/attach", response_model=ImageResponse)
async def attach_image(
    image_id: int,
    data: AttachImageRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return image_service.attach_image(image_id, data.diary_id, current_user.id, db)


@router.post("/{image_id}/detach", response_model=ImageResponse)
async def detach_image(
    image_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return image_service.detach_image(image_id, current_user.id, db)


@router.delete("/{image_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_image(
    image_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    image_service.delete_image(image_id, current_user.id, db)
