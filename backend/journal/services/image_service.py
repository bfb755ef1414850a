"""
Image service for uploaded pictures.
"""
import logging
import os
import uuid
from typing import List, Tuple
from sqlalchemy.orm import Session
from journal.core.config import settings
from journal.core.exceptions import NotFound, NotOwner, ValidationFailed
from journal.core.utils import page_to_offset
from journal.models.image import Image
from journal.repositories.diary_repository import DiaryRepository
from journal.repositories.image_repository import ImageRepository

logger = logging.getLogger(__name__)


def save_upload(user_id: int, filename: str, content_type: str, data: bytes, db: Session) -> Image:
    """Write an uploaded file under UPLOAD_DIR and record it."""
    if content_type not in settings.ALLOWED_IMAGE_TYPES:
        raise ValidationFailed(f"Invalid file type: {content_type}")
    if len(data) > settings.MAX_UPLOAD_SIZE:
        raise ValidationFailed("File too large")

    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    file_ext = os.path.splitext(filename or "")[1]
    unique_filename = f"{uuid.uuid4()}{file_ext}"
    file_path = os.path.join(settings.UPLOAD_DIR, unique_filename)

    with open(file_path, "wb") as buffer:
        buffer.write(data)

    image = Image(user_id=user_id, path=unique_filename, file_name=filename or unique_filename)
    try:
        ImageRepository(db).create(image)
        db.commit()
    except Exception:
        db.rollback()
        # Record failed; don't leave an orphaned file behind
        if os.path.exists(file_path):
            os.remove(file_path)
        raise
    db.refresh(image)
    return image


def get_owned_image(image_id: int, user_id: int, db: Session) -> Image:
    """Fetch an image the user owns."""
    image = ImageRepository(db).get_by_id(image_id)
    if image is None:
        raise NotFound("Image not found")
    if image.user_id != user_id:
        raise NotOwner("Not allowed to access this image")
    return image


def delete_image(image_id: int, user_id: int, db: Session):
    """Soft delete; the file stays on disk."""
    get_owned_image(image_id, user_id, db)
    ImageRepository(db).delete(image_id)
    db.commit()


def list_images(user_id: int, page: int, page_size: int, db: Session, unattached: bool = False) -> Tuple[List[Image], int, int, int]:
    page, page_size, offset = page_to_offset(page, page_size)
    repo = ImageRepository(db)
    if unattached:
        items, total = repo.list_unattached(user_id, offset, page_size)
    else:
        items, total = repo.list_by_user(user_id, offset, page_size)
    return items, total, page, page_size


def list_diary_images(diary_id: int, user_id: int, db: Session) -> List[Image]:
    """Images attached to a diary the user owns."""
    _get_owned_diary(diary_id, user_id, db)
    return ImageRepository(db).list_by_diary(diary_id)


def _get_owned_diary(diary_id: int, user_id: int, db: Session):
    diary = DiaryRepository(db).get_by_id(diary_id)
    if diary is None:
        raise NotFound("Diary not found")
    if diary.user_id != user_id:
        raise NotOwner("Not allowed to modify this diary")
    return diary


def attach_image(image_id: int, diary_id: int, user_id: int, db: Session) -> Image:
    """Attach an owned image to an owned diary."""
    image = get_owned_image(image_id, user_id, db)
    _get_owned_diary(diary_id, user_id, db)
    ImageRepository(db).attach_to_diary(image_id, diary_id)
    db.commit()
    db.refresh(image)
    return image


def detach_image(image_id: int, user_id: int, db: Session) -> Image:
    """Detach an image from its diary; the image row is kept."""
    image = get_owned_image(image_id, user_id, db)
    ImageRepository(db).detach_from_diary(image_id)
    db.commit()
    db.refresh(image)
    return image
