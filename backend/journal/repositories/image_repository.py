"""
Image store.
"""
from typing import List, Optional, Tuple
from sqlalchemy.orm import Session
from journal.db.base import utcnow
from journal.models.image import Image


class ImageRepository:
    def __init__(self, db: Session):
        self.db = db

    def _active(self):
        return self.db.query(Image).filter(Image.is_deleted.is_(False))

    def _page(self, query, offset: int, limit: int) -> Tuple[List[Image], int]:
        total = query.count()
        items = query.order_by(Image.created_at.desc(), Image.id.desc()).offset(offset).limit(limit).all()
        return items, total

    def create(self, image: Image) -> Image:
        self.db.add(image)
        self.db.flush()
        return image

    def get_by_id(self, image_id: int) -> Optional[Image]:
        return self._active().filter(Image.id == image_id).first()

    def update(self, image: Image) -> Image:
        image.updated_at = utcnow()
        self.db.flush()
        return image

    def delete(self, image_id: int) -> bool:
        updated = self._active().filter(Image.id == image_id).update(
            {Image.is_deleted: True, Image.deleted_at: utcnow()},
            synchronize_session="fetch",
        )
        return updated > 0

    def list_by_user(self, user_id: int, offset: int, limit: int) -> Tuple[List[Image], int]:
        return self._page(self._active().filter(Image.user_id == user_id), offset, limit)

    def list_by_diary(self, diary_id: int) -> List[Image]:
        return self._active().filter(Image.diary_id == diary_id).order_by(Image.id).all()

    def list_unattached(self, user_id: int, offset: int, limit: int) -> Tuple[List[Image], int]:
        """Images the user uploaded but has not attached to any diary."""
        query = self._active().filter(Image.user_id == user_id, Image.diary_id.is_(None))
        return self._page(query, offset, limit)

    def attach_to_diary(self, image_id: int, diary_id: int):
        self.db.query(Image).filter(Image.id == image_id).update(
            {Image.diary_id: diary_id, Image.updated_at: utcnow()},
            synchronize_session="fetch",
        )

    def detach_from_diary(self, image_id: int):
        self.db.query(Image).filter(Image.id == image_id).update(
            {Image.diary_id: None, Image.updated_at: utcnow()},
            synchronize_session="fetch",
        )

    def count_by_user(self, user_id: int) -> int:
        return self._active().filter(Image.user_id == user_id).count()
