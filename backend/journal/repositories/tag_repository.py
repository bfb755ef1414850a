"""
Tag store.
"""
import logging
from typing import Iterable, List, Optional, Tuple
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from journal.db.base import utcnow
from journal.models.diary import DiaryEntry, diary_tags
from journal.models.tag import Tag

logger = logging.getLogger(__name__)


class TagRepository:
    def __init__(self, db: Session):
        self.db = db

    def _active(self):
        return self.db.query(Tag).filter(Tag.is_deleted.is_(False))

    def create(self, tag: Tag) -> Tag:
        self.db.add(tag)
        self.db.flush()
        return tag

    def get_by_id(self, tag_id: int) -> Optional[Tag]:
        return self._active().filter(Tag.id == tag_id).first()

    def get_by_name(self, name: str) -> Optional[Tag]:
        """Exact, case-sensitive match among live tags."""
        return self._active().filter(Tag.name == name).first()

    def update(self, tag: Tag) -> Tag:
        tag.updated_at = utcnow()
        self.db.flush()
        return tag

    def delete(self, tag_id: int) -> bool:
        updated = self._active().filter(Tag.id == tag_id).update(
            {Tag.is_deleted: True, Tag.deleted_at: utcnow()},
            synchronize_session="fetch",
        )
        return updated > 0

    def list(self, offset: int, limit: int) -> Tuple[List[Tag], int]:
        query = self._active()
        total = query.count()
        items = query.order_by(Tag.name).offset(offset).limit(limit).all()
        return items, total

    def get_by_ids(self, ids: Iterable[int]) -> List[Tag]:
        ids = list(ids)
        if not ids:
            return []
        return self._active().filter(Tag.id.in_(ids)).all()

    def get_or_create(self, name: str) -> Tag:
        """Resolve a tag by name, creating it when no live tag has that name.

        A soft-deleted tag with the same name is restored instead of inserting
        a second row. A concurrent insert of the same name surfaces as an
        IntegrityError, after which the winner's row is re-fetched.
        """
        tag = self.get_by_name(name)
        if tag is not None:
            return tag

        deleted = self.db.query(Tag).filter(Tag.name == name, Tag.is_deleted.is_(True)).first()
        if deleted is not None:
            deleted.is_deleted = False
            deleted.deleted_at = None
            self.db.flush()
            return deleted

        try:
            with self.db.begin_nested():
                tag = Tag(name=name)
                self.db.add(tag)
        except IntegrityError:
            logger.info(f"Tag '{name}' created concurrently, re-fetching")
            tag = self.get_by_name(name)
            if tag is None:
                raise
        return tag

    def get_by_diary_id(self, diary_id: int) -> List[Tag]:
        return self._active().join(
            diary_tags, Tag.id == diary_tags.c.tag_id
        ).filter(diary_tags.c.diary_id == diary_id).all()

    def get_popular(self, limit: int) -> List[Tag]:
        """Live tags ranked by how many live diaries carry them."""
        usage = func.count(DiaryEntry.id)
        return self._active().outerjoin(
            diary_tags, Tag.id == diary_tags.c.tag_id
        ).outerjoin(
            DiaryEntry, (DiaryEntry.id == diary_tags.c.diary_id) & DiaryEntry.is_deleted.is_(False)
        ).group_by(Tag.id).order_by(usage.desc(), Tag.id).limit(limit).all()
