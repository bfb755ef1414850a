"""
Tag service: tag CRUD and reconciliation of a diary's tag set.
"""
import logging
from typing import Iterable, List, Set, Tuple
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from journal.core.exceptions import AlreadyExists, NotFound
from journal.core.utils import page_to_offset
from journal.models.tag import Tag
from journal.repositories.diary_repository import DiaryRepository
from journal.repositories.tag_repository import TagRepository

logger = logging.getLogger(__name__)


def normalize_tag_names(names: Iterable[str]) -> List[str]:
    """Strip names, drop blanks and duplicates, keep first-seen order."""
    seen = []
    for name in names or []:
        name = (name or "").strip()
        if name and name not in seen:
            seen.append(name)
    return seen


def resolve_tags(db: Session, names: Iterable[str]) -> List[Tag]:
    """Get-or-create a tag for every distinct name."""
    tag_repo = TagRepository(db)
    return [tag_repo.get_or_create(name) for name in normalize_tag_names(names)]


def reconcile_tags(db: Session, diary_id: int, desired_names: Iterable[str]) -> Tuple[Set[int], Set[int]]:
    """
    Bring a diary's tags in line with ``desired_names`` using the smallest diff.

    Tags already attached and still wanted are not touched. The add and the
    remove are applied independently inside their own savepoints: if one
    fails it is logged and the other still runs, so the tag set can be left
    partially reconciled.

    Returns ``(added, removed)`` tag ids.
    """
    diary_repo = DiaryRepository(db)
    tag_repo = TagRepository(db)

    resolved = {tag.id for tag in resolve_tags(db, desired_names)}
    current = {tag.id for tag in tag_repo.get_by_diary_id(diary_id)}

    to_add = resolved - current
    to_remove = current - resolved

    added, removed = set(), set()
    if to_add:
        try:
            with db.begin_nested():
                diary_repo.add_tags(diary_id, sorted(to_add))
            added = to_add
        except SQLAlchemyError:
            logger.error(f"Failed to add tags {sorted(to_add)} to diary {diary_id}", exc_info=True)
    if to_remove:
        try:
            with db.begin_nested():
                diary_repo.remove_tags(diary_id, sorted(to_remove))
            removed = to_remove
        except SQLAlchemyError:
            logger.error(f"Failed to remove tags {sorted(to_remove)} from diary {diary_id}", exc_info=True)

    if added or removed:
        logger.debug(f"Diary {diary_id} tags: +{sorted(added)} -{sorted(removed)}")
    return added, removed


class TagService:
    """Tag management for the tags API."""

    def __init__(self, db: Session):
        self.db = db
        self.tags = TagRepository(db)

    def create(self, name: str) -> Tag:
        name = name.strip()
        if self.tags.get_by_name(name) is not None:
            raise AlreadyExists("Tag already exists")
        try:
            tag = self.tags.create(Tag(name=name))
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise AlreadyExists("Tag name is reserved by a deleted tag")
        self.db.refresh(tag)
        return tag

    def get_by_id(self, tag_id: int) -> Tag:
        tag = self.tags.get_by_id(tag_id)
        if tag is None:
            raise NotFound("Tag not found")
        return tag

    def get_by_name(self, name: str) -> Tag:
        tag = self.tags.get_by_name(name)
        if tag is None:
            raise NotFound("Tag not found")
        return tag

    def update(self, tag_id: int, name: str) -> Tag:
        tag = self.get_by_id(tag_id)
        name = name.strip()
        if tag.name != name and self.tags.get_by_name(name) is not None:
            raise AlreadyExists("Tag already exists")
        tag.name = name
        try:
            self.tags.update(tag)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise AlreadyExists("Tag name is reserved by a deleted tag")
        self.db.refresh(tag)
        return tag

    def delete(self, tag_id: int):
        if not self.tags.delete(tag_id):
            raise NotFound("Tag not found")
        self.db.commit()

    def list(self, page: int, page_size: int) -> Tuple[List[Tag], int, int, int]:
        page, page_size, offset = page_to_offset(page, page_size)
        items, total = self.tags.list(offset, page_size)
        return items, total, page, page_size

    def get_popular(self, limit: int = 10) -> List[Tag]:
        if limit < 1:
            limit = 10
        return self.tags.get_popular(limit)
