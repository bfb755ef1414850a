"""
Diary store: persistence queries over DiaryEntry and the diary_tags table.
"""
from datetime import date
from typing import Iterable, List, Optional, Tuple
from sqlalchemy import func, extract
from sqlalchemy.orm import Session, selectinload
from journal.db.base import utcnow
from journal.models.diary import DiaryEntry, diary_tags
from journal.models.image import Image
from journal.models.tag import Tag


class DiaryRepository:
    """Queries always exclude soft-deleted diaries."""

    def __init__(self, db: Session):
        self.db = db

    def _active(self):
        return self.db.query(DiaryEntry).filter(DiaryEntry.is_deleted.is_(False))

    def _with_associations(self, query):
        return query.options(
            selectinload(DiaryEntry.tags.and_(Tag.is_deleted.is_(False))),
            selectinload(DiaryEntry.images.and_(Image.is_deleted.is_(False))),
        )

    def create(self, diary: DiaryEntry) -> DiaryEntry:
        self.db.add(diary)
        self.db.flush()
        return diary

    def get_by_id(self, diary_id: int, for_update: bool = False) -> Optional[DiaryEntry]:
        query = self._active().filter(DiaryEntry.id == diary_id)
        if for_update:
            query = query.with_for_update()
        return query.first()

    def get_with_all(self, diary_id: int) -> Optional[DiaryEntry]:
        """Fetch a diary with its live tags and images."""
        return self._with_associations(self._active()).filter(DiaryEntry.id == diary_id).first()

    def update(self, diary: DiaryEntry) -> DiaryEntry:
        diary.updated_at = utcnow()
        self.db.flush()
        return diary

    def delete(self, diary_id: int) -> bool:
        """Soft delete. Returns False when nothing matched."""
        updated = self._active().filter(DiaryEntry.id == diary_id).update(
            {DiaryEntry.is_deleted: True, DiaryEntry.deleted_at: utcnow()},
            synchronize_session="fetch",
        )
        return updated > 0

    def _page(self, query, offset: int, limit: int, *order_by) -> Tuple[List[DiaryEntry], int]:
        total = query.count()
        items = self._with_associations(query).order_by(*order_by).offset(offset).limit(limit).all()
        return items, total

    def list_by_user(self, user_id: int, offset: int, limit: int) -> Tuple[List[DiaryEntry], int]:
        """Pinned first, then newest."""
        query = self._active().filter(DiaryEntry.user_id == user_id)
        return self._page(
            query, offset, limit,
            DiaryEntry.is_pinned.desc(), DiaryEntry.date.desc(), DiaryEntry.created_at.desc(),
        )

    def list_public(self, offset: int, limit: int) -> Tuple[List[DiaryEntry], int]:
        query = self._active().filter(DiaryEntry.is_public.is_(True))
        return self._page(query, offset, limit, DiaryEntry.date.desc(), DiaryEntry.created_at.desc())

    def search_by_user(self, user_id: int, keyword: str, offset: int, limit: int) -> Tuple[List[DiaryEntry], int]:
        """Match the keyword against the stored title and summary columns."""
        query = self._active().filter(
            DiaryEntry.user_id == user_id,
            DiaryEntry.title.contains(keyword, autoescape=True)
            | DiaryEntry.summary.contains(keyword, autoescape=True),
        )
        return self._page(query, offset, limit, DiaryEntry.date.desc())

    def get_by_date_range(self, user_id: int, start_date: Optional[date], end_date: Optional[date]) -> List[DiaryEntry]:
        """Diaries dated within the inclusive range; a missing bound is open."""
        query = self._with_associations(self._active()).filter(DiaryEntry.user_id == user_id)
        if start_date is not None:
            query = query.filter(DiaryEntry.date >= start_date)
        if end_date is not None:
            query = query.filter(DiaryEntry.date <= end_date)
        return query.order_by(DiaryEntry.date.asc(), DiaryEntry.id.asc()).all()

    def get_by_ids(self, user_id: int, ids: Iterable[int]) -> List[DiaryEntry]:
        ids = list(ids)
        if not ids:
            return []
        return self._with_associations(self._active()).filter(
            DiaryEntry.user_id == user_id,
            DiaryEntry.id.in_(ids),
        ).order_by(DiaryEntry.date.asc()).all()

    def get_by_tags(self, user_id: int, tag_ids: Iterable[int], offset: int, limit: int) -> Tuple[List[DiaryEntry], int]:
        """Diaries carrying any of the given tags."""
        tagged = self.db.query(diary_tags.c.diary_id).filter(diary_tags.c.tag_id.in_(list(tag_ids)))
        query = self._active().filter(DiaryEntry.user_id == user_id, DiaryEntry.id.in_(tagged))
        return self._page(query, offset, limit, DiaryEntry.date.desc())

    def add_tags(self, diary_id: int, tag_ids: Iterable[int]):
        rows = [{"diary_id": diary_id, "tag_id": tag_id} for tag_id in tag_ids]
        if rows:
            self.db.execute(diary_tags.insert(), rows)

    def remove_tags(self, diary_id: int, tag_ids: Iterable[int]):
        tag_ids = list(tag_ids)
        if tag_ids:
            self.db.execute(
                diary_tags.delete().where(
                    diary_tags.c.diary_id == diary_id,
                    diary_tags.c.tag_id.in_(tag_ids),
                )
            )

    def count_by_user(self, user_id: int) -> int:
        return self._active().filter(DiaryEntry.user_id == user_id).count()

    def count_pinned(self, user_id: int) -> int:
        return self._active().filter(
            DiaryEntry.user_id == user_id,
            DiaryEntry.is_pinned.is_(True),
        ).count()

    def update_pin_status(self, diary_id: int, is_pinned: bool):
        self.db.query(DiaryEntry).filter(DiaryEntry.id == diary_id).update(
            {DiaryEntry.is_pinned: is_pinned},
            synchronize_session="fetch",
        )

    def get_monthly_trend(self, user_id: int, months: int = 12) -> List[Tuple[str, int]]:
        """Diary counts per month for the most recent ``months`` months, oldest first."""
        year = extract("year", DiaryEntry.date)
        month = extract("month", DiaryEntry.date)
        rows = self.db.query(year, month, func.count(DiaryEntry.id)).filter(
            DiaryEntry.user_id == user_id,
            DiaryEntry.is_deleted.is_(False),
        ).group_by(year, month).order_by(year.desc(), month.desc()).limit(months).all()
        return [(f"{int(y):04d}-{int(m):02d}", count) for y, m, count in reversed(rows)]

    def get_top_tags(self, user_id: int, limit: int) -> List[Tuple[str, int]]:
        """Tag names most used by the user's live diaries."""
        usage = func.count(diary_tags.c.diary_id)
        rows = self.db.query(Tag.name, usage).join(
            diary_tags, Tag.id == diary_tags.c.tag_id
        ).join(
            DiaryEntry, DiaryEntry.id == diary_tags.c.diary_id
        ).filter(
            DiaryEntry.user_id == user_id,
            DiaryEntry.is_deleted.is_(False),
            Tag.is_deleted.is_(False),
        ).group_by(Tag.name).order_by(usage.desc(), Tag.name).limit(limit).all()
        return [(name, count) for name, count in rows]

    def list_moods(self, user_id: int) -> List[str]:
        """Stored (possibly protected) mood values, one per live diary."""
        rows = self.db.query(DiaryEntry.mood).filter(
            DiaryEntry.user_id == user_id,
            DiaryEntry.is_deleted.is_(False),
        ).all()
        return [mood for (mood,) in rows]

