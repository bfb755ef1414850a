"""
Diary service: the diary lifecycle around the field confidentiality policy.

Diary rows only ever hold protected values. Everything handed back to callers
is a ``DiaryView`` built on read, carrying revealed fields, decrypted content
and a summary derived from it. Views are never written back to the database.
"""
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from journal.core.exceptions import JournalError, NotFound, NotOwner, PinLimitExceeded
from journal.core.locks import KeyedLock, diary_locks, pin_locks
from journal.core.utils import make_summary, page_to_offset
from journal.models.diary import DiaryEntry
from journal.models.image import Image
from journal.models.tag import Tag
from journal.repositories.diary_repository import DiaryRepository
from journal.repositories.image_repository import ImageRepository
from journal.repositories.tag_repository import TagRepository
from journal.repositories.user_repository import UserRepository
from journal.schemas.diary import DiaryCreate, DiaryUpdate
from journal.services.confidentiality import SCALAR_FIELDS, FieldCipher
from journal.services.tag_service import reconcile_tags, resolve_tags

logger = logging.getLogger(__name__)

MAX_PINNED_DIARIES = 3

_UNSET = object()


@dataclass
class DiaryView:
    """A diary as shown to callers: every field already revealed."""
    id: int
    user_id: int
    date: date
    is_public: bool
    is_pinned: bool
    created_at: datetime
    updated_at: datetime
    title: str = ""
    weather: str = ""
    mood: str = ""
    location: str = ""
    music: str = ""
    content: Optional[str] = None
    summary: str = ""
    properties: Optional[Dict[str, Any]] = None
    tags: List[Tag] = field(default_factory=list)
    images: List[Image] = field(default_factory=list)


class DiaryService:
    """Create, read, update, list and pin diaries for one database session."""

    def __init__(
        self,
        db: Session,
        cipher: FieldCipher,
        pin_lock: KeyedLock = pin_locks,
        diary_lock: KeyedLock = diary_locks,
    ):
        self.db = db
        self.cipher = cipher
        self.diaries = DiaryRepository(db)
        self.images = ImageRepository(db)
        self.users = UserRepository(db)
        self.pin_lock = pin_lock
        self.diary_lock = diary_lock

    def _view(self, diary: DiaryEntry, fields: Optional[Dict[str, str]] = None, content=_UNSET) -> DiaryView:
        if fields is None:
            fields = self.cipher.reveal_fields(diary)
        if content is _UNSET:
            content = self.cipher.open_content(diary.content_enc, diary.iv)
        return DiaryView(
            id=diary.id,
            user_id=diary.user_id,
            date=diary.date,
            is_public=diary.is_public,
            is_pinned=diary.is_pinned,
            created_at=diary.created_at,
            updated_at=diary.updated_at,
            content=content,
            summary=make_summary(content),
            properties=diary.properties,
            tags=list(diary.tags),
            images=list(diary.images),
            **fields,
        )

    def _apply_content(self, diary: DiaryEntry, content: str):
        ciphertext, nonce = self.cipher.seal_content(content)
        if content and ciphertext is None:
            logger.warning(f"No content key configured; content of diary {diary.id} is not stored")
        diary.content_enc = ciphertext
        diary.iv = nonce

    def _attach_images(self, user_id: int, diary_id: int, image_ids: Iterable[int]):
        for image_id in image_ids:
            image = self.images.get_by_id(image_id)
            if image is None or image.user_id != user_id:
                logger.info(f"Skipping image {image_id} for diary {diary_id}: missing or not owned by user {user_id}")
                continue
            self.images.attach_to_diary(image_id, diary_id)

    def create(self, user_id: int, data: DiaryCreate) -> DiaryView:
        """Protect and persist a new diary, then attach the caller's images."""
        plain_fields = {name: getattr(data, name) for name in SCALAR_FIELDS}
        tags = resolve_tags(self.db, data.tags)

        diary = DiaryEntry(
            user_id=user_id,
            date=data.date,
            is_public=data.is_public,
            properties=data.properties,
            summary="",
            tags=tags,
            **self.cipher.protect_fields(plain_fields),
        )
        self._apply_content(diary, data.content)
        self.diaries.create(diary)

        if data.image_ids:
            self._attach_images(user_id, diary.id, data.image_ids)

        self.db.commit()
        diary = self.diaries.get_with_all(diary.id)
        return self._view(diary, fields=plain_fields, content=data.content)

    def ensure_owner(self, diary_id: int, user_id: int) -> DiaryEntry:
        """Raw (still protected) diary, if ``user_id`` owns it."""
        diary = self.diaries.get_by_id(diary_id)
        if diary is None:
            raise NotFound("Diary not found")
        if diary.user_id != user_id:
            raise NotOwner("Not allowed to modify this diary")
        return diary

    def get(self, diary_id: int) -> DiaryView:
        diary = self.diaries.get_with_all(diary_id)
        if diary is None:
            raise NotFound("Diary not found")
        return self._view(diary)

    def update(self, diary_id: int, data: DiaryUpdate) -> DiaryView:
        """
        Replace a diary's editable fields and reconcile its tags.

        All scalar fields are re-protected. Non-empty content is resealed with
        a new nonce; empty content, or content with no key configured, leaves
        the stored ciphertext as it is. Ownership must be checked by the caller.
        """
        with self.diary_lock.hold(diary_id):
            diary = self.diaries.get_by_id(diary_id, for_update=True)
            if diary is None:
                raise NotFound("Diary not found")

            for name, value in self.cipher.protect_fields(
                {name: getattr(data, name) for name in SCALAR_FIELDS}
            ).items():
                setattr(diary, name, value)
            diary.date = data.date
            diary.is_public = data.is_public
            diary.properties = data.properties
            diary.summary = ""
            ciphertext, nonce = self.cipher.seal_content(data.content)
            if ciphertext is not None:
                diary.content_enc = ciphertext
                diary.iv = nonce
            elif data.content:
                logger.warning(f"No content key configured; keeping stored content of diary {diary_id}")
            self.diaries.update(diary)

            reconcile_tags(self.db, diary_id, data.tags)
            self.db.commit()

        return self.get(diary_id)

    def delete(self, diary_id: int):
        """Soft delete; tags and images stay in place."""
        if not self.diaries.delete(diary_id):
            raise NotFound("Diary not found")
        self.db.commit()

    def list_by_user(self, user_id: int, page: int = 1, page_size: int = 20) -> Tuple[List[DiaryView], int, int, int]:
        page, page_size, offset = page_to_offset(page, page_size)
        diaries, total = self.diaries.list_by_user(user_id, offset, page_size)
        return [self._view(d) for d in diaries], total, page, page_size

    def list_public(self, page: int = 1, page_size: int = 20) -> Tuple[List[DiaryView], int, int, int]:
        page, page_size, offset = page_to_offset(page, page_size)
        diaries, total = self.diaries.list_public(offset, page_size)
        return [self._view(d) for d in diaries], total, page, page_size

    def search(self, user_id: int, keyword: str, page: int = 1, page_size: int = 20) -> Tuple[List[DiaryView], int, int, int]:
        page, page_size, offset = page_to_offset(page, page_size)
        diaries, total = self.diaries.search_by_user(user_id, keyword, offset, page_size)
        return [self._view(d) for d in diaries], total, page, page_size

    def list_by_tag(self, user_id: int, tag_name: str, page: int = 1, page_size: int = 20) -> Tuple[List[DiaryView], int, int, int]:
        """The user's diaries carrying the named tag."""
        page, page_size, offset = page_to_offset(page, page_size)
        tag = TagRepository(self.db).get_by_name(tag_name.strip())
        if tag is None:
            return [], 0, page, page_size
        diaries, total = self.diaries.get_by_tags(user_id, [tag.id], offset, page_size)
        return [self._view(d) for d in diaries], total, page, page_size

    def get_by_date_range(self, user_id: int, start_date: Optional[date], end_date: Optional[date]) -> List[DiaryView]:
        return [self._view(d) for d in self.diaries.get_by_date_range(user_id, start_date, end_date)]

    def get_by_ids(self, user_id: int, ids: Iterable[int]) -> List[DiaryView]:
        return [self._view(d) for d in self.diaries.get_by_ids(user_id, ids)]

    def get_all(self, user_id: int) -> List[DiaryView]:
        return self.get_by_date_range(user_id, None, None)

    def toggle_pin(self, user_id: int, diary_id: int) -> bool:
        """
        Flip a diary's pinned flag, refusing to pin beyond MAX_PINNED_DIARIES.

        The count and the write happen under the per-user lock and inside one
        transaction holding the user's row, so concurrent toggles by the same
        user cannot both pass the count.
        """
        with self.pin_lock.hold(user_id):
            try:
                self.users.get_by_id(user_id, for_update=True)
                diary = self.diaries.get_by_id(diary_id, for_update=True)
                if diary is None:
                    raise NotFound("Diary not found")
                if diary.user_id != user_id:
                    raise NotOwner("Not allowed to pin this diary")

                new_status = not diary.is_pinned
                if new_status:
                    pinned = self.diaries.count_pinned(user_id)
                    if pinned >= MAX_PINNED_DIARIES:
                        logger.info(f"User {user_id} already has {pinned} pinned diaries")
                        raise PinLimitExceeded(f"At most {MAX_PINNED_DIARIES} diaries can be pinned")

                self.diaries.update_pin_status(diary_id, new_status)
                self.db.commit()
            except (JournalError, SQLAlchemyError):
                self.db.rollback()
                raise
        return new_status
