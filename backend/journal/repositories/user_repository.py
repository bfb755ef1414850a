"""
User store.
"""
from typing import List, Optional, Tuple
from sqlalchemy.orm import Session
from journal.db.base import utcnow
from journal.models.user import User


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def _active(self):
        return self.db.query(User).filter(User.is_deleted.is_(False))

    def create(self, user: User) -> User:
        self.db.add(user)
        self.db.flush()
        return user

    def get_by_id(self, user_id: int, for_update: bool = False) -> Optional[User]:
        query = self._active().filter(User.id == user_id)
        if for_update:
            query = query.with_for_update()
        return query.first()

    def get_by_username(self, username: str) -> Optional[User]:
        return self._active().filter(User.username == username).first()

    def update(self, user: User) -> User:
        user.updated_at = utcnow()
        self.db.flush()
        return user

    def delete(self, user_id: int) -> bool:
        updated = self._active().filter(User.id == user_id).update(
            {User.is_deleted: True, User.deleted_at: utcnow()},
            synchronize_session="fetch",
        )
        return updated > 0

    def list(self, offset: int, limit: int) -> Tuple[List[User], int]:
        query = self._active()
        total = query.count()
        return query.order_by(User.id).offset(offset).limit(limit).all(), total
