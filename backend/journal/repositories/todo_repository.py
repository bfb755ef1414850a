"""
Todo store.
"""
from datetime import datetime
from typing import List, Optional, Tuple
from sqlalchemy.orm import Session
from journal.db.base import utcnow
from journal.models.todo import Todo


class TodoRepository:
    def __init__(self, db: Session):
        self.db = db

    def _active(self):
        return self.db.query(Todo).filter(Todo.is_deleted.is_(False))

    def _page(self, query, offset: int, limit: int) -> Tuple[List[Todo], int]:
        total = query.count()
        items = query.order_by(Todo.done.asc(), Todo.created_at.desc(), Todo.id.desc()).offset(offset).limit(limit).all()
        return items, total

    def create(self, todo: Todo) -> Todo:
        self.db.add(todo)
        self.db.flush()
        return todo

    def get_by_id(self, todo_id: int) -> Optional[Todo]:
        return self._active().filter(Todo.id == todo_id).first()

    def update(self, todo: Todo) -> Todo:
        todo.updated_at = utcnow()
        self.db.flush()
        return todo

    def delete(self, todo_id: int) -> bool:
        updated = self._active().filter(Todo.id == todo_id).update(
            {Todo.is_deleted: True, Todo.deleted_at: utcnow()},
            synchronize_session="fetch",
        )
        return updated > 0

    def list_by_user(self, user_id: int, offset: int, limit: int) -> Tuple[List[Todo], int]:
        return self._page(self._active().filter(Todo.user_id == user_id), offset, limit)

    def list_by_status(self, user_id: int, done: bool, offset: int, limit: int) -> Tuple[List[Todo], int]:
        query = self._active().filter(Todo.user_id == user_id, Todo.done.is_(done))
        return self._page(query, offset, limit)

    def list_by_due_date(self, user_id: int, start: datetime, end: datetime) -> List[Todo]:
        return self._active().filter(
            Todo.user_id == user_id,
            Todo.due_date >= start,
            Todo.due_date <= end,
        ).order_by(Todo.due_date.asc()).all()

    def _set_done(self, todo_id: int, done: bool) -> bool:
        updated = self._active().filter(Todo.id == todo_id).update(
            {Todo.done: done, Todo.updated_at: utcnow()},
            synchronize_session="fetch",
        )
        return updated > 0

    def mark_done(self, todo_id: int) -> bool:
        return self._set_done(todo_id, True)

    def mark_undone(self, todo_id: int) -> bool:
        return self._set_done(todo_id, False)

    def count_by_user(self, user_id: int) -> int:
        return self._active().filter(Todo.user_id == user_id).count()

    def count_pending(self, user_id: int) -> int:
        return self._active().filter(Todo.user_id == user_id, Todo.done.is_(False)).count()
