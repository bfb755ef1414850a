"""
Todo service for todo-related business logic.
"""
from datetime import datetime
from typing import List, Tuple
from sqlalchemy.orm import Session
from journal.core.exceptions import NotFound, NotOwner
from journal.core.utils import page_to_offset
from journal.models.todo import Todo
from journal.repositories.todo_repository import TodoRepository
from journal.schemas.todo import TodoCreate, TodoUpdate


def create_todo(user_id: int, data: TodoCreate, db: Session) -> Todo:
    """Create a new todo, initially not done."""
    todo = Todo(
        user_id=user_id,
        title=data.title,
        description=data.description,
        due_date=data.due_date,
        done=False,
    )
    TodoRepository(db).create(todo)
    db.commit()
    db.refresh(todo)
    return todo


def get_owned_todo(todo_id: int, user_id: int, db: Session) -> Todo:
    todo = TodoRepository(db).get_by_id(todo_id)
    if todo is None:
        raise NotFound("Todo not found")
    if todo.user_id != user_id:
        raise NotOwner("Not allowed to access this todo")
    return todo


def update_todo(todo_id: int, user_id: int, data: TodoUpdate, db: Session) -> Todo:
    todo = get_owned_todo(todo_id, user_id, db)
    todo.title = data.title
    todo.description = data.description
    todo.due_date = data.due_date
    TodoRepository(db).update(todo)
    db.commit()
    db.refresh(todo)
    return todo


def delete_todo(todo_id: int, user_id: int, db: Session):
    get_owned_todo(todo_id, user_id, db)
    TodoRepository(db).delete(todo_id)
    db.commit()


def set_todo_done(todo_id: int, user_id: int, done: bool, db: Session) -> Todo:
    todo = get_owned_todo(todo_id, user_id, db)
    repo = TodoRepository(db)
    if done:
        repo.mark_done(todo_id)
    else:
        repo.mark_undone(todo_id)
    db.commit()
    db.refresh(todo)
    return todo


def list_todos(user_id: int, page: int, page_size: int, db: Session, done: bool = None) -> Tuple[List[Todo], int, int, int]:
    """List todos, optionally filtered by completion state."""
    page, page_size, offset = page_to_offset(page, page_size)
    repo = TodoRepository(db)
    if done is None:
        items, total = repo.list_by_user(user_id, offset, page_size)
    else:
        items, total = repo.list_by_status(user_id, done, offset, page_size)
    return items, total, page, page_size


def list_todos_due(user_id: int, start: datetime, end: datetime, db: Session) -> List[Todo]:
    return TodoRepository(db).list_by_due_date(user_id, start, end)


def get_todo_stats(user_id: int, db: Session) -> Tuple[int, int]:
    """Return ``(total, pending)``."""
    repo = TodoRepository(db)
    return repo.count_by_user(user_id), repo.count_pending(user_id)
