"""
Todo routes.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from datetime import datetime
from typing import List, Optional
from journal.api.dependencies import get_current_user
from journal.db.session import get_db
from journal.models.user import User
from journal.schemas.todo import (
    TodoCreate, TodoUpdate, TodoResponse, TodoListResponse, TodoStatsResponse
)
from journal.services import todo_service

router = APIRouter(prefix="/todos", tags=["todos"])


@router.post("", response_model=TodoResponse, status_code=status.HTTP_201_CREATED)
async def create_todo(
    todo_data: TodoCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return todo_service.create_todo(current_user.id, todo_data, db)


@router.get("", response_model=TodoListResponse)
async def list_todos(
    page: int = 1,
    page_size: int = 20,
    done: Optional[bool] = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List todos, pending first; filter with ?done=true|false."""
    items, total, page, page_size = todo_service.list_todos(current_user.id, page, page_size, db, done=done)
    return TodoListResponse(todos=items, total=total, page=page, page_size=page_size)


@router.get("/stats", response_model=TodoStatsResponse)
async def todo_stats(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    total, pending = todo_service.get_todo_stats(current_user.id, db)
    return TodoStatsResponse(total=total, pending=pending)


@router.get("/due", response_model=List[TodoResponse])
async def todos_due(
    start: datetime,
    end: datetime,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Todos due between start and end (inclusive), earliest first."""
    return todo_service.list_todos_due(current_user.id, start, end, db)


@router.get("/{todo_id}", response_model=TodoResponse)
async def get_todo(
    todo_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return todo_service.get_owned_todo(todo_id, current_user.id, db)


@router.put("/{todo_id}", response_model=TodoResponse)
async def update_todo(
    todo_id: int,
    todo_data: TodoUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return todo_service.update_todo(todo_id, current_user.id, todo_data, db)


@router.delete("/{todo_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_todo(
    todo_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    todo_service.delete_todo(todo_id, current_user.id, db)


@router.post("/{todo_id}/done", response_model=TodoResponse)
async def mark_done(
    todo_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return todo_service.set_todo_done(todo_id, current_user.id, True, db)


@router.post("/{todo_id}/undone", response_model=TodoResponse)
async def mark_undone(
    todo_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return todo_service.set_todo_done(todo_id, current_user.id, False, db)
