"""
User management routes.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from journal.db.session import get_db
from journal.schemas.user import UserResponse, UsernameUpdate, PasswordUpdate
from journal.models.user import User
from journal.api.dependencies import get_current_user
from journal.services.user_service import update_username, update_password, delete_user

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Get current user information."""
    return current_user


@router.put("/me/username", response_model=UserResponse)
async def change_username(
    data: UsernameUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Change the current user's username."""
    return update_username(current_user, data.username, db)


@router.put("/me/password")
async def change_password(
    data: PasswordUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Change the current user's password."""
    update_password(current_user, data.old_password, data.new_password, db)
    return {"message": "Password updated"}


@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
async def delete_account(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete the current user's account."""
    delete_user(current_user, db)
