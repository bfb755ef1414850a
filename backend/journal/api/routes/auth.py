"""
Authentication routes for registration and login.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from journal.db.session import get_db
from journal.schemas.user import UserCreate, UserLogin, Token, UserResponse
from journal.services.user_service import register_user, login_user

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(user_data: UserCreate, db: Session = Depends(get_db)):
    """Register a new user."""
    return register_user(user_data.username, user_data.password, db)


@router.post("/login", response_model=Token)
async def login(credentials: UserLogin, db: Session = Depends(get_db)):
    """Login and get JWT token."""
    user, access_token = login_user(credentials.username, credentials.password, db)
    return {"access_token": access_token, "token_type": "bearer", "user": user}
