"""
Shared FastAPI dependencies: authentication and service wiring.
"""
from functools import lru_cache
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from journal.core.config import settings
from journal.core.security import decode_access_token
from journal.db.session import get_db
from journal.models.user import User
from journal.repositories.user_repository import UserRepository
from journal.services.confidentiality import FieldCipher
from journal.services.diary_service import DiaryService

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> User:
    """Resolve the bearer token to an active user."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    user_id = decode_access_token(token)
    if user_id is None:
        raise credentials_exception
    user = UserRepository(db).get_by_id(user_id)
    if user is None or not user.is_active:
        raise credentials_exception
    return user


@lru_cache
def get_field_cipher() -> FieldCipher:
    """Field policy built once from the configured key."""
    return FieldCipher(settings.aes_key)


def get_diary_service(
    db: Session = Depends(get_db),
    cipher: FieldCipher = Depends(get_field_cipher)
) -> DiaryService:
    return DiaryService(db, cipher)
