"""
User service for registration, login and account changes.
"""
import logging
from typing import Tuple
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from journal.core.config import settings
from journal.core.exceptions import AlreadyExists, InvalidCredentials, RegistrationDisabled
from journal.core.security import create_access_token, get_password_hash, verify_password
from journal.models.user import User
from journal.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


def register_user(username: str, password: str, db: Session) -> User:
    """Register a new user."""
    if not settings.ENABLE_REGISTRATION:
        raise RegistrationDisabled()

    repo = UserRepository(db)
    if repo.get_by_username(username) is not None:
        raise AlreadyExists("Username already exists")

    user = User(username=username, hashed_password=get_password_hash(password))
    try:
        repo.create(user)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise AlreadyExists("Username already exists")
    db.refresh(user)
    logger.info(f"Registered user {user.id}")
    return user


def login_user(username: str, password: str, db: Session) -> Tuple[User, str]:
    """Check credentials and issue an access token."""
    user = UserRepository(db).get_by_username(username)
    if user is None or not verify_password(password, user.hashed_password):
        raise InvalidCredentials()
    if not user.is_active:
        raise InvalidCredentials("User account is inactive")
    return user, create_access_token(user.id)


def update_username(user: User, new_username: str, db: Session) -> User:
    repo = UserRepository(db)
    existing = repo.get_by_username(new_username)
    if existing is not None and existing.id != user.id:
        raise AlreadyExists("Username already exists")
    user.username = new_username
    repo.update(user)
    db.commit()
    db.refresh(user)
    return user


def update_password(user: User, old_password: str, new_password: str, db: Session):
    if not verify_password(old_password, user.hashed_password):
        raise InvalidCredentials("Incorrect password")
    user.hashed_password = get_password_hash(new_password)
    UserRepository(db).update(user)
    db.commit()


def delete_user(user: User, db: Session):
    """Soft delete the account; its token stops resolving to a user."""
    UserRepository(db).delete(user.id)
    db.commit()
    logger.info(f"Deleted user {user.id}")
