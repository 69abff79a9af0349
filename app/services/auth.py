"""Registration and login on top of the users table."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.errors import DuplicateUsername, InvalidCredentials, ValidationError
from app.models.user import User
from app.utils.auth import dummy_verify, hash_password, verify_password
from app.utils.tokens import TokenService
from app.utils.validation import validate_registration

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    token: str
    username: str
    expires_at: datetime


def get_user_by_username(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(User.username == username).first()


def add_user(db: Session, username: str, password_hash: str) -> Optional[User]:
    """Insert a user, or return None if the username is already taken.

    The unique constraint decides; a concurrent registration that slips
    past any earlier existence check still fails here.
    """
    user = User(username=username, password_hash=password_hash)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        return None
    db.refresh(user)
    return user


def register(db: Session, username: str, password: str) -> None:
    errors = validate_registration(username, password)
    if errors:
        raise ValidationError(errors)

    # fast path only; add_user is authoritative
    if get_user_by_username(db, username) is not None:
        logger.info("Registration rejected: username %r already exists", username)
        raise DuplicateUsername()

    user = add_user(db, username, hash_password(password))
    if user is None:
        logger.info("Registration lost a race for username %r", username)
        raise DuplicateUsername()
    logger.info("Registered user %s", user.id)


def login(db: Session, tokens: TokenService, username: str, password: str) -> LoginResult:
    user = get_user_by_username(db, username)
    if user is None:
        dummy_verify()
        logger.info("Failed login for %r", username)
        raise InvalidCredentials()
    if not verify_password(password, user.password_hash):
        logger.info("Failed login for %r", username)
        raise InvalidCredentials()

    token, expires_at = tokens.issue(user)
    return LoginResult(token=token, username=user.username, expires_at=expires_at)
