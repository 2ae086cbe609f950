# File: unpacked/services/auth_service.py

"""
Account service.

Covers:
  - User registration (email + password)
  - Credential checks for login
  - Setting a password on an account that was created without one
"""

import logging
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from unpacked.core.errors import ConflictError, InvalidInputError
from unpacked.core.security import hash_password, verify_password
from unpacked.models.user import User

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def _check_password_strength(password: str) -> None:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise InvalidInputError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )


def normalize_email(email: str) -> str:
    return email.strip().lower()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.scalars(
        select(User).where(func.lower(User.email) == normalize_email(email))
    ).first()


def register_user(db: Session, *, name: str, email: str, password: str) -> User:
    name = name.strip()
    if not name:
        raise InvalidInputError("Name is required")
    _check_password_strength(password)

    if get_user_by_email(db, email) is not None:
        raise ConflictError("User already exists")

    user = User(
        name=name,
        email=normalize_email(email),
        password_hash=hash_password(password),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email
        db.rollback()
        raise ConflictError("User already exists")
    db.refresh(user)
    logger.info("Registered user %s", user.id)
    return user


def authenticate_user(
    db: Session,
    *,
    email: str,
    password: str,
) -> Optional[User]:
    """
    Return the user if the credentials match, else None.

    Accounts without a password (external identity only) never match.
    """
    user = get_user_by_email(db, email)
    if user is None or not verify_password(password, user.password_hash):
        return None
    return user


def set_password(db: Session, user: User, password: str) -> User:
    if user.has_password:
        raise InvalidInputError("Password is already set")
    _check_password_strength(password)
    user.password_hash = hash_password(password)
    db.commit()
    db.refresh(user)
    logger.info("Password set for user %s", user.id)
    return user
