# File: unpacked/api/deps.py

import logging
from collections.abc import Generator, Iterator
from contextlib import contextmanager

from fastapi import Cookie, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from unpacked.core.config import settings
from unpacked.core.errors import InternalError, UnauthorizedError
from unpacked.core.security import CallerContext, decode_session_token
from unpacked.db.session import SessionLocal
from unpacked.models.user import User
from unpacked.services.storage import ImageStorage, build_image_storage

logger = logging.getLogger(__name__)


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that provides a SQLAlchemy session.

    Usage in route functions:
        db: Session = Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _session_cookie(
    session_token: str | None = Cookie(default=None, alias=settings.session_cookie_name),
) -> str | None:
    return session_token


def get_optional_user(
    token: str | None = Depends(_session_cookie),
    db: Session = Depends(get_db),
) -> User | None:
    """
    Resolve the caller from the session cookie, or None when anonymous.

    A cookie that fails verification is treated the same as no cookie,
    and so is one whose user no longer exists.
    """
    if not token:
        return None
    user_id = decode_session_token(token)
    if user_id is None:
        return None
    return db.get(User, user_id)


def get_current_user(user: User | None = Depends(get_optional_user)) -> User:
    if user is None:
        raise UnauthorizedError("Unauthorized")
    return user


def get_caller(user: User | None = Depends(get_optional_user)) -> CallerContext:
    return CallerContext.from_user(user)


def get_authenticated_caller(user: User = Depends(get_current_user)) -> CallerContext:
    return CallerContext.from_user(user)


def get_image_storage() -> ImageStorage:
    return build_image_storage(settings)


@contextmanager
def database_guard(db: Session, failure_message: str) -> Iterator[None]:
    """
    Turn unexpected database failures into an InternalError carrying a
    route-specific message; AppErrors raised inside pass through untouched.
    """
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception(failure_message)
        raise InternalError(failure_message) from exc
