# File: unpacked/core/security.py

"""
Security helpers for the unpacked API.

Sessions are signed JWTs (HS256) carried in an HTTP-only cookie. The token
subject is the user id; nothing else about the user is trusted from the
token, the user row is always reloaded.

Routes never read "the current session" from global state. They receive a
``CallerContext`` and pass it explicitly into every authorization check.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from unpacked.core.config import settings

ALGORITHM = settings.algorithm
ACCESS_TOKEN_EXPIRE_MINUTES = settings.access_token_expire_minutes
SECRET_KEY = settings.secret_key

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


@dataclass(frozen=True)
class CallerContext:
    """Who is making the request. ``user_id`` is None for anonymous callers."""

    user_id: Optional[int] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    def owns(self, owner_user_id: int) -> bool:
        return self.user_id is not None and self.user_id == owner_user_id

    @classmethod
    def from_user(cls, user) -> "CallerContext":
        return cls(user_id=user.id if user is not None else None)


ANONYMOUS = CallerContext()


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str | None) -> bool:
    if not password_hash:
        return False
    return pwd_context.verify(password, password_hash)


def create_session_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode: dict[str, Any] = {"sub": str(user_id), "exp": expire}
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_session_token(token: str) -> Optional[int]:
    """
    Return the user id carried by a session token, or None if the token
    does not verify (bad signature or past its expiry).
    """
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None
    subject = payload.get("sub")
    try:
        return int(subject)
    except (TypeError, ValueError):
        return None
