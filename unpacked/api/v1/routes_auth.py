# File: unpacked/api/v1/routes_auth.py

"""
Auth API routes.

Login issues a signed session token in an HTTP-only cookie; every other
route resolves the caller from that cookie through the dependencies in
``unpacked.api.deps``.
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from unpacked.api.deps import database_guard, get_current_user, get_db
from unpacked.core.config import settings
from unpacked.core.errors import UnauthorizedError
from unpacked.core.security import create_session_token
from unpacked.models.user import User
from unpacked.schemas.common import MessageResponse
from unpacked.schemas.user import PasswordSet, PasswordStatus, UserCreate, UserLogin, UserRead
from unpacked.services import auth_service

router = APIRouter()


def _set_session_cookie(response: Response, user: User) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=create_session_token(user.id),
        max_age=settings.access_token_expire_minutes * 60,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )


@router.post(
    "/register",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account and start a session",
)
def register(payload: UserCreate, response: Response, db: Session = Depends(get_db)):
    with database_guard(db, "Registration failed"):
        user = auth_service.register_user(
            db,
            name=payload.name,
            email=payload.email,
            password=payload.password,
        )
    _set_session_cookie(response, user)
    return user


@router.post("/login", response_model=UserRead, summary="Log in with email and password")
def login(payload: UserLogin, response: Response, db: Session = Depends(get_db)):
    user = auth_service.authenticate_user(db, email=payload.email, password=payload.password)
    if user is None:
        raise UnauthorizedError("Invalid email or password")
    _set_session_cookie(response, user)
    return user


@router.post("/logout", response_model=MessageResponse, summary="End the current session")
def logout(response: Response):
    response.delete_cookie(settings.session_cookie_name)
    return MessageResponse(message="Logged out")


@router.get("/me", response_model=UserRead, summary="Current user")
def me(user: User = Depends(get_current_user)):
    return user


@router.get("/check-password", response_model=PasswordStatus)
def check_password(user: User = Depends(get_current_user)):
    """Whether the account can log in with a password (settings page)."""
    return PasswordStatus(has_password=user.has_password)


@router.post("/set-password", response_model=MessageResponse)
def set_password(
    payload: PasswordSet,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Give a password to an account created through an external identity
    provider. Accounts that already have one are rejected.
    """
    with database_guard(db, "Failed to set password"):
        auth_service.set_password(db, user, payload.password)
    return MessageResponse(message="Password set successfully")
