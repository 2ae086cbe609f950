# File: unpacked/schemas/user.py

from datetime import datetime

from pydantic import EmailStr

from unpacked.schemas.common import APIModel, RequestModel


class UserCreate(RequestModel):
    name: str
    email: EmailStr
    password: str


class UserLogin(RequestModel):
    email: EmailStr
    password: str


class PasswordSet(RequestModel):
    password: str


class UserRead(APIModel):
    id: int
    email: EmailStr
    name: str
    has_password: bool
    created_at: datetime


class PasswordStatus(APIModel):
    has_password: bool
