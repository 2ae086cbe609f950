# File: unpacked/models/user.py

"""
User model.

A user can exist without a password: accounts created through an external
identity provider only carry an email and a display name until the user
sets a password from the settings page.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from unpacked.models.base import Base

if TYPE_CHECKING:
    from unpacked.models.outfit import Outfit


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    email: Mapped[str] = mapped_column(String(320), unique=True, index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    outfits: Mapped[list["Outfit"]] = relationship(
        back_populates="owner",
        cascade="all, delete-orphan",
    )

    @property
    def has_password(self) -> bool:
        return bool(self.password_hash)
