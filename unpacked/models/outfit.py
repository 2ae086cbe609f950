# File: unpacked/models/outfit.py

"""
Outfit and OutfitItem models.

An outfit belongs to exactly one user; its items live and die with it.
``share_slug`` stays NULL until the outfit is shared for the first time and
is unique across all outfits.
"""

import enum
from datetime import datetime

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from unpacked.models.base import Base
from unpacked.models.user import User


class ItemCategory(str, enum.Enum):
    # Declaration order is the display order of items inside an outfit
    UPPERWEAR = "UPPERWEAR"
    OUTERWEAR = "OUTERWEAR"
    LOWERWEAR = "LOWERWEAR"
    FULL_BODY = "FULL_BODY"
    FOOTWEAR = "FOOTWEAR"
    HEADWEAR = "HEADWEAR"
    ACCESSORIES = "ACCESSORIES"
    OTHER = "OTHER"


CATEGORY_ORDER = {category: index for index, category in enumerate(ItemCategory)}


class Outfit(Base):
    __tablename__ = "outfits"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)

    # Ordered list of strings; JSON keeps it portable across Postgres and SQLite
    tags: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)

    is_private: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    share_slug: Mapped[str | None] = mapped_column(String(64), unique=True, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    owner: Mapped[User] = relationship(back_populates="outfits")
    items: Mapped[list["OutfitItem"]] = relationship(
        back_populates="outfit",
        cascade="all, delete-orphan",
        order_by="OutfitItem.id",
    )

    @property
    def sorted_items(self) -> list["OutfitItem"]:
        return sort_items_by_category(self.items)


class OutfitItem(Base):
    __tablename__ = "outfit_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    outfit_id: Mapped[int] = mapped_column(
        ForeignKey("outfits.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[ItemCategory] = mapped_column(
        Enum(ItemCategory, name="item_category"),
        nullable=False,
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    purchase_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    outfit: Mapped[Outfit] = relationship(back_populates="items")


def sort_items_by_category(items: list[OutfitItem]) -> list[OutfitItem]:
    """Order items the way outfits are displayed: by category, then id."""
    return sorted(
        items,
        key=lambda item: (CATEGORY_ORDER.get(item.category, len(CATEGORY_ORDER)), item.id or 0),
    )
