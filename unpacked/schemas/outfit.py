# File: unpacked/schemas/outfit.py

from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, Field, field_validator

from unpacked.models.outfit import ItemCategory, sort_items_by_category
from unpacked.schemas.common import APIModel, RequestModel


# -----------------------------
# Request bodies
# -----------------------------

class OutfitItemIn(RequestModel):
    name: str = Field(min_length=1, max_length=255)
    category: ItemCategory
    description: Optional[str] = None
    purchase_url: Optional[str] = None
    image_url: Optional[str] = None

    # Sent back by clients that edit an outfit they just fetched. Items are
    # always recreated, so these are accepted and ignored.
    id: Optional[int] = None
    outfit_id: Optional[int] = None
    created_at: Optional[datetime] = None


class OutfitIn(RequestModel):
    # Optional at the schema level so a missing name is reported as
    # "Name is required" rather than a generic validation error.
    name: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    tags: Optional[List[str]] = None
    is_private: Optional[bool] = None
    items: Optional[List[OutfitItemIn]] = None

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return v
        cleaned: List[str] = []
        for tag in v:
            tag = tag.strip()
            if tag and tag not in cleaned:
                cleaned.append(tag)
        return cleaned


# -----------------------------
# Response bodies
# -----------------------------

class OwnerRead(APIModel):
    name: str


class OutfitItemRead(APIModel):
    id: int
    outfit_id: int
    name: str
    category: ItemCategory
    description: Optional[str] = None
    purchase_url: Optional[str] = None
    image_url: Optional[str] = None


class OutfitRead(APIModel):
    id: int
    user_id: int
    name: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    tags: List[str] = []
    is_private: bool
    share_slug: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    # "owner" on the ORM model, "user" once serialized
    user: OwnerRead = Field(
        validation_alias=AliasChoices("owner", "user"),
        serialization_alias="user",
    )
    items: List[OutfitItemRead] = []

    @field_validator("items")
    @classmethod
    def order_items(cls, v: List[OutfitItemRead]) -> List[OutfitItemRead]:
        return sort_items_by_category(v)


class OutfitPage(APIModel):
    outfits: List[OutfitRead]
    page: int
    total_pages: int


class OutfitItemList(APIModel):
    items: List[OutfitItemRead]


class ShareResponse(APIModel):
    share_url: str
    share_slug: str


class SaveResponse(APIModel):
    message: str
    outfit_id: int
