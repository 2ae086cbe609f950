# File: unpacked/services/outfit_service.py

"""
Outfit persistence and the operations behind the outfit endpoints.

Each operation takes the caller explicitly and checks access through
``authorize_outfit`` before touching anything. Writes of an outfit and its
items happen in a single commit; item lists are replaced wholesale rather
than diffed.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from unpacked.core.errors import InvalidInputError, NotFoundError
from unpacked.core.security import CallerContext
from unpacked.models.outfit import Outfit, OutfitItem, sort_items_by_category
from unpacked.schemas.outfit import OutfitIn, OutfitItemIn
from unpacked.services.authorization import (
    OUTFIT_NOT_FOUND,
    OUTFIT_NOT_FOUND_OR_DENIED,
    OutfitAction,
    authorize_outfit,
    normalize_outfit_name,
)
from unpacked.services.share_service import allocate_share_slug, build_share_url

logger = logging.getLogger(__name__)

NAME_REQUIRED = "Name is required"


@dataclass
class OutfitPageResult:
    outfits: List[Outfit]
    page: int
    total_pages: int


@dataclass
class ShareResult:
    share_url: str
    share_slug: str


# -----------------------------
# Loading
# -----------------------------

def _outfit_query():
    return select(Outfit).options(
        selectinload(Outfit.owner),
        selectinload(Outfit.items),
    )


def load_outfit(db: Session, outfit_id: int) -> Outfit:
    outfit = db.scalars(_outfit_query().where(Outfit.id == outfit_id)).first()
    if outfit is None:
        raise NotFoundError(OUTFIT_NOT_FOUND)
    return outfit


def _require_name(payload: OutfitIn) -> str:
    name = (payload.name or "").strip()
    if not name:
        raise InvalidInputError(NAME_REQUIRED)
    return name


def _build_items(items: Optional[List[OutfitItemIn]]) -> List[OutfitItem]:
    return [
        OutfitItem(
            name=item.name,
            category=item.category,
            description=item.description,
            purchase_url=item.purchase_url,
            image_url=item.image_url,
        )
        for item in items or []
    ]


def _copy_items(items: List[OutfitItem]) -> List[OutfitItem]:
    return [
        OutfitItem(
            name=item.name,
            category=item.category,
            description=item.description,
            purchase_url=item.purchase_url,
            image_url=item.image_url,
        )
        for item in sort_items_by_category(items)
    ]


# -----------------------------
# Single outfit
# -----------------------------

def create_outfit(db: Session, caller: CallerContext, payload: OutfitIn) -> Outfit:
    name = _require_name(payload)
    outfit = Outfit(
        user_id=caller.user_id,
        name=name,
        description=payload.description,
        image_url=payload.image_url,
        tags=payload.tags or [],
        is_private=bool(payload.is_private),
        items=_build_items(payload.items),
    )
    db.add(outfit)
    db.commit()
    logger.info("User %s created outfit %s", caller.user_id, outfit.id)
    return load_outfit(db, outfit.id)


def get_outfit(db: Session, caller: CallerContext, outfit_id: int) -> Outfit:
    outfit = load_outfit(db, outfit_id)
    authorize_outfit(
        caller,
        owner_user_id=outfit.user_id,
        is_private=outfit.is_private,
        action=OutfitAction.READ,
    )
    return outfit


def _load_for_owner_action(db: Session, caller: CallerContext, outfit_id: int, action: OutfitAction) -> Outfit:
    """
    Load an outfit for update or delete. A missing id and someone else's
    outfit get the same 404 body.
    """
    outfit = db.get(Outfit, outfit_id)
    if outfit is None:
        raise NotFoundError(OUTFIT_NOT_FOUND_OR_DENIED)
    authorize_outfit(
        caller,
        owner_user_id=outfit.user_id,
        is_private=outfit.is_private,
        action=action,
    )
    return outfit


def update_outfit(db: Session, caller: CallerContext, outfit_id: int, payload: OutfitIn) -> Outfit:
    outfit = _load_for_owner_action(db, caller, outfit_id, OutfitAction.UPDATE)
    name = _require_name(payload)

    # Delete-then-recreate: the orphaned items are removed on flush and the
    # new ones inserted in the same transaction.
    outfit.items.clear()
    outfit.items.extend(_build_items(payload.items))

    outfit.name = name
    outfit.description = payload.description
    outfit.image_url = payload.image_url
    outfit.tags = payload.tags or []
    outfit.is_private = bool(payload.is_private)

    db.commit()
    logger.info("User %s updated outfit %s", caller.user_id, outfit_id)
    return load_outfit(db, outfit_id)


def delete_outfit(db: Session, caller: CallerContext, outfit_id: int) -> None:
    outfit = _load_for_owner_action(db, caller, outfit_id, OutfitAction.DELETE)
    db.delete(outfit)
    db.commit()
    logger.info("User %s deleted outfit %s", caller.user_id, outfit_id)


def share_outfit(db: Session, caller: CallerContext, outfit_id: int) -> ShareResult:
    outfit = db.get(Outfit, outfit_id)
    if outfit is None:
        raise NotFoundError(OUTFIT_NOT_FOUND)
    authorize_outfit(
        caller,
        owner_user_id=outfit.user_id,
        is_private=outfit.is_private,
        action=OutfitAction.SHARE,
    )
    slug = allocate_share_slug(db, outfit)
    return ShareResult(share_url=build_share_url(slug), share_slug=slug)


def caller_has_copy(db: Session, caller: CallerContext, name: str) -> bool:
    if not caller.is_authenticated:
        return False
    target = normalize_outfit_name(name)
    names = db.scalars(select(Outfit.name).where(Outfit.user_id == caller.user_id))
    return any(normalize_outfit_name(existing) == target for existing in names)


def save_outfit(db: Session, caller: CallerContext, outfit_id: int) -> Outfit:
    """Copy a public outfit, with its items, into the caller's collection as a private outfit."""
    source = load_outfit(db, outfit_id)
    authorize_outfit(
        caller,
        owner_user_id=source.user_id,
        is_private=source.is_private,
        action=OutfitAction.SAVE,
        caller_has_copy=caller_has_copy(db, caller, source.name),
    )
    copy = Outfit(
        user_id=caller.user_id,
        name=source.name,
        description=source.description,
        image_url=source.image_url,
        tags=list(source.tags or []),
        is_private=True,
        items=_copy_items(source.items),
    )
    db.add(copy)
    db.commit()
    logger.info("User %s saved outfit %s as %s", caller.user_id, outfit_id, copy.id)
    return copy


def get_shared_outfit(db: Session, slug: str) -> Outfit:
    outfit = db.scalars(
        _outfit_query().where(Outfit.share_slug == slug, Outfit.is_private.is_(False))
    ).first()
    if outfit is None:
        raise NotFoundError(OUTFIT_NOT_FOUND)
    return outfit


# -----------------------------
# Listings
# -----------------------------

def _page_of(db: Session, stmt, count_stmt, page: int, page_size: int) -> OutfitPageResult:
    total = db.scalar(count_stmt) or 0
    total_pages = max(1, math.ceil(total / page_size))
    outfits = list(
        db.scalars(
            stmt.order_by(Outfit.created_at.desc(), Outfit.id.desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
    )
    return OutfitPageResult(outfits=outfits, page=page, total_pages=total_pages)


def list_public_outfits(db: Session, page: int, page_size: int) -> OutfitPageResult:
    condition = Outfit.is_private.is_(False)
    return _page_of(
        db,
        _outfit_query().where(condition),
        select(func.count(Outfit.id)).where(condition),
        page,
        page_size,
    )


def list_user_outfits(db: Session, caller: CallerContext, page: int, page_size: int) -> OutfitPageResult:
    condition = Outfit.user_id == caller.user_id
    return _page_of(
        db,
        _outfit_query().where(condition),
        select(func.count(Outfit.id)).where(condition),
        page,
        page_size,
    )


def list_user_items(db: Session, caller: CallerContext) -> List[OutfitItem]:
    items = db.scalars(
        select(OutfitItem)
        .join(Outfit, OutfitItem.outfit_id == Outfit.id)
        .where(Outfit.user_id == caller.user_id)
        .order_by(OutfitItem.id)
    )
    return sort_items_by_category(list(items))
