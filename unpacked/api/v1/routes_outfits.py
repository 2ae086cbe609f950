# File: unpacked/api/v1/routes_outfits.py

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from unpacked.api.deps import (
    database_guard,
    get_authenticated_caller,
    get_caller,
    get_db,
)
from unpacked.core.config import settings
from unpacked.core.security import CallerContext
from unpacked.schemas.common import MessageResponse
from unpacked.schemas.outfit import (
    OutfitIn,
    OutfitItemList,
    OutfitPage,
    OutfitRead,
    SaveResponse,
    ShareResponse,
)
from unpacked.services import outfit_service

router = APIRouter()


# -----------------------------
# Listings
# -----------------------------

@router.get("/outfits", response_model=OutfitPage, summary="Public outfit feed")
def list_outfits(
    page: int = Query(1, ge=1),
    db: Session = Depends(get_db),
):
    with database_guard(db, "Failed to fetch outfits"):
        result = outfit_service.list_public_outfits(db, page, settings.feed_page_size)
    return OutfitPage.model_validate(result)


@router.get("/my-outfits", response_model=OutfitPage, summary="Caller's outfits")
def list_my_outfits(
    page: int = Query(1, ge=1),
    caller: CallerContext = Depends(get_authenticated_caller),
    db: Session = Depends(get_db),
):
    with database_guard(db, "Failed to fetch outfits"):
        result = outfit_service.list_user_outfits(db, caller, page, settings.feed_page_size)
    return OutfitPage.model_validate(result)


@router.get("/my-items", response_model=OutfitItemList, summary="Every item in the caller's outfits")
def list_my_items(
    caller: CallerContext = Depends(get_authenticated_caller),
    db: Session = Depends(get_db),
):
    with database_guard(db, "Failed to fetch items"):
        items = outfit_service.list_user_items(db, caller)
    return OutfitItemList.model_validate({"items": items})


# -----------------------------
# Single outfit
# -----------------------------

@router.post(
    "/outfits",
    response_model=OutfitRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create outfit",
)
def create_outfit(
    payload: OutfitIn,
    caller: CallerContext = Depends(get_authenticated_caller),
    db: Session = Depends(get_db),
):
    with database_guard(db, "Failed to create outfit"):
        return outfit_service.create_outfit(db, caller, payload)


@router.get("/outfits/{outfit_id}", response_model=OutfitRead, summary="Get outfit")
def get_outfit(
    outfit_id: int,
    caller: CallerContext = Depends(get_caller),
    db: Session = Depends(get_db),
):
    """
    Public outfits are visible to everyone; private ones only to their owner.
    Anyone else gets the same 404 as for an id that does not exist.
    """
    with database_guard(db, "Failed to fetch outfit"):
        return outfit_service.get_outfit(db, caller, outfit_id)


@router.put("/outfits/{outfit_id}", response_model=OutfitRead, summary="Replace outfit")
def update_outfit(
    outfit_id: int,
    payload: OutfitIn,
    caller: CallerContext = Depends(get_authenticated_caller),
    db: Session = Depends(get_db),
):
    """
    Overwrite the outfit's fields and replace its item list wholesale.

    Concurrent edits are last-writer-wins, including the items.
    """
    with database_guard(db, "Failed to update outfit"):
        return outfit_service.update_outfit(db, caller, outfit_id, payload)


@router.delete("/outfits/{outfit_id}", response_model=MessageResponse, summary="Delete outfit")
def delete_outfit(
    outfit_id: int,
    caller: CallerContext = Depends(get_authenticated_caller),
    db: Session = Depends(get_db),
):
    with database_guard(db, "Failed to delete outfit"):
        outfit_service.delete_outfit(db, caller, outfit_id)
    return MessageResponse(message="Outfit deleted successfully")


@router.post("/outfits/{outfit_id}/share", response_model=ShareResponse, summary="Get a share link")
def share_outfit(
    outfit_id: int,
    caller: CallerContext = Depends(get_authenticated_caller),
    db: Session = Depends(get_db),
):
    with database_guard(db, "Failed to generate share link"):
        result = outfit_service.share_outfit(db, caller, outfit_id)
    return ShareResponse(share_url=result.share_url, share_slug=result.share_slug)


@router.post("/outfits/{outfit_id}/save", response_model=SaveResponse, summary="Save a copy")
def save_outfit(
    outfit_id: int,
    caller: CallerContext = Depends(get_authenticated_caller),
    db: Session = Depends(get_db),
):
    with database_guard(db, "Failed to save outfit"):
        copy = outfit_service.save_outfit(db, caller, outfit_id)
    return SaveResponse(message="Outfit saved successfully", outfit_id=copy.id)
