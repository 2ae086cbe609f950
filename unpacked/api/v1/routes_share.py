# File: unpacked/api/v1/routes_share.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from unpacked.api.deps import database_guard, get_db
from unpacked.schemas.outfit import OutfitRead
from unpacked.services import outfit_service

router = APIRouter()


@router.get("/{slug}", response_model=OutfitRead, summary="Resolve a share link")
def get_shared_outfit(slug: str, db: Session = Depends(get_db)):
    """
    No session needed. A slug only resolves while its outfit is public;
    making an outfit private again hides the link without deleting it.
    """
    with database_guard(db, "Failed to fetch outfit"):
        return outfit_service.get_shared_outfit(db, slug)
