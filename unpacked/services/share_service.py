# File: unpacked/services/share_service.py

"""
Share-link allocation.

A slug is generated the first time an outfit is shared and reused on every
later request. Uniqueness is enforced by the database; a collision rolls
back and retries with a fresh token a bounded number of times.
"""

import logging
import secrets
from typing import Callable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from unpacked.core.config import settings
from unpacked.core.errors import ServiceUnavailableError
from unpacked.models.outfit import Outfit

logger = logging.getLogger(__name__)


def generate_slug() -> str:
    return secrets.token_urlsafe(settings.share_slug_bytes)


def build_share_url(slug: str) -> str:
    return f"{settings.public_base_url.rstrip('/')}/outfits/share/{slug}"


def allocate_share_slug(
    db: Session,
    outfit: Outfit,
    *,
    max_attempts: int | None = None,
    slug_factory: Callable[[], str] = generate_slug,
) -> str:
    """
    Return the outfit's share slug, creating and persisting one if needed.

    Raises ServiceUnavailableError when every attempt collides.
    """
    if outfit.share_slug:
        return outfit.share_slug

    attempts = max_attempts or settings.share_slug_max_attempts
    outfit_id = outfit.id

    for attempt in range(1, attempts + 1):
        slug = slug_factory()
        outfit.share_slug = slug
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.warning(
                "Share slug collision for outfit %s (attempt %d/%d)",
                outfit_id, attempt, attempts,
            )
            # rollback expired the instance; a concurrent request may have shared it meanwhile
            db.refresh(outfit)
            if outfit.share_slug:
                return outfit.share_slug
            continue

        logger.info("Allocated share slug for outfit %s", outfit_id)
        return slug

    raise ServiceUnavailableError("Could not allocate a share link")
